"""
Tests for Color.

Tests cover:
- Construction from packed ints, byte arrays, float arrays and hex strings
- Byte conversion (truncation and saturation)
- Overlay and lerp formulas
- Arithmetic operators
- Visibility / opacity predicates
- Color as a constant source
"""

import dataclasses
import math
import unittest

from NI_Libs.ColorLib.color import Color, lerp


class TestColorConstruction(unittest.TestCase):
    """Test Color constructors."""

    def test_default_is_transparent_black(self):
        """Test that the default color is all zeros."""
        self.assertEqual(Color(), Color(0.0, 0.0, 0.0, 0.0))

    def test_from_u32(self):
        """Test unpacking 0xRRGGBBAA."""
        color = Color.from_u32(0xFF336600)

        self.assertEqual(color.r, 1.0)
        self.assertEqual(color.g, 0x33 / 255)
        self.assertEqual(color.b, 0x66 / 255)
        self.assertEqual(color.a, 0.0)

    def test_from_byte_array(self):
        """Test byte array channels are divided by 255."""
        color = Color.from_byte_array([255, 0, 51, 255])

        self.assertEqual(color, Color(1.0, 0.0, 0.2, 1.0))

    def test_from_array(self):
        """Test float array channels are used as given."""
        color = Color.from_array([0.25, 0.5, 0.75, 1.0])

        self.assertEqual(color, Color(0.25, 0.5, 0.75, 1.0))

    def test_from_array_wrong_length(self):
        """Test that arrays must have exactly four channels."""
        with self.assertRaises(ValueError):
            Color.from_array([0.1, 0.2, 0.3])

    def test_from_hex_with_alpha(self):
        """Test parsing '#RRGGBBAA'."""
        self.assertEqual(Color.from_hex("#ff000080"), Color.from_u32(0xFF000080))

    def test_from_hex_without_alpha_is_opaque(self):
        """Test parsing 'RRGGBB' defaults alpha to opaque."""
        color = Color.from_hex("00ff00")

        self.assertEqual(color, Color(0.0, 1.0, 0.0, 1.0))

    def test_from_hex_invalid(self):
        """Test malformed hex strings raise ValueError."""
        for text in ("#12", "#gggggg", "", "#1234567", "+1234567", "12_34_56", " 123456 7"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    Color.from_hex(text)

    def test_immutable(self):
        """Test that colors cannot be modified."""
        color = Color(0.1, 0.2, 0.3, 0.4)

        with self.assertRaises(dataclasses.FrozenInstanceError):
            color.r = 1.0


class TestColorToBytes(unittest.TestCase):
    """Test conversion to 8-bit channels."""

    def test_truncates_instead_of_rounding(self):
        """Test that 0.5 * 255 = 127.5 becomes 127."""
        self.assertEqual(Color(0.5, 0.5, 0.5, 1.0).to_byte_array(), (127, 127, 127, 255))

    def test_round_trip_of_exact_bytes(self):
        """Test channel extremes survive from_byte_array -> to_byte_array."""
        self.assertEqual(
            Color.from_byte_array((0, 255, 0, 255)).to_byte_array(),
            (0, 255, 0, 255),
        )

    def test_out_of_range_saturates(self):
        """Test values outside 0-1 saturate and NaN becomes 0."""
        color = Color(1.5, -0.2, float("nan"), 2.0)

        self.assertEqual(color.to_byte_array(), (255, 0, 0, 255))

    def test_to_array(self):
        """Test float tuple conversion."""
        self.assertEqual(Color(0.1, 0.2, 0.3, 0.4).to_array(), (0.1, 0.2, 0.3, 0.4))


class TestColorBlending(unittest.TestCase):
    """Test overlay and lerp."""

    def test_overlay_formula(self):
        """Test rgb moves toward top by top.a and alpha is the max."""
        base = Color(0.2, 0.4, 0.6, 0.8)
        top = Color(1.0, 0.0, 0.5, 0.25)

        result = base.overlay(top)

        self.assertEqual(result.r, 0.2 + 0.25 * (1.0 - 0.2))
        self.assertEqual(result.g, 0.4 + 0.25 * (0.0 - 0.4))
        self.assertEqual(result.b, 0.6 + 0.25 * (0.5 - 0.6))
        self.assertEqual(result.a, 0.8)

    def test_overlay_alpha_is_max_not_porter_duff(self):
        """Test two half-transparent layers stay half transparent."""
        result = Color(0.0, 0.0, 0.0, 0.5).overlay(Color(1.0, 1.0, 1.0, 0.5))

        self.assertEqual(result.a, 0.5)
        self.assertEqual(result.r, 0.5)

    def test_overlay_opaque_top_replaces_rgb(self):
        """Test an opaque top color wins completely."""
        result = Color(0.25, 0.25, 0.25, 0.125).overlay(Color(0.0, 1.0, 0.0, 1.0))

        self.assertEqual(result, Color(0.0, 1.0, 0.0, 1.0))

    def test_overlay_transparent_top_keeps_base(self):
        """Test a fully transparent top color changes nothing."""
        base = Color(0.3, 0.6, 0.9, 0.7)

        self.assertEqual(base.overlay(Color(1.0, 1.0, 1.0, 0.0)), base)

    def test_overlay_red_under_half_blue(self):
        """Test the red/blue example bytes."""
        result = Color(1.0, 0.0, 0.0, 1.0).overlay(Color(0.0, 0.0, 1.0, 0.5))

        self.assertEqual(result.to_byte_array(), (127, 0, 127, 255))

    def test_lerp_endpoints(self):
        """Test lerp at t=0 and t=1."""
        a = Color(0.25, 0.5, 0.75, 1.0)
        b = Color(1.0, 0.0, 0.5, 0.25)

        self.assertEqual(a.lerp(b, 0.0), a)
        self.assertEqual(a.lerp(b, 1.0), b)

    def test_lerp_midpoint_includes_alpha(self):
        """Test lerp interpolates all four channels."""
        result = Color(0.0, 0.0, 0.0, 0.0).lerp(Color(1.0, 0.5, 0.25, 1.0), 0.5)

        self.assertEqual(result, Color(0.5, 0.25, 0.125, 0.5))

    def test_scalar_lerp(self):
        """Test the scalar helper."""
        self.assertEqual(lerp(2.0, 4.0, 0.25), 2.5)


class TestColorArithmetic(unittest.TestCase):
    """Test operators used by blur accumulation."""

    def test_add(self):
        """Test channel-wise addition."""
        result = Color(0.25, 0.5, 0.0, 1.0) + Color(0.25, 0.25, 0.5, 1.0)

        self.assertEqual(result, Color(0.5, 0.75, 0.5, 2.0))

    def test_multiply_by_color(self):
        """Test channel-wise multiplication."""
        result = Color(0.5, 1.0, 0.25, 1.0) * Color(0.5, 0.5, 0.5, 0.5)

        self.assertEqual(result, Color(0.25, 0.5, 0.125, 0.5))

    def test_multiply_by_scalar(self):
        """Test scaling all channels including alpha."""
        color = Color(1.0, 0.5, 0.25, 1.0)

        self.assertEqual(color * 0.5, Color(0.5, 0.25, 0.125, 0.5))
        self.assertEqual(0.5 * color, Color(0.5, 0.25, 0.125, 0.5))
        self.assertEqual(color * 2, Color(2.0, 1.0, 0.5, 2.0))

    def test_unsupported_operands(self):
        """Test that non-numeric operands raise TypeError."""
        with self.assertRaises(TypeError):
            Color() * "x"

        with self.assertRaises(TypeError):
            Color() + 1.0


class TestColorPredicates(unittest.TestCase):
    """Test is_visible and is_transparent."""

    def test_is_visible(self):
        """Test visibility threshold."""
        self.assertFalse(Color(1.0, 1.0, 1.0, 0.0).is_visible())
        self.assertFalse(Color(1.0, 1.0, 1.0, 1e-8).is_visible())
        self.assertTrue(Color(0.0, 0.0, 0.0, 1e-3).is_visible())

    def test_is_transparent_means_not_opaque(self):
        """Test that anything below alpha 1 counts as transparent."""
        self.assertTrue(Color(0.0, 0.0, 0.0, 0.0).is_transparent())
        self.assertTrue(Color(0.0, 0.0, 0.0, 0.99).is_transparent())
        self.assertFalse(Color(0.0, 0.0, 0.0, 1.0).is_transparent())
        self.assertFalse(Color(0.0, 0.0, 0.0, 1.5).is_transparent())


class TestColorAsSource(unittest.TestCase):
    """Test Color as a constant source."""

    def test_same_color_everywhere(self):
        """Test sampling returns the color at any coordinate."""
        color = Color(0.1, 0.2, 0.3, 0.4)

        for x, y in [(0, 0), (-5, 7), (2 ** 31 - 1, -(2 ** 31))]:
            self.assertEqual(color.sample(x, y), color)

    def test_no_borders(self):
        """Test a constant color is unbounded."""
        self.assertIsNone(Color(1.0, 0.0, 0.0, 1.0).borders())

    def test_hashable(self):
        """Test colors can be used as dict keys."""
        self.assertEqual(len({Color(): 1, Color(0.0, 0.0, 0.0, 0.0): 2}), 1)

    def test_nan_channels_are_not_visible(self):
        """Test NaN alpha is never visible."""
        self.assertFalse(Color(0.0, 0.0, 0.0, math.nan).is_visible())


if __name__ == "__main__":
    unittest.main()
