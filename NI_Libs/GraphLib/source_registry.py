"""
Node type registry for source graphs.

Each node type maps to a factory ``factory(node, inputs) -> Source`` and the
number of inputs it consumes. ``tree_builder`` looks node types up here, so a
graph can use any type registered on the registry it is built with.

Functions:
    get_default_registry: Registry holding the built-in node types
    register_default_factories: Add the built-in node types to a registry
"""

from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from NI_Libs.ColorLib.color import Color
from NI_Libs.constants import (
    ANY_INPUT_COUNT,
    FIELD_NODE_ID,
    NODE_TYPE_BLUR,
    NODE_TYPE_COLOR,
    NODE_TYPE_IMAGE,
    NODE_TYPE_OFFSET,
    NODE_TYPE_SCALE,
    NODE_TYPE_STACK,
)
from NI_Libs.RenderLib.codec import load_sampled_image
from NI_Libs.source import Source
from NI_Libs.SourcesLib.blur_source import BlurSource
from NI_Libs.SourcesLib.image_source import SampledImage
from NI_Libs.SourcesLib.offset_source import OffsetSource
from NI_Libs.SourcesLib.scale_source import Filter, ScaleSource
from NI_Libs.SourcesLib.stack_source import StackSource

logger = logging.getLogger(__name__)

SourceFactory = Callable[[Dict[str, Any], List[Source]], Source]


class SourceFactoryRegistry:
    """
    Node type -> (factory, input count) table.

    Example:
        >>> registry = SourceFactoryRegistry()
        >>> registry.register("Gray", lambda node, inputs: Color(0.5, 0.5, 0.5, 1.0))
        >>> registry.build("Gray", {"id": "g"}, [])
        Color(r=0.5, g=0.5, b=0.5, a=1.0)
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[SourceFactory, int]] = {}

    def register(self, node_type: str, factory: SourceFactory, input_count: int = 0) -> None:
        """
        Add a node type.

        Args:
            node_type: Name used in the node's 'type' field
            factory: Callable taking (node_dict, input_sources)
            input_count: Inputs the node consumes, or -1 for any number

        Raises:
            ValueError: On an empty name, a non-callable factory or an
                        input_count below -1
            RuntimeError: If node_type is taken
        """
        node_type = str(node_type).strip()

        if not node_type:
            raise ValueError("node_type cannot be empty")
        if not callable(factory):
            raise ValueError(f"factory must be callable, got {type(factory)}")
        if input_count < ANY_INPUT_COUNT:
            raise ValueError(f"input_count must be >= {ANY_INPUT_COUNT}, got {input_count}")
        if node_type in self._entries:
            raise RuntimeError(f"Node type '{node_type}' is already registered")

        self._entries[node_type] = (factory, input_count)
        logger.debug(f"Registered node type {node_type} ({input_count} input(s))")

    def has_factory(self, node_type: str) -> bool:
        return str(node_type).strip() in self._entries

    def get_factory(self, node_type: str) -> SourceFactory:
        return self._entry(node_type)[0]

    def input_count(self, node_type: str) -> int:
        return self._entry(node_type)[1]

    def list_node_types(self) -> List[str]:
        return sorted(self._entries)

    def _entry(self, node_type: str) -> Tuple[SourceFactory, int]:
        try:
            return self._entries[str(node_type).strip()]
        except KeyError:
            known = ", ".join(self.list_node_types()) or "none"
            raise KeyError(f"Unknown node type '{node_type}'. Known types: {known}") from None

    def build(self, node_type: str, node: Dict[str, Any], inputs: List[Source]) -> Source:
        """
        Run the factory of ``node_type`` on a node and its built inputs.

        Raises:
            KeyError: If node_type is unknown
            ValueError: If the number of inputs is wrong for the node type
            TypeError: If the factory returns something other than a Source
        """
        factory, expected = self._entry(node_type)

        if expected != ANY_INPUT_COUNT and len(inputs) != expected:
            node_id = node.get(FIELD_NODE_ID, "?")
            raise ValueError(
                f"{node_type} node '{node_id}' takes {expected} input(s), got {len(inputs)}"
            )

        source = factory(node, inputs)
        if not isinstance(source, Source):
            raise TypeError(f"{node_type} factory returned {type(source)}, not a Source")
        return source


def _require(node: Dict[str, Any], key: str, node_type: str) -> Any:
    if key not in node:
        node_id = node.get(FIELD_NODE_ID, "?")
        raise ValueError(f"{node_type} node '{node_id}' requires '{key}'")
    return node[key]


def parse_color(value: Any) -> Color:
    """
    Interpret a color value from a node description.

    Accepts a Color, a hex string ('#RRGGBB' / '#RRGGBBAA'), a packed
    0xRRGGBBAA integer or a sequence of four floats.

    Raises:
        ValueError: If the value cannot be interpreted
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.from_hex(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return Color.from_u32(value)
    if isinstance(value, (list, tuple)) and len(value) == 4:
        return Color.from_array(value)
    raise ValueError(f"Cannot interpret color value: {value!r}")


def build_color_node(node: Dict[str, Any], inputs: List[Source]) -> Source:
    return parse_color(_require(node, "color", NODE_TYPE_COLOR))


def build_image_node(node: Dict[str, Any], inputs: List[Source]) -> Source:
    """
    Build a sampled image from 'image' (SampledImage or PIL Image) or
    'image_path' (decoded with Pillow, optional 'convert_mode').
    """
    image = node.get("image")

    if isinstance(image, SampledImage):
        return image
    if image is not None:
        return SampledImage.from_pil(image)

    image_path = _require(node, "image_path", NODE_TYPE_IMAGE)
    return load_sampled_image(image_path, convert_mode=node.get("convert_mode"))


def build_offset_node(node: Dict[str, Any], inputs: List[Source]) -> Source:
    # JSON graphs carry the offset as a list
    return OffsetSource(inputs[0], tuple(_require(node, "offset", NODE_TYPE_OFFSET)))


def build_scale_node(node: Dict[str, Any], inputs: List[Source]) -> Source:
    factor = _require(node, "factor", NODE_TYPE_SCALE)
    return ScaleSource(inputs[0], factor, node.get("filter", Filter.NEAREST))


def build_blur_node(node: Dict[str, Any], inputs: List[Source]) -> Source:
    return BlurSource(inputs[0], _require(node, "radius", NODE_TYPE_BLUR))


def build_stack_node(node: Dict[str, Any], inputs: List[Source]) -> Source:
    return StackSource(inputs)


DEFAULT_FACTORIES = [
    (NODE_TYPE_COLOR, build_color_node, 0),
    (NODE_TYPE_IMAGE, build_image_node, 0),
    (NODE_TYPE_OFFSET, build_offset_node, 1),
    (NODE_TYPE_SCALE, build_scale_node, 1),
    (NODE_TYPE_BLUR, build_blur_node, 1),
    (NODE_TYPE_STACK, build_stack_node, ANY_INPUT_COUNT),
]

_default_registry: Optional[SourceFactoryRegistry] = None


def register_default_factories(registry: SourceFactoryRegistry) -> None:
    """Add Color, Image, Offset, Scale, Blur and Stack to ``registry``."""
    for node_type, factory, input_count in DEFAULT_FACTORIES:
        registry.register(node_type, factory, input_count=input_count)


def get_default_registry() -> SourceFactoryRegistry:
    """Registry with the built-in node types, created on first use."""
    global _default_registry

    if _default_registry is None:
        _default_registry = SourceFactoryRegistry()
        register_default_factories(_default_registry)
        logger.info(f"Default registry ready: {', '.join(_default_registry.list_node_types())}")

    return _default_registry
