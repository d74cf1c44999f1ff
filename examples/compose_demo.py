"""
Compositing demo.

Builds the classic four-copies scene: an image scaled to a tenth of its size,
blurred once, and stacked at four offsets. The blurred source is shared by all
four offsets, so it is built once and sampled through each of them.

The same scene is built twice, directly from source classes and from a node
graph, and both renders are checked to be identical.

Usage:
    python examples/compose_demo.py [input_image] [output.png]

Without an input image a synthetic checkerboard is used.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging
import time

from PIL import Image

from NI_Libs.GraphLib import build_source_tree, describe_source_tree
from NI_Libs.RenderLib import load_sampled_image, render, save_rgba
from NI_Libs.SourcesLib import (
    BlurSource,
    Filter,
    OffsetSource,
    SampledImage,
    ScaleSource,
    StackSource,
)

OUTPUT_SIZE = (600, 600)
OFFSETS = [(200, 200), (100, 100), (400, 200), (200, 400)]


def make_checkerboard(size=1000, cell=100):
    """Create an RGBA checkerboard with transparent cells."""
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    for top in range(0, size, cell):
        for left in range(0, size, cell):
            if (top // cell + left // cell) % 2 == 0:
                image.paste((230, 120, 40, 255), (left, top, left + cell, top + cell))
    return SampledImage.from_pil(image)


def build_direct(image):
    """Build the scene from source classes."""
    scaled = ScaleSource(image, 0.1, Filter.NEAREST)
    blur = BlurSource(scaled, 8)
    return StackSource([OffsetSource(blur, offset) for offset in OFFSETS])


def build_from_graph(image):
    """Build the same scene from a node graph."""
    nodes = [
        {"id": "image", "type": "Image", "image": image},
        {"id": "scale", "type": "Scale", "factor": 0.1, "filter": "nearest"},
        {"id": "blur", "type": "Blur", "radius": 8},
        {"id": "stack", "type": "Stack"},
    ]
    connections = [
        {"from_node": "image", "to_node": "scale"},
        {"from_node": "scale", "to_node": "blur"},
    ]
    for index, (dx, dy) in enumerate(OFFSETS):
        node_id = f"offset-{index}"
        nodes.append({"id": node_id, "type": "Offset", "offset": [dx, dy]})
        connections.append({"from_node": "blur", "to_node": node_id})
        connections.append({"from_node": node_id, "to_node": "stack"})

    return build_source_tree(nodes, connections)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) > 1:
        image = load_sampled_image(sys.argv[1], convert_mode="RGBA")
    else:
        image = make_checkerboard()

    output_path = Path(sys.argv[2]) if len(sys.argv) > 2 else Path("out.png")

    direct = build_direct(image)
    from_graph = build_from_graph(image)

    print(describe_source_tree(from_graph))
    print("-" * 60)

    start_time = time.time()
    direct_buffer = render(direct, *OUTPUT_SIZE)
    print(f"Direct render: {time.time() - start_time:.2f} seconds")

    start_time = time.time()
    graph_buffer = render(from_graph, *OUTPUT_SIZE)
    print(f"Graph render: {time.time() - start_time:.2f} seconds")

    assert direct_buffer == graph_buffer, "Renders should be identical!"
    print("✓ Direct and graph renders are identical")

    saved = save_rgba(direct_buffer, OUTPUT_SIZE, output_path)
    print(f"Saved {saved}")


if __name__ == "__main__":
    main()
