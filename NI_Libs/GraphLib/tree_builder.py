"""
Source Tree Builder

This module turns a node graph (node dictionaries plus connections) into a
source tree. Nodes are assigned build stages from their dependencies, so each
node is built exactly once and after all of its inputs; a node feeding several
consumers is shared by reference between them.

Connection order is significant: a node's inputs are passed to its factory in
the order their connections appear, which is the layer order of a Stack.

Example:
    >>> nodes = [
    ...     {"id": "bg", "type": "Color", "color": "#ff0000"},
    ...     {"id": "fg", "type": "Color", "color": "#0000ff80"},
    ...     {"id": "stack", "type": "Stack"},
    ... ]
    >>> connections = [
    ...     {"from_node": "bg", "to_node": "stack"},
    ...     {"from_node": "fg", "to_node": "stack"},
    ... ]
    >>> tree = build_source_tree(nodes, connections)
"""

from typing import Any, Dict, List, Optional, Set
import logging

from NI_Libs.constants import (
    FIELD_FROM_NODE,
    FIELD_NODE_ID,
    FIELD_NODE_TYPE,
    FIELD_TO_NODE,
)
from NI_Libs.GraphLib.source_registry import (
    SourceFactoryRegistry,
    get_default_registry,
)
from NI_Libs.source import Source
from NI_Libs.SourcesLib.image_source import UnsupportedFormatError

logger = logging.getLogger(__name__)


def build_dependency_map(
    nodes: List[Dict[str, Any]],
    connections: List[Dict[str, str]],
) -> Dict[str, List[str]]:
    """
    Build a mapping of each node to its input dependencies.

    Args:
        nodes: List of node dictionaries with 'id' keys
        connections: List of connection dictionaries with 'from_node' and 'to_node' keys

    Returns:
        Dictionary mapping node_id -> list of input node_ids in connection order

    Raises:
        ValueError: If a node id is missing or duplicated, or a connection
                    references an unknown node

    Example:
        >>> nodes = [{"id": "n1"}, {"id": "n2"}]
        >>> build_dependency_map(nodes, [{"from_node": "n1", "to_node": "n2"}])
        {'n1': [], 'n2': ['n1']}
    """
    dependencies: Dict[str, List[str]] = {}
    for index, node in enumerate(nodes):
        node_id = str(node.get(FIELD_NODE_ID, "")).strip()
        if not node_id:
            raise ValueError(f"Node {index} has no id")
        if node_id in dependencies:
            raise ValueError(f"Duplicate node id: {node_id}")
        dependencies[node_id] = []

    for index, connection in enumerate(connections):
        from_node = str(connection.get(FIELD_FROM_NODE, "")).strip()
        to_node = str(connection.get(FIELD_TO_NODE, "")).strip()

        if from_node not in dependencies:
            raise ValueError(f"Connection {index}: from_node '{from_node}' does not exist")
        if to_node not in dependencies:
            raise ValueError(f"Connection {index}: to_node '{to_node}' does not exist")

        dependencies[to_node].append(from_node)

    return dependencies


def find_root_nodes(dependencies: Dict[str, List[str]]) -> List[str]:
    """
    Find nodes that no other node consumes.

    Returns:
        Sorted list of root node ids
    """
    consumed: Set[str] = set()
    for inputs in dependencies.values():
        consumed.update(inputs)
    return sorted(node_id for node_id in dependencies if node_id not in consumed)


def collect_upstream(dependencies: Dict[str, List[str]], root_id: str) -> Set[str]:
    """Collect the root and every node it (transitively) reads from."""
    reachable: Set[str] = {root_id}
    queue = [root_id]
    while queue:
        current = queue.pop(0)
        for input_id in dependencies.get(current, []):
            if input_id not in reachable:
                reachable.add(input_id)
                queue.append(input_id)
    return reachable


def calculate_build_stages(dependencies: Dict[str, List[str]]) -> Dict[str, int]:
    """
    Assign a build stage to each node.

    Leaf nodes (no inputs) are stage 0; every other node is one more than the
    highest stage among its inputs.

    Raises:
        ValueError: If circular dependency detected

    Example:
        >>> calculate_build_stages({"n1": [], "n2": ["n1"], "n3": ["n2"]})
        {'n1': 0, 'n2': 1, 'n3': 2}
    """
    node_stages: Dict[str, int] = {}
    unassigned: Set[str] = set(dependencies.keys())

    while unassigned:
        progress_made = False

        for node_id in sorted(unassigned):
            node_deps = dependencies.get(node_id, [])

            if all(dep_id in node_stages for dep_id in node_deps):
                input_stages = [node_stages[dep_id] for dep_id in node_deps]
                node_stages[node_id] = max(input_stages) + 1 if input_stages else 0
                unassigned.remove(node_id)
                progress_made = True

        if not progress_made:
            cycle_nodes = ", ".join(sorted(unassigned))
            raise ValueError(
                f"Circular dependency detected: cannot build nodes: {cycle_nodes}"
            )

    return dict(sorted(node_stages.items(), key=lambda item: (item[1], item[0])))


def build_source_tree(
    nodes: List[Dict[str, Any]],
    connections: List[Dict[str, str]],
    root_id: Optional[str] = None,
    registry: Optional[SourceFactoryRegistry] = None,
) -> Source:
    """
    Build the source tree described by a node graph.

    Only the root and the nodes it reads from are built.

    Args:
        nodes: List of node dictionaries with 'id' and 'type' keys plus
               type-specific parameters
        connections: List of connection dictionaries with 'from_node', 'to_node' keys
        root_id: Node to return; required when the graph has several roots
        registry: Factory registry (default: the global default registry)

    Returns:
        The root Source

    Raises:
        ValueError: If the graph is malformed, cyclic or has no single root
        KeyError: If a node type has no registered factory
    """
    if registry is None:
        registry = get_default_registry()

    dependencies = build_dependency_map(nodes, connections)

    if root_id is None:
        roots = find_root_nodes(dependencies)
        if len(roots) != 1:
            found = ", ".join(roots) if roots else "none"
            raise ValueError(
                f"Graph must have exactly one root node, found: {found}. Pass root_id."
            )
        root_id = roots[0]
    else:
        root_id = str(root_id).strip()
        if root_id not in dependencies:
            raise ValueError(f"Root node '{root_id}' does not exist")

    reachable = collect_upstream(dependencies, root_id)
    stages = calculate_build_stages({
        node_id: deps for node_id, deps in dependencies.items() if node_id in reachable
    })

    node_lookup = {str(node.get(FIELD_NODE_ID, "")).strip(): node for node in nodes}
    built: Dict[str, Source] = {}

    for node_id in stages:
        node = node_lookup[node_id]
        node_type = str(node.get(FIELD_NODE_TYPE, "")).strip()
        inputs = [built[dep_id] for dep_id in dependencies[node_id]]

        try:
            built[node_id] = registry.build(node_type, node, inputs)
        except UnsupportedFormatError:
            raise
        except (ValueError, TypeError) as e:
            raise ValueError(f"Error building node {node_id}: {str(e)}") from e

    logger.debug(
        f"Built source tree '{root_id}' from {len(built)} of {len(dependencies)} node(s)"
    )
    return built[root_id]


def _child_sources(source: Source) -> List[Source]:
    children = getattr(source, "sources", None)
    if children is not None:
        return list(children)
    child = getattr(source, "source", None)
    if isinstance(child, Source):
        return [child]
    return []


def describe_source_tree(source: Source) -> str:
    """
    Generate a human-readable outline of a source tree.

    Example:
        >>> print(describe_source_tree(BlurSource(image, 2)))
        BlurSource(radius=2) borders=x[-2, 11] y[-2, 11]
          SampledImage(size=(10, 10), channels=4) borders=x[0, 9] y[0, 9]
    """
    lines: List[str] = []

    def visit(node: Source, depth: int) -> None:
        borders = node.borders()
        if borders is None:
            extent = "unbounded"
        else:
            extent = (
                f"x[{borders.x_range[0]}, {borders.x_range[1]}] "
                f"y[{borders.y_range[0]}, {borders.y_range[1]}]"
            )
        lines.append(f"{'  ' * depth}{node!r} borders={extent}")
        for child in _child_sources(node):
            visit(child, depth + 1)

    visit(source, 0)
    return "\n".join(lines)
