"""
GraphLib - Source trees from node graphs

This module builds source trees from plain node and connection dictionaries,
using a registry of per-node-type factories.
"""

from NI_Libs.GraphLib.source_registry import (
    SourceFactoryRegistry,
    get_default_registry,
    register_default_factories,
    parse_color,
)
from NI_Libs.GraphLib.tree_builder import (
    build_dependency_map,
    find_root_nodes,
    calculate_build_stages,
    build_source_tree,
    describe_source_tree,
)

__all__ = [
    "SourceFactoryRegistry",
    "get_default_registry",
    "register_default_factories",
    "parse_color",
    "build_dependency_map",
    "find_root_nodes",
    "calculate_build_stages",
    "build_source_tree",
    "describe_source_tree",
]
