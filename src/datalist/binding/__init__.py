"""
Binding declarations
Parses binding strings and links them into a tree of nodes
"""

from .parser import BindingRecord, BindingParser, parse_binding, parse_bindings, serialize
from .node import BindingNode, RenderState, SubModel
from .graph import BindingGraphBuilder, build_graph, find_by_template, roots, walk

__all__ = [
    "BindingRecord",
    "BindingParser",
    "parse_binding",
    "parse_bindings",
    "serialize",
    "BindingNode",
    "RenderState",
    "SubModel",
    "BindingGraphBuilder",
    "build_graph",
    "find_by_template",
    "roots",
    "walk",
]
