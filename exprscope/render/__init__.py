"""
exprscope Render Package

Pure transforms from a concrete syntax tree to human-facing views:
an indented text outline and a directed graph (with Mermaid output).
Both hide the plumbing rules that only encode repetition or dispatch.
"""

from .outline import cst_to_outline, cst_to_simplified_outline
from .graph import (
    GraphDescription, GraphNode, GraphEdge, cst_to_graph, outline_to_graph,
    placeholder_graph, escape_label, PLACEHOLDER_LABEL
)

__all__ = [
    "cst_to_outline",
    "cst_to_simplified_outline",
    "cst_to_graph",
    "outline_to_graph",
    "placeholder_graph",
    "escape_label",
    "GraphDescription",
    "GraphNode",
    "GraphEdge",
    "PLACEHOLDER_LABEL",
]
