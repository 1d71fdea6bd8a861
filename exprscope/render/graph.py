"""
CST to directed graph.

Builds a node/edge description of a parse tree for diagram tools. Rule
nodes and token nodes are styled differently, token nodes are labelled
with their literal text and `expression` is shortened to `expr`. Plumbing
rules are skipped and their children attach to the nearest kept ancestor.

Node ids are numbered per call, so rendering the same tree twice gives
identical output.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from ..lexer.tokens import Token
from ..parser.cst_nodes import CstNode, RuleName, PLUMBING_RULES
from .outline import DEFAULT_INDENT

PLACEHOLDER_LABEL = "No Parse Tree Available"

RULE_NODE = "ruleNode"
TOKEN_NODE = "tokenNode"
PLACEHOLDER_NODE = "placeholder"

CLASS_DEFINITIONS = [
    "classDef ruleNode fill:#4f46e5,stroke:#312e81,stroke-width:2px,color:#fff",
    "classDef tokenNode fill:#059669,stroke:#065f46,stroke-width:2px,color:#fff",
    "classDef leafNode fill:#dc2626,stroke:#991b1b,stroke-width:2px,color:#fff",
]

_MERMAID_ESCAPES = {
    '"': '\\"',
    "[": "\\[",
    "]": "\\]",
    "(": "\\(",
    ")": "\\)",
    "{": "\\{",
    "}": "\\}",
    "\n": "\\n",
    "\r": "\\r",
}

_OUTLINE_TERMINAL = re.compile(r'^\w+: "(.+)"$')
_PLUMBING_NAMES = frozenset(rule.value for rule in PLUMBING_RULES)


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    style: str


@dataclass(frozen=True)
class GraphEdge:
    parent: str
    child: str


@dataclass
class GraphDescription:
    """Declared nodes and parent -> child edges, in creation order."""
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    @property
    def is_placeholder(self) -> bool:
        return len(self.nodes) == 1 and self.nodes[0].style == PLACEHOLDER_NODE

    def children_of(self, node_id: str) -> List[GraphNode]:
        by_id = {node.id: node for node in self.nodes}
        return [by_id[e.child] for e in self.edges if e.parent == node_id]

    def to_mermaid(self) -> str:
        """Serialize as a top-down Mermaid flowchart."""
        if self.is_placeholder:
            return f"graph TD\n  {self.nodes[0].id}[{self.nodes[0].label}]"

        lines = ["graph TD"]
        for node in self.nodes:
            lines.append(f'  {node.id}["{escape_label(node.label)}"]:::{node.style}')
        for edge in self.edges:
            lines.append(f"  {edge.parent} --> {edge.child}")
        lines.append("")
        lines.extend(CLASS_DEFINITIONS)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [{"id": n.id, "label": n.label, "style": n.style} for n in self.nodes],
            "edges": [{"parent": e.parent, "child": e.child} for e in self.edges],
        }


def placeholder_graph() -> GraphDescription:
    return GraphDescription(nodes=[GraphNode("A", PLACEHOLDER_LABEL, PLACEHOLDER_NODE)])


class _GraphBuilder:
    """Accumulates one graph; ids restart at node0 for every builder."""

    def __init__(self):
        self.graph = GraphDescription()
        self._counter = 0

    def add(self, label: str, style: str, parent_id: Optional[str]) -> str:
        node_id = f"node{self._counter}"
        self._counter += 1
        self.graph.nodes.append(GraphNode(node_id, label, style))
        if parent_id is not None:
            self.graph.edges.append(GraphEdge(parent_id, node_id))
        return node_id

    def visit(self, node: CstNode, parent_id: Optional[str]) -> None:
        if node.is_plumbing:
            for child in node.iter_children():
                self._visit_child(child, parent_id)
            return

        label = "expr" if node.name is RuleName.EXPRESSION else node.name.value
        node_id = self.add(label, RULE_NODE, parent_id)
        for child in node.iter_children():
            self._visit_child(child, node_id)

    def _visit_child(self, child: Any, parent_id: Optional[str]) -> None:
        if isinstance(child, CstNode):
            self.visit(child, parent_id)
        elif isinstance(child, Token):
            self.add(child.text, TOKEN_NODE, parent_id)


def cst_to_graph(cst: Optional[CstNode]) -> GraphDescription:
    """
    Build the graph description of a CST.

    Returns the single-node placeholder graph when there is no tree.
    """
    if cst is None:
        return placeholder_graph()

    builder = _GraphBuilder()
    builder.visit(cst, None)
    return builder.graph


def outline_to_graph(outline: List[str], indent_unit: str = DEFAULT_INDENT) -> GraphDescription:
    """
    Rebuild a graph from outline lines indented with `indent_unit` per depth
    level (the unit the outline was rendered with).

    Each line is parented on the nearest preceding line with a smaller
    depth. Plumbing rule lines are dropped and terminal lines are
    labelled with their quoted text.
    """
    if not indent_unit:
        raise ValueError("indent_unit must not be empty")
    if not outline:
        return placeholder_graph()

    builder = _GraphBuilder()
    stack: List[tuple] = []  # (node_id, depth)

    for line in outline:
        content = line.strip()
        if not content or content in _PLUMBING_NAMES:
            continue

        depth = _indent_depth(line, indent_unit)

        terminal = _OUTLINE_TERMINAL.match(content)
        if terminal:
            label, style = terminal.group(1), TOKEN_NODE
        else:
            label = "expr" if content == RuleName.EXPRESSION.value else content
            style = RULE_NODE

        while stack and stack[-1][1] >= depth:
            stack.pop()
        parent_id = stack[-1][0] if stack else None

        node_id = builder.add(label, style, parent_id)
        stack.append((node_id, depth))

    return builder.graph


def _indent_depth(line: str, unit: str) -> int:
    depth = 0
    while line.startswith(unit, depth * len(unit)):
        depth += 1
    return depth


def escape_label(label: str) -> str:
    """Escape characters that break Mermaid node labels."""
    return "".join(_MERMAID_ESCAPES.get(char, char) for char in label)
