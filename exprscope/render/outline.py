"""
CST to indented text outline.

Plumbing rules (expressionPrime, termPrime, statement) never get a line of
their own: their children are spliced into the parent at the depth the
plumbing node would have occupied.
"""

from typing import List, Optional

from ..lexer.tokens import Token
from ..parser.cst_nodes import CstNode, RuleName

DEFAULT_INDENT = "  "


def cst_to_outline(cst: Optional[CstNode], indent_unit: str = DEFAULT_INDENT) -> List[str]:
    """
    Render a CST as outline lines.

    Rule nodes render as `<indent * depth><rule>`, terminals as
    `<indent * (depth + 1)><TokenKind>: "<text>"` under their rule.
    """
    lines: List[str] = []
    if cst is not None:
        _emit(cst, 0, lines, indent_unit, simplified=False)
    return lines


def cst_to_simplified_outline(cst: Optional[CstNode], indent_unit: str = DEFAULT_INDENT) -> List[str]:
    """
    Render a compact outline: `expression` is shown as `expr` and
    terminals show only their text.
    """
    lines: List[str] = []
    if cst is not None:
        _emit(cst, 0, lines, indent_unit, simplified=True)
    return lines


def _emit(node: CstNode, depth: int, lines: List[str], unit: str, simplified: bool) -> None:
    if node.is_plumbing:
        # Children take this node's place at the same depth
        for child in node.iter_children():
            if isinstance(child, CstNode):
                _emit(child, depth, lines, unit, simplified)
            else:
                lines.append(unit * depth + _terminal_label(child, simplified))
        return

    lines.append(unit * depth + _rule_label(node, simplified))
    for child in node.iter_children():
        if isinstance(child, CstNode):
            _emit(child, depth + 1, lines, unit, simplified)
        else:
            lines.append(unit * (depth + 1) + _terminal_label(child, simplified))


def _rule_label(node: CstNode, simplified: bool) -> str:
    if simplified and node.name is RuleName.EXPRESSION:
        return "expr"
    return node.name.value


def _terminal_label(token: Token, simplified: bool) -> str:
    if simplified:
        return token.text
    return f'{token.kind.display_name}: "{token.text}"'
