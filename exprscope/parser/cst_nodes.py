"""
Concrete Syntax Tree node definitions for exprscope.

A CST keeps every grammar rule invocation and every consumed token. Rule
nodes map child-slot names to ordered child lists, the same way the grammar
names them: terminal slots are named after the token kind ("Plus",
"NumberLiteral", ...) and subrule slots after the rule ("term", "factor", ...).
Slots keep the order in which they were first filled.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Union, Any

from ..lexer.tokens import Token


class RuleName(Enum):
    """Closed set of grammar rules."""
    STATEMENT = "statement"
    ASSIGNMENT = "assignment"
    EXPRESSION = "expression"
    EXPRESSION_PRIME = "expressionPrime"
    TERM = "term"
    TERM_PRIME = "termPrime"
    FACTOR = "factor"


# Rules that only encode repetition or dispatch
PLUMBING_RULES = frozenset({
    RuleName.EXPRESSION_PRIME,
    RuleName.TERM_PRIME,
    RuleName.STATEMENT,
})


CstChild = Union["CstNode", Token]


@dataclass
class CstNode:
    """
    A rule node of the concrete syntax tree.

    `recovered` marks nodes the parser completed through error recovery
    (a missing operand or closing parenthesis).
    """
    name: RuleName
    children: Dict[str, List[CstChild]] = field(default_factory=dict)
    recovered: bool = False

    def add_rule(self, node: "CstNode") -> None:
        self.children.setdefault(node.name.value, []).append(node)

    def add_token(self, token: Token) -> None:
        self.children.setdefault(token.kind.display_name, []).append(token)

    def iter_children(self) -> Iterator[CstChild]:
        """Yield children slot by slot, in slot order."""
        for slot_children in self.children.values():
            yield from slot_children

    def rules(self, name: RuleName) -> List["CstNode"]:
        """Return the subrule children filed under `name`."""
        return [c for c in self.children.get(name.value, []) if isinstance(c, CstNode)]

    def tokens(self) -> List[Token]:
        """All terminal leaves of this subtree, in source order."""
        leaves: List[Token] = []
        for child in self.iter_children():
            if isinstance(child, CstNode):
                leaves.extend(child.tokens())
            else:
                leaves.append(child)
        leaves.sort(key=lambda t: (t.start_line, t.start_column))
        return leaves

    @property
    def is_plumbing(self) -> bool:
        return self.name in PLUMBING_RULES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name.value,
            "recovered": self.recovered,
            "children": {
                slot: [
                    c.to_dict() if isinstance(c, CstNode) else {"token": c.to_dict()}
                    for c in slot_children
                ]
                for slot, slot_children in self.children.items()
            },
        }
