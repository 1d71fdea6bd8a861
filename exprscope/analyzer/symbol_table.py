"""
Symbol table for exprscope line analysis.

Collects the number literals and identifiers of one line into a
deduplicated table. Each distinct lexeme gets one row, numbered from 1 in
first-seen order and positioned at its first occurrence. Later occurrences
of the same lexeme leave the table untouched.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Any

from ..lexer.tokens import Token

GLOBAL_SCOPE = "global"


@dataclass(frozen=True)
class SymbolTableRow:
    """One distinct lexeme of the line."""
    id: int
    lexeme: str
    kind: str           # "NumberLiteral" or "Identifier"
    line: int
    column: int
    length: int
    scope: str = GLOBAL_SCOPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "lexeme": self.lexeme,
            "kind": self.kind,
            "line": self.line,
            "column": self.column,
            "length": self.length,
            "scope": self.scope,
        }


class SymbolTable:
    """
    Insertion-ordered registry of operand lexemes.

    Only tokens that are number literals or identifiers are accepted;
    operators and parentheses are ignored.
    """

    def __init__(self):
        self._rows: Dict[str, SymbolTableRow] = {}

    def declare(self, token: Token) -> Optional[SymbolTableRow]:
        """
        Register a token's lexeme if it is an unseen operand.

        Returns:
            The new row, or None when nothing was added
        """
        if not token.is_operand or token.text in self._rows:
            return None

        row = SymbolTableRow(
            id=len(self._rows) + 1,
            lexeme=token.text,
            kind=token.kind.display_name,
            line=token.start_line,
            column=token.start_column,
            length=len(token.text),
        )
        self._rows[token.text] = row
        return row

    def lookup(self, lexeme: str) -> Optional[SymbolTableRow]:
        return self._rows.get(lexeme)

    def rows(self) -> List[SymbolTableRow]:
        return list(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, lexeme: str) -> bool:
        return lexeme in self._rows


def build_symbol_table(tokens: List[Token]) -> List[SymbolTableRow]:
    """Build the deduplicated symbol rows for one line's tokens."""
    table = SymbolTable()
    for token in tokens:
        table.declare(token)
    return table.rows()
