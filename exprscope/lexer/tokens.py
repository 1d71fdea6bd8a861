"""
Token definitions for the exprscope lexer.

This module defines the token kinds of the expression language:
- Arithmetic operators (+, -, *, /)
- Assignment (=)
- Grouping parentheses
- Number literals and identifiers

It also holds the character classes shared by the tokenizer and the
pre-analysis scanner, so both agree on what counts as a valid character.
"""

import re
from enum import Enum
from dataclasses import dataclass
from typing import Dict, Pattern


class TokenKind(Enum):
    """
    Enumeration of all token kinds.

    The value of each member is its display name, which is what outlines,
    reports and symbol table rows show.
    """

    WHITESPACE = "WhiteSpace"       # skipped, never emitted
    PLUS = "Plus"                   # +
    MINUS = "Minus"                 # -
    MULTIPLY = "Multiply"           # *
    DIVIDE = "Divide"               # /
    EQUALS = "Equals"               # =
    LPAREN = "LParen"               # (
    RPAREN = "RParen"               # )
    NUMBER_LITERAL = "NumberLiteral"  # 42, 3.14
    IDENTIFIER = "Identifier"       # x, total2

    # Parser-internal end of input marker
    EOF = "EOF"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceLocation:
    """
    A 1-based line/column position inside one analyzed line.
    """
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    `start` points at the first character and `end` at the last one
    (inclusive), so a single-character token has start == end.
    """
    kind: TokenKind
    text: str
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        return f"{self.kind.display_name}({self.text!r})"

    @property
    def start_line(self) -> int:
        return self.start.line

    @property
    def start_column(self) -> int:
        return self.start.column

    @property
    def end_line(self) -> int:
        return self.end.line

    @property
    def end_column(self) -> int:
        return self.end.column

    @property
    def is_operator(self) -> bool:
        return self.kind in ARITHMETIC_OPERATORS

    @property
    def is_operand(self) -> bool:
        """Number literals and identifiers, the only symbol table entries."""
        return self.kind in (TokenKind.NUMBER_LITERAL, TokenKind.IDENTIFIER)

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind.display_name,
            "text": self.text,
            "start_line": self.start_line,
            "start_column": self.start_column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


# Single-character punctuation in match priority order
PUNCTUATION: Dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "=": TokenKind.EQUALS,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

ARITHMETIC_OPERATORS = frozenset({
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.MULTIPLY,
    TokenKind.DIVIDE,
})

# Raw characters treated as operators by the message mapping and pre-scan
OPERATOR_CHARS = frozenset("+-*/")

NUMBER_PATTERN: Pattern[str] = re.compile(r"[0-9]+(?:\.[0-9]+)?")
IDENTIFIER_PATTERN: Pattern[str] = re.compile(r"[A-Za-z][A-Za-z0-9]*")

# Every character that may appear in a line. The tokenizer's error path and
# the pre-analysis invalid character rule both go through is_valid_char().
VALID_CHAR_CLASS = r"[A-Za-z0-9+\-*/=()\s.]"
VALID_CHAR_PATTERN: Pattern[str] = re.compile(VALID_CHAR_CLASS)
VALID_LINE_PATTERN: Pattern[str] = re.compile(VALID_CHAR_CLASS + r"*\Z")


def is_valid_char(char: str) -> bool:
    """Check if a single character belongs to the allowed character set."""
    return VALID_CHAR_PATTERN.fullmatch(char) is not None


def is_valid_line(text: str) -> bool:
    """Check if every character of the text belongs to the allowed set."""
    return VALID_LINE_PATTERN.match(text) is not None


def is_operator_char(char: str) -> bool:
    return char in OPERATOR_CHARS
