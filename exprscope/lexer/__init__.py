"""
exprscope Lexer Package

Implements the tokenizer for single-line arithmetic/assignment expressions.

Key Features:
- Priority-ordered matching: punctuation, number literals, identifiers
- Whitespace skipped, never emitted
- 1-based line/column tracking with inclusive end columns
- Best-effort recovery: every bad character in a line is reported
- One shared definition of the allowed character set
"""

from .tokens import (
    Token, TokenKind, SourceLocation, ARITHMETIC_OPERATORS, OPERATOR_CHARS,
    is_valid_char, is_valid_line, is_operator_char
)
from .lexer import Lexer, LexResult, tokenize
from .errors import Diagnostic, DiagnosticKind, LexerError

__all__ = [
    "Lexer",
    "LexResult",
    "tokenize",
    "Token",
    "TokenKind",
    "SourceLocation",
    "ARITHMETIC_OPERATORS",
    "OPERATOR_CHARS",
    "is_valid_char",
    "is_valid_line",
    "is_operator_char",
    "Diagnostic",
    "DiagnosticKind",
    "LexerError",
]
