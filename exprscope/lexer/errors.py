"""
Error handling for the exprscope lexer.

Defines the user-facing Diagnostic record shared by every analysis stage,
and the LexerError raised internally when the tokenizer meets a character
it cannot place in any token.
"""

from enum import Enum
from typing import Optional, Dict, Any
from dataclasses import dataclass

from .tokens import SourceLocation


class DiagnosticKind(str, Enum):
    """Category of a diagnostic."""
    LEXICAL = "lexical"
    SYNTACTIC = "syntactic"
    RUNTIME = "runtime"


@dataclass(frozen=True)
class Diagnostic:
    """
    A positioned, human-readable problem report.

    `line` and `column` are 1-based. `symbol` is the offending text when
    one exists ("EOF" for end-of-input problems).
    """
    message: str
    line: int
    column: int
    kind: DiagnosticKind
    symbol: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.kind.value} error at {self.line}:{self.column}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "kind": self.kind.value,
            "symbol": self.symbol,
        }


class LexerError(Exception):
    """
    Raised by the lexer for a character no token pattern accepts.

    The lexer collects these and keeps scanning from the next character.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        char: str,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.location = location
        self.char = char
        self.code = code
        self.help_text = help_text

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            message=self.message,
            line=self.location.line,
            column=self.location.column,
            kind=DiagnosticKind.LEXICAL,
            symbol=self.char,
        )


# Error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unrecognized character sequence",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character outside the allowed character set."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in an expression."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character '{char}' at position {location.column}",
        location=location,
        char=char,
        code="L001",
        help_text=help_text,
    )


def create_unrecognized_character_error(char: str, location: SourceLocation) -> LexerError:
    """
    Create an error for an allowed character that cannot start a token,
    such as a stray '.' that is not part of a number literal.
    """
    return LexerError(
        message=f"Unexpected character '{char}' at position {location.column}",
        location=location,
        char=char,
        code="L002",
        help_text="Decimal points must appear between digits, as in 3.14.",
    )
