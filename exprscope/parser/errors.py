"""
Error handling for the exprscope parser.

Turns grammar violations into positioned, human-readable diagnostics. The
wording depends on the failing token (or end of input) and on the original
line text, so that common mistakes get a specific sentence instead of a
generic "unexpected token".
"""

from typing import Optional, List, Tuple

from ..lexer.tokens import Token, TokenKind, is_operator_char, is_valid_char
from ..lexer.errors import Diagnostic, DiagnosticKind


class ParseError(Exception):
    """
    A grammar violation found by the parser.

    `token` is the failing token, or None when the parser ran out of input.
    The parser records these and keeps going; they never escape `parse()`.
    """

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        token: Optional[Token] = None,
        code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.token = token
        self.code = code

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            message=self.message,
            line=self.line,
            column=self.column,
            kind=DiagnosticKind.SYNTACTIC,
            symbol=self.token.text if self.token is not None else "EOF",
        )


# Parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Expected token not found",
    "P005": "Missing operand",
    "P010": "Unexpected end of input",
    "P012": "Mismatched parentheses",
}


def describe_failure(token: Optional[Token], source: str) -> str:
    """
    Build the user-facing sentence for a failure at `token`.

    Args:
        token: Failing token, None for end of input
        source: The (trimmed) line being parsed; columns index into it
    """
    text = token.text if token is not None else None
    position = token.start_column if token is not None else 1
    trimmed = source.strip()

    if token is not None and token.is_operator:
        if position == 1:
            return f"Expression cannot start with operator '{text}'"

        previous = _previous_non_space(source, position - 1)
        if previous is not None and is_operator_char(previous):
            return f"Consecutive operators '{previous}{text}' are not allowed"

        if position == len(trimmed):
            return f"Expression cannot end with operator '{text}'"

        return f"Unexpected operator '{text}' at position {position}"

    if token is not None and token.kind is TokenKind.RPAREN:
        return "Unmatched closing parenthesis ')'"
    if token is not None and token.kind is TokenKind.LPAREN:
        return "Unmatched opening parenthesis '('"

    if token is None:
        if trimmed and is_operator_char(trimmed[-1]):
            return f"Expression cannot end with operator '{trimmed[-1]}'"
        return "Unexpected end of expression"

    char = source[position - 1] if 0 < position <= len(source) else ""
    if char and not is_valid_char(char):
        return f"Invalid character '{char}' at position {position}"

    return f"Syntax error at position {position}: unexpected '{text}'"


def failure_position(token: Optional[Token], tokens: List[Token]) -> Tuple[int, int]:
    """
    Locate a failure as (line, column).

    A real token reports its own start. End of input is placed one column
    past the last real token, on that token's line; with no tokens at all
    it falls back to 1:1.
    """
    if token is not None:
        return token.start_line, token.start_column

    if not tokens:
        return 1, 1

    last = tokens[-1]
    return last.end_line, last.end_column + 1


def _previous_non_space(source: str, index: int) -> Optional[str]:
    """Return the nearest non-whitespace character before `index`."""
    i = index - 1
    while i >= 0:
        if not source[i].isspace():
            return source[i]
        i -= 1
    return None


def create_parse_error(
    token: Optional[Token],
    tokens: List[Token],
    source: str,
    code: str
) -> ParseError:
    """Create a ParseError with a friendly message and a derived position."""
    line, column = failure_position(token, tokens)
    return ParseError(
        message=describe_failure(token, source),
        line=line,
        column=max(column, 1),
        token=token,
        code=code,
    )
