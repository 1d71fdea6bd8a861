"""
Pre-analysis scanner.

A heuristic pass over the raw characters of a line that catches the most
common structural mistakes before the grammar gets involved:

1. an operator as the first non-space character
2. an operator as the last non-space character
3. two operator characters side by side (every adjacent pair is reported,
   so "+++" yields two overlapping reports)
4. a ')' with no '(' to close
5. a '(' that is never closed (one report per leftover)
6. empty parentheses, "()" or "(  )"
7. characters outside the allowed set

The checks are independent and all of them are reported. They overlap
with what the parser finds, so a single mistake may be described by both
passes.
"""

import re
from typing import List

from ..lexer.tokens import is_operator_char, is_valid_char, is_valid_line
from ..lexer.errors import Diagnostic, DiagnosticKind

EMPTY_PARENS_PATTERN = re.compile(r"\(\s*\)")


def pre_analyze(text: str) -> List[Diagnostic]:
    """
    Scan a line for common structural errors.

    Args:
        text: Raw line text; columns are 1-based offsets into it

    Returns:
        Diagnostics in rule order (see module docstring)
    """
    diagnostics: List[Diagnostic] = []
    stripped = text.strip()

    if stripped and is_operator_char(stripped[0]):
        op = stripped[0]
        diagnostics.append(_syntactic(
            f"Expression cannot start with operator '{op}'",
            text.index(op) + 1,
            op,
        ))

    if stripped and is_operator_char(stripped[-1]):
        op = stripped[-1]
        diagnostics.append(_syntactic(
            f"Expression cannot end with operator '{op}'",
            text.rindex(op) + 1,
            op,
        ))

    for i in range(len(text) - 1):
        current, following = text[i], text[i + 1]
        if is_operator_char(current) and is_operator_char(following):
            diagnostics.append(_syntactic(
                f"Consecutive operators '{current}{following}' are not allowed",
                i + 1,
                current,
            ))

    diagnostics.extend(_check_parentheses(text))

    for match in EMPTY_PARENS_PATTERN.finditer(text):
        diagnostics.append(_syntactic(
            "Empty parentheses '()' are not allowed",
            match.start() + 1,
            "()",
        ))

    if not is_valid_line(text):
        for i, char in enumerate(text):
            if not is_valid_char(char):
                diagnostics.append(Diagnostic(
                    message=f"Invalid character '{char}' at position {i + 1}",
                    line=1,
                    column=i + 1,
                    kind=DiagnosticKind.LEXICAL,
                    symbol=char,
                ))

    return diagnostics


def _check_parentheses(text: str) -> List[Diagnostic]:
    """Report unmatched ')' as they occur, then every '(' left open."""
    diagnostics: List[Diagnostic] = []
    depth = 0
    open_positions: List[int] = []

    for i, char in enumerate(text):
        if char == "(":
            depth += 1
            open_positions.append(i + 1)
        elif char == ")":
            depth -= 1
            if depth < 0:
                diagnostics.append(_syntactic(
                    "Unmatched closing parenthesis ')'", i + 1, ")"
                ))
                depth = 0
            else:
                open_positions.pop()

    for position in open_positions:
        diagnostics.append(_syntactic(
            "Unmatched opening parenthesis '('", position, "("
        ))

    return diagnostics


def _syntactic(message: str, column: int, symbol: str) -> Diagnostic:
    return Diagnostic(
        message=message,
        line=1,
        column=column,
        kind=DiagnosticKind.SYNTACTIC,
        symbol=symbol,
    )
