"""
exprscope Lexer - turns one line of expression text into tokens.

Scans left to right and at each position tries, in priority order:
whitespace (skipped), the single-character punctuation + - * / = ( ),
a number literal and an identifier. The first pattern that matches wins.

A character no pattern accepts is reported as a LexerError and scanning
resumes at the next character, so every bad character in a line is
reported in one pass.
"""

import logging
from typing import List, NamedTuple

from .tokens import (
    Token, TokenKind, SourceLocation, PUNCTUATION, NUMBER_PATTERN,
    IDENTIFIER_PATTERN, is_valid_char
)
from .errors import (
    LexerError, create_invalid_character_error,
    create_unrecognized_character_error
)

logger = logging.getLogger(__name__)


class LexResult(NamedTuple):
    tokens: List[Token]
    errors: List[LexerError]


class Lexer:
    """
    Line lexer for the expression language.

    Whitespace never reaches the token list. Positions are 1-based; every
    token of the line is on `line` (1 unless the caller says otherwise).
    """

    def __init__(self, source: str, line: int = 1):
        """
        Initialize the lexer with a single line of source text.

        Args:
            source: The line to tokenize (no newlines expected)
            line: Line number recorded on every token
        """
        self.source = source
        self.line = line
        self.pos = 0
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the whole line.

        Returns:
            Tokens in source order, whitespace excluded
        """
        self.pos = 0
        self.tokens.clear()
        self.errors.clear()

        while self.pos < len(self.source):
            if self.source[self.pos].isspace():
                self.pos += 1
                continue

            try:
                self.tokens.append(self._next_token())
            except LexerError as e:
                self.errors.append(e)
                # Skip the offending character and keep going
                self.pos += 1

        logger.debug(
            "tokenized %r: %d tokens, %d errors",
            self.source, len(self.tokens), len(self.errors)
        )
        return self.tokens

    def _next_token(self) -> Token:
        """Match one token at the current position."""
        current_char = self.source[self.pos]

        kind = PUNCTUATION.get(current_char)
        if kind is not None:
            return self._make_token(kind, current_char)

        match = NUMBER_PATTERN.match(self.source, self.pos)
        if match:
            return self._make_token(TokenKind.NUMBER_LITERAL, match.group(0))

        match = IDENTIFIER_PATTERN.match(self.source, self.pos)
        if match:
            return self._make_token(TokenKind.IDENTIFIER, match.group(0))

        location = SourceLocation(self.line, self.pos + 1)
        if is_valid_char(current_char):
            raise create_unrecognized_character_error(current_char, location)
        raise create_invalid_character_error(current_char, location)

    def _make_token(self, kind: TokenKind, text: str) -> Token:
        start_column = self.pos + 1
        self.pos += len(text)
        return Token(
            kind,
            text,
            SourceLocation(self.line, start_column),
            SourceLocation(self.line, start_column + len(text) - 1),
        )

    def has_errors(self) -> bool:
        """Check if the lexer encountered any errors."""
        return len(self.errors) > 0


def tokenize(line: str, line_number: int = 1) -> LexResult:
    """
    Convenience function to tokenize a single line.

    Args:
        line: Source text of one line
        line_number: Line number to record on the tokens

    Returns:
        LexResult with the tokens and the collected lexer errors
    """
    lexer = Lexer(line, line_number)
    tokens = lexer.tokenize()
    return LexResult(list(tokens), list(lexer.errors))

