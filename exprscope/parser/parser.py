"""
exprscope recursive descent parser.

Grammar (lower rules bind tighter):

    statement       := assignment | expression
    assignment      := Identifier Equals expression
    expression      := term expressionPrime
    expressionPrime := ( (Plus | Minus) term )*
    term            := factor termPrime
    termPrime       := ( (Multiply | Divide) factor )*
    factor          := NumberLiteral | Identifier | LParen expression RParen

The primed rules carry the repetition, which keeps + and - left associative
with * and / nested below them.

Recovery is local and bounded:
- a missing operand is reported once, stray operators in front of the next
  operand are skipped and parsing continues with that operand
- a missing ')' is either found one token later (the stray token is
  dropped) or assumed present
- input left over after the statement is reported once and discarded
Only one diagnostic is recorded per token position, so a single mistake
does not cascade.
"""

import logging
from typing import List, NamedTuple, Optional

from ..lexer.tokens import Token, TokenKind, SourceLocation
from ..lexer.errors import Diagnostic, DiagnosticKind
from .cst_nodes import CstNode, RuleName
from .errors import ParseError, create_parse_error

logger = logging.getLogger(__name__)


# Tokens that may begin a factor
OPERAND_START = frozenset({
    TokenKind.NUMBER_LITERAL,
    TokenKind.IDENTIFIER,
    TokenKind.LPAREN,
})

# Tokens skipped while looking for the next operand
STRAY_OPERATORS = frozenset({
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.MULTIPLY,
    TokenKind.DIVIDE,
    TokenKind.EQUALS,
})


class ParseOutcome(NamedTuple):
    cst: Optional[CstNode]
    diagnostics: List[Diagnostic]


class Parser:
    """
    Parser for one line's token stream.

    A Parser holds a cursor and the errors found so far, so an instance
    must not be shared between concurrent parses. `parse()` resets the
    state first; constructing a fresh Parser per line is the usual way.
    """

    def __init__(self, tokens: Optional[List[Token]] = None, source: str = ""):
        """
        Initialize the parser.

        Args:
            tokens: Tokens of one line, whitespace already removed
            source: The line text the tokens came from, used for messages
        """
        self.reset(tokens or [], source)

    def reset(self, tokens: List[Token], source: str = "") -> None:
        """Load a new token stream and forget all previous state."""
        self.tokens = list(tokens)
        self.source = source
        self.current = 0
        self.errors: List[ParseError] = []
        self._last_error_index: Optional[int] = None

        if self.tokens:
            last = self.tokens[-1]
            eof_location = SourceLocation(last.end_line, last.end_column + 1)
        else:
            eof_location = SourceLocation(1, 1)
        self._eof = Token(TokenKind.EOF, "", eof_location, eof_location)

    def parse(self) -> ParseOutcome:
        """
        Parse the token stream into a CST.

        Grammar violations become syntactic diagnostics. If the parsing
        machinery itself fails, the result is a null tree and a single
        runtime diagnostic; no exception reaches the caller.
        """
        self.reset(self.tokens, self.source)

        try:
            root = self._parse_statement()

            if not self._is_at_end():
                # Input left over after a complete statement
                self._report(self._peek(), "P001")
                self.current = len(self.tokens)

        except Exception as exc:  # engine failure, not a grammar violation
            logger.exception("parser failed on %r", self.source)
            return ParseOutcome(None, [_runtime_diagnostic(exc)])

        diagnostics = [e.to_diagnostic() for e in self.errors]
        logger.debug("parsed %r: %d diagnostics", self.source, len(diagnostics))
        return ParseOutcome(root, diagnostics)

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _parse_statement(self) -> CstNode:
        node = CstNode(RuleName.STATEMENT)

        # One token of lookahead past the identifier decides the alternative
        if self._check(TokenKind.IDENTIFIER) and self._check_next(TokenKind.EQUALS):
            node.add_rule(self._parse_assignment())
        else:
            node.add_rule(self._parse_expression())

        return node

    def _parse_assignment(self) -> CstNode:
        node = CstNode(RuleName.ASSIGNMENT)
        node.add_token(self._advance())  # Identifier
        node.add_token(self._advance())  # Equals
        node.add_rule(self._parse_expression())
        return node

    def _parse_expression(self) -> CstNode:
        node = CstNode(RuleName.EXPRESSION)
        node.add_rule(self._parse_term())
        node.add_rule(self._parse_expression_prime())
        return node

    def _parse_expression_prime(self) -> CstNode:
        node = CstNode(RuleName.EXPRESSION_PRIME)
        while self._check(TokenKind.PLUS) or self._check(TokenKind.MINUS):
            node.add_token(self._advance())
            node.add_rule(self._parse_term())
        return node

    def _parse_term(self) -> CstNode:
        node = CstNode(RuleName.TERM)
        node.add_rule(self._parse_factor())
        node.add_rule(self._parse_term_prime())
        return node

    def _parse_term_prime(self) -> CstNode:
        node = CstNode(RuleName.TERM_PRIME)
        while self._check(TokenKind.MULTIPLY) or self._check(TokenKind.DIVIDE):
            node.add_token(self._advance())
            node.add_rule(self._parse_factor())
        return node

    def _parse_factor(self) -> CstNode:
        node = CstNode(RuleName.FACTOR)

        if not self._check_operand():
            self._report(self._peek(), "P010" if self._is_at_end() else "P005")
            node.recovered = True
            if not self._skip_stray_operators():
                return node

        if self._check(TokenKind.LPAREN):
            node.add_token(self._advance())
            node.add_rule(self._parse_expression())
            closing = self._consume(TokenKind.RPAREN)
            if closing is None:
                node.recovered = True
            else:
                node.add_token(closing)
        else:
            node.add_token(self._advance())

        return node

    # ------------------------------------------------------------------
    # Recovery
    # ------------------------------------------------------------------

    def _skip_stray_operators(self) -> bool:
        """
        Skip operators standing where an operand was expected.

        Returns True when an operand follows, so the factor can be
        completed with it.
        """
        while self._peek().kind in STRAY_OPERATORS:
            self._advance()
        return self._check_operand()

    def _consume(self, kind: TokenKind) -> Optional[Token]:
        """
        Consume a token of the expected kind.

        On a mismatch the error is recorded and either the single stray
        token in front of the expected one is dropped, or the expected
        token is assumed missing and None is returned.
        """
        if self._check(kind):
            return self._advance()

        self._report(self._peek(), "P012" if kind is TokenKind.RPAREN else "P002")

        if not self._is_at_end() and self._check_next(kind):
            self._advance()
            return self._advance()

        return None

    def _report(self, token: Token, code: str) -> None:
        """Record an error at `token`, at most once per token position."""
        if self._last_error_index == self.current:
            return
        self._last_error_index = self.current

        failing = None if token.kind is TokenKind.EOF else token
        error = create_parse_error(failing, self.tokens, self.source, code)
        self.errors.append(error)

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _check(self, kind: TokenKind) -> bool:
        return self._peek().kind is kind

    def _check_next(self, kind: TokenKind) -> bool:
        index = self.current + 1
        return index < len(self.tokens) and self.tokens[index].kind is kind

    def _check_operand(self) -> bool:
        return self._peek().kind in OPERAND_START

    def _advance(self) -> Token:
        token = self._peek()
        if not self._is_at_end():
            self.current += 1
        return token

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _peek(self) -> Token:
        if self._is_at_end():
            return self._eof
        return self.tokens[self.current]


def _runtime_diagnostic(exc: Exception) -> Diagnostic:
    if isinstance(exc, RecursionError):
        message = "Parse error: expression is nested too deeply to analyze"
    else:
        message = f"Parse error: internal failure while parsing ({type(exc).__name__})"
    return Diagnostic(message=message, line=1, column=1, kind=DiagnosticKind.RUNTIME)


def parse(tokens: List[Token], source: str = "") -> ParseOutcome:
    """
    Convenience function to parse one line's tokens with a fresh parser.

    Args:
        tokens: Tokens of the line (no whitespace tokens)
        source: Line text the tokens were produced from

    Returns:
        ParseOutcome with the CST (None only on engine failure) and the
        syntactic or runtime diagnostics
    """
    return Parser(tokens, source).parse()
