"""
Test suite for the exprscope lexer.

Tests cover:
- Token kinds and 1-based inclusive positions
- Match priority between numbers and identifiers
- Whitespace skipping
- Lexical error recovery and messages
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from exprscope.lexer.lexer import Lexer, tokenize
from exprscope.lexer.tokens import TokenKind, is_valid_char, is_valid_line
from exprscope.lexer.errors import DiagnosticKind


class TestLexer(unittest.TestCase):
    """Test cases for the line lexer."""

    def _kinds(self, text):
        return [t.kind for t in tokenize(text).tokens]

    def test_assignment_positions(self):
        """Test kinds, texts and columns of a simple assignment."""
        tokens, errors = tokenize("x = 10")

        self.assertEqual(errors, [])
        self.assertEqual(
            [(t.kind, t.text) for t in tokens],
            [
                (TokenKind.IDENTIFIER, "x"),
                (TokenKind.EQUALS, "="),
                (TokenKind.NUMBER_LITERAL, "10"),
            ]
        )
        self.assertEqual((tokens[0].start_column, tokens[0].end_column), (1, 1))
        self.assertEqual((tokens[1].start_column, tokens[1].end_column), (3, 3))
        self.assertEqual((tokens[2].start_column, tokens[2].end_column), (5, 6))
        self.assertTrue(all(t.start_line == 1 and t.end_line == 1 for t in tokens))

    def test_all_punctuation(self):
        """Test every single-character token kind."""
        self.assertEqual(
            self._kinds("+-*/=()"),
            [
                TokenKind.PLUS, TokenKind.MINUS, TokenKind.MULTIPLY,
                TokenKind.DIVIDE, TokenKind.EQUALS, TokenKind.LPAREN,
                TokenKind.RPAREN,
            ]
        )

    def test_number_literals(self):
        """Test integer and decimal number literals."""
        tokens, errors = tokenize("42 3.14")
        self.assertEqual(errors, [])
        self.assertEqual([t.text for t in tokens], ["42", "3.14"])
        self.assertEqual(tokens[1].end_column, 7)

    def test_number_before_identifier(self):
        """A leading digit starts a number, the letters form an identifier."""
        tokens, errors = tokenize("2x")
        self.assertEqual(errors, [])
        self.assertEqual(
            [(t.kind, t.text) for t in tokens],
            [(TokenKind.NUMBER_LITERAL, "2"), (TokenKind.IDENTIFIER, "x")]
        )

    def test_identifier_with_digits(self):
        tokens, _ = tokenize("total2")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].kind, TokenKind.IDENTIFIER)
        self.assertEqual(tokens[0].text, "total2")

    def test_whitespace_not_emitted(self):
        """Test that spaces and tabs never become tokens."""
        tokens, errors = tokenize("  a\t+  b ")
        self.assertEqual(errors, [])
        self.assertEqual([t.text for t in tokens], ["a", "+", "b"])
        self.assertEqual([t.start_column for t in tokens], [3, 5, 8])
        self.assertNotIn(TokenKind.WHITESPACE, [t.kind for t in tokens])

    def test_invalid_character_recovery(self):
        """Test that scanning continues after an invalid character."""
        tokens, errors = tokenize("a + #")

        self.assertEqual([t.text for t in tokens], ["a", "+"])
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].code, "L001")
        self.assertEqual(errors[0].location.column, 5)
        self.assertEqual(errors[0].message, "Invalid character '#' at position 5")

    def test_every_bad_character_reported(self):
        tokens, errors = tokenize("@a$b")
        self.assertEqual([t.text for t in tokens], ["a", "b"])
        self.assertEqual([e.char for e in errors], ["@", "$"])
        self.assertEqual([e.location.column for e in errors], [1, 3])

    def test_stray_decimal_point(self):
        """A '.' is allowed only between digits."""
        tokens, errors = tokenize("3.")
        self.assertEqual([t.text for t in tokens], ["3"])
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].code, "L002")
        self.assertEqual(errors[0].message, "Unexpected character '.' at position 2")

    def test_error_to_diagnostic(self):
        _, errors = tokenize("1 ? 2")
        diagnostic = errors[0].to_diagnostic()
        self.assertEqual(diagnostic.kind, DiagnosticKind.LEXICAL)
        self.assertEqual((diagnostic.line, diagnostic.column), (1, 3))
        self.assertEqual(diagnostic.symbol, "?")

    def test_line_number(self):
        """Test that tokens carry the line the lexer was given."""
        lexer = Lexer("a + b", line=3)
        tokens = lexer.tokenize()
        self.assertTrue(all(t.start_line == 3 for t in tokens))
        self.assertFalse(lexer.has_errors())

    def test_tokenize_is_repeatable(self):
        lexer = Lexer("1 + #")
        first = list(lexer.tokenize())
        first_errors = list(lexer.errors)
        second = lexer.tokenize()
        self.assertEqual(first, second)
        self.assertEqual(len(first_errors), len(lexer.errors))

    def test_empty_line(self):
        self.assertEqual(tokenize(""), ([], []))


class TestCharacterClasses(unittest.TestCase):
    """Test cases for the shared character set."""

    def test_valid_chars(self):
        for char in "aZ09+-*/=() \t.":
            self.assertTrue(is_valid_char(char), char)

    def test_invalid_chars(self):
        for char in "#$@!?[]{}_,;":
            self.assertFalse(is_valid_char(char), char)

    def test_valid_line(self):
        self.assertTrue(is_valid_line("x = (a + 3.5) * b"))
        self.assertTrue(is_valid_line(""))
        self.assertFalse(is_valid_line("x = a_b"))


if __name__ == '__main__':
    unittest.main()
