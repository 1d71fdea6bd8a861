"""
Test suite for the pre-analysis scanner.

Tests cover:
- Leading and trailing operators
- Adjacent operator pairs
- Parenthesis balance and empty parentheses
- Invalid characters
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from exprscope.analyzer.pre_analysis import pre_analyze
from exprscope.lexer.errors import DiagnosticKind


class TestPreAnalysis(unittest.TestCase):
    """Test cases for the heuristic pre-analysis pass."""

    def _summary(self, text):
        return [(d.message, d.column, d.symbol) for d in pre_analyze(text)]

    def test_clean_line(self):
        self.assertEqual(pre_analyze("3 + 4"), [])
        self.assertEqual(pre_analyze("x = (a + b) * 2"), [])

    def test_leading_operator(self):
        self.assertEqual(
            self._summary("+ 3"),
            [("Expression cannot start with operator '+'", 1, "+")]
        )

    def test_trailing_operator(self):
        self.assertEqual(
            self._summary("3 +"),
            [("Expression cannot end with operator '+'", 3, "+")]
        )

    def test_lone_operator(self):
        """A single operator both starts and ends the line."""
        messages = [d.message for d in pre_analyze("-")]
        self.assertEqual(messages, [
            "Expression cannot start with operator '-'",
            "Expression cannot end with operator '-'",
        ])

    def test_every_adjacent_pair_reported(self):
        """Test that '+++' yields two overlapping reports."""
        self.assertEqual(
            self._summary("a +++ b"),
            [
                ("Consecutive operators '++' are not allowed", 3, "+"),
                ("Consecutive operators '++' are not allowed", 4, "+"),
            ]
        )

    def test_spaced_operators_not_adjacent(self):
        """Only directly adjacent characters count as a pair here."""
        self.assertEqual(pre_analyze("5 + + 3"), [])

    def test_mixed_operator_pair(self):
        self.assertEqual(
            self._summary("3 +* 4"),
            [("Consecutive operators '+*' are not allowed", 3, "+")]
        )

    def test_unmatched_closing(self):
        self.assertEqual(
            self._summary("a + b)"),
            [("Unmatched closing parenthesis ')'", 6, ")")]
        )

    def test_unmatched_opening(self):
        self.assertEqual(
            self._summary("(a + b"),
            [("Unmatched opening parenthesis '('", 1, "(")]
        )

    def test_leftover_opening_is_outermost(self):
        self.assertEqual(
            self._summary("((a)"),
            [("Unmatched opening parenthesis '('", 1, "(")]
        )

    def test_closing_before_opening(self):
        """Closing errors come first, then every '(' left open."""
        self.assertEqual(
            self._summary(")("),
            [
                ("Unmatched closing parenthesis ')'", 1, ")"),
                ("Unmatched opening parenthesis '('", 2, "("),
            ]
        )

    def test_empty_parentheses(self):
        for text in ("()", "( )", "(   )"):
            self.assertEqual(
                self._summary(text),
                [("Empty parentheses '()' are not allowed", 1, "()")],
                text
            )

    def test_invalid_character(self):
        diagnostics = pre_analyze("a + #")
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].kind, DiagnosticKind.LEXICAL)
        self.assertEqual(diagnostics[0].message, "Invalid character '#' at position 5")
        self.assertEqual(diagnostics[0].column, 5)

    def test_all_diagnostics_on_line_one(self):
        diagnostics = pre_analyze("+ (a ++ ) #")
        self.assertTrue(diagnostics)
        self.assertTrue(all(d.line == 1 for d in diagnostics))

    def test_rule_order(self):
        """Syntactic rules are reported before invalid characters."""
        kinds = [d.kind for d in pre_analyze("(# + 1")]
        self.assertEqual(kinds, [DiagnosticKind.SYNTACTIC, DiagnosticKind.LEXICAL])


if __name__ == '__main__':
    unittest.main()
