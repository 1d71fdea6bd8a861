"""
exprscope Parser Package

Implements a recursive descent parser for arithmetic expressions and single
assignments, producing a concrete syntax tree.

Key Features:
- Precedence encoded structurally (expression > term > factor)
- Left-associative + - and * / through repetition rules
- Bounded local error recovery, one diagnostic per mistake
- Friendly, positioned syntax error messages
"""

from .cst_nodes import CstNode, CstChild, RuleName, PLUMBING_RULES
from .parser import Parser, ParseOutcome, parse
from .errors import ParseError, describe_failure, failure_position

__all__ = [
    # Core parser
    "Parser",
    "ParseOutcome",
    "parse",

    # CST nodes
    "CstNode", "CstChild", "RuleName", "PLUMBING_RULES",

    # Error handling
    "ParseError", "describe_failure", "failure_position",
]
