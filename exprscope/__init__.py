"""
exprscope - Expression Analysis Package

Line-by-line lexical and syntactic analysis of short arithmetic and
assignment expressions, with positioned, human-readable diagnostics.

Architecture:
    exprscope/
    ├── lexer/           # Tokenization and shared character classes
    ├── parser/          # Recursive descent CST parser and error messages
    ├── analyzer/        # Pre-analysis, symbol table, line/document pipeline
    ├── render/          # CST outline and graph views
    ├── history.py       # Bounded JSON analysis history
    ├── report.py        # Plain-text report
    └── cli.py           # `exprscope` command

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenKind, Diagnostic, DiagnosticKind, tokenize
from .parser import Parser, CstNode, RuleName, parse
from .analyzer import (
    ExpressionAnalyzer, LineAnalysisResult, DocumentStats, analyze_line,
    analyze_document, document_stats, pre_analyze, build_symbol_table,
    SymbolTableRow
)
from .render import cst_to_outline, cst_to_graph, GraphDescription
from .config import AnalyzerConfig

__all__ = [
    # Pipeline
    "Lexer", "tokenize",
    "Parser", "parse",
    "ExpressionAnalyzer", "analyze_line", "analyze_document", "document_stats",
    "pre_analyze", "build_symbol_table",

    # Data model
    "Token", "TokenKind", "Diagnostic", "DiagnosticKind",
    "CstNode", "RuleName", "SymbolTableRow",
    "LineAnalysisResult", "DocumentStats",

    # Rendering
    "cst_to_outline", "cst_to_graph", "GraphDescription",

    # Configuration
    "AnalyzerConfig",

    # Version info
    "__version__",
    "__license__",
]
