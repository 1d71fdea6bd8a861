"""
exprscope Analyzer Package

Drives the per-line analysis pipeline and its supporting passes:
- Pre-analysis scan for common structural mistakes
- Deduplicated symbol table of numbers and identifiers
- Line and document orchestration with aggregate statistics
"""

from .analysis import (
    ExpressionAnalyzer, LineAnalysisResult, DocumentStats,
    analyze_line, analyze_document, document_stats
)
from .pre_analysis import pre_analyze
from .symbol_table import SymbolTable, SymbolTableRow, build_symbol_table

__all__ = [
    # Orchestration
    "ExpressionAnalyzer",
    "LineAnalysisResult",
    "DocumentStats",
    "analyze_line",
    "analyze_document",
    "document_stats",

    # Passes
    "pre_analyze",
    "SymbolTable", "SymbolTableRow", "build_symbol_table",
]
