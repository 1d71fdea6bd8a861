"""
Line and document analysis.

Runs the whole pipeline for each non-blank line of a document:

    pre-analysis -> tokenize -> symbol table -> parse -> outline

Lexical errors end a line's analysis early: the result then carries only the
lexical diagnostics, no symbol table and no tree. Otherwise pre-analysis
diagnostics come first, followed by the parser's. Document totals are
always recomputed from the stored line results.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Any

from ..config import AnalyzerConfig
from ..lexer.lexer import tokenize
from ..lexer.tokens import Token
from ..lexer.errors import Diagnostic, DiagnosticKind
from ..parser.cst_nodes import CstNode
from ..parser.parser import Parser
from ..render.outline import cst_to_outline
from .pre_analysis import pre_analyze
from .symbol_table import SymbolTableRow, build_symbol_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineAnalysisResult:
    """Everything known about one analyzed line."""
    line_number: int
    source_text: str
    tokens: List[Token]
    symbol_table: List[SymbolTableRow]
    cst: Optional[CstNode]
    diagnostics: List[Diagnostic]
    outline_lines: List[str]
    accepted: bool
    primary_diagnostic_kind: Optional[DiagnosticKind]

    def has_errors(self) -> bool:
        """Check if the line produced any diagnostics."""
        return len(self.diagnostics) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line_number": self.line_number,
            "source_text": self.source_text,
            "tokens": [t.to_dict() for t in self.tokens],
            "symbol_table": [row.to_dict() for row in self.symbol_table],
            "cst": self.cst.to_dict() if self.cst is not None else None,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "outline_lines": list(self.outline_lines),
            "accepted": self.accepted,
            "primary_diagnostic_kind": (
                self.primary_diagnostic_kind.value
                if self.primary_diagnostic_kind is not None else None
            ),
        }


@dataclass(frozen=True)
class DocumentStats:
    """Totals across all analyzed lines."""
    lines: int = 0
    tokens: int = 0
    symbols: int = 0
    errors: int = 0
    valid: int = 0

    def to_summary(self) -> Dict[str, int]:
        """The summary shape recorded by the history store."""
        return {
            "tokens": self.tokens,
            "symbols": self.symbols,
            "errors": self.errors,
            "valid": self.valid,
        }


def document_stats(results: List[LineAnalysisResult]) -> DocumentStats:
    """Sum token, symbol, diagnostic and accepted counts over the results."""
    return DocumentStats(
        lines=len(results),
        tokens=sum(len(r.tokens) for r in results),
        symbols=sum(len(r.symbol_table) for r in results),
        errors=sum(len(r.diagnostics) for r in results),
        valid=sum(1 for r in results if r.accepted),
    )


class ExpressionAnalyzer:
    """
    Analyzes documents of expressions line by line.

    Lines are processed strictly in order and each line gets its own
    Parser, so no parser state leaks from one line to the next.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()

    def analyze(self, text: str) -> List[LineAnalysisResult]:
        """
        Analyze every non-blank line of `text`.

        Line numbers are 1-based positions in the original text, so blank
        lines are skipped but still counted.
        """
        results = []
        for index, raw_line in enumerate(text.split("\n"), start=1):
            if raw_line.strip():
                results.append(self.analyze_line(raw_line, index))

        logger.debug("analyzed %d lines", len(results))
        return results

    def analyze_line(self, text: str, line_number: int = 1) -> LineAnalysisResult:
        """
        Analyze a single line.

        Args:
            text: Line text; surrounding whitespace is trimmed first and
                  all columns refer to the trimmed text
            line_number: Document line number to tag the result with
        """
        source = text.strip()
        try:
            return self._analyze(source, line_number)
        except Exception as exc:
            logger.exception("analysis of line %d failed", line_number)
            diagnostic = Diagnostic(
                message=f"Analysis failed unexpectedly ({type(exc).__name__})",
                line=1,
                column=1,
                kind=DiagnosticKind.RUNTIME,
            )
            return LineAnalysisResult(
                line_number=line_number,
                source_text=source,
                tokens=[],
                symbol_table=[],
                cst=None,
                diagnostics=[diagnostic],
                outline_lines=[],
                accepted=False,
                primary_diagnostic_kind=DiagnosticKind.RUNTIME,
            )

    def _analyze(self, source: str, line_number: int) -> LineAnalysisResult:
        pre_diagnostics = pre_analyze(source)

        lex_result = tokenize(source)
        if lex_result.errors:
            logger.debug("line %d: %d lexical errors", line_number, len(lex_result.errors))
            return LineAnalysisResult(
                line_number=line_number,
                source_text=source,
                tokens=lex_result.tokens,
                symbol_table=[],
                cst=None,
                diagnostics=[e.to_diagnostic() for e in lex_result.errors],
                outline_lines=[],
                accepted=False,
                primary_diagnostic_kind=DiagnosticKind.LEXICAL,
            )

        symbol_table = build_symbol_table(lex_result.tokens)
        outcome = Parser(lex_result.tokens, source).parse()

        diagnostics = pre_diagnostics + outcome.diagnostics
        outline = cst_to_outline(outcome.cst, self.config.indent_unit)

        return LineAnalysisResult(
            line_number=line_number,
            source_text=source,
            tokens=lex_result.tokens,
            symbol_table=symbol_table,
            cst=outcome.cst,
            diagnostics=diagnostics,
            outline_lines=outline,
            accepted=not diagnostics and outcome.cst is not None,
            primary_diagnostic_kind=diagnostics[0].kind if diagnostics else None,
        )


def analyze_line(text: str, line_number: int = 1) -> LineAnalysisResult:
    """Analyze one line with a default analyzer."""
    return ExpressionAnalyzer().analyze_line(text, line_number)


def analyze_document(text: str) -> List[LineAnalysisResult]:
    """Analyze every non-blank line of a document with a default analyzer."""
    return ExpressionAnalyzer().analyze(text)
