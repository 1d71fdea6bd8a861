"""
Plain-text analysis report.

Renders the ordered line results of a document into a report: a header,
the input, summary counts, and for every line its token table, symbol
table, parse tree outline and diagnostics. Failed lines render with the
same sections, showing empty-state notes instead of tables.
"""

import io
from datetime import datetime
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .analyzer.analysis import LineAnalysisResult, document_stats

DEFAULT_TITLE = "Expression Analysis Report"
DEFAULT_WIDTH = 100


def render_report(
    results: List[LineAnalysisResult],
    source: str = "",
    title: str = DEFAULT_TITLE,
    generated_at: Optional[datetime] = None,
    width: int = DEFAULT_WIDTH
) -> str:
    """
    Render a report for the given line results.

    Args:
        results: Line results in document order
        source: Raw input text; rebuilt from the results when empty
        title: Report heading
        generated_at: Timestamp shown in the header (defaults to now)
        width: Character width of the rendered text

    Returns:
        The report as plain text
    """
    console = Console(
        file=io.StringIO(), record=True, width=width,
        color_system=None, force_terminal=False
    )
    timestamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    console.print(Text(f"{title}  |  Generated: {timestamp}", style="bold"))
    console.rule()

    console.print(Text("Input", style="bold"))
    input_text = source or "\n".join(r.source_text for r in results)
    for line in input_text.split("\n"):
        console.print(Text("    " + line), no_wrap=True)
    console.print()

    stats = document_stats(results)
    console.print(Text("Analysis Summary", style="bold"))
    console.print(Text(
        f"Lines: {stats.lines}   Tokens: {stats.tokens}   Symbols: {stats.symbols}   "
        f"Errors: {stats.errors}   Valid: {stats.valid}"
    ))
    console.print()

    if not results:
        console.print(Text("No analysis results available."))

    for result in results:
        _render_line(console, result)

    return console.export_text()


def _render_line(console: Console, result: LineAnalysisResult) -> None:
    status = "valid" if result.accepted else "invalid"
    console.rule(Text(f'Line {result.line_number}: "{result.source_text}" ({status})'), align="left")

    if result.tokens:
        tokens = _table("Tokens", ["Token", "Type", "Value", "Line", "Col"])
        for token in result.tokens:
            tokens.add_row(*_cells(
                token.text, token.kind.display_name, token.text,
                token.start_line, token.start_column
            ))
        console.print(tokens)
    else:
        console.print(Text("No tokens."))

    if result.symbol_table:
        symbols = _table("Symbol Table", ["ID", "Lexeme", "Type", "Line", "Col", "Len", "Scope"])
        for row in result.symbol_table:
            symbols.add_row(*_cells(
                row.id, row.lexeme, row.kind, row.line, row.column, row.length, row.scope
            ))
        console.print(symbols)
    else:
        console.print(Text("No symbols."))

    if result.outline_lines:
        console.print(Text("Parse Tree", style="bold"))
        for line in result.outline_lines:
            console.print(Text("  " + line), no_wrap=True)
    else:
        console.print(Text("No parse tree available."))

    if result.diagnostics:
        errors = _table("Errors", ["Type", "Line", "Col", "Symbol", "Message"])
        for diagnostic in result.diagnostics:
            errors.add_row(*_cells(
                diagnostic.kind.value, diagnostic.line, diagnostic.column,
                diagnostic.symbol or "", diagnostic.message
            ))
        console.print(errors)
    else:
        console.print(Text("No errors."))

    console.print()


def _table(title: str, headers: List[str]) -> Table:
    table = Table(title=title, title_justify="left", box=box.SIMPLE_HEAD)
    for header in headers:
        table.add_column(header)
    return table


def _cells(*values: object) -> List[Text]:
    # Text cells keep user input from being read as console markup
    return [Text(str(value)) for value in values]
