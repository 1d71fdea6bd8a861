"""
Command line interface for exprscope.

    exprscope expressions.txt
    echo "x = (a + b) * 2" | exprscope --graph
    exprscope --show-history

Exit status is 0 when every analyzed line is valid, 1 when any line has
errors, and 2 for usage errors.
"""

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .analyzer.analysis import ExpressionAnalyzer, document_stats
from .config import AnalyzerConfig
from .history import HistoryStore
from .render.graph import cst_to_graph
from .report import render_report

logger = logging.getLogger(__name__)


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("source", type=click.File("r", encoding="utf-8", errors="replace"), default="-")
@click.option("--graph", is_flag=True, help="Print the Mermaid parse tree graph of each line.")
@click.option("--json", "as_json", is_flag=True, help="Emit results as JSON instead of a report.")
@click.option("--history/--no-history", "record_history", default=True,
              help="Record this analysis in the history file.")
@click.option("--show-history", is_flag=True, help="List recorded analyses and exit.")
@click.option("--clear-history", is_flag=True, help="Delete recorded analyses and exit.")
@click.option("--history-file", type=click.Path(dir_okay=False), default=None,
              help="History file to use instead of the configured one.")
@click.option("-v", "--verbose", count=True, help="Enable debug logging.")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors.")
@click.version_option(__version__, prog_name="exprscope")
def main(source, graph, as_json, record_history, show_history, clear_history,
         history_file, verbose, quiet):
    """Analyze arithmetic expressions and assignments, one per line."""
    _configure_logging(verbose, quiet)

    try:
        config = AnalyzerConfig.from_env()
    except ValueError as e:
        raise click.UsageError(str(e))
    if history_file:
        config.history_path = Path(history_file)

    history = HistoryStore(config.history_path, config.history_limit)

    if clear_history:
        history.clear()
        click.echo("History cleared.")
        return

    if show_history:
        _print_history(history, as_json)
        return

    text = source.read()
    if not text.strip():
        click.echo("No expressions to analyze.")
        return

    results = ExpressionAnalyzer(config).analyze(text)
    stats = document_stats(results)
    logger.debug("analysis done: %s", stats)

    if record_history:
        history.add(text, stats.to_summary())

    if as_json:
        payload = {
            "lines": [r.to_dict() for r in results],
            "stats": asdict(stats),
        }
        if graph:
            payload["graphs"] = {
                str(r.line_number): cst_to_graph(r.cst).to_dict() for r in results
            }
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(render_report(results, text), nl=False)
        if graph:
            for result in results:
                click.echo(f"%% line {result.line_number}")
                click.echo(cst_to_graph(result.cst).to_mermaid())

    sys.exit(0 if stats.valid == stats.lines else 1)


def _print_history(history: HistoryStore, as_json: bool) -> None:
    records = history.list()
    if as_json:
        click.echo(json.dumps(records, indent=2))
        return

    if not records:
        click.echo("No history.")
        return

    for record in records:
        summary = record.get("summary") or {}
        first_line = record.get("input", "").strip().split("\n")[0]
        click.echo(
            f"{record.get('timestamp', '?')}  "
            f"tokens={summary.get('tokens', 0)} symbols={summary.get('symbols', 0)} "
            f"errors={summary.get('errors', 0)} valid={summary.get('valid', 0)}  "
            f"{first_line}"
        )


if __name__ == "__main__":
    main()
