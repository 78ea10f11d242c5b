# src/cli/runner.py

"""CLI front end: collection, the interactive read loop and scans."""

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.filters.denomination import strategy_by_name
from src.models.errors import NoCurrentFileError
from src.services.collector import DataCollector
from src.services.folder_scanner import FolderScanner
from src.services.query_engine import QueryEngine, ResultBlock
from src.storage.history_store import HistoryStore

logger = logging.getLogger("price_stats.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

NOTHING_FOUND = "Nothing found!"
PROMPT = "What price are you looking for?"


def build_engine(
    data_dir: Path,
    denomination: str = Settings.DENOMINATION_STRATEGY,
) -> QueryEngine:
    """Collect every table under *data_dir* into a query engine."""
    store = HistoryStore(denomination=strategy_by_name(denomination))
    _err.print("[bold]Collecting data...[/bold]")
    summary = DataCollector(store).collect(data_dir)
    _err.print(
        f"[dim]Collecting data...Done ({summary.files_read} files, "
        f"{summary.rows_ingested} rows, "
        f"{summary.files_skipped} skipped)[/dim]"
    )
    return QueryEngine(store)


# ── Presentation ─────────────────────────────────────────


def format_block(
    block: ResultBlock,
    delta: float = Settings.SIMILAR_PRICE_DELTA,
    currency: str = Settings.CURRENCY,
) -> list[str]:
    """Render one result block as output lines."""
    lines = [
        "=" * 80,
        f"{block.name.capitalize()} is "
        f"{round(block.latest.price, 2)} {currency} these days",
        f"Lowest was on {block.minimum.period.slash_label}"
        f" at price {round(block.minimum.price, 2)} {currency}",
        f"Highest was on {block.maximum.period.slash_label}"
        f" at price {round(block.maximum.price, 2)} {currency}",
        f"\nFor the same price (+/- {delta} {currency}) you can get: ",
    ]
    lines.extend(
        f"{s.name.capitalize()} with price {round(s.price, 2)} {currency}"
        for s in block.similar
    )
    return lines


def blocks_to_dicts(blocks: list[ResultBlock]) -> list[dict[str, object]]:
    """Serialise result blocks to plain dicts for JSON output."""
    return [
        {
            "name": b.name,
            "latest": {
                "price": round(b.latest.price, 2),
                "date": b.latest.period.slash_label,
            },
            "min": {
                "price": round(b.minimum.price, 2),
                "date": b.minimum.period.slash_label,
            },
            "max": {
                "price": round(b.maximum.price, 2),
                "date": b.maximum.period.slash_label,
            },
            "similar": [
                {"name": s.name, "price": round(s.price, 2)}
                for s in b.similar
            ],
        }
        for b in blocks
    ]


def _print_table(blocks: list[ResultBlock]) -> None:
    """Render a Rich table of matched products to stdout."""
    table = Table(
        title="Price Statistics",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Product", max_width=60)
    table.add_column("Now", justify="right", style="green")
    table.add_column("Lowest", justify="right")
    table.add_column("Highest", justify="right")
    table.add_column("Similar", justify="right", style="dim")

    for b in blocks:
        table.add_row(
            b.name.capitalize(),
            f"{b.latest.price:,.2f}",
            f"{b.minimum.price:,.2f} ({b.minimum.period.slash_label})",
            f"{b.maximum.price:,.2f} ({b.maximum.period.slash_label})",
            str(len(b.similar)),
        )

    Console().print(table)


# ── Commands ─────────────────────────────────────────────


def answer(engine: QueryEngine, term: str) -> list[str]:
    """Lines printed by the interactive loop for one query."""
    blocks = engine.query(term)
    if not blocks:
        return [NOTHING_FOUND]
    lines: list[str] = []
    for block in blocks:
        lines.extend(format_block(block, delta=engine.delta))
    return lines


def interactive_loop(
    engine: QueryEngine,
    read: Callable[[], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Prompt for product names until interrupted."""
    try:
        while True:
            write(f"\n{PROMPT}")
            term = read().strip()
            if not term:
                continue
            for line in answer(engine, term):
                write(line)
    except (KeyboardInterrupt, EOFError):
        write("Exiting")
        logger.info("Interactive loop stopped by user")
    return 0


def run_query(
    engine: QueryEngine, term: str, output_format: str,
) -> int:
    """Answer a single query and return an exit code."""
    blocks = engine.query(term)
    if not blocks:
        _err.print(f"[yellow]{NOTHING_FOUND}[/yellow]")
        return 1

    if output_format == "table":
        _print_table(blocks)
    elif output_format == "text":
        for block in blocks:
            for line in format_block(block, delta=engine.delta):
                print(line)
    else:
        json.dump(
            blocks_to_dicts(blocks),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0


def run_scan(
    directory: Path,
    region: str,
    query: str,
    denomination: str = "magnitude",
    delta: float = Settings.SIMILAR_PRICE_DELTA,
) -> int:
    """Print folder-scan statistics for *query* in one region."""
    try:
        scanner = FolderScanner(
            region, directory, denomination=strategy_by_name(denomination),
        )
    except NoCurrentFileError as exc:
        logger.error("Scan failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1

    stat = scanner.find_stat(query)
    if stat.max == 0:
        _err.print(f"[yellow]{NOTHING_FOUND}[/yellow]")
        return 1

    table = Table(
        title=f"{query} / {region}",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Stat", style="bold")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Date", justify="center")
    table.add_row(
        "Current",
        f"{stat.curr:,.2f}" if stat.curr is not None else "—",
        scanner.current_period.label if scanner.current_period else "",
    )
    table.add_row("Lowest", f"{stat.min:,.2f}", stat.min_date)
    table.add_row("Highest", f"{stat.max:,.2f}", stat.max_date)
    Console().print(table)

    if stat.curr is not None:
        similar = scanner.find_similar(stat.curr - delta, stat.curr + delta)
        _err.print(
            f"[dim]For the same price (+/- {delta}): "
            f"{', '.join(similar) or '—'}[/dim]"
        )
    return 0


def run_download(data_dir: Path) -> int:
    """Fetch new source tables into *data_dir*."""
    from src.scrapers.belstat_downloader import BelstatDownloader

    _err.print("[bold]Downloading source tables...[/bold]")
    written = BelstatDownloader(data_dir).download_all()
    _err.print(f"[green]✓ {len(written)} new file(s)[/green]")
    return 0
