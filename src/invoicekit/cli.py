"""Click CLI for invoicekit — inspect configuration and exercise the document cache."""

from __future__ import annotations

import logging
import random
import sys
from collections.abc import Hashable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from invoicekit.cache.entry import CacheStats
from invoicekit.cache.estimator import estimate_document_size, is_oversized
from invoicekit.config.hierarchy import load_config_hierarchy
from invoicekit.config.schema import CacheConfig
from invoicekit.errors.exceptions import ConfigError
from invoicekit.types import LETTER, PageSize, RenderedDocument
from invoicekit.utils.format import format_byte_count, format_percentage

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging from -v count, falling back to the configured log_level."""
    level = logging.getLevelName(str(default_level).upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("invoicekit").setLevel(level)


def _cache_options(fn):
    fn = click.option(
        "--min-eviction-batch", type=int, default=None, help="Minimum entries evicted per pass."
    )(fn)
    fn = click.option("--max-entries", type=int, default=None, help="Entry count ceiling.")(fn)
    fn = click.option(
        "--max-size-bytes", type=int, default=None, help="Total estimated size ceiling."
    )(fn)
    fn = click.option(
        "--config", "config_path", type=click.Path(exists=True), help="Explicit config YAML."
    )(fn)
    return fn


def _resolve_config(
    config_path: str | None,
    max_size_bytes: int | None,
    max_entries: int | None,
    min_eviction_batch: int | None,
) -> tuple[dict[str, Any], CacheConfig]:
    try:
        settings = load_config_hierarchy(
            config_path=config_path,
            cache_max_size_bytes=max_size_bytes,
            cache_max_entries=max_entries,
            cache_min_eviction_batch=min_eviction_batch,
        )
        return settings, CacheConfig.from_mapping(settings)
    except ConfigError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="invoicekit")
def cli() -> None:
    """invoicekit — rendered invoice document cache."""


@cli.command("config")
@_cache_options
def show_config(
    config_path: str | None,
    max_size_bytes: int | None,
    max_entries: int | None,
    min_eviction_batch: int | None,
) -> None:
    """Show the resolved configuration."""
    settings, cache_config = _resolve_config(
        config_path, max_size_bytes, max_entries, min_eviction_batch
    )

    table = Table(title="Resolved Configuration", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key in sorted(settings):
        table.add_row(key, str(settings[key]))
    table.add_row(
        "eviction_size_target",
        format_byte_count(cache_config.eviction_size_target),
    )

    console.print(table)


@cli.group()
def cache() -> None:
    """Document cache commands."""


class _SyntheticRenderer:
    """Stands in for the PDF engine: deterministic page counts per invoice."""

    def __init__(self, max_pages: int, seed: int) -> None:
        self._max_pages = max_pages
        self._seed = seed

    def render(self, invoice_id: Hashable, invoice: Any) -> RenderedDocument:
        pages = random.Random(f"{self._seed}:{invoice_id}").randint(1, self._max_pages)
        return RenderedDocument.uniform(pages, LETTER)


@cache.command("simulate")
@_cache_options
@click.option(
    "--invoices", type=click.IntRange(min=1), default=50, show_default=True,
    help="Distinct invoices.",
)
@click.option(
    "--lookups", type=click.IntRange(min=0), default=1000, show_default=True,
    help="Total lookups.",
)
@click.option(
    "--workers", type=click.IntRange(min=1), default=4, show_default=True,
    help="Concurrent threads.",
)
@click.option(
    "--pages", type=click.IntRange(min=1), default=3, show_default=True,
    help="Max pages per invoice.",
)
@click.option(
    "--edit-ratio",
    type=click.FloatRange(0.0, 1.0),
    default=0.05,
    show_default=True,
    help="Fraction of lookups preceded by an invalidating edit.",
)
@click.option("--seed", type=int, default=0, show_default=True, help="Random seed.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def cache_simulate(
    config_path: str | None,
    max_size_bytes: int | None,
    max_entries: int | None,
    min_eviction_batch: int | None,
    invoices: int,
    lookups: int,
    workers: int,
    pages: int,
    edit_ratio: float,
    seed: int,
    verbose: int,
) -> None:
    """Run a concurrent get-or-render workload and report cache statistics."""
    settings, cache_config = _resolve_config(
        config_path, max_size_bytes, max_entries, min_eviction_batch
    )
    _setup_logging(verbose, settings.get("log_level", "WARNING"))
    from invoicekit.core import InvoiceKit

    kit = InvoiceKit(cache_config=cache_config)
    provider = kit.provider(_SyntheticRenderer(max_pages=pages, seed=seed))

    workload = _build_workload(invoices, lookups, edit_ratio, seed)

    def run(item: tuple[int, bool]) -> None:
        invoice_id, edited = item
        if edited:
            provider.invalidate(invoice_id)
        provider.get_document(invoice_id, None)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        list(pool.map(run, workload))

    _print_stats(kit.cache.metrics())


def _build_workload(
    invoices: int, lookups: int, edit_ratio: float, seed: int
) -> list[tuple[int, bool]]:
    """(invoice id, edited first) pairs, skewed toward low ids so some invoices are hot."""
    rng = random.Random(seed)
    return [
        ((int(rng.paretovariate(1.2)) - 1) % invoices, rng.random() < edit_ratio)
        for _ in range(lookups)
    ]


@cache.command("estimate")
@click.option("--pages", type=click.IntRange(min=0), required=True, help="Page count.")
@click.option("--width", type=float, default=LETTER.width, show_default=True, help="Points.")
@click.option("--height", type=float, default=LETTER.height, show_default=True, help="Points.")
def cache_estimate(pages: int, width: float, height: float) -> None:
    """Estimate the cache footprint of a document."""
    _, cache_config = _resolve_config(None, None, None, None)
    policy = cache_config.size_policy
    page = PageSize(width=width, height=height)
    document = RenderedDocument.uniform(pages, page)
    size = estimate_document_size(document, policy)

    oversized = "yes" if is_oversized(page.area, policy) else "no"
    console.print(
        f"{pages} page(s) at {width:g}x{height:g} pt "
        f"(oversized: {oversized}) → [green]{format_byte_count(size)}[/green] ({size:,} bytes)"
    )


def _print_stats(stats: CacheStats) -> None:
    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Entries", f"{stats.entries} / {stats.max_entries}")
    table.add_row(
        "Size",
        f"{format_byte_count(stats.size_bytes)} / {format_byte_count(stats.max_size_bytes)}",
    )
    table.add_row("Hits", str(stats.hits))
    table.add_row("Misses", str(stats.misses))
    table.add_row("Evictions", str(stats.evictions))
    table.add_row("Hit rate", format_percentage(stats.hit_rate))

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()
