"""Click CLI for hubdown — render markdown to HTML."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from hubdown.config.hierarchy import load_config_hierarchy
from hubdown.errors.exceptions import ConfigError, HubdownError
from hubdown.types import StageName

console = Console()
error_console = Console(stderr=True)

_MARKDOWN_SUFFIXES = {".md", ".markdown", ".mdown"}


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
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


def _load_config(**overrides: Any) -> dict[str, Any]:
    """Resolve configuration, exiting with a message when it is invalid."""
    try:
        return load_config_hierarchy(**overrides)
    except ConfigError as e:
        error_console.print(f"[red]Config error:[/red] {escape(str(e))}")
        sys.exit(1)


def _open_store(config: dict[str, Any]):
    """Disk store from config, or None when caching is disabled."""
    if config.get("cache_disabled"):
        return None
    from hubdown.cache.disk import DiskStore

    db_path = config.get("cache_db_path")
    return DiskStore(
        db_path=Path(db_path) if db_path else None,
        max_size_mb=float(config.get("cache_disk_mb", 500)),
    )


@click.group()
@click.version_option(package_name="hubdown")
def cli() -> None:
    """hubdown — render markdown to HTML through a cached stage pipeline."""


@cli.command()
@click.argument("input_path", type=click.Path(exists=True))
@click.option("-o", "--output", type=click.Path(), help="Output file path.")
@click.option("--output-dir", type=click.Path(), help="Output directory for batch rendering.")
@click.option(
    "--frontmatter/--no-frontmatter",
    default=None,
    help="Split leading YAML metadata from the document.",
)
@click.option(
    "--ignore",
    multiple=True,
    type=click.Choice([name.value for name in StageName]),
    help="Stage to leave out (repeatable).",
)
@click.option("--no-cache", is_flag=True, default=False, help="Disable caching.")
@click.option("--cache-db", type=click.Path(), default=None, help="SQLite cache file.")
@click.option("--workers", type=int, default=None, help="Concurrent documents for batch.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit the full result as JSON.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def render(
    input_path: str,
    output: str | None,
    output_dir: str | None,
    frontmatter: bool | None,
    ignore: tuple[str, ...],
    no_cache: bool,
    cache_db: str | None,
    workers: int | None,
    as_json: bool,
    verbose: int,
) -> None:
    """Render markdown file(s) to HTML."""
    config = _load_config(
        frontmatter=frontmatter,
        ignore=list(ignore) or None,
        cache_disabled=no_cache or None,
        cache_db_path=cache_db,
        max_workers=workers,
    )
    _setup_logging(verbose, config.get("log_level", "WARNING"))

    store = _open_store(config)
    options = {
        "frontmatter": bool(config.get("frontmatter")),
        "ignore": list(config.get("ignore") or []),
        "cache": store,
    }

    input_path_obj = Path(input_path)
    try:
        if input_path_obj.is_dir():
            _render_batch(input_path_obj, output_dir, options, config, as_json)
        else:
            _render_single(input_path_obj, output, options, as_json, verbose)
    except (HubdownError, ValidationError, OSError) as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    finally:
        if store is not None:
            store.close()


def _render_single(
    input_path: Path,
    output: str | None,
    options: dict[str, Any],
    as_json: bool,
    verbose: int,
) -> None:
    """Render a single file."""
    from hubdown.core import convert

    markdown = input_path.read_text(encoding="utf-8")
    result = asyncio.run(convert(markdown, options))
    payload = _format_result(result, as_json)

    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload, encoding="utf-8")
        console.print(f"[green]Written to {out_path}[/green]")
    else:
        click.echo(payload)

    if verbose >= 1:
        _print_summary(result, options)


def _render_batch(
    input_dir: Path,
    output_dir: str | None,
    options: dict[str, Any],
    config: dict[str, Any],
    as_json: bool,
) -> None:
    """Render every markdown file in a directory."""
    from hubdown.core import convert_batch

    files = [f for f in sorted(input_dir.iterdir()) if f.suffix.lower() in _MARKDOWN_SUFFIXES]
    if not files:
        error_console.print("[yellow]No markdown files found in directory.[/yellow]")
        return

    out_dir = Path(output_dir) if output_dir else input_dir / "html"
    out_dir.mkdir(parents=True, exist_ok=True)

    documents = [f.read_text(encoding="utf-8") for f in files]
    results = asyncio.run(
        convert_batch(
            documents,
            options,
            max_workers=int(config.get("max_workers", 5)),
            return_exceptions=True,
        )
    )

    failed: list[Path] = []
    suffix = ".json" if as_json else ".html"
    for file, result in zip(files, results, strict=True):
        if isinstance(result, Exception):
            error_console.print(f"[red]Failed:[/red] {file.name}: {escape(str(result))}")
            failed.append(file)
            continue
        (out_dir / f"{file.stem}{suffix}").write_text(
            _format_result(result, as_json), encoding="utf-8"
        )

    console.print(f"[green]Rendered {len(files) - len(failed)} files to {out_dir}[/green]")
    if failed:
        sys.exit(1)


def _format_result(result: dict[str, Any], as_json: bool) -> str:
    if as_json:
        return json.dumps(result, indent=2, ensure_ascii=False, default=str)
    return result["content"]


def _print_summary(result: dict[str, Any], options: dict[str, Any]) -> None:
    """Print a conversion summary."""
    from hubdown.pipeline.builder import get_pipeline

    error_console.print()
    table = Table(title="Render Summary", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    pipeline = get_pipeline(ignore=options.get("ignore") or [])
    table.add_row("Stages", " → ".join(pipeline.stage_names))
    metadata = sorted(k for k in result if k != "content")
    if metadata:
        table.add_row("Frontmatter", ", ".join(metadata))
    table.add_row("Output length", f"{len(result['content']):,} chars")

    store = options.get("cache")
    if store is None:
        table.add_row("Cache", "disabled")
    else:
        stats = store.stats()
        table.add_row("Cache", f"hits: {stats.hits}, misses: {stats.misses}")

    error_console.print(table)


@cli.command("stages")
def list_stages() -> None:
    """List the pipeline stages in execution order."""
    from hubdown.pipeline.builder import base_stages

    config = _load_config()
    ignored = set(config.get("ignore") or [])

    table = Table(title="Pipeline Stages", show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Options")
    table.add_column("Status")

    for i, stage in enumerate(base_stages(), 1):
        options = ", ".join(f"{k}={v!r}" for k, v in stage.options.items()) or "-"
        if stage.name in ignored:
            status = "[yellow]ignored[/yellow]"
        elif stage.is_placeholder:
            status = "placeholder"
        else:
            status = "active"
        table.add_row(str(i), str(stage.name), options, status)

    console.print(table)


@cli.group()
def cache() -> None:
    """Cache management commands."""


@cache.command("stats")
@click.option("--cache-db", type=click.Path(), default=None, help="SQLite cache file.")
def cache_stats(cache_db: str | None) -> None:
    """Show cache statistics."""
    config = _load_config(cache_disabled=False, cache_db_path=cache_db)
    store = _open_store(config)

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    stats = store.stats()
    table.add_row("Location", str(store.path))
    table.add_row("Entries", str(stats.entries))
    table.add_row("Size (MB)", f"{stats.size_mb:.2f}")

    console.print(table)
    store.close()


@cache.command("clear")
@click.option("--cache-db", type=click.Path(), default=None, help="SQLite cache file.")
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear(cache_db: str | None) -> None:
    """Clear all cached results."""
    config = _load_config(cache_disabled=False, cache_db_path=cache_db)
    store = _open_store(config)
    store.clear()
    store.close()
    console.print("[green]Cache cleared.[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
