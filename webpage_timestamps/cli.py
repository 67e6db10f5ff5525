"""CLI for webpage timestamp extraction."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from webpage_timestamps.config import ExtractorConfig, load_config
from webpage_timestamps.extractors.pipeline import batch_extract_timestamps, extract_timestamps
from webpage_timestamps.models import TimestampResult

app = typer.Typer(
    name="webpage-timestamps",
    help="Extract creation, modification and publication timestamps from webpages",
    add_completion=False,
)
console = Console()

CONFIDENCE_STYLES = {"high": "green", "medium": "yellow", "low": "red"}


def build_config(
    timeout: Optional[int],
    user_agent: Optional[str],
    follow_redirects: Optional[bool],
    max_redirects: Optional[int],
    heuristics: Optional[bool],
) -> ExtractorConfig:
    """Merge CLI options over env/.env settings, exiting on invalid values."""
    try:
        return load_config({
            "timeout": timeout,
            "user_agent": user_agent,
            "follow_redirects": follow_redirects,
            "max_redirects": max_redirects,
            "enable_heuristics": heuristics,
        })
    except ValidationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)


def read_url_file(path: Path) -> list[str]:
    """One URL per line; blank lines and # comments are skipped."""
    urls = []
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            urls.append(line)
    return urls


def format_timestamp(value) -> str:
    return value.isoformat() if value else "-"


def print_result(result: TimestampResult) -> None:
    """Print one result: summary line plus a table of its sources."""
    style = CONFIDENCE_STYLES[result.confidence.value]
    console.print(f"\n[bold]{result.url}[/bold]  [{style}]{result.confidence.value}[/{style}]")
    console.print(f"  Published: {format_timestamp(result.published_at)}")
    console.print(f"  Modified:  {format_timestamp(result.modified_at)}")
    console.print(f"  Created:   {format_timestamp(result.created_at)}")

    for error in result.errors or ():
        console.print(f"  [red]{error}[/red]")

    if not result.sources:
        return

    table = Table(title=f"Sources ({len(result.sources)})")
    table.add_column("Mechanism", style="cyan")
    table.add_column("Field", style="magenta")
    table.add_column("Value", style="green", max_width=40)
    table.add_column("Confidence")

    for source in result.sources:
        source_style = CONFIDENCE_STYLES[source.confidence.value]
        table.add_row(
            source.mechanism.value,
            source.field,
            source.value,
            f"[{source_style}]{source.confidence.value}[/{source_style}]",
        )

    console.print(table)


def print_json(payload) -> None:
    # Plain print: rich would re-wrap long lines
    print(json.dumps(payload, indent=2))


@app.command()
def extract(
    url: str = typer.Argument(..., help="URL of the webpage"),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", help="Request timeout in ms (default: 10000)"),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="User agent for requests"),
    follow_redirects: Optional[bool] = typer.Option(
        None, "--follow-redirects/--no-follow-redirects", help="Follow HTTP redirects (default: yes)"
    ),
    max_redirects: Optional[int] = typer.Option(None, "--max-redirects", help="Maximum redirects (default: 5)"),
    heuristics: Optional[bool] = typer.Option(
        None, "--heuristics/--no-heuristics", help="Enable heuristic detection (default: yes)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Extract timestamps from a single webpage."""
    config = build_config(timeout, user_agent, follow_redirects, max_redirects, heuristics)
    result = asyncio.run(extract_timestamps(url, config))

    if as_json:
        print_json(result.to_json_dict())
    else:
        print_result(result)


@app.command()
def batch(
    urls: Optional[list[str]] = typer.Argument(None, help="URLs of the webpages"),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="File with one URL per line"
    ),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", help="Request timeout in ms (default: 10000)"),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="User agent for requests"),
    follow_redirects: Optional[bool] = typer.Option(
        None, "--follow-redirects/--no-follow-redirects", help="Follow HTTP redirects (default: yes)"
    ),
    max_redirects: Optional[int] = typer.Option(None, "--max-redirects", help="Maximum redirects (default: 5)"),
    heuristics: Optional[bool] = typer.Option(
        None, "--heuristics/--no-heuristics", help="Enable heuristic detection (default: yes)"
    ),
    max_concurrent: int = typer.Option(10, "--max-concurrent", "-c", help="Maximum concurrent fetches"),
    as_json: bool = typer.Option(False, "--json", help="Print the results as JSON"),
):
    """Extract timestamps from multiple webpages."""
    all_urls = list(urls or [])
    if file:
        all_urls.extend(read_url_file(file))

    if not all_urls:
        console.print("[red]Error: at least one URL is required[/red]")
        raise typer.Exit(1)

    config = build_config(timeout, user_agent, follow_redirects, max_redirects, heuristics)
    results = asyncio.run(
        batch_extract_timestamps(all_urls, config, max_concurrent=max_concurrent)
    )

    if as_json:
        print_json([r.to_json_dict() for r in results])
        return

    for result in results:
        print_result(result)

    found = sum(1 for r in results if r.sources)
    console.print(f"\n[green]Found timestamps for {found}/{len(results)} URLs[/green]")


if __name__ == "__main__":
    app()
