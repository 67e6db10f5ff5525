"""Main timestamp extraction pipeline.

Runs every extractor over one parsed page, in a fixed order:
1. HTML meta tags
2. HTTP response headers
3. Schema.org JSON-LD
4. Microdata
5. OpenGraph
6. Twitter cards
7. Heuristics (optional)

then consolidates the candidates. The async entry points add fetching and
per-URL error capture on top.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

from bs4 import BeautifulSoup
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from webpage_timestamps.config import DEFAULT_CONFIG, ExtractorConfig
from webpage_timestamps.extractors.consolidate import consolidate_timestamps
from webpage_timestamps.extractors.fetch import FetchError, fetch_page
from webpage_timestamps.extractors.headers import extract_http_headers
from webpage_timestamps.extractors.heuristics import extract_heuristics
from webpage_timestamps.extractors.structured import (
    extract_from_schema_org,
    extract_meta_tags,
    extract_microdata,
    extract_opengraph,
    extract_twitter_card,
)
from webpage_timestamps.models import Mechanism, TimestampResult, TimestampSource

console = Console(stderr=True)


@dataclass(frozen=True)
class Extractor:
    """One entry of the extractor table."""

    mechanism: Mechanism
    extract: Callable[..., list[TimestampSource]]
    uses_headers: bool = False  # Called with the response headers instead of the page
    heuristic: bool = False  # Only run when heuristics are enabled


# Order matters: it is the order of TimestampResult.sources and the final tie-break
EXTRACTORS: list[Extractor] = [
    Extractor(Mechanism.META_TAG, extract_meta_tags),
    Extractor(Mechanism.HTTP_HEADER, extract_http_headers, uses_headers=True),
    Extractor(Mechanism.STRUCTURED_DATA, extract_from_schema_org),
    Extractor(Mechanism.MICRODATA, extract_microdata),
    Extractor(Mechanism.OPEN_GRAPH, extract_opengraph),
    Extractor(Mechanism.SOCIAL_CARD, extract_twitter_card),
    Extractor(Mechanism.HEURISTIC, extract_heuristics, heuristic=True),
]


def run_extractors(
    soup: BeautifulSoup,
    headers: Mapping[str, str],
    enable_heuristics: bool = True,
    extractors: Sequence[Extractor] = EXTRACTORS,
) -> list[TimestampSource]:
    """Run all extractors in table order and concatenate their candidates."""
    sources: list[TimestampSource] = []

    for extractor in extractors:
        if extractor.heuristic and not enable_heuristics:
            continue
        if extractor.uses_headers:
            sources.extend(extractor.extract(headers))
        else:
            sources.extend(extractor.extract(soup))

    return sources


def extract_from_document(
    url: str,
    soup: BeautifulSoup,
    headers: Mapping[str, str],
    enable_heuristics: bool = True,
) -> TimestampResult:
    """Extract and consolidate timestamps from an already parsed page."""
    sources = run_extractors(soup, headers, enable_heuristics=enable_heuristics)
    return consolidate_timestamps(url, sources)


def extract_from_html(
    url: str,
    html: str,
    headers: Optional[Mapping[str, str]] = None,
    enable_heuristics: bool = True,
) -> TimestampResult:
    """Parse HTML with lxml and extract timestamps from it."""
    soup = BeautifulSoup(html, "lxml")
    return extract_from_document(url, soup, headers or {}, enable_heuristics=enable_heuristics)


async def extract_timestamps(
    url: str,
    config: Optional[ExtractorConfig] = None,
) -> TimestampResult:
    """Fetch a URL and extract its timestamps.

    Fetch failures don't raise: they come back as a low-confidence result
    with no sources and a single error message.
    """
    config = config or DEFAULT_CONFIG

    try:
        page = await fetch_page(url, config)
    except FetchError as e:
        console.print(f"[red]Failed to fetch {url}: {e}[/red]")
        return TimestampResult.failed(url, f"Failed to fetch page: {e}")

    result = extract_from_html(
        url,
        page.html,
        page.headers,
        enable_heuristics=config.enable_heuristics,
    )

    console.print(
        f"[dim]{url}: {len(result.sources)} sources, "
        f"confidence {result.confidence.value}[/dim]"
    )
    return result


async def batch_extract_timestamps(
    urls: Sequence[str],
    config: Optional[ExtractorConfig] = None,
    max_concurrent: int = 10,
) -> list[TimestampResult]:
    """Extract timestamps from many URLs concurrently.

    Args:
        urls: URLs to process (must not be empty)
        config: Shared config for every URL
        max_concurrent: Maximum in-flight fetches

    Returns:
        One result per input URL, in input order
    """
    if not urls:
        raise ValueError("URLs array is required and must not be empty")

    config = config or DEFAULT_CONFIG
    semaphore = asyncio.Semaphore(max_concurrent)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task("Extracting timestamps...", total=len(urls))

        async def extract_with_semaphore(url: str) -> TimestampResult:
            async with semaphore:
                try:
                    return await extract_timestamps(url, config)
                finally:
                    progress.advance(task)

        # gather keeps input order; failures come back as exception objects
        outcomes = await asyncio.gather(
            *(extract_with_semaphore(url) for url in urls),
            return_exceptions=True,
        )

    results: list[TimestampResult] = []
    for url, outcome in zip(urls, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            console.print(f"[yellow]Error extracting {url}: {outcome}[/yellow]")
            results.append(TimestampResult.failed(url, f"Failed to extract timestamps: {outcome}"))
        else:
            results.append(outcome)

    return results
