"""HTTP fetcher for pages whose timestamps we extract.

Single attempt, no cache: whatever goes wrong surfaces as a FetchError
with a human-readable message.
"""

from typing import Optional

import httpx
from rich.console import Console

from webpage_timestamps.config import DEFAULT_CONFIG, ExtractorConfig

console = Console(stderr=True)

ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class FetchError(Exception):
    """Raised when a page could not be retrieved."""


class FetchResult:
    """Fetched page with response metadata."""
    def __init__(
        self,
        html: str,
        headers: dict[str, str],
        final_url: str,
        status_code: int,
    ):
        self.html = html
        self.headers = headers  # Lower-cased header names
        self.final_url = final_url
        self.status_code = status_code


async def fetch_page(
    url: str,
    config: ExtractorConfig = DEFAULT_CONFIG,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FetchResult:
    """Fetch a page with the configured user agent, timeout and redirect policy.

    Args:
        url: Page URL (not validated beyond what httpx requires)
        config: Extraction config; timeout is in milliseconds
        transport: Optional httpx transport (tests use httpx.MockTransport)

    Returns:
        FetchResult for any status below 400

    Raises:
        FetchError: network failure, timeout, too many redirects or status >= 400
    """
    headers = {
        "User-Agent": config.user_agent,
        "Accept": ACCEPT_HEADER,
    }

    try:
        async with httpx.AsyncClient(
            timeout=config.timeout_seconds,
            follow_redirects=config.follow_redirects,
            max_redirects=config.max_redirects,
            transport=transport,
        ) as client:
            response = await client.get(url, headers=headers)
    except httpx.TimeoutException as e:
        raise FetchError(f"timeout after {config.timeout}ms ({type(e).__name__})") from e
    except httpx.TooManyRedirects as e:
        raise FetchError(f"too many redirects (max {config.max_redirects})") from e
    except httpx.ConnectError as e:
        raise FetchError(f"connection failed: {e}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(f"{type(e).__name__}: {e}") from e

    # 3xx is accepted as-is when redirects are not followed
    if response.status_code >= 400:
        raise FetchError(f"HTTP {response.status_code} for {url}")

    console.print(f"[dim]Fetched {url} ({response.status_code})[/dim]")

    return FetchResult(
        html=response.text,
        headers={name.lower(): value for name, value in response.headers.items()},
        final_url=str(response.url),
        status_code=response.status_code,
    )
