"""HTTP fetcher for seed and post pages.

Pages are fetched through the allorigins relay by default, which wraps the
target HTML in a JSON envelope ({"contents": "<html>..."}). Direct fetching
is available for sites that don't need it.

No retries: a failed fetch is final for that URL within a scan.
"""

import asyncio
import random
from typing import Optional

import httpx
from bs4 import BeautifulSoup
from rich.console import Console

from job_crawler.errors import FetchError
from job_crawler.models import FetchedDocument

console = Console()

RELAY_URL = "https://api.allorigins.win/get"
DEFAULT_TIMEOUT = 30.0
MAX_CONCURRENT_FETCHES = 10

# Realistic Firefox User-Agents
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14.7; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (X11; Linux x86_64; rv:134.0) Gecko/20100101 Firefox/134.0",
]


def make_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create the HTTP client shared by one scan."""
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={
            "User-Agent": random.choice(USER_AGENTS),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        },
    )


async def _get(
    client: httpx.AsyncClient,
    url: str,
    request_url: Optional[str] = None,
    params: Optional[dict] = None,
) -> httpx.Response:
    """GET `request_url` (default: `url`), reporting failures against `url`."""
    try:
        response = await client.get(request_url or url, params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(url, str(e.response.status_code), status=e.response.status_code) from e
    except httpx.TimeoutException as e:
        raise FetchError(url, "timeout") from e
    except httpx.HTTPError as e:
        raise FetchError(url, type(e).__name__.lower()) from e
    except httpx.InvalidURL as e:
        raise FetchError(url, "invalid url") from e
    return response


async def _fetch_html(client: httpx.AsyncClient, url: str, use_relay: bool) -> str:
    if not use_relay:
        response = await _get(client, url)
        return response.text

    response = await _get(client, url, request_url=RELAY_URL, params={"url": url})
    try:
        envelope = response.json()
    except ValueError as e:
        raise FetchError(url, "relay returned invalid JSON", status=response.status_code) from e

    contents = envelope.get("contents") if isinstance(envelope, dict) else None
    if not contents:
        raise FetchError(url, "relay returned no contents", status=response.status_code)
    return contents


async def fetch_html(
    url: str,
    use_relay: bool = True,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Fetch raw HTML for a URL.

    Args:
        url: Page to fetch
        use_relay: Route the request through the CORS relay
        client: Shared client; a throwaway one is created if omitted

    Raises:
        FetchError: on transport failure or a non-2xx status
    """
    if client is not None:
        return await _fetch_html(client, url, use_relay)

    async with make_client() as own_client:
        return await _fetch_html(own_client, url, use_relay)


def parse_document(html: str) -> BeautifulSoup:
    """Parse HTML into a tree supporting CSS selector queries."""
    return BeautifulSoup(html, "lxml")


async def fetch_document(
    url: str,
    use_relay: bool = True,
    client: Optional[httpx.AsyncClient] = None,
) -> FetchedDocument:
    """Fetch a page and parse it."""
    html = await fetch_html(url, use_relay=use_relay, client=client)
    return FetchedDocument(source_url=url, raw_html=html, tree=parse_document(html))


async def fetch_documents_parallel(
    urls: list[str],
    client: Optional[httpx.AsyncClient] = None,
    use_relay: bool = True,
    max_concurrent: int = MAX_CONCURRENT_FETCHES,
) -> list[FetchedDocument]:
    """Fetch many pages concurrently.

    A page that fails to fetch is dropped; the rest are returned in the
    order of `urls`.
    """
    semaphore = asyncio.Semaphore(max_concurrent)

    async def fetch_with_semaphore(url: str) -> Optional[FetchedDocument]:
        async with semaphore:
            try:
                return await fetch_document(url, use_relay=use_relay, client=client)
            except FetchError as e:
                console.print(f"[dim]Skipping {url[:60]}: {e.reason}[/dim]")
                return None

    if client is None:
        async with make_client() as own_client:
            return await fetch_documents_parallel(
                urls, client=own_client, use_relay=use_relay, max_concurrent=max_concurrent
            )

    results = await asyncio.gather(*[fetch_with_semaphore(url) for url in urls])

    documents = [doc for doc in results if doc is not None]
    console.print(f"[dim]Fetched {len(documents)}/{len(urls)} pages[/dim]")
    return documents
