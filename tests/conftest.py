"""Shared test fixtures and configuration."""

from datetime import date
from typing import Callable, Optional, Union

import httpx
import pytest

from job_crawler.extractors.fetch import parse_document
from job_crawler.models import FetchedDocument, VideoEntry

TODAY = date(2025, 6, 1)

# Page body, or an HTTP status code to fail with
PageMap = dict[str, Union[str, int]]


def _job_page(title: str, deadline: str, extra: str = "") -> str:
    """A minimal job post page with enough job vocabulary to pass relevance."""
    return f"""
    <html>
      <head><title>{title} | Example Corp</title></head>
      <body>
        <nav><a href="/">Home</a></nav>
        <article>
          <h1 class="entry-title">{title}</h1>
          <p>Location: Remote</p>
          <p>Experience: 5+ years building web services.</p>
          <p>Qualification: BSc in Computer Science or equivalent.</p>
          <p>Last date: {deadline}</p>
          {extra}
        </article>
      </body>
    </html>
    """


def _make_document(html: str, url: str = "https://example.com/jobs/1") -> FetchedDocument:
    return FetchedDocument(source_url=url, raw_html=html, tree=parse_document(html))


@pytest.fixture
def job_page() -> Callable[..., str]:
    return _job_page


@pytest.fixture
def make_document() -> Callable[..., FetchedDocument]:
    return _make_document


@pytest.fixture
def today() -> date:
    """Fixed 'today' for deadline comparisons."""
    return TODAY


@pytest.fixture
def sample_videos() -> list[VideoEntry]:
    return [
        VideoEntry(title="company culture at example corp", url="https://www.youtube.com/watch?v=culture"),
        VideoEntry(title="staff engineer hiring 2025", url="https://www.youtube.com/watch?v=staff"),
        VideoEntry(title="meet the data platform analytics team", url="https://www.youtube.com/watch?v=data"),
    ]


@pytest.fixture
def mock_client() -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient that serves pages from a dict instead of the network.

    Direct requests are looked up by URL. Relay requests (?url=...) are looked
    up by their target URL and wrapped in the relay's JSON envelope.
    """
    def factory(pages: PageMap, requests: Optional[list[httpx.Request]] = None) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            if requests is not None:
                requests.append(request)

            relayed = request.url.params.get("url")
            target = relayed or str(request.url)
            page = pages.get(target)

            if page is None:
                return httpx.Response(404, text="not found")
            if isinstance(page, int):
                return httpx.Response(page, text="error")
            if relayed:
                return httpx.Response(200, json={"contents": page, "status": {"http_code": 200}})
            return httpx.Response(200, text=page)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
