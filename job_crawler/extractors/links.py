"""Find links to individual job posts on a seed page.

Only anchors inside likely content containers are considered, only links
on the seed's own site are followed, and the anchor text or URL has to
mention something job-like.
"""

from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup

# Anchors under post/article wrappers and headings
CANDIDATE_SELECTOR = "article a, .post a, .job-listing a, h2 a, h3 a"

JOB_URL_KEYWORDS = ["job", "career", "vacancy", "hiring", "position"]


def get_origin(url: str) -> str:
    """scheme://host[:port], lowercased."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}".lower()


def resolve_link(href: str, base_url: str) -> Optional[str]:
    """Resolve an href against the page URL, dropping any fragment."""
    try:
        absolute = urljoin(base_url, href.strip())
        return urldefrag(absolute).url or None
    except ValueError:
        return None


def looks_like_job_link(text: str, url: str) -> bool:
    text_lower = text.lower()
    url_lower = url.lower()
    return any(kw in text_lower or kw in url_lower for kw in JOB_URL_KEYWORDS)


def discover_links(tree: BeautifulSoup, seed_url: str) -> list[str]:
    """Collect candidate job post URLs from a seed page.

    Returns:
        Absolute same-site URLs, de-duplicated, in the order found
    """
    seed_origin = get_origin(seed_url)
    links: dict[str, None] = {}

    for anchor in tree.select(CANDIDATE_SELECTOR):
        href = anchor.get("href")
        if not href:
            continue

        url = resolve_link(href, seed_url)
        if not url or get_origin(url) != seed_origin:
            continue

        if looks_like_job_link(anchor.get_text(" ", strip=True), url):
            links[url] = None

    return list(links)
