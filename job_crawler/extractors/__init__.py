"""Page → job record extraction.

1. Fetches seed and post pages (optionally through a CORS relay)
2. Discovers candidate job links on the seed page
3. Extracts title and deadline from each post using HTML heuristics
4. Parses free-form deadline text into dates
"""

from job_crawler.extractors.dates import parse_date
from job_crawler.extractors.fetch import (
    fetch_html,
    fetch_document,
    fetch_documents_parallel,
    parse_document,
)
from job_crawler.extractors.links import discover_links
from job_crawler.extractors.heuristics import analyze_post, find_title

__all__ = [
    "parse_date",
    "fetch_html",
    "fetch_document",
    "fetch_documents_parallel",
    "parse_document",
    "discover_links",
    "analyze_post",
    "find_title",
]
