"""HTML heuristics for deciding whether a page is a live job post.

A page is accepted when it:
1. Mentions a deadline ("last date", "closing date", "deadline", "apply by")
2. Contains enough job-post vocabulary to not be a nav or listing page
3. Has a deadline that parses and is not in the past
"""

import re
from datetime import date
from typing import Optional

from bs4 import BeautifulSoup
from rich.console import Console

from job_crawler.extractors.dates import parse_date
from job_crawler.models import FetchedDocument, JobRecord

console = Console()

# Most specific first; the first non-empty match wins
TITLE_SELECTORS = [
    "h1.entry-title",
    "h2.entry-title",
    "h1.post-title",
    "article h1",
    "main h1",
    ".entry-content h1",
    "h1",
]

TITLE_NOT_FOUND = "Post Title Not Found"

DEADLINE_PATTERN = re.compile(
    r"(?:last date|closing date|deadline|apply by)[\s:.-]*([\w\s,./-]+\d{1,4})",
    re.I,
)

# Words a real job post tends to contain. "responsibilit" covers
# responsibility and responsibilities.
JOB_KEYWORDS = [
    "qualification",
    "experience",
    "salary",
    "location",
    "apply",
    "responsibilit",
]

MIN_RELEVANCE_SCORE = 2


def find_title(tree: BeautifulSoup) -> str:
    """Pick the post title from the first selector with text."""
    for selector in TITLE_SELECTORS:
        element = tree.select_one(selector)
        if element:
            text = " ".join(element.get_text(" ").split())
            if text:
                return text
    return TITLE_NOT_FOUND


def find_deadline_phrase(html: str) -> Optional[str]:
    """Return the text following a deadline keyword, if any."""
    match = DEADLINE_PATTERN.search(html)
    if not match:
        return None
    return match.group(1).strip()


def relevance_score(html: str) -> int:
    """Count how many job keywords appear in the page."""
    html_lower = html.lower()
    return sum(1 for kw in JOB_KEYWORDS if kw in html_lower)


def analyze_post(
    document: FetchedDocument,
    today: Optional[date] = None,
) -> Optional[JobRecord]:
    """Turn a fetched page into a JobRecord, or None if it isn't a live post.

    The returned record has no video link; matching happens afterwards.
    """
    today = today or date.today()

    phrase = find_deadline_phrase(document.raw_html)
    if phrase is None:
        return None

    score = relevance_score(document.raw_html)
    if score < MIN_RELEVANCE_SCORE:
        console.print(f"[dim]Low relevance ({score}): {document.source_url[:60]}[/dim]")
        return None

    last_date = parse_date(phrase)
    if last_date is None:
        console.print(f"[dim]Unparseable deadline '{phrase[:40]}': {document.source_url[:60]}[/dim]")
        return None

    if last_date < today:
        return None

    return JobRecord(
        title=find_title(document.tree),
        link=document.source_url,
        last_date=last_date,
    )
