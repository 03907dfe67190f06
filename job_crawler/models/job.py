"""Data models for job scans."""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional
from urllib.parse import quote

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field, computed_field

JOBS_PER_PAGE = 10


class JobRecord(BaseModel):
    """A job post with an upcoming application deadline."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str  # Post URL, unique within a result set
    last_date: date
    youtube_link: Optional[str] = None

    @computed_field
    @property
    def last_date_display(self) -> str:
        """Deadline as dd/mm/yyyy."""
        return self.last_date.strftime("%d/%m/%Y")

    def share_text(self) -> str:
        """Plain-text summary for sharing a post."""
        text = f"Post: {self.title}\nLast date: {self.last_date_display}"
        if self.youtube_link:
            text += f"\nVideo Link: {self.youtube_link}"
        text += f"\nApply Now: {self.link}"
        return text

    def whatsapp_link(self) -> str:
        return f"https://wa.me/?text={quote(self.share_text(), safe='')}"

    def to_record(self) -> dict:
        """Convert to a camelCase dict for JSON output."""
        record = {
            "title": self.title,
            "link": self.link,
            "lastDate": self.last_date.isoformat(),
            "youtubeLink": self.youtube_link,
        }
        return {k: v for k, v in record.items() if v is not None}


class VideoEntry(BaseModel):
    """One upload from a channel's video index."""

    model_config = ConfigDict(frozen=True)

    title: str  # Lowercased at ingestion
    url: str


@dataclass
class FetchedDocument:
    """A fetched page, kept only until it has been analyzed."""

    source_url: str
    raw_html: str
    tree: BeautifulSoup


class ScanSession(BaseModel):
    """State a front end keeps around one scan: inputs, results, paging."""

    url: str = ""
    handle: str = ""
    api_key: str = ""

    jobs: list[JobRecord] = Field(default_factory=list)
    is_loading: bool = False
    status: str = ""
    error: str = ""
    page: int = 1

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.jobs) / JOBS_PER_PAGE)

    def page_jobs(self) -> list[JobRecord]:
        """Jobs on the current page."""
        start = (self.page - 1) * JOBS_PER_PAGE
        return self.jobs[start:start + JOBS_PER_PAGE]

    def next_page(self) -> int:
        self.page = max(1, min(self.total_pages, self.page + 1))
        return self.page

    def prev_page(self) -> int:
        self.page = max(1, self.page - 1)
        return self.page

    def reset(self) -> None:
        """Clear results before a new scan."""
        self.jobs = []
        self.error = ""
        self.status = ""
        self.page = 1
