"""Errors raised by the crawl pipeline.

Unparseable dates are not errors: the date parser returns None and callers
skip the post.
"""

from typing import Optional


class CrawlerError(Exception):
    """Base class for errors that abort (or drop part of) a scan."""


class FetchError(CrawlerError):
    """A page could not be retrieved."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"Failed to fetch {url}: {reason}")


class ChannelNotFoundError(CrawlerError):
    """A channel handle did not resolve to any channel."""

    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(f"Could not find channel with handle: {handle}")


class NoCandidatesError(CrawlerError):
    """The seed page had no job-like links."""

    def __init__(self, seed_url: str):
        self.seed_url = seed_url
        super().__init__("Could not find any potential job post links.")


class VideoApiError(CrawlerError):
    """Building the channel video index failed."""
