"""Data models for the job crawler."""

from job_crawler.models.job import (
    JobRecord,
    VideoEntry,
    FetchedDocument,
    ScanSession,
    JOBS_PER_PAGE,
)

__all__ = [
    "JobRecord",
    "VideoEntry",
    "FetchedDocument",
    "ScanSession",
    "JOBS_PER_PAGE",
]
