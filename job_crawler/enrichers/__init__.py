"""Enrichment of accepted job posts (promotional videos)."""

from job_crawler.enrichers.youtube import (
    build_video_index,
    find_matching_video,
    find_embedded_video,
    match_video,
)

__all__ = [
    "build_video_index",
    "find_matching_video",
    "find_embedded_video",
    "match_video",
]
