"""YouTube video lookup for job posts.

Two sources, tried in order:
1. A channel's full upload list (YouTube Data API v3, needs an API key),
   matched against the job title
2. A video embedded in or linked from the post page itself
"""

from typing import Optional
from urllib.parse import urljoin

import httpx
from rich.console import Console

from job_crawler.errors import ChannelNotFoundError, VideoApiError
from job_crawler.extractors.fetch import make_client
from job_crawler.models import FetchedDocument, VideoEntry

console = Console()

YOUTUBE_API_URL = "https://www.googleapis.com/youtube/v3"
PLAYLIST_PAGE_SIZE = 50  # API maximum

# Title words must be longer than this to count as match tokens
MIN_TOKEN_LENGTH = 3
MIN_TOKEN_MATCHES = 3

EMBED_SELECTOR = 'iframe[src*="youtube.com/embed/"]'
LINK_SELECTOR = 'a[href*="youtube.com/watch"], a[href*="youtu.be/"]'


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


async def _api_get(client: httpx.AsyncClient, endpoint: str, params: dict) -> dict:
    response = await client.get(f"{YOUTUBE_API_URL}/{endpoint}", params=params)
    response.raise_for_status()
    return response.json()


async def resolve_channel_id(client: httpx.AsyncClient, handle: str, api_key: str) -> str:
    """Find a channel ID by searching for its handle."""
    data = await _api_get(client, "search", {
        "part": "id",
        "q": handle,
        "type": "channel",
        "key": api_key,
    })
    items = data.get("items") or []
    if not items:
        raise ChannelNotFoundError(handle)
    return items[0]["id"]["channelId"]


async def resolve_uploads_playlist(
    client: httpx.AsyncClient,
    channel_id: str,
    api_key: str,
    handle: str,
) -> str:
    """Get the ID of a channel's "uploads" playlist."""
    data = await _api_get(client, "channels", {
        "part": "contentDetails",
        "id": channel_id,
        "key": api_key,
    })
    items = data.get("items") or []
    if not items:
        raise ChannelNotFoundError(handle)
    return items[0]["contentDetails"]["relatedPlaylists"]["uploads"]


async def fetch_playlist_videos(client: httpx.AsyncClient, playlist_id: str, api_key: str) -> list[VideoEntry]:
    """Page through a playlist until the API stops returning a page token."""
    videos: list[VideoEntry] = []
    page_token = ""

    while True:
        data = await _api_get(client, "playlistItems", {
            "part": "snippet",
            "playlistId": playlist_id,
            "maxResults": PLAYLIST_PAGE_SIZE,
            "pageToken": page_token,
            "key": api_key,
        })
        for item in data.get("items") or []:
            snippet = item["snippet"]
            videos.append(VideoEntry(
                title=snippet["title"].lower(),
                url=watch_url(snippet["resourceId"]["videoId"]),
            ))

        page_token = data.get("nextPageToken")
        if not page_token:
            break

    return videos


async def build_video_index(
    handle: Optional[str],
    api_key: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
) -> list[VideoEntry]:
    """Fetch every upload of a YouTube channel.

    Args:
        handle: Channel handle, with or without the leading "@"
        api_key: YouTube Data API key
        client: Shared HTTP client

    Returns:
        All uploads with lowercased titles; empty if handle or key is missing

    Raises:
        VideoApiError: if any step fails; no partial index is returned
    """
    if not handle or not api_key:
        return []

    if client is None:
        async with make_client() as own_client:
            return await build_video_index(handle, api_key, client=own_client)

    handle = handle.strip().lstrip("@")
    console.print(f"[dim]  Resolving YouTube channel @{handle}[/dim]")

    try:
        channel_id = await resolve_channel_id(client, handle, api_key)
        playlist_id = await resolve_uploads_playlist(client, channel_id, api_key, handle)
        videos = await fetch_playlist_videos(client, playlist_id, api_key)
    except ChannelNotFoundError as e:
        raise VideoApiError(f"Failed to fetch YouTube videos: {e}") from e
    except httpx.HTTPStatusError as e:
        raise VideoApiError(
            f"Failed to fetch YouTube videos: API returned {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise VideoApiError(f"Failed to fetch YouTube videos: {type(e).__name__}") from e
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise VideoApiError(f"Failed to fetch YouTube videos: unexpected API response ({e!r})") from e

    console.print(f"[dim]  Found {len(videos)} videos on @{handle}[/dim]")
    return videos


def find_matching_video(job_title: str, videos: list[VideoEntry]) -> Optional[str]:
    """Match a job title against the channel index.

    A video whose title contains the whole job title wins outright.
    Otherwise the first video sharing at least three of the title's longer
    words is returned.
    """
    if not job_title or not videos:
        return None

    title_lower = job_title.lower()
    for video in videos:
        if title_lower in video.title:
            return video.url

    words = [w for w in title_lower.split() if len(w) > MIN_TOKEN_LENGTH]
    for video in videos:
        matches = sum(1 for w in words if w in video.title)
        if matches >= MIN_TOKEN_MATCHES:
            return video.url

    return None


def find_embedded_video(document: FetchedDocument) -> Optional[str]:
    """Find a YouTube player or link on the post page itself."""
    iframe = document.tree.select_one(EMBED_SELECTOR)
    if iframe and iframe.get("src"):
        return urljoin(document.source_url, iframe["src"])

    anchor = document.tree.select_one(LINK_SELECTOR)
    if anchor and anchor.get("href"):
        return urljoin(document.source_url, anchor["href"])

    return None


def match_video(
    job_title: str,
    document: FetchedDocument,
    videos: list[VideoEntry],
) -> Optional[str]:
    """Best video for a post: index match first, then the page's own."""
    return find_matching_video(job_title, videos) or find_embedded_video(document)
