"""Main scan orchestration."""

from datetime import date
from typing import Callable, Optional

import httpx
from rich.console import Console
from rich.table import Table

from job_crawler.enrichers.youtube import build_video_index, match_video
from job_crawler.errors import NoCandidatesError
from job_crawler.extractors.fetch import fetch_document, fetch_documents_parallel, make_client
from job_crawler.extractors.heuristics import analyze_post
from job_crawler.extractors.links import discover_links
from job_crawler.models import FetchedDocument, JobRecord, VideoEntry

console = Console()

NO_RESULTS_MESSAGE = "Scan complete. No jobs with future deadlines were found."

StatusCallback = Callable[[str], None]


def print_status(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def verify_posts(
    documents: list[FetchedDocument],
    videos: list[VideoEntry],
    today: Optional[date] = None,
) -> list[JobRecord]:
    """Analyze fetched posts and attach videos to the accepted ones.

    Returns:
        One record per link (first wins), sorted by deadline, soonest first
    """
    jobs: dict[str, JobRecord] = {}

    for document in documents:
        job = analyze_post(document, today=today)
        if job is None or job.link in jobs:
            continue

        youtube_link = match_video(job.title, document, videos)
        if youtube_link:
            job = job.model_copy(update={"youtube_link": youtube_link})
        jobs[job.link] = job

    return sorted(jobs.values(), key=lambda j: j.last_date)


async def _run_scan(
    client: httpx.AsyncClient,
    seed_url: str,
    handle: Optional[str],
    api_key: Optional[str],
    use_relay: bool,
    on_status: StatusCallback,
    today: Optional[date],
) -> list[JobRecord]:
    use_api = bool(handle and api_key)
    total = 4 if use_api else 3
    step = 0

    def report(message: str) -> None:
        nonlocal step
        step += 1
        on_status(f"Step {step}/{total}: {message}")

    # Step 1: Channel video index (optional)
    videos: list[VideoEntry] = []
    if use_api:
        report("Fetching videos from YouTube channel...")
        videos = await build_video_index(handle, api_key, client=client)

    # Step 2: Seed page
    report("Fetching main page...")
    seed = await fetch_document(seed_url, use_relay=use_relay, client=client)

    links = discover_links(seed.tree, seed_url)
    if not links:
        raise NoCandidatesError(seed_url)

    # Step 3: Candidate pages, concurrently
    report(f"Analyzing {len(links)} links...")
    documents = await fetch_documents_parallel(links, client=client, use_relay=use_relay)

    # Step 4: Accept/reject and match videos
    report("Verifying posts...")
    jobs = verify_posts(documents, videos, today=today)

    if not jobs:
        on_status(NO_RESULTS_MESSAGE)
    return jobs


async def run_scan(
    seed_url: str,
    handle: Optional[str] = None,
    api_key: Optional[str] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    use_relay: bool = True,
    on_status: Optional[StatusCallback] = None,
    today: Optional[date] = None,
) -> list[JobRecord]:
    """Run the full scan.

    1. Build the channel video index (only with both handle and api_key)
    2. Fetch the seed page and discover candidate job links
    3. Fetch all candidates concurrently, dropping the ones that fail
    4. Keep posts with a future deadline and attach a matching video

    An empty list means the scan worked but found nothing.

    Raises:
        FetchError: the seed page could not be fetched
        NoCandidatesError: the seed page had no job-like links
        VideoApiError: the channel index could not be built
    """
    on_status = on_status or print_status
    console.print(f"\n[bold cyan]Scanning {seed_url}[/bold cyan]\n")

    if client is None:
        async with make_client() as own_client:
            jobs = await _run_scan(own_client, seed_url, handle, api_key, use_relay, on_status, today)
    else:
        jobs = await _run_scan(client, seed_url, handle, api_key, use_relay, on_status, today)

    console.print(f"[green]Scan complete: {len(jobs)} jobs with upcoming deadlines[/green]\n")
    return jobs


def print_job_summary(jobs: list[JobRecord], title: Optional[str] = None) -> None:
    """Print a table of jobs."""
    table = Table(title=title or f"Upcoming Deadlines ({len(jobs)})")
    table.add_column("Post", style="cyan", max_width=50)
    table.add_column("Last Date", style="red")
    table.add_column("Video", style="blue", max_width=45)
    table.add_column("Link", style="green", max_width=60)

    for job in jobs:
        table.add_row(
            job.title[:50],
            job.last_date_display,
            job.youtube_link or "-",
            job.link,
        )

    console.print(table)
