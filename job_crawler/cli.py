"""CLI for the job deadline crawler."""

import asyncio
import os

import typer
from dotenv import load_dotenv
from rich.console import Console

from job_crawler.enrichers.youtube import build_video_index
from job_crawler.errors import CrawlerError
from job_crawler.models import ScanSession
from job_crawler.pipeline import NO_RESULTS_MESSAGE, print_job_summary, run_scan

# Load environment variables (override=True to beat shell env vars)
load_dotenv(override=True)

app = typer.Typer(
    name="job-crawler",
    help="Find job posts with upcoming deadlines on a website",
    add_completion=False,
)
console = Console()


def run_session(session: ScanSession, use_relay: bool = True) -> ScanSession:
    """Run a scan and record the outcome on the session."""
    session.reset()
    if not session.url:
        session.error = "Please enter a website URL."
        return session

    def on_status(message: str) -> None:
        session.status = message
        console.print(f"[cyan]{message}[/cyan]")

    session.is_loading = True
    try:
        session.jobs = asyncio.run(run_scan(
            session.url,
            handle=session.handle or None,
            api_key=session.api_key or None,
            use_relay=use_relay,
            on_status=on_status,
        ))
        if not session.jobs:
            session.error = NO_RESULTS_MESSAGE
    except CrawlerError as e:
        session.error = f"An error occurred: {e}"
    finally:
        session.is_loading = False
        session.status = ""

    return session


@app.command()
def scan(
    url: str = typer.Argument(..., help="Website to scan, e.g. https://example.com/careers"),
    handle: str = typer.Option(
        None, "--handle", "-c",
        help="YouTube channel handle (default: YOUTUBE_HANDLE env var)"
    ),
    api_key: str = typer.Option(
        None, "--api-key", "-k",
        help="YouTube Data API key (default: YOUTUBE_API_KEY env var)"
    ),
    direct: bool = typer.Option(False, "--direct", help="Fetch pages directly instead of via the relay"),
    page: int = typer.Option(1, "--page", "-p", help="Results page to show"),
    share: bool = typer.Option(False, "--share", help="Print share text for each job"),
):
    """Scan a website for job posts with future deadlines."""
    session = ScanSession(
        url=url,
        handle=handle or os.environ.get("YOUTUBE_HANDLE", ""),
        api_key=api_key or os.environ.get("YOUTUBE_API_KEY", ""),
    )
    run_session(session, use_relay=not direct)

    if not session.jobs:
        if session.error == NO_RESULTS_MESSAGE:
            console.print(f"[yellow]{session.error}[/yellow]")
            raise typer.Exit(0)
        console.print(f"[red]{session.error}[/red]")
        raise typer.Exit(1)

    session.page = max(1, min(page, session.total_pages))
    print_job_summary(
        session.page_jobs(),
        title=f"Upcoming Deadlines (page {session.page} of {session.total_pages})",
    )

    if share:
        for job in session.page_jobs():
            console.print(f"\n{job.share_text()}")
            console.print(f"[dim]WhatsApp: {job.whatsapp_link()}[/dim]")


@app.command()
def videos(
    handle: str = typer.Option(
        None, "--handle", "-c",
        help="YouTube channel handle (default: YOUTUBE_HANDLE env var)"
    ),
    api_key: str = typer.Option(
        None, "--api-key", "-k",
        help="YouTube Data API key (default: YOUTUBE_API_KEY env var)"
    ),
    limit: int = typer.Option(20, "--limit", "-l", help="Max videos to list (0 = all)"),
):
    """List the uploads of a YouTube channel as used for matching."""
    handle = handle or os.environ.get("YOUTUBE_HANDLE")
    api_key = api_key or os.environ.get("YOUTUBE_API_KEY")

    if not handle or not api_key:
        console.print("[red]Error: a channel handle and API key are required[/red]")
        console.print("[dim]Set YOUTUBE_HANDLE and YOUTUBE_API_KEY in .env or pass --handle/--api-key[/dim]")
        raise typer.Exit(1)

    try:
        index = asyncio.run(build_video_index(handle, api_key))
    except CrawlerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]{len(index)} videos[/bold]")
    shown = index[:limit] if limit > 0 else index
    for video in shown:
        console.print(f"  {video.title}  [dim]{video.url}[/dim]")


if __name__ == "__main__":
    app()
