"""Tests for job models and scan session state."""

from datetime import date
from urllib.parse import unquote

import pytest
from pydantic import ValidationError

from job_crawler.models import JOBS_PER_PAGE, JobRecord, ScanSession


@pytest.fixture
def job() -> JobRecord:
    return JobRecord(
        title="Staff Engineer",
        link="https://example.com/jobs/staff",
        last_date=date(2099, 3, 1),
        youtube_link="https://www.youtube.com/watch?v=staff",
    )


def make_jobs(count: int) -> list[JobRecord]:
    return [
        JobRecord(title=f"Job {i}", link=f"https://example.com/jobs/{i}", last_date=date(2099, 1, 1))
        for i in range(count)
    ]


class TestJobRecord:
    """Tests for the job record model."""

    def test_share_text(self, job: JobRecord):
        assert job.share_text() == (
            "Post: Staff Engineer\n"
            "Last date: 01/03/2099\n"
            "Video Link: https://www.youtube.com/watch?v=staff\n"
            "Apply Now: https://example.com/jobs/staff"
        )

    def test_share_text_without_video(self, job: JobRecord):
        no_video = job.model_copy(update={"youtube_link": None})
        assert "Video Link" not in no_video.share_text()

    def test_whatsapp_link(self, job: JobRecord):
        link = job.whatsapp_link()
        assert link.startswith("https://wa.me/?text=")
        assert "\n" not in link
        assert unquote(link.removeprefix("https://wa.me/?text=")) == job.share_text()

    def test_immutable(self, job: JobRecord):
        with pytest.raises(ValidationError):
            job.title = "Changed"

    def test_to_record(self, job: JobRecord):
        assert job.to_record() == {
            "title": "Staff Engineer",
            "link": "https://example.com/jobs/staff",
            "lastDate": "2099-03-01",
            "youtubeLink": "https://www.youtube.com/watch?v=staff",
        }
        assert "youtubeLink" not in job.model_copy(update={"youtube_link": None}).to_record()


class TestScanSession:
    """Tests for result paging."""

    def test_pages(self):
        session = ScanSession(jobs=make_jobs(25))
        assert session.total_pages == 3
        assert len(session.page_jobs()) == JOBS_PER_PAGE

        session.next_page()
        session.next_page()
        assert session.page == 3
        assert [j.title for j in session.page_jobs()] == [f"Job {i}" for i in range(20, 25)]

        session.next_page()
        assert session.page == 3

    def test_prev_page_stops_at_first(self):
        session = ScanSession(jobs=make_jobs(15), page=2)
        assert session.prev_page() == 1
        assert session.prev_page() == 1

    def test_empty(self):
        session = ScanSession()
        assert session.total_pages == 0
        assert session.page_jobs() == []
        assert session.next_page() == 1

    def test_reset(self):
        session = ScanSession(url="https://example.com", jobs=make_jobs(3), error="boom", page=2)
        session.reset()
        assert session.jobs == []
        assert session.error == ""
        assert session.page == 1
        assert session.url == "https://example.com"
