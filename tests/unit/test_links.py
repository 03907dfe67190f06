"""Tests for candidate link discovery."""

import pytest

from job_crawler.extractors.fetch import parse_document
from job_crawler.extractors.links import discover_links, get_origin, looks_like_job_link

SEED_URL = "https://example.com/careers"

SEED_HTML = """
<html>
  <body>
    <nav><a href="/jobs/from-nav">Jobs</a></nav>
    <article><a href="/jobs/backend-engineer">Backend Engineer</a></article>
    <article><a href="/jobs/backend-engineer#apply">Apply now</a></article>
    <div class="post"><a href="/p/7">We're hiring: Product Designer</a></div>
    <div class="job-listing"><a href="vacancy/42">Open role</a></div>
    <h2><a href="https://other.com/jobs/2">Partner job</a></h2>
    <h2><a href="https://example.com.evil.com/jobs/3">Mirror job</a></h2>
    <h3><a href="/about">About us</a></h3>
    <h3><a href="mailto:jobs@example.com">Email a job application</a></h3>
    <h3><a href="http://[::1">Broken job link</a></h3>
    <article><a>Job without href</a></article>
    <h3><a href="http://example.com/jobs/insecure">Position (http)</a></h3>
  </body>
</html>
"""


class TestDiscoverLinks:
    """Tests for seed page link discovery."""

    @pytest.fixture
    def links(self) -> list[str]:
        return discover_links(parse_document(SEED_HTML), SEED_URL)

    def test_finds_job_links(self, links: list[str]):
        """Links in content containers with job keywords are collected."""
        assert links == [
            "https://example.com/jobs/backend-engineer",
            "https://example.com/p/7",
            "https://example.com/vacancy/42",
        ]

    def test_same_origin_only(self, links: list[str]):
        """Absolute links to other sites are never followed."""
        assert all(get_origin(link) == "https://example.com" for link in links)

    def test_fragments_collapse_to_one_link(self, links: list[str]):
        assert links.count("https://example.com/jobs/backend-engineer") == 1

    def test_ignores_anchors_outside_containers(self, links: list[str]):
        assert "https://example.com/jobs/from-nav" not in links

    def test_empty_page(self):
        assert discover_links(parse_document("<html><body></body></html>"), SEED_URL) == []


class TestHelpers:
    """Tests for link helper functions."""

    @pytest.mark.parametrize("url,expected", [
        ("https://Example.com/jobs", "https://example.com"),
        ("http://example.com:8080/a", "http://example.com:8080"),
        ("mailto:jobs@example.com", "mailto://"),
    ])
    def test_get_origin(self, url: str, expected: str):
        assert get_origin(url) == expected

    @pytest.mark.parametrize("text,url,expected", [
        ("Senior CAREER opportunities", "https://example.com/x", True),
        ("Read more", "https://example.com/Hiring/2025", True),
        ("Open Position", "https://example.com/x", True),
        ("Read more", "https://example.com/blog/post", False),
    ])
    def test_looks_like_job_link(self, text: str, url: str, expected: bool):
        assert looks_like_job_link(text, url) is expected
