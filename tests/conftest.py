"""Shared test fixtures for the pagetoc test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
import structlog

PLACEHOLDER = "<!-- TOC_PLACEHOLDER -->"


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """CLI runs point structlog at a captured stderr; drop that after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def make_page() -> Callable[..., str]:
    """Build a rendered blog page around an article body."""

    def _make_page(body: str, *, placeholder: bool = True) -> str:
        return (
            "<!doctype html>\n"
            "<html>\n"
            "<head><title>Post</title></head>\n"
            "<body>\n"
            '<main class="post">\n'
            f"{PLACEHOLDER if placeholder else ''}\n"
            f'<article class="post-content">\n{body}\n</article>\n'
            "</main>\n"
            "</body>\n"
            "</html>\n"
        )

    return _make_page


@pytest.fixture()
def long_body() -> str:
    """Article body with enough headings to get a TOC."""
    return (
        '<p>Intro paragraph.</p>\n'
        '<h2 id="install"><a class="header-anchor" href="#install">#</a> Install</h2>\n'
        "<p>pip install it.</p>\n"
        '<h3 id="from-source">From <code>source</code></h3>\n'
        "<pre><code>git clone ...</code></pre>\n"
        '<h2 id="usage">Usage</h2>\n'
        "<p>Run it.</p>"
    )


@pytest.fixture()
def short_body() -> str:
    return '<h2 id="only">Only heading</h2>\n<p>Short post.</p>'
