"""Fixtures for command-line integration tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture()
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """CliRunner isolated from any PAGETOC__* environment of the host."""
    for name in list(os.environ):
        if name.startswith("PAGETOC__"):
            monkeypatch.delenv(name)
    return CliRunner()


@pytest.fixture()
def site_dir(tmp_path: Path, make_page: Callable[..., str], long_body: str, short_body: str) -> Path:
    site = tmp_path / "_site"
    (site / "blog" / "first-post").mkdir(parents=True)
    (site / "blog" / "second-post").mkdir(parents=True)
    (site / "blog" / "first-post" / "index.html").write_text(make_page(long_body), encoding="utf-8")
    (site / "blog" / "second-post" / "index.html").write_text(make_page(short_body), encoding="utf-8")
    (site / "about.html").write_text(make_page(long_body, placeholder=False), encoding="utf-8")
    (site / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")
    return site
