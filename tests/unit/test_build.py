"""Unit tests for the site batch handler."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pagetoc.build import build_site, process_page
from pagetoc.errors import ErrorCode, PageTocError
from pagetoc.transform import TocTransform

MakePage = Callable[..., str]


class _ExplodingTransform(TocTransform):
    """Fails on one named page, behaves normally on the rest."""

    def __init__(self, bad_name: str) -> None:
        super().__init__()
        self.bad_name = bad_name

    def apply(self, content: str, output_path: str | None = None) -> str:
        if output_path is not None and output_path.endswith(self.bad_name):
            raise RuntimeError("boom")
        return super().apply(content, output_path)


@pytest.fixture()
def site(tmp_path: Path, make_page: MakePage, long_body: str, short_body: str) -> Path:
    (tmp_path / "posts").mkdir()
    (tmp_path / "posts" / "long.html").write_text(make_page(long_body), encoding="utf-8")
    (tmp_path / "posts" / "short.html").write_text(make_page(short_body), encoding="utf-8")
    (tmp_path / "index.html").write_text(
        make_page(long_body, placeholder=False), encoding="utf-8"
    )
    (tmp_path / "feed.xml").write_text("<!-- TOC_PLACEHOLDER -->", encoding="utf-8")
    return tmp_path


class TestProcessPage:
    def test_changed_page_written(self, site: Path) -> None:
        path = site / "posts" / "long.html"
        assert process_page(path, TocTransform()) is True
        assert "toc-sidebar" in path.read_text(encoding="utf-8")

    def test_unchanged_page_reports_false(self, site: Path) -> None:
        path = site / "index.html"
        before = path.read_text(encoding="utf-8")
        assert process_page(path, TocTransform()) is False
        assert path.read_text(encoding="utf-8") == before

    def test_dry_run_does_not_write(self, site: Path) -> None:
        path = site / "posts" / "long.html"
        before = path.read_text(encoding="utf-8")
        assert process_page(path, TocTransform(), dry_run=True) is True
        assert path.read_text(encoding="utf-8") == before

    def test_missing_file_raises_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(PageTocError) as exc_info:
            process_page(tmp_path / "missing.html", TocTransform())
        assert exc_info.value.code == ErrorCode.PAGE_READ_FAILED
        assert exc_info.value.recoverable is True

    def test_undecodable_file_raises_read_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.html"
        path.write_bytes(b"\xff\xfe\xfa not utf-8")
        with pytest.raises(PageTocError) as exc_info:
            process_page(path, TocTransform())
        assert exc_info.value.code == ErrorCode.PAGE_READ_FAILED

    def test_transform_failure_wrapped(self, site: Path) -> None:
        with pytest.raises(PageTocError) as exc_info:
            process_page(site / "posts" / "long.html", _ExplodingTransform("long.html"))
        assert exc_info.value.code == ErrorCode.PAGE_PROCESSING_FAILED
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestBuildSite:
    def test_summary_counts(self, site: Path) -> None:
        summary = build_site(site, TocTransform())
        assert summary.scanned == 3
        assert sorted(p.name for p in summary.changed) == ["long.html", "short.html"]
        assert summary.failed == []
        assert summary.ok

    def test_non_output_files_untouched(self, site: Path) -> None:
        build_site(site, TocTransform())
        assert (site / "feed.xml").read_text(encoding="utf-8") == "<!-- TOC_PLACEHOLDER -->"

    def test_short_page_loses_placeholder(self, site: Path) -> None:
        build_site(site, TocTransform())
        text = (site / "posts" / "short.html").read_text(encoding="utf-8")
        assert "TOC_PLACEHOLDER" not in text
        assert "toc-sidebar" not in text

    def test_second_run_changes_nothing(self, site: Path) -> None:
        build_site(site, TocTransform())
        summary = build_site(site, TocTransform())
        assert summary.changed == []

    def test_failure_isolated_to_one_page(self, site: Path) -> None:
        summary = build_site(site, _ExplodingTransform("short.html"))
        assert not summary.ok
        assert [p.name for p, _ in summary.failed] == ["short.html"]
        assert [p.name for p in summary.changed] == ["long.html"]
        assert "toc-sidebar" in (site / "posts" / "long.html").read_text(encoding="utf-8")

    def test_empty_directory(self, tmp_path: Path) -> None:
        summary = build_site(tmp_path, TocTransform())
        assert summary.scanned == 0
        assert summary.ok


class TestErrorEnvelope:
    def test_to_dict(self) -> None:
        error = PageTocError(
            code=ErrorCode.INVALID_OPTIONS,
            message="bad levels",
            suggestion="use 2,3,4",
        )
        assert error.to_dict() == {
            "error": {
                "code": "INVALID_OPTIONS",
                "message": "bad levels",
                "suggestion": "use 2,3,4",
                "recoverable": False,
            }
        }
        assert str(error) == "bad levels"
