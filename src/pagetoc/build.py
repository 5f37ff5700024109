"""Batch handler for a rendered site directory.

Reads every output page, runs the transform, and writes changed pages back.
Each page succeeds or fails on its own; a failure is recorded and the walk
continues. No typer imports; cli.py handles the command-line wiring.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from pagetoc.errors import ErrorCode, PageTocError

if TYPE_CHECKING:
    from pathlib import Path

    from pagetoc.transform import TocTransform


@dataclass
class BuildSummary:
    scanned: int = 0
    changed: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, PageTocError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def process_page(path: Path, transform: TocTransform, *, dry_run: bool = False) -> bool:
    """Transform a single page file in place. Returns True if its content changed."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PageTocError(
            code=ErrorCode.PAGE_READ_FAILED,
            message=f"Could not read {path}: {exc}",
            suggestion="Check that the file exists and is UTF-8 encoded.",
            recoverable=True,
        ) from exc

    try:
        result = transform.apply(content, str(path))
    except Exception as exc:
        raise PageTocError(
            code=ErrorCode.PAGE_PROCESSING_FAILED,
            message=f"Failed to transform {path}: {exc}",
            suggestion="Inspect the page markup; other pages are unaffected.",
            recoverable=False,
        ) from exc

    if result == content:
        return False

    if not dry_run:
        try:
            path.write_text(result, encoding="utf-8")
        except OSError as exc:
            raise PageTocError(
                code=ErrorCode.PAGE_WRITE_FAILED,
                message=f"Could not write {path}: {exc}",
                suggestion="Check file permissions on the output directory.",
                recoverable=True,
            ) from exc
    return True


def build_site(site_dir: Path, transform: TocTransform, *, dry_run: bool = False) -> BuildSummary:
    """Run the transform over every output page under *site_dir*, in sorted path order."""
    log = structlog.get_logger().bind(site_dir=str(site_dir), dry_run=dry_run)
    summary = BuildSummary()

    for path in sorted(site_dir.rglob(f"*{transform.output_extension}")):
        if not path.is_file():
            continue
        summary.scanned += 1
        try:
            changed = process_page(path, transform, dry_run=dry_run)
        except PageTocError as exc:
            log.warning(
                "page_failed",
                path=str(path),
                code=exc.code,
                message=exc.message,
                recoverable=exc.recoverable,
            )
            summary.failed.append((path, exc))
            continue

        if changed:
            summary.changed.append(path)
            log.info("page_transformed", path=str(path))

    log.info(
        "build_complete",
        scanned=summary.scanned,
        changed=len(summary.changed),
        failed=len(summary.failed),
    )
    return summary
