"""Command-line entrypoint.

Responsibilities (and nothing more):
- Load Settings and configure structlog
- Parse arguments and hand off to build.py / TocTransform
- Turn PageTocError into stderr output and exit codes
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import structlog
import typer
from pydantic import ValidationError

from pagetoc import __version__
from pagetoc.build import build_site
from pagetoc.config import Settings, TocSettings
from pagetoc.errors import ErrorCode, PageTocError
from pagetoc.transform import TocTransform

app = typer.Typer(
    help="Inject a table-of-contents sidebar into rendered blog pages",
    add_completion=False,
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once per invocation before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for command output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _fail(error: PageTocError, exit_code: int = 1) -> typer.Exit:
    typer.echo(json.dumps(error.to_dict()), err=True)
    return typer.Exit(code=exit_code)


def _parse_levels(raw: str) -> tuple[int, ...]:
    """Parse ``"2,3,4"`` into heading levels."""
    try:
        return tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError as exc:
        raise PageTocError(
            code=ErrorCode.INVALID_OPTIONS,
            message=f"Invalid heading levels: {raw!r}",
            suggestion="Pass a comma-separated list of integers between 1 and 6, e.g. 2,3,4.",
        ) from exc


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pagetoc {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    _version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable debug logging"),
    ] = False,
) -> None:
    """Post-process rendered HTML pages with a table of contents."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise _fail(
            PageTocError(
                code=ErrorCode.INVALID_OPTIONS,
                message=str(exc),
                suggestion="Fix pagetoc.yaml or the PAGETOC__* environment variables.",
            ),
            exit_code=2,
        ) from exc

    if verbose:
        settings.logging.level = "DEBUG"
    _setup_logging(settings)
    ctx.obj = settings


@app.command()
def build(
    ctx: typer.Context,
    site_dir: Annotated[
        Path,
        typer.Argument(exists=True, file_okay=False, dir_okay=True, help="Rendered site output"),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Report pages that would change without writing them"),
    ] = False,
) -> None:
    """Inject the TOC into every rendered page under SITE_DIR."""
    settings: Settings = ctx.obj
    transform = TocTransform.from_settings(settings)

    summary = build_site(site_dir, transform, dry_run=dry_run)

    verb = "would change" if dry_run else "changed"
    typer.echo(
        f"Scanned {summary.scanned} pages: "
        f"{len(summary.changed)} {verb}, {len(summary.failed)} failed"
    )
    for path, error in summary.failed:
        typer.echo(f"  {path}: {error.code} {error.message}", err=True)

    if not summary.ok:
        raise typer.Exit(code=1)


@app.command()
def headings(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="HTML file to scan, or - for stdin")],
    levels: Annotated[
        str | None,
        typer.Option("--levels", "-l", help="Comma-separated heading levels, e.g. 2,3"),
    ] = None,
) -> None:
    """Print the headings of an HTML document as JSON."""
    settings: Settings = ctx.obj
    log = structlog.get_logger().bind(command="headings", source=source)

    try:
        toc = settings.toc
        if levels is not None:
            try:
                toc = TocSettings.model_validate(
                    {**toc.model_dump(), "levels": _parse_levels(levels)}
                )
            except ValidationError as exc:
                raise PageTocError(
                    code=ErrorCode.INVALID_OPTIONS,
                    message=f"Invalid heading levels: {levels!r}",
                    suggestion="Heading levels must be between 1 and 6.",
                ) from exc

        if source == "-":
            markup = sys.stdin.read()
        else:
            try:
                markup = Path(source).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise PageTocError(
                    code=ErrorCode.PAGE_READ_FAILED,
                    message=f"Could not read {source}: {exc}",
                    suggestion="Check that the file exists and is UTF-8 encoded.",
                ) from exc
    except PageTocError as exc:
        log.warning("command_failed", code=exc.code, message=exc.message)
        raise _fail(exc) from exc

    records = TocTransform(toc).table_of_contents(markup)
    log.debug("headings_extracted", count=len(records))
    typer.echo(json.dumps([record.model_dump() for record in records], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
