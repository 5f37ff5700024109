"""Page transform: splice a TOC sidebar and scroll-spy script into a rendered page.

Each call is a pure function of the page string and the settings it was built
with. Pages missing the expected structure come back unchanged or with only
the placeholder removed; nothing here raises for malformed-but-parseable HTML.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from bs4 import BeautifulSoup

from pagetoc.config import TocSettings
from pagetoc.parser import extract_headings
from pagetoc.renderer import render_toc
from pagetoc.script import script_tag, scroll_spy_script

if TYPE_CHECKING:
    from pagetoc.config import Settings
    from pagetoc.models.headings import HeadingRecord

_BODY_CLOSE = "</body>"


class TocTransform:
    """Configured once per deployment, applied once per page."""

    def __init__(
        self,
        toc: TocSettings | None = None,
        *,
        output_extension: str = ".html",
    ) -> None:
        self.toc = toc or TocSettings()
        self.output_extension = output_extension
        self._extraction = self.toc.extraction_options()
        self._render = self.toc.render_options()
        self._script_html = script_tag(
            scroll_spy_script(
                list_id=self.toc.list_id,
                container_class=self.toc.container_class,
                levels=self.toc.levels,
            )
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> TocTransform:
        return cls(settings.toc, output_extension=settings.build.output_extension)

    @property
    def script_html(self) -> str:
        return self._script_html

    def table_of_contents(self, markup: str | None) -> list[HeadingRecord]:
        """Headings of any markup fragment at the configured levels."""
        return list(extract_headings(markup, self._extraction))

    def apply(self, content: str, output_path: str | None = None) -> str:
        """Return *content* with the placeholder replaced by the TOC, or removed."""
        log = structlog.get_logger().bind(output_path=output_path)
        placeholder = self.toc.placeholder

        if output_path is not None and not output_path.endswith(self.output_extension):
            log.debug("toc_skipped", reason="not_html_output")
            return content

        if f'class="{self.toc.container_class}"' not in content:
            log.debug("toc_skipped", reason="no_content_container")
            return content

        if placeholder not in content:
            log.debug("toc_skipped", reason="no_placeholder")
            return content

        container = self._find_container(content)
        if container is None:
            log.debug("toc_placeholder_removed", reason="container_element_not_found")
            return content.replace(placeholder, "", 1)

        headings = self.table_of_contents(container)
        if len(headings) < self.toc.min_headings:
            log.debug(
                "toc_placeholder_removed",
                reason="too_few_headings",
                heading_count=len(headings),
                min_headings=self.toc.min_headings,
            )
            return content.replace(placeholder, "", 1)

        content = content.replace(placeholder, render_toc(headings, self._render), 1)

        head, body_close, tail = content.rpartition(_BODY_CLOSE)
        if body_close:
            content = f"{head}{self._script_html}\n{body_close}{tail}"
        else:
            log.warning("toc_script_not_injected", reason="no_body_close")

        log.debug("toc_injected", heading_count=len(headings))
        return content

    def _find_container(self, content: str) -> str | None:
        """Inner markup of the main content container, or None if there is none."""
        soup = BeautifulSoup(content, "html.parser")
        container = soup.find(self.toc.container_tag, class_=self.toc.container_class)
        if container is None:
            return None
        return container.decode_contents()


def inject_toc(
    content: str,
    output_path: str | None = None,
    settings: TocSettings | None = None,
) -> str:
    """One-shot form of ``TocTransform(settings).apply(content, output_path)``."""
    return TocTransform(settings).apply(content, output_path)
