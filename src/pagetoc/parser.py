"""Heading extractor for rendered HTML.

Parses a markup fragment with BeautifulSoup and walks it in document order,
emitting one ``HeadingRecord`` per ``<hN>`` element at a configured level that
carries an ``id`` attribute. Ids are expected to be stamped on the headings by
an upstream step; headings without one cannot be linked to and are skipped.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag

from pagetoc.models.headings import ExtractionOptions, HeadingRecord

if TYPE_CHECKING:
    from collections.abc import Iterator

# Permalink anchors rendered inside headings leave a "#" in the text content.
_ANCHOR_ARTIFACT_RE = re.compile(r"^#\s*")

_PARSER = "html.parser"


def clean_heading_text(text: str) -> str:
    """Trim text content and drop a leading ``#`` permalink artifact."""
    return _ANCHOR_ARTIFACT_RE.sub("", text.strip()).strip()


class HeadingSequence:
    """Lazy, restartable sequence of headings in a markup fragment.

    Nothing is parsed until the first iteration. The parse tree is then kept,
    and every call to ``iter()`` walks it again from the top.
    """

    def __init__(self, markup: str | None, levels: tuple[int, ...]) -> None:
        self._markup = markup or ""
        self._tag_names = frozenset(f"h{level}" for level in levels)
        self._soup: BeautifulSoup | None = None

    def __iter__(self) -> Iterator[HeadingRecord]:
        if not self._markup:
            return
        if self._soup is None:
            self._soup = BeautifulSoup(self._markup, _PARSER)

        for node in self._soup.descendants:
            if not isinstance(node, Tag) or node.name not in self._tag_names:
                continue
            record = _to_record(node)
            if record is not None:
                yield record


def _to_record(tag: Tag) -> HeadingRecord | None:
    heading_id = tag.get("id")
    if not isinstance(heading_id, str) or not heading_id.strip():
        return None
    return HeadingRecord(
        id=heading_id,
        text=clean_heading_text(tag.get_text()),
        level=int(tag.name[1]),
    )


def extract_headings(
    markup: str | None,
    options: ExtractionOptions | None = None,
) -> HeadingSequence:
    """Return the headings in *markup* at the configured levels, in document order.

    Empty or missing input yields an empty sequence.
    """
    options = options or ExtractionOptions()
    return HeadingSequence(markup, options.levels)
