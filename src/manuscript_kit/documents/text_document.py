# src/manuscript_kit/documents/text_document.py

import logging
import re
from dataclasses import dataclass

from .base import SelectionCallback
from .models import MarkRequest, Paragraph

logger = logging.getLogger(__name__)

_HEADING = re.compile(r"^(#{1,9})\s+(.*\S)\s*$")


@dataclass(frozen=True)
class MarkedRange:
    paragraph_index: int
    start: int
    end: int
    severity_tag: str


class TextDocument:
    """In-memory DocumentProvider over plain text.

    - One paragraph per non-blank line
    - Markdown ATX headings ("#", "##", ...) set the heading level
    - Deterministic output for same input
    """

    def __init__(self, text: str = "") -> None:
        self._paragraphs = self._parse(text)
        self._selection = ""
        self._callbacks: list[SelectionCallback] = []
        self.marks: list[MarkedRange] = []
        logger.debug("Loaded TextDocument with %d paragraphs", len(self._paragraphs))

    @classmethod
    def from_paragraphs(cls, paragraphs: list[Paragraph]) -> "TextDocument":
        doc = cls()
        doc._paragraphs = list(paragraphs)
        return doc

    @property
    def text(self) -> str:
        return "\n\n".join(p.text for p in self._paragraphs)

    async def extract_paragraphs(self) -> list[Paragraph]:
        return list(self._paragraphs)

    async def get_selection_text(self) -> str:
        return self._selection

    def select(self, text: str) -> None:
        """Set the live selection and notify listeners."""
        self._selection = text
        for callback in self._callbacks:
            callback(text)

    def on_selection_changed(self, callback: SelectionCallback) -> None:
        self._callbacks.append(callback)

    async def search_and_replace(self, pattern: str, replacement: str) -> bool:
        if not pattern:
            return False
        regex = re.compile(re.escape(pattern), re.IGNORECASE)

        for position, p in enumerate(self._paragraphs):
            match = regex.search(p.text)
            if match is None:
                continue
            text = p.text[: match.start()] + replacement + p.text[match.end() :]
            self._paragraphs[position] = Paragraph.from_text(
                p.index, text, p.heading_level
            )
            logger.debug("Replaced %r in paragraph %d", pattern, p.index)
            return True

        logger.debug("No match for %r", pattern)
        return False

    async def mark_ranges(self, matches: list[MarkRequest]) -> None:
        for m in matches:
            if not m.pattern:
                continue
            regex = re.compile(re.escape(m.pattern))
            for p in self._paragraphs:
                for found in regex.finditer(p.text):
                    self.marks.append(
                        MarkedRange(
                            paragraph_index=p.index,
                            start=found.start(),
                            end=found.end(),
                            severity_tag=m.severity_tag,
                        )
                    )

    def clear_marks(self) -> None:
        self.marks.clear()

    def _parse(self, text: str) -> list[Paragraph]:
        paragraphs: list[Paragraph] = []
        for line in text.splitlines():
            clean = line.strip()
            if not clean:
                continue

            heading = _HEADING.match(clean)
            if heading:
                level = len(heading.group(1))
                paragraphs.append(
                    Paragraph.from_text(len(paragraphs), heading.group(2), level)
                )
            else:
                paragraphs.append(Paragraph.from_text(len(paragraphs), clean))
        return paragraphs
