# src/manuscript_kit/documents/base.py

from collections.abc import Callable
from typing import Protocol

from .models import MarkRequest, Paragraph

SelectionCallback = Callable[[str], None]


class DocumentProvider(Protocol):
    """Host document boundary.

    Implementations wrap an editor's text-extraction and mutation API.
    Every call is async because host APIs round-trip to the editor.
    """

    async def extract_paragraphs(self) -> list[Paragraph]:
        """Return all paragraphs in document order."""
        ...

    async def get_selection_text(self) -> str:
        """Return the live selection, or an empty string."""
        ...

    async def search_and_replace(self, pattern: str, replacement: str) -> bool:
        """Replace the first case-insensitive literal match.

        Returns:
            True if a match was replaced.
        """
        ...

    async def mark_ranges(self, matches: list[MarkRequest]) -> None:
        """Visually annotate every occurrence of each pattern. Fire-and-forget."""
        ...

    def on_selection_changed(self, callback: SelectionCallback) -> None:
        """Register a callback fired with the new selection text.

        Consumers debounce on their own.
        """
        ...
