# src/manuscript_kit/documents/models.py

from dataclasses import dataclass, field


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


@dataclass(frozen=True)
class Paragraph:
    """Snapshot of one document paragraph at extraction time.

    heading_level is 0 for body text and 1..N for heading depth.
    """

    index: int
    text: str
    heading_level: int = 0
    word_count: int = 0

    @classmethod
    def from_text(cls, index: int, text: str, heading_level: int = 0) -> "Paragraph":
        return cls(
            index=index,
            text=text,
            heading_level=heading_level,
            word_count=count_words(text),
        )


@dataclass(frozen=True)
class ChapterInfo:
    """A chapter group of the document outline.

    start_index and end_index are positions in the paragraph list,
    end exclusive, so paragraphs[start_index:end_index] is the chapter.
    """

    title: str
    word_count: int
    start_index: int
    end_index: int


@dataclass(frozen=True)
class DocumentInfo:
    total_words: int
    selected_words: int
    has_selection: bool
    chapters: list[ChapterInfo] = field(default_factory=list)


@dataclass(frozen=True)
class MarkRequest:
    """One pattern to annotate in the host document."""

    pattern: str
    severity_tag: str
