# src/manuscript_kit/documents/outline.py

"""Document outline helpers shared by the chunker and the scope resolver."""

from collections.abc import Iterable, Sequence

from .models import ChapterInfo, DocumentInfo, Paragraph, count_words

CHAPTER_LEVELS = (1, 2)
SUBSECTION_LEVELS = (3, 4)


def split_at_headings(
    paragraphs: Sequence[Paragraph], levels: Iterable[int]
) -> list[tuple[str, list[Paragraph]]]:
    """Group consecutive paragraphs at headings of the given levels.

    Each group is (title, paragraphs). The heading paragraph opens its own
    group. Paragraphs before the first matching heading form a group with
    an empty title.
    """
    levels = frozenset(levels)
    groups: list[tuple[str, list[Paragraph]]] = []
    title = ""
    current: list[Paragraph] = []

    for p in paragraphs:
        if p.heading_level in levels:
            if current:
                groups.append((title, current))
                current = []
            title = p.text
        current.append(p)

    if current:
        groups.append((title, current))
    return groups


def chapter_infos(paragraphs: Sequence[Paragraph]) -> list[ChapterInfo]:
    chapters: list[ChapterInfo] = []
    position = 0
    for title, group in split_at_headings(paragraphs, CHAPTER_LEVELS):
        chapters.append(
            ChapterInfo(
                title=title,
                word_count=sum(p.word_count for p in group),
                start_index=position,
                end_index=position + len(group),
            )
        )
        position += len(group)
    return chapters


def build_document_info(
    paragraphs: Sequence[Paragraph], selection_text: str = ""
) -> DocumentInfo:
    selected_words = count_words(selection_text)
    return DocumentInfo(
        total_words=sum(p.word_count for p in paragraphs),
        selected_words=selected_words,
        has_selection=selected_words > 0,
        chapters=chapter_infos(paragraphs),
    )


def paragraphs_from_text(text: str) -> list[Paragraph]:
    """Wrap free text as body paragraphs, one per non-blank line."""
    lines = [line.strip() for line in text.splitlines()]
    return [
        Paragraph.from_text(i, line)
        for i, line in enumerate(line for line in lines if line)
    ]


def join_paragraphs(paragraphs: Iterable[Paragraph]) -> str:
    return "\n\n".join(p.text for p in paragraphs)
