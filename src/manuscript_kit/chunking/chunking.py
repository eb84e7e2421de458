# src/manuscript_kit/chunking/chunking.py

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from time import monotonic

from manuscript_kit.documents.models import Paragraph
from manuscript_kit.documents.outline import (
    CHAPTER_LEVELS,
    SUBSECTION_LEVELS,
    split_at_headings,
)
from manuscript_kit.errors import ChunkingError
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

MAX_WORDS_PER_CHUNK = 4000  # ~5,500 tokens
OVERLAP_WORDS = 300
TOC_MAX_CHARS = 3000


@dataclass(frozen=True)
class Chunk:
    """A bounded, contiguous slice of a document's paragraphs.

    overlap_before/overlap_after hold words copied from the neighbouring
    chunks. They are context only and never part of `paragraphs`.
    """

    id: str
    chapter_label: str
    paragraphs: list[Paragraph]
    overlap_before: str = ""
    overlap_after: str = ""

    @property
    def text(self) -> str:
        return "\n\n".join(p.text for p in self.paragraphs)

    @property
    def word_count(self) -> int:
        return sum(p.word_count for p in self.paragraphs)


@dataclass(frozen=True)
class MetaContext:
    """Whole-document orientation shared by every chunk of one pass."""

    table_of_contents: str
    total_words: int
    total_chapters: int


@dataclass(frozen=True)
class ChunkedDocument:
    chunks: list[Chunk]
    meta: MetaContext


def chunk_document(
    paragraphs: Sequence[Paragraph],
    *,
    max_words: int = MAX_WORDS_PER_CHUNK,
    overlap_words: int = OVERLAP_WORDS,
    toc_max_chars: int = TOC_MAX_CHARS,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ChunkedDocument:
    """Partition paragraphs into analysis chunks.

    Splitting happens at chapter headings (level 1/2) first, then at
    subsection headings (level 3/4) for oversized chapters, and finally at
    paragraph boundaries by word count. Paragraphs are never split, so a
    single paragraph longer than max_words becomes a chunk of its own.

    Args:
        paragraphs: Full paragraph sequence in document order.
        max_words: Upper bound for a chunk's paragraph words.
        overlap_words: Words copied from each neighbour as context.
        toc_max_chars: Character budget of the table of contents.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        The chunks in document order and the shared MetaContext.

    Raises:
        ChunkingError: If the bounds are invalid.
    """
    start = monotonic()
    if max_words <= 0:
        raise ChunkingError("max_words must be > 0")
    if overlap_words < 0:
        raise ChunkingError("overlap_words must be >= 0")

    chapters = split_at_headings(paragraphs, CHAPTER_LEVELS)
    chunks: list[Chunk] = []

    for i, (title, chapter) in enumerate(chapters):
        if _words(chapter) <= max_words:
            chunks.append(Chunk(id=f"ch{i}", chapter_label=title, paragraphs=chapter))
            continue

        sections = split_at_headings(chapter, SUBSECTION_LEVELS)
        for j, (section_title, section) in enumerate(sections):
            label = _section_label(title, section_title)
            if _words(section) <= max_words:
                chunks.append(
                    Chunk(id=f"ch{i}_s{j}", chapter_label=label, paragraphs=section)
                )
                continue

            for k, group in enumerate(_split_at_word_limit(section, max_words)):
                chunks.append(
                    Chunk(
                        id=f"ch{i}_s{j}_p{k}",
                        chapter_label=f"{label} ({k + 1})".strip(),
                        paragraphs=group,
                    )
                )

    oversized = [c for c in chunks if c.word_count > max_words]
    for c in oversized:
        logger.warning(
            "Chunk %s holds a single paragraph of %d words (limit %d)",
            c.id,
            c.word_count,
            max_words,
        )

    chunks = _with_overlap(chunks, overlap_words)
    meta = MetaContext(
        table_of_contents=_table_of_contents(paragraphs)[:toc_max_chars],
        total_words=_words(paragraphs),
        total_chapters=len(chapters),
    )

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms)
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks))
    if oversized:
        metrics_hook.increment(names.CHUNKING_OVERSIZED_PARAGRAPHS, len(oversized))
    logger.info(
        "Chunked %d paragraphs (%d words) into %d chunks across %d chapters",
        len(paragraphs),
        meta.total_words,
        len(chunks),
        meta.total_chapters,
    )
    return ChunkedDocument(chunks=chunks, meta=meta)


def _words(paragraphs: Sequence[Paragraph]) -> int:
    return sum(p.word_count for p in paragraphs)


def _section_label(chapter_title: str, section_title: str) -> str:
    if not section_title:
        return chapter_title
    if not chapter_title:
        return section_title
    return f"{chapter_title} > {section_title}"


def _split_at_word_limit(
    paragraphs: Sequence[Paragraph], max_words: int
) -> list[list[Paragraph]]:
    groups: list[list[Paragraph]] = []
    current: list[Paragraph] = []
    count = 0

    for p in paragraphs:
        if current and count + p.word_count > max_words:
            groups.append(current)
            current = []
            count = 0
        current.append(p)
        count += p.word_count

    if current:
        groups.append(current)
    return groups


def _with_overlap(chunks: list[Chunk], overlap_words: int) -> list[Chunk]:
    if overlap_words == 0:
        return chunks

    words = [" ".join(p.text for p in c.paragraphs).split() for c in chunks]
    result = []
    for i, chunk in enumerate(chunks):
        before = " ".join(words[i - 1][-overlap_words:]) if i > 0 else ""
        after = " ".join(words[i + 1][:overlap_words]) if i < len(chunks) - 1 else ""
        result.append(replace(chunk, overlap_before=before, overlap_after=after))
    return result


def _table_of_contents(paragraphs: Sequence[Paragraph]) -> str:
    return "\n".join(
        "  " * (p.heading_level - 1) + p.text
        for p in paragraphs
        if p.heading_level > 0
    )
