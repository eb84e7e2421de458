import pytest

from manuscript_kit.chunking.chunking import (
    MAX_WORDS_PER_CHUNK,
    OVERLAP_WORDS,
    Chunk,
    chunk_document,
)
from manuscript_kit.documents.models import Paragraph
from manuscript_kit.errors import ChunkingError


def body(index: int, words: int, tag: str = "w") -> Paragraph:
    text = " ".join(f"{tag}{index}_{j}" for j in range(words))
    return Paragraph.from_text(index, text)


def heading(index: int, title: str, level: int = 1) -> Paragraph:
    return Paragraph.from_text(index, title, heading_level=level)


def flatten(chunks: list[Chunk]) -> list[Paragraph]:
    return [p for c in chunks for p in c.paragraphs]


class TestChunkDocument:
    def test_small_document_without_headings_is_one_chunk(self) -> None:
        paragraphs = [body(i, 50) for i in range(10)]

        result = chunk_document(paragraphs)

        assert len(result.chunks) == 1
        assert result.chunks[0].overlap_before == ""
        assert result.chunks[0].overlap_after == ""
        assert result.chunks[0].chapter_label == ""
        assert result.meta.total_words == 500
        assert result.meta.total_chapters == 1

    def test_one_chunk_per_chapter_when_chapters_fit(self) -> None:
        paragraphs = []
        for chapter in range(3):
            paragraphs.append(heading(len(paragraphs), f"Chapter {chapter + 1}"))
            for _ in range(15):
                paragraphs.append(body(len(paragraphs), 100))

        result = chunk_document(paragraphs)

        assert result.meta.total_words > MAX_WORDS_PER_CHUNK
        assert [c.chapter_label for c in result.chunks] == [
            "Chapter 1",
            "Chapter 2",
            "Chapter 3",
        ]
        assert [c.id for c in result.chunks] == ["ch0", "ch1", "ch2"]
        assert result.meta.total_chapters == 3

    def test_oversized_chapter_splits_by_word_count(self) -> None:
        paragraphs = [heading(0, "Intro")]
        paragraphs += [body(i, 100) for i in range(1, 91)]

        result = chunk_document(paragraphs)

        assert [c.chapter_label for c in result.chunks] == [
            "Intro (1)",
            "Intro (2)",
            "Intro (3)",
        ]
        assert [c.id for c in result.chunks] == ["ch0_s0_p0", "ch0_s0_p1", "ch0_s0_p2"]
        assert all(c.word_count <= MAX_WORDS_PER_CHUNK for c in result.chunks)

    def test_oversized_chapter_splits_at_subsections(self) -> None:
        paragraphs = [heading(0, "Methods")]
        for section in ("Sampling", "Coding"):
            paragraphs.append(heading(len(paragraphs), section, level=3))
            for _ in range(25):
                paragraphs.append(body(len(paragraphs), 100))

        result = chunk_document(paragraphs)

        assert [c.chapter_label for c in result.chunks] == [
            "Methods",
            "Methods > Sampling",
            "Methods > Coding",
        ]
        assert result.chunks[1].paragraphs[0].text == "Sampling"

    def test_oversized_subsection_falls_back_to_word_groups(self) -> None:
        paragraphs = [heading(0, "Results"), heading(1, "Survey", level=4)]
        paragraphs += [body(i, 1000) for i in range(2, 12)]

        result = chunk_document(paragraphs)

        labels = [c.chapter_label for c in result.chunks]
        assert labels[0] == "Results"
        assert labels[1:] == [
            "Results > Survey (1)",
            "Results > Survey (2)",
            "Results > Survey (3)",
        ]

    def test_single_oversized_paragraph_gets_its_own_chunk(self) -> None:
        paragraphs = [body(0, 100), body(1, 5000), body(2, 100)]

        result = chunk_document(paragraphs)

        assert len(result.chunks) == 3
        assert result.chunks[1].paragraphs == [paragraphs[1]]
        assert result.chunks[1].word_count == 5000

    def test_empty_document(self) -> None:
        result = chunk_document([])

        assert result.chunks == []
        assert result.meta.total_words == 0
        assert result.meta.total_chapters == 0
        assert result.meta.table_of_contents == ""


class TestChunkInvariants:
    @pytest.fixture
    def book(self) -> list[Paragraph]:
        paragraphs: list[Paragraph] = [body(0, 30, tag="pre")]
        for chapter in range(4):
            paragraphs.append(heading(len(paragraphs), f"Chapter {chapter}", level=1))
            paragraphs.append(heading(len(paragraphs), f"Part {chapter}.1", level=3))
            for _ in range(30):
                paragraphs.append(body(len(paragraphs), 90 + chapter * 10))
            paragraphs.append(heading(len(paragraphs), f"Part {chapter}.2", level=3))
            for _ in range(20):
                paragraphs.append(body(len(paragraphs), 120))
        return paragraphs

    def test_partition_is_lossless(self, book: list[Paragraph]) -> None:
        result = chunk_document(book)

        assert flatten(result.chunks) == book

    def test_word_bound_respected(self, book: list[Paragraph]) -> None:
        result = chunk_document(book)

        for chunk in result.chunks:
            assert chunk.word_count <= MAX_WORDS_PER_CHUNK or len(chunk.paragraphs) == 1

    def test_overlap_matches_neighbours(self, book: list[Paragraph]) -> None:
        chunks = chunk_document(book).chunks

        assert len(chunks) > 2
        assert chunks[0].overlap_before == ""
        assert chunks[-1].overlap_after == ""
        for a, b in zip(chunks, chunks[1:]):
            a_words = " ".join(p.text for p in a.paragraphs).split()
            b_words = " ".join(p.text for p in b.paragraphs).split()
            assert a.overlap_after == " ".join(b_words[:OVERLAP_WORDS])
            assert b.overlap_before == " ".join(a_words[-OVERLAP_WORDS:])

    def test_chunking_is_deterministic(self, book: list[Paragraph]) -> None:
        first = chunk_document(book)
        second = chunk_document(book)

        assert [(c.id, c.chapter_label) for c in first.chunks] == [
            (c.id, c.chapter_label) for c in second.chunks
        ]
        assert [len(c.paragraphs) for c in first.chunks] == [
            len(c.paragraphs) for c in second.chunks
        ]

    def test_chunk_ids_are_unique(self, book: list[Paragraph]) -> None:
        ids = [c.id for c in chunk_document(book).chunks]

        assert len(ids) == len(set(ids))


class TestMetaContext:
    def test_table_of_contents_is_indented_by_level(self) -> None:
        paragraphs = [
            heading(0, "Introduction", 1),
            body(1, 10),
            heading(2, "Background", 2),
            heading(3, "Prior work", 3),
        ]

        meta = chunk_document(paragraphs).meta

        assert meta.table_of_contents == "Introduction\n  Background\n    Prior work"
        assert meta.total_chapters == 2

    def test_table_of_contents_is_truncated(self) -> None:
        paragraphs = [heading(i, f"Heading number {i}") for i in range(500)]

        meta = chunk_document(paragraphs, toc_max_chars=100).meta

        assert len(meta.table_of_contents) == 100

    def test_metrics_hook_called(self) -> None:
        from unittest.mock import MagicMock

        metrics_hook = MagicMock()
        chunk_document([body(0, 10)], metrics_hook=metrics_hook)

        metrics_hook.record_latency.assert_called_once()
        assert metrics_hook.record_latency.call_args[0][0] == "chunking_duration"
        metrics_hook.increment.assert_called_with("chunking_chunks_created", 1)


class TestChunkDocumentValidation:
    def test_raises_on_zero_max_words(self) -> None:
        with pytest.raises(ChunkingError, match="max_words must be > 0"):
            chunk_document([body(0, 10)], max_words=0)

    def test_raises_on_negative_overlap(self) -> None:
        with pytest.raises(ChunkingError, match="overlap_words must be >= 0"):
            chunk_document([body(0, 10)], overlap_words=-1)

    def test_chunking_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            chunk_document([body(0, 10)], max_words=-5)

    def test_chunk_is_frozen(self) -> None:
        chunk = Chunk(id="ch0", chapter_label="", paragraphs=[])

        with pytest.raises(AttributeError):
            chunk.id = "modified"  # type: ignore
