import pytest

from manuscript_kit.documents.models import MarkRequest, Paragraph
from manuscript_kit.documents.text_document import TextDocument

SAMPLE = """# Introduction

This is the first paragraph. The results are clear.

## Background
Prior work is summarised here.

### Details
the results are repeated.
"""


@pytest.fixture
def document() -> TextDocument:
    return TextDocument(SAMPLE)


class TestTextDocument:
    @pytest.mark.asyncio
    async def test_extract_paragraphs(self, document: TextDocument) -> None:
        paragraphs = await document.extract_paragraphs()

        assert [(x.text, x.heading_level) for x in paragraphs] == [
            ("Introduction", 1),
            ("This is the first paragraph. The results are clear.", 0),
            ("Background", 2),
            ("Prior work is summarised here.", 0),
            ("Details", 3),
            ("the results are repeated.", 0),
        ]
        assert [x.index for x in paragraphs] == list(range(6))
        assert paragraphs[1].word_count == 9

    @pytest.mark.asyncio
    async def test_search_and_replace_first_match_case_insensitive(
        self, document: TextDocument
    ) -> None:
        replaced = await document.search_and_replace("THE RESULTS", "the findings")

        paragraphs = await document.extract_paragraphs()
        assert replaced is True
        expected = "This is the first paragraph. the findings are clear."
        assert paragraphs[1].text == expected
        assert paragraphs[5].text == "the results are repeated."

    @pytest.mark.asyncio
    async def test_search_and_replace_without_match(
        self, document: TextDocument
    ) -> None:
        assert await document.search_and_replace("missing text", "x") is False
        assert await document.search_and_replace("", "x") is False

    @pytest.mark.asyncio
    async def test_replace_updates_word_count(self, document: TextDocument) -> None:
        await document.search_and_replace("Prior work", "Much prior work")

        paragraphs = await document.extract_paragraphs()
        assert paragraphs[3].word_count == 6

    @pytest.mark.asyncio
    async def test_mark_ranges_marks_every_case_sensitive_match(
        self, document: TextDocument
    ) -> None:
        await document.mark_ranges(
            [MarkRequest(pattern="results", severity_tag="error")]
        )

        assert [(m.paragraph_index, m.severity_tag) for m in document.marks] == [
            (1, "error"),
            (5, "error"),
        ]
        assert document.marks[1].start == 4
        assert document.marks[1].end == 11

    @pytest.mark.asyncio
    async def test_selection_and_callbacks(self, document: TextDocument) -> None:
        seen: list[str] = []
        document.on_selection_changed(seen.append)

        document.select("Prior work")

        assert await document.get_selection_text() == "Prior work"
        assert seen == ["Prior work"]

    def test_text_joins_paragraphs(self) -> None:
        document = TextDocument("# Title\nBody")

        assert document.text == "Title\n\nBody"

    @pytest.mark.asyncio
    async def test_clear_marks(self, document: TextDocument) -> None:
        await document.mark_ranges([MarkRequest(pattern="work", severity_tag="info")])
        assert len(document.marks) == 1

        document.clear_marks()

        assert document.marks == []

    @pytest.mark.asyncio
    async def test_from_paragraphs(self) -> None:
        paragraphs = [
            Paragraph.from_text(0, "Methods", heading_level=1),
            Paragraph.from_text(1, "We sampled twelve sites."),
        ]

        document = TextDocument.from_paragraphs(paragraphs)

        assert await document.extract_paragraphs() == paragraphs
        assert document.text == "Methods\n\nWe sampled twelve sites."
