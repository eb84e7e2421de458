from manuscript_kit.documents.models import ChapterInfo, Paragraph, count_words
from manuscript_kit.documents.outline import (
    build_document_info,
    paragraphs_from_text,
    split_at_headings,
)


def p(index: int, text: str, level: int = 0) -> Paragraph:
    return Paragraph.from_text(index, text, level)


class TestSplitAtHeadings:
    def test_leading_body_text_has_empty_title(self) -> None:
        paragraphs = [p(0, "Preface text"), p(1, "One", 1), p(2, "Body")]

        groups = split_at_headings(paragraphs, (1, 2))

        assert [(title, [x.index for x in group]) for title, group in groups] == [
            ("", [0]),
            ("One", [1, 2]),
        ]

    def test_heading_first_opens_group(self) -> None:
        paragraphs = [p(0, "One", 1), p(1, "Body"), p(2, "Two", 2), p(3, "More")]

        groups = split_at_headings(paragraphs, (1, 2))

        assert [title for title, _ in groups] == ["One", "Two"]

    def test_other_levels_do_not_split(self) -> None:
        paragraphs = [p(0, "One", 1), p(1, "Sub", 3), p(2, "Body")]

        groups = split_at_headings(paragraphs, (1, 2))

        assert len(groups) == 1

    def test_empty_input(self) -> None:
        assert split_at_headings([], (1, 2)) == []


class TestBuildDocumentInfo:
    def test_chapters_and_totals(self) -> None:
        paragraphs = [
            p(0, "Intro words here"),
            p(1, "Chapter One", 1),
            p(2, "four words of text"),
            p(3, "Chapter Two", 2),
        ]

        info = build_document_info(paragraphs, selection_text="two words")

        assert info.total_words == 11
        assert info.selected_words == 2
        assert info.has_selection is True
        assert info.chapters == [
            ChapterInfo(title="", word_count=3, start_index=0, end_index=1),
            ChapterInfo(title="Chapter One", word_count=6, start_index=1, end_index=3),
            ChapterInfo(title="Chapter Two", word_count=2, start_index=3, end_index=4),
        ]

    def test_no_selection(self) -> None:
        info = build_document_info([p(0, "text")])

        assert info.has_selection is False
        assert info.selected_words == 0


class TestParagraphHelpers:
    def test_count_words(self) -> None:
        assert count_words("  several   spaced\nwords ") == 3
        assert count_words("") == 0

    def test_from_text_counts_words(self) -> None:
        paragraph = Paragraph.from_text(4, "a b c", heading_level=2)

        assert paragraph.word_count == 3
        assert paragraph.heading_level == 2

    def test_paragraphs_from_text_skips_blank_lines(self) -> None:
        paragraphs = paragraphs_from_text("first line\n\n  second line  \n")

        assert [(x.index, x.text, x.heading_level) for x in paragraphs] == [
            (0, "first line", 0),
            (1, "second line", 0),
        ]
