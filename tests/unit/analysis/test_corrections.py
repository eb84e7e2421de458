import pytest

from manuscript_kit.analysis.corrections import apply_correction, mark_corrections
from manuscript_kit.analysis.schemas import GrammarCorrection
from manuscript_kit.documents.text_document import TextDocument


def correction(
    original: str, suggestion: str, severity: str = "error"
) -> GrammarCorrection:
    return GrammarCorrection(
        original=original,
        suggestion=suggestion,
        type="spelling",
        explanation="",
        severity=severity,  # type: ignore[arg-type]
    )


@pytest.fixture
def document() -> TextDocument:
    return TextDocument("We recieve data.\nThey recieve more data.")


class TestApplyCorrection:
    @pytest.mark.asyncio
    async def test_replaces_first_occurrence_only(self, document: TextDocument) -> None:
        applied = await apply_correction(document, correction("recieve", "receive"))

        assert applied is True
        assert document.text == "We receive data.\n\nThey recieve more data."

    @pytest.mark.asyncio
    async def test_missing_target(self, document: TextDocument) -> None:
        assert await apply_correction(document, correction("absent", "x")) is False


class TestMarkCorrections:
    @pytest.mark.asyncio
    async def test_marks_by_severity(self, document: TextDocument) -> None:
        await mark_corrections(
            document,
            [correction("recieve", "receive"), correction("data", "data", "info")],
        )

        tags = sorted({(m.paragraph_index, m.severity_tag) for m in document.marks})
        assert tags == [(0, "error"), (0, "info"), (1, "error"), (1, "info")]

    @pytest.mark.asyncio
    async def test_disabled_marks_nothing(self, document: TextDocument) -> None:
        await mark_corrections(
            document, [correction("recieve", "receive")], enabled=False
        )

        assert document.marks == []
