# src/manuscript_kit/analysis/scope.py

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from manuscript_kit.documents.base import DocumentProvider
from manuscript_kit.documents.models import DocumentInfo, Paragraph
from manuscript_kit.documents.outline import (
    build_document_info,
    join_paragraphs,
    paragraphs_from_text,
)
from manuscript_kit.errors import ScopeEmptyError

logger = logging.getLogger(__name__)


class AnalysisScope(str, Enum):
    SELECTION = "selection"
    FULL = "full"
    CHAPTERS = "chapters"


@dataclass(frozen=True)
class ResolvedScope:
    """Text and paragraphs that feed one analysis run.

    `scope` is the scope actually used, which is FULL after a fallback.
    """

    scope: AnalysisScope
    text: str
    paragraphs: list[Paragraph]


class ScopeResolver:
    """Decides which part of the document an analysis run sees.

    SELECTION and CHAPTERS fall back to FULL when they resolve to nothing.
    """

    def __init__(self, document: DocumentProvider) -> None:
        self._document = document

    async def resolve(
        self,
        scope: AnalysisScope,
        selected_chapters: Iterable[int] = (),
        doc_info: DocumentInfo | None = None,
    ) -> ResolvedScope:
        """Resolve a scope to paragraphs.

        Raises:
            ScopeEmptyError: If even the full document has no text.
        """
        paragraphs = await self._document.extract_paragraphs()

        try:
            if scope == AnalysisScope.SELECTION:
                return await self._selection()
            if scope == AnalysisScope.CHAPTERS:
                info = doc_info or build_document_info(paragraphs)
                return self._chapters(paragraphs, info, selected_chapters)
        except ScopeEmptyError as e:
            logger.info("Scope %s is empty (%s), falling back to full", scope.value, e)

        return self._full(paragraphs)

    async def resolve_text(
        self,
        scope: AnalysisScope,
        doc_info: DocumentInfo | None = None,
        selected_chapters: Iterable[int] = (),
    ) -> str:
        resolved = await self.resolve(scope, selected_chapters, doc_info)
        return resolved.text

    async def _selection(self) -> ResolvedScope:
        text = (await self._document.get_selection_text()).strip()
        if not text:
            raise ScopeEmptyError("no text selected")
        return ResolvedScope(
            scope=AnalysisScope.SELECTION,
            text=text,
            paragraphs=paragraphs_from_text(text),
        )

    def _chapters(
        self,
        paragraphs: list[Paragraph],
        doc_info: DocumentInfo,
        selected_chapters: Iterable[int],
    ) -> ResolvedScope:
        indices = sorted(
            {i for i in selected_chapters if 0 <= i < len(doc_info.chapters)}
        )
        chosen: list[Paragraph] = []
        for i in indices:
            chapter = doc_info.chapters[i]
            chosen.extend(paragraphs[chapter.start_index : chapter.end_index])

        text = join_paragraphs(chosen)
        if not text.strip():
            raise ScopeEmptyError(f"chapters {indices} contain no text")

        logger.debug("Resolved %d chapters to %d paragraphs", len(indices), len(chosen))
        return ResolvedScope(scope=AnalysisScope.CHAPTERS, text=text, paragraphs=chosen)

    def _full(self, paragraphs: list[Paragraph]) -> ResolvedScope:
        text = join_paragraphs(paragraphs)
        if not text.strip():
            raise ScopeEmptyError("document contains no text")
        return ResolvedScope(scope=AnalysisScope.FULL, text=text, paragraphs=paragraphs)
