# src/manuscript_kit/analysis/corrections.py

import logging

from manuscript_kit.documents.base import DocumentProvider
from manuscript_kit.documents.models import MarkRequest

from .schemas import GrammarCorrection

logger = logging.getLogger(__name__)


async def apply_correction(
    document: DocumentProvider, correction: GrammarCorrection
) -> bool:
    """Replace the first occurrence of `correction.original`.

    Matching is literal and position-blind: when the same text occurs more
    than once, the first occurrence is changed whichever one was meant.
    """
    applied = await document.search_and_replace(
        correction.original, correction.suggestion
    )
    if not applied:
        logger.info("Correction target not found: %r", correction.original)
    return applied


async def mark_corrections(
    document: DocumentProvider,
    corrections: list[GrammarCorrection],
    enabled: bool = True,
) -> None:
    """Underline each correction's original text, tagged by severity."""
    if not enabled or not corrections:
        return
    await document.mark_ranges(
        [MarkRequest(pattern=c.original, severity_tag=c.severity) for c in corrections]
    )
