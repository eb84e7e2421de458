# src/manuscript_kit/analysis/mergers.py

"""Fold per-chunk backend results into one document-level result.

Each chunk result is validated before it contributes. A chunk whose
overall shape is wrong is logged and skipped; inside a valid chunk, list
entries (corrections, citations) are validated one by one and only the
bad entries are dropped. A merge where no chunk contributed raises
MergeError.
"""

import logging
import math
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError

from manuscript_kit.errors import MergeError
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

from .schemas import (
    AnalysisKind,
    CitationResult,
    GrammarCorrection,
    LegitimacyOverall,
    LegitimacyResult,
    ProofreadResult,
    ProofreadScore,
    ProofreadScores,
    StyleResult,
    UnifiedResult,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

PROOFREAD_CATEGORIES = tuple(ProofreadScores.model_fields)


# Backends sometimes report fractional scores; they are averaged as floats
# and rounded only in the merged result.
class _PartialScore(BaseModel):
    score: float = Field(ge=0, le=100)
    issues: list[str] = []


class _PartialScores(BaseModel):
    structure: _PartialScore
    argumentation: _PartialScore
    precision: _PartialScore
    conventions: _PartialScore
    formal: _PartialScore


class _PartialProofread(BaseModel):
    scores: _PartialScores | None = None
    overall_score: float | None = Field(default=None, ge=0, le=100)
    summary: str = ""


class _PartialGrammar(BaseModel):
    corrections: list[Any]


class _PartialOverall(BaseModel):
    style_detected: str | None = None
    consistency_score: float | None = Field(default=None, ge=0, le=100)


class _PartialLegitimacy(BaseModel):
    citations: list[Any]
    overall: _PartialOverall = Field(default_factory=_PartialOverall)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _validated(
    results: Mapping[str, Any],
    model: type[ModelT],
    metrics_hook: MetricsHook,
) -> dict[str, ModelT]:
    valid: dict[str, ModelT] = {}
    for chunk_id, raw in results.items():
        try:
            valid[chunk_id] = model.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "Skipping chunk %s: result does not match %s (%d errors)",
                chunk_id,
                model.__name__,
                e.error_count(),
            )
            metrics_hook.increment(
                names.MERGE_SKIPPED_CHUNKS_TOTAL, labels={"schema": model.__name__}
            )

    if not valid:
        raise MergeError(
            f"None of {len(results)} chunk results matched {model.__name__}"
        )
    return valid


def _valid_items(
    chunk_id: str,
    items: list[Any],
    model: type[ModelT],
    metrics_hook: MetricsHook,
) -> list[ModelT]:
    valid: list[ModelT] = []
    for position, raw in enumerate(items):
        try:
            valid.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(
                "Skipping %s #%d of chunk %s (%d errors)",
                model.__name__,
                position,
                chunk_id,
                e.error_count(),
            )
            metrics_hook.increment(
                names.MERGE_SKIPPED_ITEMS_TOTAL, labels={"schema": model.__name__}
            )
    return valid


def merge_grammar_results(
    results: Mapping[str, Any],
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[GrammarCorrection]:
    """Concatenate corrections in chunk order. No de-duplication."""
    merged: list[GrammarCorrection] = []
    for chunk_id, result in _validated(results, _PartialGrammar, metrics_hook).items():
        merged.extend(
            _valid_items(chunk_id, result.corrections, GrammarCorrection, metrics_hook)
        )
    logger.info("Merged %d corrections from %d chunks", len(merged), len(results))
    return merged


def merge_proofread_results(
    results: Mapping[str, Any],
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ProofreadResult:
    """Average category and overall scores over chunks that reported scores.

    Issues are concatenated per category. A single scored chunk keeps its
    summary and its scores, rounded to integers.
    """
    scored = [
        r
        for r in _validated(results, _PartialProofread, metrics_hook).values()
        if r.scores is not None
    ]
    if not scored:
        raise MergeError(f"None of {len(results)} chunk results reported scores")

    categories = {}
    for category in PROOFREAD_CATEGORIES:
        per_chunk: list[_PartialScore] = [getattr(r.scores, category) for r in scored]
        categories[category] = ProofreadScore(
            score=round_half_up(_mean([s.score for s in per_chunk])),
            issues=[issue for s in per_chunk for issue in s.issues],
        )

    overall = [r.overall_score for r in scored if r.overall_score is not None]
    if not overall:
        overall = [s.score for s in categories.values()]

    if len(scored) == 1:
        summary = scored[0].summary
    else:
        summary = f"Document-level assessment averaged across {len(scored)} chunks."

    merged = ProofreadResult(
        scores=ProofreadScores(**categories),
        overall_score=round_half_up(_mean(overall)),
        summary=summary,
    )
    logger.info(
        "Merged proofreading scores from %d chunks: overall=%d",
        len(scored),
        merged.overall_score,
    )
    return merged


def merge_legitimacy_results(
    results: Mapping[str, Any],
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LegitimacyResult:
    """Concatenate citations, average consistency, keep the first detected style.

    Consistency is 0 when no chunk reported one, and the style is "unknown"
    when no chunk detected one.
    """
    valid = _validated(results, _PartialLegitimacy, metrics_hook)

    citations = [
        c
        for chunk_id, r in valid.items()
        for c in _valid_items(chunk_id, r.citations, CitationResult, metrics_hook)
    ]
    consistency = [
        r.overall.consistency_score
        for r in valid.values()
        if r.overall.consistency_score is not None
    ]
    style = next(
        (r.overall.style_detected for r in valid.values() if r.overall.style_detected),
        "unknown",
    )

    merged = LegitimacyResult(
        citations=citations,
        overall=LegitimacyOverall(
            style_detected=style,
            consistency_score=round_half_up(_mean(consistency)) if consistency else 0,
        ),
    )
    logger.info(
        "Merged %d citations from %d chunks: style=%s",
        len(citations),
        len(valid),
        style,
    )
    return merged


def merge_style_results(
    results: Mapping[str, Any],
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> StyleResult:
    """Style runs on a bounded sample, so there is one result to validate."""
    valid = list(_validated(results, StyleResult, metrics_hook).values())
    if len(valid) > 1:
        logger.warning("Style merge got %d results, keeping the first", len(valid))
    return valid[0]


MERGERS: dict[AnalysisKind, Callable[..., UnifiedResult]] = {
    AnalysisKind.GRAMMAR: merge_grammar_results,
    AnalysisKind.PROOFREADING: merge_proofread_results,
    AnalysisKind.SOURCES: merge_legitimacy_results,
    AnalysisKind.STYLE: merge_style_results,
}


def merge_results(
    kind: AnalysisKind,
    results: Mapping[str, Any],
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> UnifiedResult:
    return MERGERS[kind](results, metrics_hook=metrics_hook)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)
