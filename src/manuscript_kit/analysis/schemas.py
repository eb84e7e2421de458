# src/manuscript_kit/analysis/schemas.py

"""Result schemas the backend is instructed to emit.

A merged multi-chunk result validates against the same model as a
single-shot result, so consumers never branch on chunking.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

Severity = Literal["error", "warning", "info"]


class AnalysisKind(str, Enum):
    GRAMMAR = "grammar"
    PROOFREADING = "proofreading"
    SOURCES = "sources"
    STYLE = "style"


# ---- Grammar & spelling ----


class GrammarCorrection(BaseModel):
    original: str
    suggestion: str
    type: str
    explanation: str = ""
    severity: Severity = "warning"


class GrammarResult(BaseModel):
    corrections: list[GrammarCorrection]


# ---- Scientific proofreading ----


class ProofreadScore(BaseModel):
    score: int = Field(ge=0, le=100)
    issues: list[str] = []


class ProofreadScores(BaseModel):
    structure: ProofreadScore
    argumentation: ProofreadScore
    precision: ProofreadScore
    conventions: ProofreadScore
    formal: ProofreadScore


class ProofreadResult(BaseModel):
    scores: ProofreadScores
    overall_score: int = Field(ge=0, le=100)
    summary: str = ""


# ---- Sources & legitimacy ----


class CitationIssue(BaseModel):
    type: Literal["format", "consistency", "plausibility", "missing"]
    description: str
    suggestion: str = ""


class CitationResult(BaseModel):
    text: str
    status: Literal["ok", "warning", "error"]
    issues: list[CitationIssue] = []


class LegitimacyOverall(BaseModel):
    style_detected: str
    consistency_score: int = Field(ge=0, le=100)


class LegitimacyResult(BaseModel):
    citations: list[CitationResult]
    overall: LegitimacyOverall


# ---- Style ----


class PunctuationHabits(BaseModel):
    semicolons: str
    dashes: str
    parentheses: str
    colons: str


class StyleProfile(BaseModel):
    formality: str
    voice: str
    sentence_length: str
    complexity: str
    passive_tendency: str
    preferred_connectors: list[str] = []
    vocabulary_level: str
    characteristic_words: list[str] | None = None
    characteristic_phrases: list[str] | None = None
    typical_sentence_starters: list[str] | None = None
    paragraph_transitions: list[str] | None = None
    punctuation_habits: PunctuationHabits | None = None
    avg_sentence_word_count: float | None = None
    sentence_length_variation: str | None = None
    passive_ratio_percent: float | None = None


class StyleDeviation(BaseModel):
    location: str
    issue: str
    suggestion: str


class StyleConsistency(BaseModel):
    score: int = Field(ge=0, le=100)
    deviations: list[StyleDeviation] = []


class StyleResult(BaseModel):
    style_profile: StyleProfile
    consistency: StyleConsistency


UnifiedResult = (
    list[GrammarCorrection] | ProofreadResult | LegitimacyResult | StyleResult
)


# ---- Rewrite, rephrase & suggestions ----


class RewriteChange(BaseModel):
    original: str
    replacement: str
    reason: str = ""


class RewriteResult(BaseModel):
    rewritten_text: str = Field(min_length=1)
    changes_summary: str = ""
    changes: list[RewriteChange] = []
    style_note: str | None = None

    @field_validator("changes", mode="before")
    @classmethod
    def _changes_default_to_empty(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []


class RephraseVariant(BaseModel):
    text: str
    style: str  # formal | precise | elaborate
    description: str = ""


class RephraseResult(BaseModel):
    variants: list[RephraseVariant]


class Suggestion(BaseModel):
    text: str
    type: str  # completion | expansion | transition | summary | counterargument
    description: str = ""


class SuggestionsResult(BaseModel):
    suggestions: list[Suggestion] = []
