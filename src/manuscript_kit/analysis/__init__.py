from .analyzer import ChunkAnalyzer, analyze_chunks, build_chunk_payload
from .corrections import apply_correction, mark_corrections
from .mergers import (
    merge_grammar_results,
    merge_legitimacy_results,
    merge_proofread_results,
    merge_results,
    merge_style_results,
)
from .pipeline import DocumentAnalyzer
from .profiles import InMemoryProfileStore, JsonFileProfileStore, ProfileStore
from .schemas import (
    AnalysisKind,
    CitationIssue,
    CitationResult,
    GrammarCorrection,
    GrammarResult,
    LegitimacyOverall,
    LegitimacyResult,
    ProofreadResult,
    ProofreadScore,
    ProofreadScores,
    RephraseResult,
    RephraseVariant,
    RewriteChange,
    RewriteResult,
    StyleConsistency,
    StyleDeviation,
    StyleProfile,
    StyleResult,
    Suggestion,
    SuggestionsResult,
)
from .scope import AnalysisScope, ResolvedScope, ScopeResolver

__all__ = [
    # Pipeline
    "DocumentAnalyzer",
    "ChunkAnalyzer",
    "analyze_chunks",
    "build_chunk_payload",
    # Scope
    "AnalysisScope",
    "ResolvedScope",
    "ScopeResolver",
    # Mergers
    "merge_grammar_results",
    "merge_legitimacy_results",
    "merge_proofread_results",
    "merge_results",
    "merge_style_results",
    # Corrections
    "apply_correction",
    "mark_corrections",
    # Profiles
    "InMemoryProfileStore",
    "JsonFileProfileStore",
    "ProfileStore",
    # Schemas
    "AnalysisKind",
    "CitationIssue",
    "CitationResult",
    "GrammarCorrection",
    "GrammarResult",
    "LegitimacyOverall",
    "LegitimacyResult",
    "ProofreadResult",
    "ProofreadScore",
    "ProofreadScores",
    "RephraseResult",
    "RephraseVariant",
    "RewriteChange",
    "RewriteResult",
    "StyleConsistency",
    "StyleDeviation",
    "StyleProfile",
    "StyleResult",
    "Suggestion",
    "SuggestionsResult",
]
