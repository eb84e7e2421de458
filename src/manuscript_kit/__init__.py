# Analysis
from .analysis import (
    AnalysisKind,
    AnalysisScope,
    ChunkAnalyzer,
    DocumentAnalyzer,
    GrammarCorrection,
    JsonFileProfileStore,
    LegitimacyResult,
    ProofreadResult,
    RephraseResult,
    RewriteResult,
    ScopeResolver,
    StyleResult,
    SuggestionsResult,
    analyze_chunks,
    merge_grammar_results,
    merge_legitimacy_results,
    merge_proofread_results,
    merge_style_results,
)

# Chunking
from .chunking import Chunk, MetaContext, chunk_document

# Config
from .config import AnalysisConfig

# Documents
from .documents import DocumentProvider, Paragraph, TextDocument

# Errors
from .errors import (
    AuthError,
    BackendError,
    BackendTimeoutError,
    ChunkingError,
    MalformedResponseError,
    ManuscriptKitError,
    MergeError,
    NetworkError,
    RateLimitError,
    ScopeEmptyError,
)

# LLMs
from .llms import JsonModel, LLMConfig, create_json_model, create_llm_client

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Prompts
from .prompts import Prompt, PromptsLibrary

__all__ = [
    # Analysis
    "AnalysisKind",
    "AnalysisScope",
    "ChunkAnalyzer",
    "DocumentAnalyzer",
    "GrammarCorrection",
    "JsonFileProfileStore",
    "LegitimacyResult",
    "ProofreadResult",
    "RephraseResult",
    "RewriteResult",
    "ScopeResolver",
    "StyleResult",
    "SuggestionsResult",
    "analyze_chunks",
    "merge_grammar_results",
    "merge_legitimacy_results",
    "merge_proofread_results",
    "merge_style_results",
    # Chunking
    "Chunk",
    "MetaContext",
    "chunk_document",
    # Config
    "AnalysisConfig",
    # Documents
    "DocumentProvider",
    "Paragraph",
    "TextDocument",
    # Errors
    "AuthError",
    "BackendError",
    "BackendTimeoutError",
    "ChunkingError",
    "MalformedResponseError",
    "ManuscriptKitError",
    "MergeError",
    "NetworkError",
    "RateLimitError",
    "ScopeEmptyError",
    # LLMs
    "JsonModel",
    "LLMConfig",
    "create_json_model",
    "create_llm_client",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Prompts
    "Prompt",
    "PromptsLibrary",
]
