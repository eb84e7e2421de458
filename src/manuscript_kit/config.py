# src/manuscript_kit/config.py

from dataclasses import dataclass
from typing import Literal

CorrectionMode = Literal["soft", "standard", "strict"]


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for document analysis runs.

    Immutable. Explicit. No magic defaults from environment.
    """

    max_words_per_chunk: int = 4000
    overlap_words: int = 300
    toc_max_chars: int = 3000
    direct_word_limit: int = 4000  # Below this, one direct backend call
    pacing_delay: float = 1.5  # Seconds between chunk calls
    temperature: float = 0.3
    style_sample_words: int = 3000
    rewrite_max_words: int = 3000
    suggestion_context_words: int = 1000  # Each side of the insertion point
    creative_temperature: float = 0.7  # Rewrite, rephrase and suggestions
    correction_mode: CorrectionMode = "standard"
    discipline: str = "general"
    text_type: str = "academic paper"
    citation_style: str = "APA"
