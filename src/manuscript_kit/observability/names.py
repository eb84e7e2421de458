# src/manuscript_kit/observability/names.py

"""Standard metric names for manuscript-kit observability.

Use these constants instead of hardcoded strings.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# LLM Metrics
# ============================================================================

# Duration
LLM_COMPLETION_DURATION = "llm_completion_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"
LLM_ERRORS_TOTAL = "llm_errors_total"
LLM_MALFORMED_RESPONSES_TOTAL = "llm_malformed_responses_total"

# Counters (token usage)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Chunking Metrics
# ============================================================================

# Duration
CHUNKING_DURATION = "chunking_duration"

# Counters
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"
CHUNKING_OVERSIZED_PARAGRAPHS = "chunking_oversized_paragraphs"


# ============================================================================
# Analysis Metrics
# ============================================================================

# Duration
ANALYSIS_CHUNK_DURATION = "analysis_chunk_duration"
ANALYSIS_RUN_DURATION = "analysis_run_duration"

# Counters
ANALYSIS_CHUNKS_TOTAL = "analysis_chunks_total"
ANALYSIS_RUNS_TOTAL = "analysis_runs_total"
MERGE_SKIPPED_CHUNKS_TOTAL = "merge_skipped_chunks_total"
MERGE_SKIPPED_ITEMS_TOTAL = "merge_skipped_items_total"

# Gauges
ANALYSIS_INPUT_WORDS = "analysis_input_words"
