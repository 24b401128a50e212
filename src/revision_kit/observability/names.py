# src/revision_kit/observability/names.py

"""Standard metric names for revision-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# Retrieval Metrics
# ============================================================================

# Duration
CHUNKING_DURATION = "chunking_duration"
RETRIEVAL_DURATION = "retrieval_duration"

# Counters (chunks accumulate over time)
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"
RETRIEVAL_CHUNKS_SELECTED = "retrieval_chunks_selected"

# Gauges
RETRIEVAL_CONTEXT_CHARS = "retrieval_context_chars"


# ============================================================================
# Diff Metrics
# ============================================================================

# Duration
DIFF_DURATION = "diff_duration"

# Counters
DIFF_ROWS_TOTAL = "diff_rows_total"
DIFF_DEGRADED_TOTAL = "diff_degraded_total"


# ============================================================================
# Citation Metrics
# ============================================================================

# Duration
CITATION_CHECK_DURATION = "citation_check_duration"

# Counters
CITATION_CHECKS_TOTAL = "citation_checks_total"
CITATION_VERIFIED_TOTAL = "citation_verified_total"
CITATION_UNVERIFIED_TOTAL = "citation_unverified_total"
CITATION_PROVIDER_ERRORS_TOTAL = "citation_provider_errors_total"


# ============================================================================
# LLM Metrics
# ============================================================================

# Duration
LLM_COMPLETION_DURATION = "llm_completion_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"
LLM_ERRORS_TOTAL = "llm_errors_total"

# Counters (token usage - monotonic over time for cost/rate tracking)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Analysis Metrics
# ============================================================================

# Counters
ANALYSIS_GENERATED_TOTAL = "analysis_generated_total"
ANALYSIS_FALLBACK_TOTAL = "analysis_fallback_total"
