# src/prd_kit/observability/names.py

"""Standard metric names for prd-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Document Parsing Metrics
# ============================================================================

# Duration
PARSE_DURATION = "prd_parse_duration"

# Counters
PARSE_SECTIONS_DETECTED = "prd_parse_sections_detected"
PARSE_TASKS_BUILT = "prd_parse_tasks_built"


# ============================================================================
# Chunking Metrics
# ============================================================================

# Duration
CHUNKING_DURATION = "chunking_duration"

# Counters (chunks accumulate over time)
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"


# ============================================================================
# Context Assembly Metrics
# ============================================================================

# Duration
CONTEXT_COMPRESSION_DURATION = "context_compression_duration"

# Counters
CONTEXT_CHUNKS_KEPT = "context_chunks_kept"

# Gauges (kept / total chunk count of the last compression)
CONTEXT_COMPRESSION_RATIO = "context_compression_ratio"
