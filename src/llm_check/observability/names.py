# src/llm_check/observability/names.py

"""Standard metric names for llm-check observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Remote Rule Metrics
# ============================================================================

# Duration
REMOTE_RULE_DURATION = "remote_rule_duration"

# Counters
REMOTE_RULE_REQUESTS_TOTAL = "remote_rule_requests_total"
REMOTE_RULE_ERRORS_TOTAL = "remote_rule_errors_total"
REMOTE_RULE_SHORT_CIRCUITS_TOTAL = "remote_rule_short_circuits_total"

# Counters (correction output)
REMOTE_RULE_MATCHES_TOTAL = "remote_rule_matches_total"
REMOTE_RULE_SKIPPED_RECORDS_TOTAL = "remote_rule_skipped_records_total"

# Gauges
REMOTE_RULE_INPUT_CHARS = "remote_rule_input_chars"
