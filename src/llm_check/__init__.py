# Corrections
from .corrections import (
    Correction,
    Match,
    Skipped,
    decode_corrections,
    map_corrections,
    parse_corrections,
)

# Observability
from .observability import MetricsHook, NoOpMetricsHook

# Remote rules
from .remote import (
    ErrorKind,
    HealthGate,
    OpenAIRule,
    RemoteRule,
    RemoteRuleConfig,
    RemoteRuleResult,
    RemoteRuleTimeoutError,
    TransportError,
    create_all,
    create_remote_rule,
    load_remote_rule_configs,
)

# Text
from .text import Language, Sentence, sentence_boundaries

__all__ = [
    # Text
    "Language",
    "Sentence",
    "sentence_boundaries",
    # Corrections
    "Correction",
    "Match",
    "Skipped",
    "decode_corrections",
    "map_corrections",
    "parse_corrections",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    # Remote rules
    "ErrorKind",
    "HealthGate",
    "OpenAIRule",
    "RemoteRule",
    "RemoteRuleConfig",
    "RemoteRuleResult",
    "RemoteRuleTimeoutError",
    "TransportError",
    "create_all",
    "create_remote_rule",
    "load_remote_rule_configs",
]
