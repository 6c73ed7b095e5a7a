# src/llm_check/remote/__init__.py

"""Remote rule layer for llm-check.

Sends sentences to an OpenAI-compatible endpoint and maps the returned
corrections back onto them.

Design principles:
- Fail fast: a shared health gate skips the network for a while after a failure
- Degrade, don't crash: transport and parse problems yield an empty result
- Deadlines propagate: a caller timeout is raised, never swallowed

Example:
    >>> from llm_check.remote import RemoteRuleConfig, create_all
    >>> from llm_check.text import Language, Sentence
    >>>
    >>> config = RemoteRuleConfig(
    ...     ruleId="AI_OPENAI_GRAMMAR",
    ...     type="openai",
    ...     url="https://api.openai.com/v1/chat/completions",
    ...     options={"apiKey": "sk-..."},
    ... )
    >>> [rule] = create_all(Language("en-US", "English (US)"), [config])
    >>> result = await rule.run([Sentence("Teh cat sat.")], timeout_ms=10000)
    >>> print([m.replacements for m in result.matches])
"""

from .base import (
    ErrorKind,
    RemoteRequest,
    RemoteRule,
    RemoteRuleResult,
    RemoteRuleTimeoutError,
)
from .config import RemoteRuleConfig, load_remote_rule_configs
from .factory import create_all, create_remote_rule
from .health import DEFAULT_HEALTH_GATE, HealthGate
from .openai import (
    CONFIG_TYPE,
    EnvelopeError,
    OpenAIRule,
    build_request_body,
    default_system_prompt,
    unwrap_content,
)
from .transport import TransportError, post_json

__all__ = [
    # Factory
    "create_all",
    "create_remote_rule",
    # Rules
    "CONFIG_TYPE",
    "OpenAIRule",
    "RemoteRule",
    # Config
    "RemoteRuleConfig",
    "load_remote_rule_configs",
    # Health
    "DEFAULT_HEALTH_GATE",
    "HealthGate",
    # Types
    "ErrorKind",
    "RemoteRequest",
    "RemoteRuleResult",
    # Errors
    "EnvelopeError",
    "RemoteRuleTimeoutError",
    "TransportError",
    # Wire
    "build_request_body",
    "post_json",
    "unwrap_content",
]
