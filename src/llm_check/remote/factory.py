# src/llm_check/remote/factory.py

import logging
import re
from collections.abc import Iterable

from llm_check.observability.base import MetricsHook, NoOpMetricsHook
from llm_check.text.sentences import Language

from .base import RemoteRule
from .config import RemoteRuleConfig
from .health import DEFAULT_HEALTH_GATE, HealthGate

logger = logging.getLogger(__name__)


def create_remote_rule(
    language: Language,
    config: RemoteRuleConfig,
    *,
    input_logging: bool = False,
    health_gate: HealthGate = DEFAULT_HEALTH_GATE,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> RemoteRule:
    """Create a remote rule from config.

    Raises:
        ValueError: If the config type is unknown.

    Example:
        >>> config = RemoteRuleConfig(
        ...     ruleId="AI_OPENAI_GRAMMAR",
        ...     type="openai",
        ...     url="http://localhost:11434/v1/chat/completions",
        ... )
        >>> rule = create_remote_rule(Language("en-US", "English (US)"), config)
    """
    from .openai import CONFIG_TYPE, OpenAIRule

    if config.type == CONFIG_TYPE:
        return OpenAIRule(
            language,
            config,
            input_logging=input_logging,
            health_gate=health_gate,
            metrics_hook=metrics_hook,
        )

    raise ValueError(f"Unknown remote rule type: {config.type}")


def create_all(
    language: Language,
    configs: Iterable[RemoteRuleConfig],
    *,
    input_logging: bool = False,
    health_gate: HealthGate = DEFAULT_HEALTH_GATE,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[RemoteRule]:
    """OpenAI rules for every config that applies to ``language``.

    A config applies when its type is ``openai`` and its language pattern
    is unset or matches the whole language code. Other types are skipped.
    """
    from .openai import CONFIG_TYPE

    rules = [
        create_remote_rule(
            language,
            config,
            input_logging=input_logging,
            health_gate=health_gate,
            metrics_hook=metrics_hook,
        )
        for config in configs
        if config.type == CONFIG_TYPE and _applies_to(config, language)
    ]
    logger.debug("Created %d OpenAI rules for %s", len(rules), language.code)
    return rules


def _applies_to(config: RemoteRuleConfig, language: Language) -> bool:
    if config.language is None:
        return True
    return re.fullmatch(config.language, language.code) is not None
