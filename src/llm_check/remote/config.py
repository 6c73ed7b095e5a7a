# src/llm_check/remote/config.py

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class RemoteRuleConfig(BaseModel):
    """One entry of a remote rules file.

    Accepts the camelCase keys used in remote-rules.json as well as
    snake_case field names. Unknown keys are ignored.

    Example:
        {
          "ruleId": "AI_OPENAI_GRAMMAR",
          "type": "openai",
          "url": "https://api.openai.com/v1/chat/completions",
          "language": "en.*",
          "options": {"model": "gpt-4", "apiKey": "..."}
        }
    """

    rule_id: str | None = Field(default=None, alias="ruleId")
    url: str
    type: str
    language: str | None = None  # Regex over the language code, None = any
    options: dict[str, str] = Field(default_factory=dict)

    class Config:
        extra = "ignore"
        populate_by_name = True
        frozen = True

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_options(cls, value: Any) -> Any:
        # Rules files may write "maxRetries": 2 or "thirdPartyAI": true
        if not isinstance(value, dict):
            return value
        return {
            key: _option_to_str(option)
            for key, option in value.items()
            if option is not None
        }

    @property
    def is_using_third_party_ai(self) -> bool:
        return self.options.get("thirdPartyAI", "").lower() == "true"

    @property
    def fallback_rule_id(self) -> str | None:
        return self.options.get("fallbackRuleId") or None


def _option_to_str(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def load_remote_rule_configs(path: str | Path) -> list[RemoteRuleConfig]:
    """Load rule configs from a JSON or YAML file holding a list of entries.

    Raises:
        ValueError: If the file does not contain a list.
        pydantic.ValidationError: If an entry is invalid.
    """
    logger.info("Loading remote rule configs from %s", path)
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of rule configs in {path}")

    configs = [RemoteRuleConfig(**entry) for entry in data]
    logger.info("Loaded %d remote rule configs", len(configs))
    return configs
