# tests/unit/remote/test_config.py

from pathlib import Path

import pytest
from pydantic import ValidationError

from llm_check.remote.config import RemoteRuleConfig, load_remote_rule_configs


@pytest.fixture
def json_rules(tmp_path: Path) -> Path:
    path = tmp_path / "remote-rules.json"
    path.write_text(
        """[
  {
    "ruleId": "AI_OPENAI_GRAMMAR",
    "type": "openai",
    "url": "https://api.openai.com/v1/chat/completions",
    "language": "en.*",
    "options": {
      "model": "gpt-4",
      "apiKey": "your-api-key",
      "thirdPartyAI": "true",
      "fallbackRuleId": "MORFOLOGIK_RULE_EN"
    }
  },
  {
    "ruleId": "GRPC_RULE",
    "type": "grpc",
    "url": "localhost:8081",
    "timeout": 500
  }
]
"""
    )
    return path


@pytest.fixture
def yaml_rules(tmp_path: Path) -> Path:
    path = tmp_path / "remote-rules.yaml"
    path.write_text(
        """- rule_id: OLLAMA_LOCAL
  type: openai
  url: http://localhost:11434/v1/chat/completions
  options:
    model: llama3
"""
    )
    return path


class TestLoadRemoteRuleConfigs:
    def test_loads_json(self, json_rules: Path) -> None:
        """A remote-rules.json file loads every entry."""
        configs = load_remote_rule_configs(json_rules)

        assert [c.rule_id for c in configs] == ["AI_OPENAI_GRAMMAR", "GRPC_RULE"]
        first = configs[0]
        assert first.type == "openai"
        assert first.language == "en.*"
        assert first.options["model"] == "gpt-4"

    def test_loads_yaml_with_snake_case_keys(self, yaml_rules: Path) -> None:
        """YAML files with snake_case keys load too."""
        [config] = load_remote_rule_configs(str(yaml_rules))

        assert config.rule_id == "OLLAMA_LOCAL"
        assert config.language is None
        assert config.options == {"model": "llama3"}

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file yields no configs."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_remote_rule_configs(path) == []

    def test_non_list_raises(self, tmp_path: Path) -> None:
        """A top-level object is rejected."""
        path = tmp_path / "rules.json"
        path.write_text('{"ruleId": "X", "type": "openai", "url": "http://x"}')

        with pytest.raises(ValueError, match="Expected a list"):
            load_remote_rule_configs(path)

    def test_invalid_entry_raises(self, tmp_path: Path) -> None:
        """An entry without url fails validation."""
        path = tmp_path / "rules.json"
        path.write_text('[{"ruleId": "NO_URL", "type": "openai"}]')

        with pytest.raises(ValidationError):
            load_remote_rule_configs(path)


class TestRemoteRuleConfig:
    def test_third_party_ai_flag(self, json_rules: Path) -> None:
        """thirdPartyAI is read from options."""
        openai_rule, grpc_rule = load_remote_rule_configs(json_rules)

        assert openai_rule.is_using_third_party_ai is True
        assert grpc_rule.is_using_third_party_ai is False

    def test_fallback_rule_id(self, json_rules: Path) -> None:
        """fallbackRuleId is read from options."""
        openai_rule, grpc_rule = load_remote_rule_configs(json_rules)

        assert openai_rule.fallback_rule_id == "MORFOLOGIK_RULE_EN"
        assert grpc_rule.fallback_rule_id is None

    def test_defaults(self) -> None:
        config = RemoteRuleConfig(url="http://x", type="openai")

        assert config.rule_id is None
        assert config.language is None
        assert config.options == {}

    def test_is_immutable(self) -> None:
        """Configs cannot be modified after loading."""
        config = RemoteRuleConfig(url="http://x", type="openai")

        with pytest.raises(ValidationError):
            config.url = "http://y"  # type: ignore[misc]

    def test_scalar_option_values_become_strings(self, tmp_path: Path) -> None:
        """Rules files may use JSON numbers and booleans for options."""
        path = tmp_path / "rules.json"
        path.write_text(
            '[{"type": "openai", "url": "http://x", "options": '
            '{"maxRetries": 2, "thirdPartyAI": true, "model": "gpt-4", '
            '"systemPrompt": null}}]'
        )

        [config] = load_remote_rule_configs(path)

        assert config.options == {
            "maxRetries": "2",
            "thirdPartyAI": "true",
            "model": "gpt-4",
        }
        assert config.is_using_third_party_ai is True

    def test_nested_option_value_rejected(self) -> None:
        """Only scalar option values are accepted."""
        with pytest.raises(ValidationError):
            RemoteRuleConfig(url="http://x", type="openai", options={"a": [1]})
