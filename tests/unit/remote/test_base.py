# tests/unit/remote/test_base.py

import asyncio
from collections.abc import Sequence

import pytest

from llm_check.remote.base import (
    ErrorKind,
    RemoteRequest,
    RemoteRule,
    RemoteRuleResult,
    RemoteRuleTimeoutError,
)
from llm_check.remote.config import RemoteRuleConfig
from llm_check.text.sentences import Language, Sentence, SentenceLike


class EchoRule(RemoteRule):
    """Minimal rule whose call just sleeps for a configurable time."""

    def __init__(self, delay_s: float = 0.0) -> None:
        super().__init__(
            Language(code="xx", name="Demo"),
            RemoteRuleConfig(ruleId="ECHO", url="http://unused", type="echo"),
        )
        self.delay_s = delay_s
        self.cancelled = False
        self.timeouts: list[float] = []

    @property
    def rule_id(self) -> str:
        return "ECHO"

    def prepare_request(
        self,
        sentences: Sequence[SentenceLike],
        text_session_id: int | None = None,
    ) -> RemoteRequest:
        return RemoteRequest(
            sentences=list(sentences),
            combined_text="".join(s.text for s in sentences),
            text_session_id=text_session_id,
        )

    async def execute_request(
        self, request: RemoteRequest, timeout_ms: float
    ) -> RemoteRuleResult:
        self.timeouts.append(timeout_ms)
        try:
            await asyncio.sleep(self.delay_s)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return RemoteRuleResult(
            remote=True, success=True, matches=[], sentences=request.sentences
        )

    def fallback_results(
        self, request: RemoteRequest, error: ErrorKind | None = None
    ) -> RemoteRuleResult:
        return RemoteRuleResult(
            remote=False,
            success=False,
            matches=[],
            sentences=request.sentences,
            error=error,
        )


class TestRun:
    @pytest.mark.asyncio
    async def test_returns_result_within_deadline(self) -> None:
        """A call finishing in time returns its result."""
        rule = EchoRule()

        result = await rule.run([Sentence("Hi.")], timeout_ms=1000)

        assert result.success is True
        assert rule.timeouts == [1000]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout_ms", [None, 0, -5])
    async def test_missing_deadline_uses_default(
        self, timeout_ms: float | None
    ) -> None:
        """No or non-positive timeout falls back to 30 seconds."""
        rule = EchoRule()

        await rule.run([Sentence("Hi.")], timeout_ms=timeout_ms)

        assert rule.timeouts == [30000]

    @pytest.mark.asyncio
    async def test_timeout_raised_and_work_cancelled(self) -> None:
        """An elapsed deadline raises and cancels the call."""
        rule = EchoRule(delay_s=5)

        with pytest.raises(RemoteRuleTimeoutError, match="ECHO timed out"):
            await rule.run([Sentence("Hi.")], timeout_ms=20)

        assert rule.cancelled is True

    def test_timeout_error_is_a_timeout(self) -> None:
        assert issubclass(RemoteRuleTimeoutError, TimeoutError)


def test_error_kinds_are_distinct() -> None:
    assert {k.value for k in ErrorKind} == {
        "short_circuit",
        "transport",
        "envelope",
        "parse",
    }


def test_remote_rule_is_abstract() -> None:
    """The base class cannot be instantiated."""
    with pytest.raises(TypeError):
        RemoteRule(  # type: ignore[abstract]
            Language(code="xx", name="Demo"),
            RemoteRuleConfig(url="http://unused", type="echo"),
        )
