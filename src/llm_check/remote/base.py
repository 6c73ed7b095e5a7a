# src/llm_check/remote/base.py

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from llm_check.corrections.models import Match
from llm_check.text.sentences import Language, SentenceLike

from .config import RemoteRuleConfig
from .transport import DEFAULT_TIMEOUT_MS

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Why a call fell back to an empty result.

    All kinds look the same to the caller (no matches, ``success=False``).
    Kept apart for logs, metrics and tests.
    """

    SHORT_CIRCUIT = "short_circuit"
    TRANSPORT = "transport"
    ENVELOPE = "envelope"
    PARSE = "parse"


class RemoteRuleTimeoutError(TimeoutError):
    """The caller-imposed deadline passed before the remote call finished."""


@dataclass(frozen=True)
class RemoteRequest:
    """Everything one call needs. Built fresh per call, never shared."""

    sentences: list[SentenceLike]
    combined_text: str
    text_session_id: int | None = None


@dataclass(frozen=True)
class RemoteRuleResult:
    """Outcome of one remote call.

    ``remote`` is False when no remote answer was used. ``error`` is set
    on every fallback result.
    """

    remote: bool
    success: bool
    matches: list[Match]
    sentences: list[SentenceLike]
    error: ErrorKind | None = None


class RemoteRule(ABC):
    """A check delegated to a remote service.

    Subclasses build a request from sentences and return the call itself
    as a coroutine; ``run`` is the scheduler that enforces the deadline.
    """

    def __init__(
        self,
        language: Language,
        config: RemoteRuleConfig,
        *,
        input_logging: bool = False,
    ) -> None:
        self.language = language
        self.service_configuration = config
        self.input_logging = input_logging

    @property
    @abstractmethod
    def rule_id(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def prepare_request(
        self,
        sentences: Sequence[SentenceLike],
        text_session_id: int | None = None,
    ) -> RemoteRequest:
        raise NotImplementedError

    @abstractmethod
    async def execute_request(
        self, request: RemoteRequest, timeout_ms: float
    ) -> RemoteRuleResult:
        """The deferred unit of work for one call.

        Must not raise for transport or parse problems: those become a
        fallback result. Cancellation propagates.
        """
        raise NotImplementedError

    @abstractmethod
    def fallback_results(
        self, request: RemoteRequest, error: ErrorKind | None = None
    ) -> RemoteRuleResult:
        raise NotImplementedError

    async def run(
        self,
        sentences: Sequence[SentenceLike],
        timeout_ms: float | None = None,
        text_session_id: int | None = None,
    ) -> RemoteRuleResult:
        """Prepare and execute a request under a deadline.

        Raises:
            RemoteRuleTimeoutError: If the deadline passes. The in-flight
                call is cancelled and its connection released.
        """
        if not timeout_ms or timeout_ms <= 0:
            timeout_ms = DEFAULT_TIMEOUT_MS

        request = self.prepare_request(sentences, text_session_id)
        try:
            return await asyncio.wait_for(
                self.execute_request(request, timeout_ms), timeout_ms / 1000
            )
        except asyncio.TimeoutError as exc:
            logger.warning(
                "Remote rule %s timed out after %.0fms", self.rule_id, timeout_ms
            )
            raise RemoteRuleTimeoutError(
                f"Remote rule {self.rule_id} timed out after {timeout_ms:.0f}ms"
            ) from exc
