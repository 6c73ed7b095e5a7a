# src/llm_check/remote/openai.py

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from time import monotonic

import httpx
from pydantic import BaseModel, ValidationError

from llm_check.corrections.mapping import map_corrections
from llm_check.corrections.models import Correction
from llm_check.corrections.parser import CorrectionsDecodeError, decode_corrections
from llm_check.observability import names
from llm_check.observability.base import MetricsHook, NoOpMetricsHook
from llm_check.text.sentences import Language, SentenceLike, combine_text

from .base import ErrorKind, RemoteRequest, RemoteRule, RemoteRuleResult
from .config import RemoteRuleConfig
from .health import DEFAULT_HEALTH_GATE, HealthGate
from .transport import DEFAULT_TIMEOUT_MS, TransportError, post_json

logger = logging.getLogger(__name__)

CONFIG_TYPE = "openai"
DEFAULT_RULE_ID = "AI_OPENAI_RULE"
DEFAULT_MODEL = "gpt-4"
DESCRIPTION = "AI-powered grammar and style checking using OpenAI-compatible API"


class Role(str, Enum):
    """Message role in a chat completion request."""

    SYSTEM = "system"
    USER = "user"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str


# Chat completion envelope. Only the fields we read; the rest is ignored.


class ChatMessage(BaseModel):
    role: str | None = None
    content: str | None = None


class Choice(BaseModel):
    message: ChatMessage | None = None


class ChatCompletion(BaseModel):
    choices: list[Choice] | None = None


class EnvelopeError(ValueError):
    """Response body is not a chat completion envelope."""


def default_system_prompt(language: Language) -> str:
    return (
        f"You are a grammar and style checker for {language.name}. "
        "Analyze the following text and identify any grammar, spelling, "
        "punctuation, or style errors. "
        "For each error found, respond with a JSON array of objects, "
        "where each object has: "
        '"offset" (character position where error starts), '
        '"length" (length of the error text), '
        '"message" (description of the error), '
        '"replacements" (array of suggested corrections). '
        "If no errors are found, respond with an empty array []. "
        "Only respond with valid JSON, no other text."
    )


def build_request_body(text: str, *, model: str, system_prompt: str) -> bytes:
    """Encode a chat completion request for the combined text.

    Temperature is pinned to 0.0 so the checker is as deterministic as
    the service allows.
    """
    messages = [
        Message(role=Role.SYSTEM, content=system_prompt),
        Message(role=Role.USER, content=text),
    ]
    payload = {
        "model": model,
        "messages": [{"role": m.role.value, "content": m.content} for m in messages],
        "temperature": 0.0,
    }
    return json.dumps(payload).encode("utf-8")


def unwrap_content(raw: bytes) -> str | None:
    """Assistant text of the first choice, or None if there is none.

    Raises:
        EnvelopeError: If ``raw`` is not a decodable envelope.
    """
    try:
        envelope = ChatCompletion.model_validate_json(raw)
    except ValidationError as exc:
        raise EnvelopeError(f"Unexpected response envelope: {exc}") from exc

    if not envelope.choices:
        return None
    message = envelope.choices[0].message
    if message is None or not message.content or not message.content.strip():
        return None
    return message.content


class OpenAIRule(RemoteRule):
    """Remote rule backed by an OpenAI-compatible chat completions endpoint.

    Works with OpenAI, Ollama, LM Studio and anything else speaking
    ``POST /v1/chat/completions``. One call per batch of sentences; the
    model's corrections are mapped back onto the sentences they hit.
    """

    description = DESCRIPTION

    def __init__(
        self,
        language: Language,
        config: RemoteRuleConfig,
        *,
        input_logging: bool = False,
        health_gate: HealthGate = DEFAULT_HEALTH_GATE,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(language, config, input_logging=input_logging)
        options = config.options
        self.api_url = config.url
        self.api_key = options.get("apiKey", "")
        self.model = options.get("model", DEFAULT_MODEL)
        self.system_prompt = options.get("systemPrompt") or default_system_prompt(
            language
        )
        self.max_retries = int(options.get("maxRetries", "0"))
        self.health_gate = health_gate
        self.metrics_hook = metrics_hook
        self._transport = transport
        logger.info(
            "Initialized OpenAIRule %s with model=%s, url=%s",
            self.rule_id,
            self.model,
            self.api_url,
        )

    @property
    def rule_id(self) -> str:
        return self.service_configuration.rule_id or DEFAULT_RULE_ID

    def prepare_request(
        self,
        sentences: Sequence[SentenceLike],
        text_session_id: int | None = None,
    ) -> RemoteRequest:
        return RemoteRequest(
            sentences=list(sentences),
            combined_text=combine_text(sentences),
            text_session_id=text_session_id,
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

    async def execute_request(
        self, request: RemoteRequest, timeout_ms: float
    ) -> RemoteRuleResult:
        if self.health_gate.should_short_circuit():
            logger.warning(
                "Temporarily disabled OpenAI server at %s because of recent error",
                self.api_url,
            )
            self.metrics_hook.increment(
                names.REMOTE_RULE_SHORT_CIRCUITS_TOTAL, labels={"rule": self.rule_id}
            )
            return self.fallback_results(request, ErrorKind.SHORT_CIRCUIT)

        start = monotonic()
        try:
            content = await self._call_api(request, timeout_ms)
        except TransportError as exc:
            return self._transport_failed(request, ErrorKind.TRANSPORT, exc)
        except EnvelopeError as exc:
            return self._transport_failed(request, ErrorKind.ENVELOPE, exc)

        try:
            decoded = decode_corrections(content) if content else []
        except CorrectionsDecodeError as exc:
            logger.warning(
                "Failed to parse OpenAI response as JSON (%s): %s", exc, content
            )
            self._count_error(ErrorKind.PARSE)
            return self.fallback_results(request, ErrorKind.PARSE)

        corrections = [item for item in decoded if isinstance(item, Correction)]
        matches = map_corrections(corrections, request.sentences, self.rule_id)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.REMOTE_RULE_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.REMOTE_RULE_MATCHES_TOTAL, len(matches))
        self.metrics_hook.increment(
            names.REMOTE_RULE_SKIPPED_RECORDS_TOTAL, len(decoded) - len(corrections)
        )

        logger.info(
            "OpenAI check: corrections=%d, matches=%d, latency=%.0fms",
            len(corrections),
            len(matches),
            elapsed_ms,
        )
        return RemoteRuleResult(
            remote=True,
            success=True,
            matches=matches,
            sentences=request.sentences,
        )

    async def _call_api(self, request: RemoteRequest, timeout_ms: float) -> str | None:
        body = build_request_body(
            request.combined_text, model=self.model, system_prompt=self.system_prompt
        )

        logger.debug(
            "Calling OpenAI: model=%s, sentences=%d, chars=%d",
            self.model,
            len(request.sentences),
            len(request.combined_text),
        )
        if self.input_logging:
            logger.debug("OpenAI input: %s", request.combined_text)

        self.metrics_hook.increment(
            names.REMOTE_RULE_REQUESTS_TOTAL,
            labels={"rule": self.rule_id, "model": self.model},
        )
        self.metrics_hook.record_gauge(
            names.REMOTE_RULE_INPUT_CHARS, len(request.combined_text)
        )

        raw = await post_json(
            self.api_url,
            body,
            api_key=self.api_key,
            timeout_ms=timeout_ms if timeout_ms > 0 else DEFAULT_TIMEOUT_MS,
            max_retries=self.max_retries,
            transport=self._transport,
        )
        return unwrap_content(raw)

    def _transport_failed(
        self, request: RemoteRequest, kind: ErrorKind, exc: Exception
    ) -> RemoteRuleResult:
        self.health_gate.record_failure()
        logger.warning(
            "Failed to query OpenAI-compatible server at %s: %s", self.api_url, exc
        )
        self._count_error(kind)
        return self.fallback_results(request, kind)

    def _count_error(self, kind: ErrorKind) -> None:
        self.metrics_hook.increment(
            names.REMOTE_RULE_ERRORS_TOTAL,
            labels={"rule": self.rule_id, "kind": kind.value},
        )
