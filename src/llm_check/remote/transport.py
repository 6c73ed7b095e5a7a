# src/llm_check/remote/transport.py

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000


class TransportError(Exception):
    """The remote call did not produce a successful response.

    ``body`` is kept for logging only. It is never parsed.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


async def post_json(
    url: str,
    body: bytes,
    *,
    api_key: str | None = None,
    timeout_ms: float = DEFAULT_TIMEOUT_MS,
    max_retries: int = 0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bytes:
    """POST a JSON body and return the raw response bytes.

    Args:
        url: Full endpoint URL.
        body: Encoded JSON payload.
        api_key: Sent as a bearer token when non-empty.
        timeout_ms: Applied to connect, write, read and pool acquisition.
        max_retries: Extra attempts on connection-level errors only.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).

    Raises:
        TransportError: On any httpx error, an unusable URL or header,
            or a non-2xx status.
    """
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"

    timeout = httpx.Timeout(timeout_ms / 1000)
    try:
        # Connection is released on exit, including on cancellation
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await _send(client, url, body, headers, max_retries)
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        # InvalidURL and header encoding errors surface before any I/O
        raise TransportError(f"Request to {url} failed: {exc!r}") from exc

    if not response.is_success:
        raise TransportError(
            f"{url} returned status {response.status_code}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        )
    return response.content


async def _send(
    client: httpx.AsyncClient,
    url: str,
    body: bytes,
    headers: dict[str, str],
    max_retries: int,
) -> httpx.Response:
    """Send with transport-only retries. Status errors are not retried."""
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception_type(httpx.TransportError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            return await client.post(url, content=body, headers=headers)
