# src/llm_check/corrections/parser.py

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from .models import Correction, CorrectionRecord, DecodedRecord, Skipped

logger = logging.getLogger(__name__)

# Opening fence with an optional language tag, e.g. ```json
_OPENING_FENCE = re.compile(r"^```[\w+-]*")
_FENCE = "```"


class CorrectionsDecodeError(ValueError):
    """Model content is not a JSON array of corrections."""


def strip_code_fence(content: str) -> str:
    """Remove a leading ```lang marker and a trailing ``` marker.

    Prefix/suffix only. Anything else in the content is left alone.
    """
    cleaned = _OPENING_FENCE.sub("", content.strip(), count=1)
    if cleaned.endswith(_FENCE):
        cleaned = cleaned[: -len(_FENCE)]
    return cleaned.strip()


def decode_corrections(content: str) -> list[DecodedRecord]:
    """Decode model content into one ``Correction`` or ``Skipped`` per record.

    Args:
        content: Assistant message text, optionally wrapped in a code fence.

    Returns:
        Records in input order. Empty for blank content or ``[]``.

    Raises:
        CorrectionsDecodeError: If the cleaned content is not a JSON array.
    """
    cleaned = strip_code_fence(content)
    if not cleaned or cleaned == "[]":
        return []

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise CorrectionsDecodeError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise CorrectionsDecodeError(
            f"Expected a JSON array, got {type(data).__name__}"
        )

    decoded = [_decode_record(item) for item in data]
    for item in decoded:
        if isinstance(item, Skipped):
            logger.warning(
                "Skipping correction record %r: %s", item.record, item.reason
            )
    return decoded


def parse_corrections(content: str) -> list[Correction]:
    """Valid corrections only. Never raises on bad content."""
    try:
        decoded = decode_corrections(content)
    except CorrectionsDecodeError as exc:
        logger.warning("Failed to parse corrections (%s): %s", exc, content)
        return []
    return [item for item in decoded if isinstance(item, Correction)]


def _decode_record(item: Any) -> DecodedRecord:
    if not isinstance(item, dict):
        return Skipped(record=item, reason="not an object")

    try:
        record = CorrectionRecord.model_validate(item)
    except ValidationError as exc:
        return Skipped(record=item, reason=_describe(exc))

    return Correction(
        offset=record.offset,
        length=record.length,
        message=record.message,
        replacements=tuple(record.replacements or ()),
    )


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
