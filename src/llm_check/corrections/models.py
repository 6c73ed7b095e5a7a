# src/llm_check/corrections/models.py

import math
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import BaseModel, StrictStr, field_validator

from llm_check.text.sentences import SentenceLike


class CorrectionRecord(BaseModel):
    """Schema of one entry in the model's JSON correction array.

    Unknown keys are ignored. Numeric offsets are truncated to int,
    matching how loosely models emit them (``3`` or ``3.0``).
    """

    offset: int
    length: int
    message: StrictStr
    replacements: list[StrictStr] | None = None

    class Config:
        extra = "ignore"

    @field_validator("offset", "length", mode="before")
    @classmethod
    def _numeric_to_int(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("must be a number")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("must be finite")
        return int(value)

    @field_validator("length")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be >= 0")
        return value


@dataclass(frozen=True)
class Correction:
    """A correction in global offsets, as reported by the remote model."""

    offset: int
    length: int
    message: str
    replacements: tuple[str, ...] = ()


@dataclass(frozen=True)
class Skipped:
    """A record that failed validation. Dropped from the batch."""

    record: Any
    reason: str


DecodedRecord: TypeAlias = Correction | Skipped


@dataclass(frozen=True)
class Match:
    """A correction bound to one sentence, in sentence-local offsets.

    ``replacements`` is None when the model suggested nothing.
    ``end`` is not clamped to the sentence length.
    """

    sentence: SentenceLike
    start: int
    end: int
    message: str
    replacements: tuple[str, ...] | None = None
    rule_id: str | None = None
