"""Turning free-form model output into sentence-bound matches.

Pipeline:
- ``parser``: fenced/unfenced JSON text -> ``Correction`` records
- ``mapping``: global offsets -> (sentence, local offset) -> ``Match``
"""

from .mapping import assemble_match, locate_sentence, map_corrections
from .models import Correction, CorrectionRecord, DecodedRecord, Match, Skipped
from .parser import (
    CorrectionsDecodeError,
    decode_corrections,
    parse_corrections,
    strip_code_fence,
)

__all__ = [
    # Types
    "Correction",
    "CorrectionRecord",
    "DecodedRecord",
    "Match",
    "Skipped",
    # Parsing
    "CorrectionsDecodeError",
    "decode_corrections",
    "parse_corrections",
    "strip_code_fence",
    # Mapping
    "assemble_match",
    "locate_sentence",
    "map_corrections",
]
