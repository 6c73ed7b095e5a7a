# src/llm_check/corrections/mapping.py

import logging
from bisect import bisect_right
from collections.abc import Iterable, Sequence

from llm_check.text.sentences import SentenceLike, sentence_boundaries

from .models import Correction, Match

logger = logging.getLogger(__name__)


def locate_sentence(
    offset: int,
    sentences: Sequence[SentenceLike],
    boundaries: Sequence[int],
) -> int | None:
    """Index of the sentence whose range contains a global offset.

    Ranges are ``[boundaries[i], boundaries[i] + len(text_i))``; contiguous
    and non-overlapping, so the last start at or before ``offset`` is the
    only candidate. Empty sentences never contain anything.
    """
    index = bisect_right(boundaries, offset) - 1
    if index < 0:
        return None
    if offset < boundaries[index] + len(sentences[index].text):
        return index
    return None


def assemble_match(
    sentence: SentenceLike,
    local_offset: int,
    correction: Correction,
    rule_id: str | None = None,
) -> Match:
    end = local_offset + correction.length
    if end > len(sentence.text):
        logger.debug(
            "Correction end %d runs past sentence length %d", end, len(sentence.text)
        )
    return Match(
        sentence=sentence,
        start=local_offset,
        end=end,
        message=correction.message,
        replacements=correction.replacements or None,
        rule_id=rule_id,
    )


def map_corrections(
    corrections: Iterable[Correction],
    sentences: Sequence[SentenceLike],
    rule_id: str | None = None,
) -> list[Match]:
    """Bind global-offset corrections to the sentences they fall into.

    Corrections outside every sentence are dropped. Order and duplicates
    are preserved.
    """
    boundaries = sentence_boundaries(sentences)
    matches: list[Match] = []
    for correction in corrections:
        index = locate_sentence(correction.offset, sentences, boundaries)
        if index is None:
            logger.debug(
                "Dropping correction at offset %d: outside all sentences",
                correction.offset,
            )
            continue
        local_offset = correction.offset - boundaries[index]
        matches.append(
            assemble_match(sentences[index], local_offset, correction, rule_id)
        )
    return matches
