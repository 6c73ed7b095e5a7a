# src/llm_check/text/sentences.py

from collections.abc import Sequence
from dataclasses import dataclass
from itertools import accumulate
from typing import Protocol


class SentenceLike(Protocol):
    """Anything an external tokenizer hands us. Only ``text`` is read."""

    @property
    def text(self) -> str: ...


@dataclass(frozen=True)
class Sentence:
    """A single sentence of the checked text.

    Immutable. Order within a call defines the global offset space.
    """

    text: str


@dataclass(frozen=True)
class Language:
    """Target language of a check.

    ``code`` is the full short code with country and variant (e.g. ``en-US``),
    ``name`` the display name used in prompts.
    """

    code: str
    name: str


def sentence_boundaries(sentences: Sequence[SentenceLike]) -> list[int]:
    """Start offset of every sentence within the concatenated text.

    ``start[0] == 0`` and ``start[i] == start[i - 1] + len(text[i - 1])``.
    Empty input gives an empty table.
    """
    if not sentences:
        return []
    lengths = [len(s.text) for s in sentences[:-1]]
    return list(accumulate(lengths, initial=0))


def combine_text(sentences: Sequence[SentenceLike]) -> str:
    """Concatenate sentence texts in order, no separators."""
    return "".join(s.text for s in sentences)
