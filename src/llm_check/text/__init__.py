from .sentences import (
    Language,
    Sentence,
    SentenceLike,
    combine_text,
    sentence_boundaries,
)

__all__ = [
    "Language",
    "Sentence",
    "SentenceLike",
    "combine_text",
    "sentence_boundaries",
]
