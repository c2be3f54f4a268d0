"""
Sentence segmentation of normalized unit text.
"""

import re
from functools import lru_cache
from typing import Iterable, Optional

from crossquote.models import LanguageProfile, Sentence


_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
# Sentence punctuation glued to the next word: "unity.It", "Questioner:What"
_GLUED_PUNCTUATION = re.compile(r"([.!?:])(\w)")

DEFAULT_MIN_LENGTH = 10


def _unglue(match: re.Match) -> str:
    punct, letter = match.group(1), match.group(2)
    if letter.isupper():
        return f"{punct} {letter}"
    return match.group(0)


def split_sentences(text: str) -> list[str]:
    """
    Split text on sentence boundaries without any filtering.

    Sentence-ending punctuation stays attached to the preceding sentence.
    """
    if not text:
        return []
    text = _GLUED_PUNCTUATION.sub(_unglue, text)
    return [part.strip() for part in _SENTENCE_BOUNDARY.split(text) if part.strip()]


@lru_cache(maxsize=64)
def _greeting_sentence_pattern(
    greetings: tuple[str, ...],
    speaker_prefixes: tuple[str, ...],
) -> Optional[re.Pattern]:
    forms = sorted({g.rstrip(".").strip() for g in greetings if g.rstrip(".").strip()}, key=len, reverse=True)
    if not forms:
        return None
    greeting_alt = "|".join(re.escape(g) for g in forms)
    speaker = ""
    if speaker_prefixes:
        speaker_alt = "|".join(re.escape(p) for p in sorted(speaker_prefixes, key=len, reverse=True))
        speaker = rf"(?:(?:{speaker_alt})\s*)?"
    return re.compile(rf"^{speaker}(?:{greeting_alt})\s*[.!]?$", re.IGNORECASE)


def is_greeting(sentence: str, greetings: Iterable[str], speaker_prefixes: Iterable[str] = ()) -> bool:
    """Whether a sentence is nothing but an (optionally labelled) greeting."""
    pattern = _greeting_sentence_pattern(tuple(greetings), tuple(speaker_prefixes))
    return pattern is not None and pattern.match(sentence.strip()) is not None


def segment(
    normalized_text: str,
    profile: LanguageProfile,
    *,
    min_length: int = DEFAULT_MIN_LENGTH,
    extra_greetings: Iterable[str] = (),
) -> tuple[Sentence, ...]:
    """
    Split normalized text into the sentence sequence used for alignment.

    Sentences shorter than ``min_length`` and pure greeting remnants
    ("I am Ra." in any configured form) are dropped; indices refer to the
    filtered sequence.

    Args:
        normalized_text: Output of normalize()
        profile: Language profile of the text
        min_length: Minimum sentence length in characters
        extra_greetings: Greeting forms of other languages to filter as well

    Returns:
        Tuple of Sentence objects, in text order
    """
    greetings = tuple(profile.greetings) + tuple(g for g in extra_greetings if g not in profile.greetings)

    kept: list[str] = []
    for sentence in split_sentences(normalized_text):
        if len(sentence) < min_length:
            continue
        if is_greeting(sentence, greetings, profile.speaker_prefixes):
            continue
        kept.append(sentence)

    return tuple(Sentence(index=i, text=s) for i, s in enumerate(kept))


def join_sentences(sentences: Iterable[Sentence]) -> str:
    """Join sentences with single spaces."""
    return " ".join(s.text for s in sentences).strip()
