"""
Text normalization for unit texts and excerpts.

Two forms are produced:
- normalize(): the display form. Quote marks canonicalized, whitespace
  collapsed, footnote markers, speaker labels and the opening greeting removed.
  Case is preserved.
- fold(): the comparison form of an already normalized text. Quotes, dashes
  and ellipses canonicalized, whitespace collapsed, case-folded.
"""

import re
from functools import lru_cache
from typing import Optional

from crossquote.models import LanguageProfile


_DOUBLE_QUOTES = "“”„‟«»″〝〞＂"
_SINGLE_QUOTES = "‘’‚‛‹›′`´"
_DASHES = "‐‑‒–—―"

_QUOTE_TABLE = str.maketrans(
    {**{c: '"' for c in _DOUBLE_QUOTES}, **{c: "'" for c in _SINGLE_QUOTES}}
)
_DASH_TABLE = str.maketrans({c: "-" for c in _DASHES})

_WHITESPACE = re.compile(r"\s+")

# "1 Text..." at the very start of a unit
_LEADING_FOOTNOTE = re.compile(r"^\d{1,2}\s+(?=\D)")
# "word1." / "word1 next" but not "v1.5", "year1985" or "3rd"
_GLUED_FOOTNOTE = re.compile(r"(?<=[^\W\d_])\d{1,2}(?=\s|[.,;:!?](?!\d)|$)")
# "word 1." or "word 1" at the end; "there are 7 densities" is a number
_SPACED_FOOTNOTE = re.compile(r"(?<=[^\W\d_])\s\d{1,2}(?=[.,;:!?](?!\d)|$)")


def canonicalize_quotes(text: str) -> str:
    """Map curly, angled and prime quotation marks to ``"`` and ``'``."""
    return text.translate(_QUOTE_TABLE)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def strip_footnotes(text: str) -> str:
    """
    Remove 1-2 digit footnote markers.

    Examples:
        >>> strip_footnotes("the word 1. Next")
        'the word. Next'
        >>> strip_footnotes("the word1. Next")
        'the word. Next'
    """
    text = _LEADING_FOOTNOTE.sub("", text)
    text = _GLUED_FOOTNOTE.sub("", text)
    return _SPACED_FOOTNOTE.sub("", text)


@lru_cache(maxsize=64)
def _speaker_pattern(prefixes: tuple[str, ...]) -> Optional[re.Pattern]:
    if not prefixes:
        return None
    alternatives = "|".join(re.escape(p) for p in sorted(prefixes, key=len, reverse=True))
    # A segment opens at the text start or right after sentence-ending punctuation
    return re.compile(rf"(?:^|(?<=[.!?] ))(?:{alternatives})\s*", re.IGNORECASE)


@lru_cache(maxsize=64)
def _greeting_pattern(greetings: tuple[str, ...]) -> Optional[re.Pattern]:
    forms = sorted({g.rstrip(".").strip() for g in greetings if g.rstrip(".").strip()}, key=len, reverse=True)
    if not forms:
        return None
    alternatives = "|".join(re.escape(g) for g in forms)
    return re.compile(rf"^(?:{alternatives})\.?(?=\s|$)\s*", re.IGNORECASE)


def strip_speaker_prefixes(text: str, prefixes: tuple[str, ...]) -> str:
    """Remove speaker labels (e.g. "Questioner:") that open a segment."""
    pattern = _speaker_pattern(tuple(prefixes))
    if pattern is None:
        return text
    return pattern.sub("", text)


def strip_greeting(text: str, greetings: tuple[str, ...]) -> str:
    """Remove the entity's opening greeting (e.g. "I am Ra.") at the start of the text."""
    pattern = _greeting_pattern(tuple(greetings))
    if pattern is None:
        return text
    return pattern.sub("", text, count=1)


def _normalize_pass(text: str, profile: Optional[LanguageProfile]) -> str:
    text = collapse_whitespace(canonicalize_quotes(text))
    text = strip_footnotes(text)
    if profile is not None:
        text = strip_speaker_prefixes(text, profile.speaker_prefixes)
        text = strip_greeting(text, profile.greetings)
    return collapse_whitespace(text)


def normalize(raw: str, profile: Optional[LanguageProfile] = None) -> str:
    """
    Canonicalize raw unit text for display and comparison.

    Never raises; input that is not a string normalizes to "". Applying
    normalize() to its own output returns it unchanged.

    Args:
        raw: Raw unit or excerpt text
        profile: Language profile providing speaker labels and greetings

    Returns:
        Normalized text (case preserved)
    """
    if not isinstance(raw, str):
        return ""

    # Each pass only shortens the text, so this reaches a fixed point
    text = raw
    while True:
        updated = _normalize_pass(text, profile)
        if updated == text:
            return text
        text = updated


def fold(text: str) -> str:
    """
    Comparison form of a text: canonical punctuation, single spaces, case-folded.

    Used only for matching, never for display.
    """
    if not isinstance(text, str):
        return ""
    text = canonicalize_quotes(text).translate(_DASH_TABLE).replace("…", "...")
    return collapse_whitespace(text).casefold()


def fold_with_offsets(text: str) -> tuple[str, list[int]]:
    """
    fold() of a text plus, per folded character, the index in ``text`` it comes from.

    Lets a match found in the folded form be cut from the original text.
    The folded string is always equal to ``fold(text)``.
    """
    if not isinstance(text, str):
        return "", []

    chars: list[str] = []
    offsets: list[int] = []
    pending_space = False
    for i, char in enumerate(text):
        if char.isspace():
            pending_space = bool(chars)
            continue
        if pending_space:
            chars.append(" ")
            offsets.append(i - 1)
            pending_space = False

        folded = canonicalize_quotes(char).translate(_DASH_TABLE).replace("…", "...").casefold()
        chars.append(folded)
        offsets.extend([i] * len(folded))

    return "".join(chars), offsets
