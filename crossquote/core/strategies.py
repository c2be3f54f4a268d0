"""
Position-mapping strategies.

Each strategy turns an AlignmentContext into a candidate target span, or
returns None when its preconditions are not met. None of them raises on
ordinary input.

- proportional_sentence_match: locate the excerpt's sentences in the source
  and map the sentence index proportionally into the target (most precise).
- character_offset_match: map the excerpt's character offset proportionally
  and widen to sentence punctuation (tolerates segmentation drift).
- lead_span_match: take the target's first sentences; only for excerpts the
  caller asserts come from an opening monologue.
"""

import math
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from crossquote.config import CrossquoteSettings
from crossquote.core.matcher import prefix_containment
from crossquote.core.normalizer import fold, normalize
from crossquote.core.segmenter import join_sentences, segment
from crossquote.models import AlignmentStrategy, LanguageProfile, Sentence


# Sentence end: punctuation run plus any closing quotes/brackets
_SENTENCE_END = re.compile(r"[.!?]+[\"')\]]*")
# Sentence boundary: a sentence end followed by whitespace
_SENTENCE_BOUNDARY = re.compile(r"[.!?]+[\"')\]]*\s+")


@dataclass(frozen=True)
class AlignmentContext:
    """Normalized and segmented inputs shared by all strategies for one alignment."""
    excerpt_text: str
    source_text: str
    target_text: str
    excerpt_sentences: tuple[Sentence, ...]
    source_sentences: tuple[Sentence, ...]
    target_sentences: tuple[Sentence, ...]
    settings: CrossquoteSettings
    monologue: bool = False

    @classmethod
    def build(
        cls,
        excerpt: str,
        source_full: str,
        target_full: str,
        source_profile: LanguageProfile,
        target_profile: LanguageProfile,
        settings: CrossquoteSettings,
        monologue: bool = False,
        extra_greetings: Iterable[str] = (),
    ) -> "AlignmentContext":
        """Normalize and segment the excerpt, source and target texts."""
        extra_greetings = tuple(extra_greetings)
        excerpt_text = normalize(excerpt, source_profile)
        source_text = normalize(source_full, source_profile)
        target_text = normalize(target_full, target_profile)

        def _segment(text: str, profile: LanguageProfile) -> tuple[Sentence, ...]:
            return segment(
                text,
                profile,
                min_length=settings.min_sentence_length,
                extra_greetings=extra_greetings,
            )

        return cls(
            excerpt_text=excerpt_text,
            source_text=source_text,
            target_text=target_text,
            excerpt_sentences=_segment(excerpt_text, source_profile),
            source_sentences=_segment(source_text, source_profile),
            target_sentences=_segment(target_text, target_profile),
            settings=settings,
            monologue=monologue,
        )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def find_source_start(ctx: AlignmentContext) -> Optional[int]:
    """
    Index of the source sentence where the excerpt starts.

    A candidate start must match the excerpt's first sentence, and at least
    ``continuity_ratio`` of the excerpt's sentences must then match the
    following source sentences in sequence.

    Returns:
        Source sentence index, or None if no candidate verifies
    """
    settings = ctx.settings
    excerpt = [fold(s.text) for s in ctx.excerpt_sentences]
    source = [fold(s.text) for s in ctx.source_sentences]
    if not excerpt or not source:
        return None

    def matches(a: str, b: str) -> bool:
        return prefix_containment(
            a, b,
            contain_chars=settings.start_match_chars,
            exact_chars=settings.prefix_match_chars,
        )

    required = settings.continuity_ratio * len(excerpt)

    for i, candidate in enumerate(source):
        if not matches(excerpt[0], candidate):
            continue

        verified = 0
        for j, excerpt_sentence in enumerate(excerpt):
            if i + j >= len(source) or not matches(excerpt_sentence, source[i + j]):
                break
            verified += 1

        if verified >= required:
            return i

    return None


def proportional_sentence_match(ctx: AlignmentContext) -> Optional[str]:
    """
    Strategy A: proportional sentence-index mapping.

    ``targetStart = round(sourceStart / nSource * nTarget)`` and
    ``length = round(nExcerpt / nSource * nTarget)``, at least 1 and at most
    ``nExcerpt + 1``. An excerpt spanning the whole source maps to the whole
    target.
    """
    target = ctx.target_sentences
    n_excerpt = len(ctx.excerpt_sentences)
    n_source = len(ctx.source_sentences)
    n_target = len(target)
    if n_excerpt == 0 or n_source == 0 or n_target == 0:
        return None

    source_start = find_source_start(ctx)
    if source_start is None:
        return None

    if source_start == 0 and n_excerpt >= n_source:
        return join_sentences(target) or None

    target_start = _round_half_up(source_start / n_source * n_target)
    target_start = min(max(target_start, 0), n_target - 1)

    length = max(1, _round_half_up(n_excerpt / n_source * n_target))
    length = min(length, n_excerpt + 1)

    return join_sentences(target[target_start:target_start + length]) or None


def _snap_start(text: str, start: int, end: int, window: int) -> int:
    """Move a window start onto a sentence start."""
    boundaries = [0] + [m.end() for m in _SENTENCE_BOUNDARY.finditer(text)]
    if start in boundaries:
        return start

    # A sentence boundary just inside the window: the window began at the
    # tail of the previous sentence
    for b in boundaries:
        if start < b <= start + window and b < end:
            return b

    return max(b for b in boundaries if b <= start)


def _snap_end(text: str, end: int) -> int:
    """Move a window end forward onto the next sentence end."""
    for m in _SENTENCE_END.finditer(text):
        if m.end() >= end:
            return m.end()
    return len(text)


def character_offset_match(ctx: AlignmentContext) -> Optional[str]:
    """
    Strategy B: character-offset proportional mapping.

    Finds the excerpt's opening characters in the folded source text, applies
    the relative start and length to the target text, then widens the window
    to sentence punctuation so the span never starts or ends mid-word.
    """
    settings = ctx.settings
    source = fold(ctx.source_text)
    excerpt = fold(ctx.excerpt_text)
    target = ctx.target_text
    if not source or not excerpt or not target:
        return None

    offset = source.find(excerpt[:settings.offset_probe_chars])
    if offset < 0:
        return None

    relative_start = offset / len(source)
    relative_length = min(len(excerpt) / len(source), 1.0)

    start = math.floor(relative_start * len(target))
    if start >= len(target):
        return None
    end = min(len(target), start + math.ceil(relative_length * len(target)))

    end = _snap_end(target, end)
    start = _snap_start(target, start, end, settings.boundary_window_chars)

    result = target[start:end].strip()
    return result or None


def lead_span_match(ctx: AlignmentContext) -> Optional[str]:
    """
    Strategy C: lead-span fallback for opening monologues.

    Takes the first ``min(nExcerpt, nTarget)`` target sentences. Applies only
    when the caller asserted the excerpt is from the unit's sole-speaker
    opening.
    """
    if not ctx.monologue:
        return None
    if not ctx.excerpt_sentences or not ctx.target_sentences:
        return None

    count = min(len(ctx.excerpt_sentences), len(ctx.target_sentences))
    return join_sentences(ctx.target_sentences[:count]) or None


StrategyFn = Callable[[AlignmentContext], Optional[str]]

# Fixed priority order: most precise first
STRATEGY_CHAIN: tuple[tuple[AlignmentStrategy, StrategyFn], ...] = (
    (AlignmentStrategy.PROPORTIONAL_SENTENCE, proportional_sentence_match),
    (AlignmentStrategy.CHARACTER_OFFSET, character_offset_match),
    (AlignmentStrategy.LEAD_SPAN, lead_span_match),
)
