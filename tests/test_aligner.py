import pytest

from crossquote.config import CrossquoteSettings
from crossquote.core.aligner import Aligner, align_excerpt, get_alignment_stats
from crossquote.core.confidence import classify_confidence, validation_confidence
from crossquote.core.strategies import (
    AlignmentContext,
    character_offset_match,
    find_source_start,
    lead_span_match,
    proportional_sentence_match,
)
from crossquote.exceptions import ConfigurationError
from crossquote.models import AlignmentResult, AlignmentStrategy, Confidence, ValidationStatus

from conftest import EN_16_51, FR_16_51


def _context(excerpt, settings, en, fr, monologue=False):
    return AlignmentContext.build(excerpt, EN_16_51, FR_16_51, en, fr, settings, monologue=monologue)


def test_single_sentence_maps_proportionally(settings, en, fr) -> None:
    result = Aligner(settings=settings).align("Love is unity.", EN_16_51, FR_16_51, en, fr, reference="16.51")

    assert result.text == "L'amour est l'unité."
    assert result.strategy == AlignmentStrategy.PROPORTIONAL_SENTENCE
    assert result.confidence == Confidence.HIGH
    assert result.reference == "16.51"


def test_whole_unit_excerpt_maps_to_whole_target(settings, en, fr) -> None:
    excerpt = "What is love? Love is unity. It is the Creator."

    result = Aligner(settings=settings).align(excerpt, EN_16_51, FR_16_51, en, fr)

    assert result.text == "Qu'est-ce que l'amour? L'amour est l'unité. C'est le Créateur."
    assert result.strategy == AlignmentStrategy.PROPORTIONAL_SENTENCE


def test_excerpt_with_labels_and_greeting(settings, en, fr) -> None:
    result = Aligner(settings=settings).align(
        "Ra: I am Ra. Love is unity. It is the Creator.", EN_16_51, FR_16_51, en, fr
    )
    assert result.text == "L'amour est l'unité. C'est le Créateur."


def test_source_start_requires_matching_opener(settings, en, fr) -> None:
    assert find_source_start(_context("Love is unity.", settings, en, fr)) == 1
    assert find_source_start(_context("Something never said at all.", settings, en, fr)) is None


def test_proportional_match_without_source_start(settings, en, fr) -> None:
    assert proportional_sentence_match(_context("Something never said at all.", settings, en, fr)) is None


def test_character_offset_snaps_to_sentence_boundaries(settings, en, fr) -> None:
    text = character_offset_match(_context("Love is unity.", settings, en, fr))
    assert text == "L'amour est l'unité."


def test_character_offset_without_prefix_hit(settings, en, fr) -> None:
    assert character_offset_match(_context("Something never said at all.", settings, en, fr)) is None


def test_lead_span_requires_monologue(settings, en, fr) -> None:
    excerpt = "Something never said at all. Another unknown sentence."

    assert lead_span_match(_context(excerpt, settings, en, fr)) is None
    assert lead_span_match(_context(excerpt, settings, en, fr, monologue=True)) == (
        "Qu'est-ce que l'amour? L'amour est l'unité."
    )


def test_strategies_run_in_fixed_order(settings, en, fr) -> None:
    aligner = Aligner(
        settings=settings,
        strategies=[AlignmentStrategy.LEAD_SPAN, AlignmentStrategy.CHARACTER_OFFSET],
    )
    assert aligner.strategies == (AlignmentStrategy.CHARACTER_OFFSET, AlignmentStrategy.LEAD_SPAN)

    result = aligner.align("Love is unity.", EN_16_51, FR_16_51, en, fr, monologue=True)
    assert result.strategy == AlignmentStrategy.CHARACTER_OFFSET
    assert result.confidence == Confidence.MEDIUM


def test_lead_span_is_last_resort(settings, en, fr) -> None:
    result = Aligner(settings=settings).align(
        "Something never said at all.", EN_16_51, FR_16_51, en, fr, monologue=True
    )
    assert result.text == "Qu'est-ce que l'amour?"
    assert result.strategy == AlignmentStrategy.LEAD_SPAN
    assert result.confidence == Confidence.LOW


def test_short_spans_are_rejected(en, fr) -> None:
    settings = CrossquoteSettings(min_result_length=25)

    result = Aligner(settings=settings).align("Love is unity.", EN_16_51, FR_16_51, en, fr)

    assert not result.is_aligned
    assert result.strategy == AlignmentStrategy.NONE
    assert result.confidence is None
    assert result.unresolved_reason is None


def test_nothing_aligned_for_unknown_excerpt(settings, en, fr) -> None:
    result = Aligner(settings=settings).align("Something never said at all.", EN_16_51, FR_16_51, en, fr)
    assert result.text is None
    assert result.strategy == AlignmentStrategy.NONE


def test_empty_inputs_never_raise(settings, en, fr) -> None:
    aligner = Aligner(settings=settings)
    assert not aligner.align("", EN_16_51, FR_16_51, en, fr).is_aligned
    assert not aligner.align("Love is unity.", EN_16_51, "", en, fr).is_aligned


def test_alignment_is_deterministic(settings, en, fr) -> None:
    aligner = Aligner(settings=settings)
    first = aligner.align("Love is unity.", EN_16_51, FR_16_51, en, fr)
    second = aligner.align("Love is unity.", EN_16_51, FR_16_51, en, fr)
    assert first == second


@pytest.mark.parametrize("strategies", [[], [AlignmentStrategy.NONE]])
def test_invalid_strategy_selection(strategies) -> None:
    with pytest.raises(ConfigurationError):
        Aligner(strategies=strategies)


def test_align_excerpt_wrapper(settings, en, fr) -> None:
    result = align_excerpt("Love is unity.", EN_16_51, FR_16_51, en, fr, settings=settings)
    assert result.text == "L'amour est l'unité."


def test_alignment_stats() -> None:
    results = [
        AlignmentResult(text="L'amour est l'unité.", strategy=AlignmentStrategy.PROPORTIONAL_SENTENCE,
                        confidence=Confidence.HIGH),
        AlignmentResult(text="C'est le Créateur.", strategy=AlignmentStrategy.LEAD_SPAN,
                        confidence=Confidence.LOW),
        AlignmentResult.unaligned("99.1", ValidationStatus.SESSION_NOT_FOUND),
        AlignmentResult.unaligned("16.52"),
    ]

    stats = get_alignment_stats(results)

    assert stats["total"] == 4
    assert stats["aligned"] == 2
    assert stats["unaligned"] == 2
    assert stats["by_strategy"] == {"lead_span": 1, "proportional_sentence": 1}
    assert stats["by_confidence"] == {"high": 1, "low": 1}
    assert stats["by_reason"] == {"session_not_found": 1}


def test_confidence_grades() -> None:
    assert classify_confidence(AlignmentStrategy.PROPORTIONAL_SENTENCE) == Confidence.HIGH
    assert classify_confidence(AlignmentStrategy.CHARACTER_OFFSET) == Confidence.MEDIUM
    assert classify_confidence(AlignmentStrategy.LEAD_SPAN) == Confidence.LOW
    assert classify_confidence(AlignmentStrategy.NONE) is None
    assert validation_confidence(ValidationStatus.VALID) == Confidence.HIGH
    assert validation_confidence(ValidationStatus.WRONG_REFERENCE) is None


REPEATED_EN = (
    "Love is the great unity of all things. This was said before in another context. "
    "We return to the same thought once more. Love is the great unity of all things. "
    "It binds the many into the one Creator. That is all for this working, my friend."
)
REPEATED_FR = (
    "Première phrase de la cible ici. Deuxième phrase de la cible ici. "
    "Troisième phrase de la cible ici. Quatrième phrase de la cible ici. "
    "Cinquième phrase de la cible ici. Sixième phrase de la cible ici."
)


def test_opener_without_continuation_is_skipped(settings, en, fr) -> None:
    excerpt = "Love is the great unity of all things. It binds the many into the one Creator."
    ctx = AlignmentContext.build(excerpt, REPEATED_EN, REPEATED_FR, en, fr, settings)

    # Sentence 0 repeats the opener, but only sentence 3 is followed by the rest
    assert find_source_start(ctx) == 3
    assert proportional_sentence_match(ctx) == "Quatrième phrase de la cible ici. Cinquième phrase de la cible ici."


OFFSET_SOURCE = "First sentence of the source text. Second one is here. Quoted sentence ends it."


def test_character_offset_moves_forward_past_a_sentence_tail(settings, en) -> None:
    # The raw window opens at the final "e." of "Second goes here."
    target = (
        "The opening sentence of this translated text runs rather long. "
        "Second goes here. And the final one closes it all."
    )
    ctx = AlignmentContext.build("Quoted sentence ends it.", OFFSET_SOURCE, target, en, en, settings)

    assert character_offset_match(ctx) == "And the final one closes it all."


def test_character_offset_steps_back_to_the_enclosing_sentence(settings, en) -> None:
    # The raw window opens at "d the final" with no boundary ahead of it
    target = "Short one. Then a much longer second sentence follows here now. And the final one closes it all."
    ctx = AlignmentContext.build("Quoted sentence ends it.", OFFSET_SOURCE, target, en, en, settings)

    assert character_offset_match(ctx) == "And the final one closes it all."
