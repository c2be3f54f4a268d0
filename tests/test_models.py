import pytest
from pydantic import ValidationError

from crossquote.models import (
    AlignmentResult,
    AlignmentStrategy,
    Confidence,
    ExcerptClaim,
    LanguageProfile,
    UnitKey,
    ValidationResult,
    ValidationStatus,
)


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("16.51", UnitKey(sequence=16, subsequence=51)),
        (" 16.51 ", UnitKey(sequence=16, subsequence=51)),
        ("Ra 16.51", UnitKey(sequence=16, subsequence=51)),
        ("RA 1.7", UnitKey(sequence=1, subsequence=7)),
        ("Law 2.3", UnitKey(collection="law", sequence=2, subsequence=3)),
    ],
)
def test_unit_key_parse(reference: str, expected: UnitKey) -> None:
    assert UnitKey.parse(reference) == expected


@pytest.mark.parametrize("reference", ["16", "16.", ".51", "16.51.2", "sixteen.51", "16,51", None, 16.51])
def test_unit_key_parse_rejects(reference) -> None:
    assert UnitKey.parse(reference) is None


def test_unit_key_formatting() -> None:
    key = UnitKey(sequence=16, subsequence=51)
    assert str(key) == "16.51"
    assert key.qualified == "ra 16.51"


def test_unit_keys_sort_numerically() -> None:
    keys = [UnitKey.parse(r) for r in ["16.51", "2.10", "16.5", "2.9"]]
    assert [str(k) for k in sorted(keys)] == ["2.9", "2.10", "16.5", "16.51"]


def test_unit_key_is_hashable() -> None:
    assert len({UnitKey.parse("16.51"), UnitKey.parse("Ra 16.51")}) == 1


def test_claim_excerpt_for() -> None:
    claim = ExcerptClaim(reference="16.51", excerpts={"en": "  Love is unity. ", "fr": "   "})

    assert claim.excerpt_for("en") == "Love is unity."
    assert claim.excerpt_for("fr") is None
    assert claim.excerpt_for("de") is None


def test_claim_with_excerpt_leaves_original_unchanged() -> None:
    claim = ExcerptClaim(reference="16.51", excerpts={"en": "Love is unity."})

    updated = claim.with_excerpt("fr", "L'amour est l'unité.")

    assert updated.excerpts == {"en": "Love is unity.", "fr": "L'amour est l'unité."}
    assert claim.excerpts == {"en": "Love is unity."}


def test_language_profile_normalizes_fields() -> None:
    profile = LanguageProfile(code=" FR ", name="French", speaker_prefixes=("Ra:", " ", ""), greetings=(" Je suis Ra. ",))
    assert profile.code == "fr"
    assert profile.speaker_prefixes == ("Ra:",)
    assert profile.greetings == ("Je suis Ra.",)


def test_aligned_result() -> None:
    result = AlignmentResult(
        text="L'amour est l'unité.",
        strategy=AlignmentStrategy.PROPORTIONAL_SENTENCE,
        confidence=Confidence.HIGH,
    )
    assert result.is_aligned
    assert result.model_dump()["is_aligned"] is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"text": "Some text here.", "strategy": AlignmentStrategy.NONE},
        {"text": " padded text ", "strategy": AlignmentStrategy.LEAD_SPAN},
        {"text": "", "strategy": AlignmentStrategy.LEAD_SPAN},
        {"strategy": AlignmentStrategy.CHARACTER_OFFSET},
        {"text": "Some text here.", "strategy": AlignmentStrategy.LEAD_SPAN,
         "unresolved_reason": ValidationStatus.MISSING_TRANSLATION},
    ],
)
def test_inconsistent_alignment_results_are_rejected(kwargs) -> None:
    with pytest.raises(ValidationError):
        AlignmentResult(**kwargs)


def test_unaligned_result() -> None:
    result = AlignmentResult.unaligned("99.1", ValidationStatus.SESSION_NOT_FOUND)
    assert not result.is_aligned
    assert result.strategy == AlignmentStrategy.NONE
    assert "session_not_found" in str(result)


def test_suggestion_only_for_wrong_reference() -> None:
    with pytest.raises(ValidationError):
        ValidationResult(status=ValidationStatus.WRONG_REFERENCE, reference="16.50")
    with pytest.raises(ValidationError):
        ValidationResult(status=ValidationStatus.VALID, reference="16.50", suggested_reference="16.51")


def test_coverage_bounds() -> None:
    with pytest.raises(ValidationError):
        ValidationResult(status=ValidationStatus.QUOTE_NOT_FOUND, reference="16.51", coverage=1.5)


def test_report_record() -> None:
    wrong = ValidationResult(status=ValidationStatus.WRONG_REFERENCE, reference="16.50", suggested_reference="16.51")
    missing = ValidationResult(status=ValidationStatus.MISSING_TRANSLATION, reference="16.50")

    assert wrong.to_record() == {"reference": "16.50", "status": "wrong_reference", "suggestedReference": "16.51"}
    assert missing.to_record() == {"reference": "16.50", "status": "missing_translation"}
    assert wrong.is_finding
    assert not ValidationResult(status=ValidationStatus.VALID, reference="16.51").is_finding
