"""
Corpus verification of excerpt claims.

Checks that a claimed excerpt really occurs in the unit it cites and, when it
does not, searches the rest of the corpus for the unit it came from.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from crossquote._logging import get_logger
from crossquote.config import CrossquoteSettings, get_settings
from crossquote.core.matcher import compute_coverage, evidence_snippet, lexical_signature
from crossquote.core.normalizer import fold, normalize
from crossquote.data.store import BaseDocumentStore
from crossquote.models import ExcerptClaim, LanguageProfile, UnitKey, ValidationResult, ValidationStatus


logger = get_logger("verifier")


@dataclass(frozen=True)
class CorpusSnapshot:
    """
    Folded text of every unit in one language, in key order.

    Built once per batch and shared read-only by every claim in it.
    """
    language: str
    entries: tuple[tuple[UnitKey, str], ...]

    @classmethod
    def build(
        cls,
        store: BaseDocumentStore,
        language: str,
        profile: LanguageProfile,
    ) -> "CorpusSnapshot":
        """
        Read and fold every unit of ``language`` from the store.

        Raises:
            StoreError: If the store cannot be read
        """
        entries = []
        for key in store.unit_keys(language):
            text = store.get_unit_text(key, language)
            if text is None:
                continue
            entries.append((key, fold(normalize(text, profile))))

        logger.debug(f"Corpus snapshot for {language}: {len(entries)} units")
        return cls(language=language, entries=tuple(sorted(entries, key=lambda e: e[0].sort_key)))

    def __iter__(self) -> Iterator[tuple[UnitKey, str]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _evidence(folded_excerpt: str, unit_text: str, signature: list[str], length: int) -> Optional[str]:
    return evidence_snippet(unit_text, signature or [folded_excerpt], length=length)


def find_best_unit(
    folded_excerpt: str,
    snapshot: CorpusSnapshot,
    signature: list[str],
) -> tuple[Optional[UnitKey], float]:
    """
    Unit with the highest coverage of the excerpt; the first one wins ties.

    Returns:
        (key, coverage), or (None, 0.0) for an empty corpus
    """
    best_key: Optional[UnitKey] = None
    best_coverage = 0.0

    for key, folded_unit in snapshot:
        coverage = compute_coverage(folded_excerpt, folded_unit, signature=signature)
        if best_key is None or coverage > best_coverage:
            best_key, best_coverage = key, coverage
            if coverage >= 1.0:
                break

    return best_key, best_coverage


def verify(
    claim: ExcerptClaim,
    store: BaseDocumentStore,
    language: str,
    profile: LanguageProfile,
    settings: Optional[CrossquoteSettings] = None,
    snapshot: Optional[CorpusSnapshot] = None,
) -> ValidationResult:
    """
    Verify that a claim's excerpt occurs in the unit it cites.

    Data problems are returned as statuses, never raised.

    Args:
        claim: Claim to verify
        store: Document store holding the corpus
        language: Language whose excerpt is checked
        profile: Profile of that language
        settings: Settings instance to use (default: get_settings())
        snapshot: Prebuilt corpus snapshot for ``language``, built on demand if omitted

    Returns:
        ValidationResult

    Raises:
        StoreError: If the store cannot be read
    """
    settings = settings or get_settings()
    reference = claim.reference

    excerpt = claim.excerpt_for(language)
    if excerpt is None:
        return ValidationResult(status=ValidationStatus.MISSING_TRANSLATION, reference=reference, language=language)

    key = UnitKey.parse(reference, collection=settings.default_collection)
    if key is None:
        return ValidationResult(status=ValidationStatus.INVALID_REFERENCE, reference=reference, language=language)

    raw_unit = store.get_unit_text(key, language)
    if raw_unit is None:
        if store.has_unit(key):
            status = ValidationStatus.MISSING_TRANSLATION
        else:
            status = ValidationStatus.SESSION_NOT_FOUND
        return ValidationResult(status=status, reference=reference, language=language)

    folded_excerpt = fold(normalize(excerpt, profile))
    unit_text = normalize(raw_unit, profile)
    folded_unit = fold(unit_text)
    signature = lexical_signature(
        folded_excerpt,
        size=settings.signature_size,
        min_chars=settings.signature_token_min_chars,
    )
    coverage = compute_coverage(folded_excerpt, folded_unit, signature=signature)
    logger.debug(f"{reference} ({language}): coverage {coverage:.2f} over {len(signature)} tokens")

    if coverage >= settings.coverage_threshold:
        return ValidationResult(
            status=ValidationStatus.VALID,
            reference=reference,
            language=language,
            coverage=coverage,
            evidence_snippet=_evidence(folded_excerpt, unit_text, signature, settings.evidence_snippet_chars),
        )

    if snapshot is None:
        snapshot = CorpusSnapshot.build(store, language, profile)
    elif snapshot.language != language:
        raise ValueError(f"Snapshot is for '{snapshot.language}', not '{language}'")

    best_key, best_coverage = find_best_unit(folded_excerpt, snapshot, signature)

    if best_key is not None and best_key != key and best_coverage >= settings.coverage_threshold:
        logger.debug(f"{reference} ({language}): found in {best_key} at {best_coverage:.2f}")
        best_text = normalize(store.get_unit_text(best_key, language) or "", profile)
        return ValidationResult(
            status=ValidationStatus.WRONG_REFERENCE,
            reference=reference,
            language=language,
            coverage=coverage,
            suggested_reference=str(best_key),
            evidence_snippet=_evidence(folded_excerpt, best_text, signature, settings.evidence_snippet_chars),
        )

    return ValidationResult(
        status=ValidationStatus.QUOTE_NOT_FOUND,
        reference=reference,
        language=language,
        coverage=coverage,
    )
