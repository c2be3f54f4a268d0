"""
Batch driver: resolves claims against a document store and runs the aligner
or the verifier on them.

Usage:
    from crossquote import ExcerptEngine
    from crossquote.data import JsonSectionStore

    engine = ExcerptEngine(JsonSectionStore("public/sections"))
    for result in engine.align_many(claims, "fr"):
        print(result)
"""

import time
from collections import Counter
from typing import Iterable, Iterator, Optional

from crossquote._logging import (
    get_logger,
    log_batch_complete,
    log_batch_start,
    log_claim_aligned,
    log_claim_verified,
    log_warning,
)
from crossquote.config import CrossquoteSettings, get_settings
from crossquote.core.aligner import Aligner
from crossquote.core.normalizer import normalize
from crossquote.core.segmenter import is_greeting, split_sentences
from crossquote.core.verifier import CorpusSnapshot, verify
from crossquote.data.languages import LanguageRegistry, default_registry
from crossquote.data.store import BaseDocumentStore
from crossquote.models import (
    AlignmentResult,
    AlignmentStrategy,
    ExcerptClaim,
    UnitKey,
    ValidationResult,
    ValidationStatus,
)


logger = get_logger("engine")


class ExcerptEngine:
    """
    Aligns and verifies excerpt claims against one document store.

    The engine is read-only: claims are never modified and the store is only
    queried. Data problems come back as result values; a StoreError from
    the store propagates.

    Example:
        engine = ExcerptEngine(store, strategies=[AlignmentStrategy.PROPORTIONAL_SENTENCE])
        result = engine.align_one(claim, "de")
        report = engine.verify_one(claim, "en")
    """

    def __init__(
        self,
        store: BaseDocumentStore,
        registry: Optional[LanguageRegistry] = None,
        settings: Optional[CrossquoteSettings] = None,
        strategies: Optional[Iterable[AlignmentStrategy]] = None,
    ):
        """
        Initialize the engine.

        Args:
            store: Document store holding the unit texts
            registry: Language profiles (default: default_registry())
            settings: Settings instance to use (default: get_settings())
            strategies: Alignment strategies to enable (default: all)
        """
        self.store = store
        self.registry = registry or default_registry()
        self.settings = settings or get_settings()
        self.aligner = Aligner(settings=self.settings, strategies=strategies)

    @property
    def source_language(self) -> str:
        return self.settings.source_language

    def _parse(self, reference: str) -> Optional[UnitKey]:
        return UnitKey.parse(reference, collection=self.settings.default_collection)

    def _absent_reason(self, key: UnitKey) -> ValidationStatus:
        if self.store.has_unit(key):
            return ValidationStatus.MISSING_TRANSLATION
        return ValidationStatus.SESSION_NOT_FOUND

    def align_one(self, claim: ExcerptClaim, target_language: str) -> AlignmentResult:
        """
        Align a claim's source-language excerpt into ``target_language``.

        Returns:
            AlignmentResult. When alignment cannot be attempted,
            ``unresolved_reason`` says why.

        Raises:
            UnsupportedLanguageError: If either language has no profile
            StoreError: If the store cannot be read
        """
        source_profile = self.registry.get(self.source_language)
        target_profile = self.registry.get(target_language)
        reference = claim.reference

        excerpt = claim.excerpt_for(source_profile.code)
        if excerpt is None:
            return AlignmentResult.unaligned(reference, ValidationStatus.MISSING_TRANSLATION)

        key = self._parse(reference)
        if key is None:
            return AlignmentResult.unaligned(reference, ValidationStatus.INVALID_REFERENCE)

        source_full = self.store.get_unit_text(key, source_profile.code)
        target_full = self.store.get_unit_text(key, target_profile.code)
        if source_full is None or target_full is None:
            return AlignmentResult.unaligned(reference, self._absent_reason(key))

        result = self.aligner.align(
            excerpt,
            source_full,
            target_full,
            source_profile,
            target_profile,
            monologue=claim.monologue,
            extra_greetings=self.registry.all_greetings(),
            reference=reference,
        )
        if result.is_aligned:
            log_claim_aligned(reference, target_profile.code, result.strategy.value, len(result.text))
        else:
            logger.debug(f"No strategy aligned {reference} -> {target_profile.code}")
        return result

    def unit_text(self, reference: str, language: Optional[str] = None) -> Optional[str]:
        """
        Display text of the unit a reference cites: normalized, with greeting
        sentences removed. None if the reference or the unit is unknown.
        """
        profile = self.registry.get(language or self.source_language)
        key = self._parse(reference)
        if key is None:
            return None
        raw = self.store.get_unit_text(key, profile.code)
        if raw is None:
            return None

        greetings = self.registry.all_greetings()
        sentences = [
            sentence
            for sentence in split_sentences(normalize(raw, profile))
            if not is_greeting(sentence, greetings, profile.speaker_prefixes)
        ]
        return " ".join(sentences) or None

    def build_snapshot(self, language: Optional[str] = None) -> CorpusSnapshot:
        """Fold the whole corpus of one language for a verification batch."""
        profile = self.registry.get(language or self.source_language)
        snapshot = CorpusSnapshot.build(self.store, profile.code, profile)
        if not snapshot:
            log_warning("Corpus has no units", language=profile.code)
        return snapshot

    def verify_one(
        self,
        claim: ExcerptClaim,
        language: Optional[str] = None,
        snapshot: Optional[CorpusSnapshot] = None,
    ) -> ValidationResult:
        """
        Verify a claim's excerpt in ``language`` (default: the source language).

        Raises:
            UnsupportedLanguageError: If the language has no profile
            StoreError: If the store cannot be read
        """
        profile = self.registry.get(language or self.source_language)
        result = verify(
            claim,
            self.store,
            profile.code,
            profile,
            settings=self.settings,
            snapshot=snapshot,
        )
        log_claim_verified(claim.reference, profile.code, result.status.value, result.coverage)
        return result

    def align_many(self, claims: Iterable[ExcerptClaim], target_language: str) -> Iterator[AlignmentResult]:
        """Yield one AlignmentResult per claim, in order."""
        claims = list(claims)
        log_batch_start("align", target_language, len(claims))
        start = time.time()

        done = 0
        for claim in claims:
            yield self.align_one(claim, target_language)
            done += 1

        log_batch_complete("align", done, len(claims), time.time() - start)

    def verify_many(
        self,
        claims: Iterable[ExcerptClaim],
        language: Optional[str] = None,
    ) -> Iterator[ValidationResult]:
        """
        Yield one ValidationResult per claim, in order.

        The corpus snapshot is built once, before the first claim, and shared
        by the whole batch.
        """
        claims = list(claims)
        language = language or self.source_language
        log_batch_start("verify", language, len(claims))
        start = time.time()

        snapshot = self.build_snapshot(language) if claims else None

        done = 0
        for claim in claims:
            yield self.verify_one(claim, language, snapshot=snapshot)
            done += 1

        log_batch_complete("verify", done, len(claims), time.time() - start)


def claims_missing(claims: Iterable[ExcerptClaim], language: str) -> list[ExcerptClaim]:
    """Claims that have no excerpt recorded for ``language``."""
    return [claim for claim in claims if claim.excerpt_for(language) is None]


def to_report(results: Iterable[ValidationResult]) -> list[dict]:
    """Flat report records ``{reference, status, suggestedReference?}``."""
    return [result.to_record() for result in results]


def summarize_validation(results: Iterable[ValidationResult]) -> dict[str, int]:
    """Count results per status; every status is present, zeros included."""
    counts = Counter(result.status for result in results)
    return {status.value: counts.get(status, 0) for status in ValidationStatus}
