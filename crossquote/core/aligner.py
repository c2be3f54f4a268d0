"""
Strategy orchestration for excerpt alignment.

Runs the position-mapping strategies in their fixed priority order and
accepts the first span long enough to be meaningful.
"""

from collections import Counter
from typing import Iterable, Optional, Sequence

from crossquote._logging import get_logger
from crossquote.config import CrossquoteSettings, get_settings
from crossquote.core.confidence import classify_confidence
from crossquote.core.strategies import STRATEGY_CHAIN, AlignmentContext
from crossquote.exceptions import ConfigurationError
from crossquote.models import AlignmentResult, AlignmentStrategy, LanguageProfile


logger = get_logger("aligner")


class Aligner:
    """
    Orchestrates the position-mapping strategies.

    Strategies always run in the order proportional sentence, character
    offset, lead span; ``strategies`` only selects which of them are enabled.

    Example:
        aligner = Aligner(strategies=[AlignmentStrategy.PROPORTIONAL_SENTENCE])
        result = aligner.align(excerpt, english_full, french_full, en, fr)
    """

    def __init__(
        self,
        settings: Optional[CrossquoteSettings] = None,
        strategies: Optional[Iterable[AlignmentStrategy]] = None,
    ):
        """
        Initialize the aligner.

        Args:
            settings: Settings instance to use (default: get_settings())
            strategies: Enabled strategies (default: all three)
        """
        self._settings = settings or get_settings()

        enabled = set(strategies) if strategies is not None else {s for s, _ in STRATEGY_CHAIN}
        if AlignmentStrategy.NONE in enabled:
            raise ConfigurationError("NONE is not an alignment strategy", setting_name="strategies")
        if not enabled:
            raise ConfigurationError("At least one strategy must be enabled", setting_name="strategies")

        self._chain = tuple((s, fn) for s, fn in STRATEGY_CHAIN if s in enabled)

    @property
    def settings(self) -> CrossquoteSettings:
        return self._settings

    @property
    def strategies(self) -> tuple[AlignmentStrategy, ...]:
        """Enabled strategies, in execution order."""
        return tuple(s for s, _ in self._chain)

    def align(
        self,
        excerpt: str,
        source_full: str,
        target_full: str,
        source_profile: LanguageProfile,
        target_profile: LanguageProfile,
        *,
        monologue: bool = False,
        extra_greetings: Iterable[str] = (),
        reference: Optional[str] = None,
    ) -> AlignmentResult:
        """
        Locate the excerpt's counterpart span in the target text.

        Args:
            excerpt: Source-language excerpt
            source_full: Full source-language text of the unit
            target_full: Full target-language text of the unit
            source_profile: Profile of the source language
            target_profile: Profile of the target language
            monologue: Caller asserts the excerpt is from an opening monologue
            extra_greetings: Greeting forms of other languages to filter out
            reference: Unit reference recorded on the result

        Returns:
            AlignmentResult; strategy NONE and no text if nothing qualified
        """
        ctx = AlignmentContext.build(
            excerpt,
            source_full,
            target_full,
            source_profile,
            target_profile,
            self._settings,
            monologue=monologue,
            extra_greetings=extra_greetings,
        )
        return self.align_context(ctx, reference=reference)

    def align_context(
        self,
        ctx: AlignmentContext,
        reference: Optional[str] = None,
    ) -> AlignmentResult:
        """Run the enabled strategies over a prepared context."""
        threshold = self._settings.min_result_length

        for strategy, match in self._chain:
            text = match(ctx)
            if text is None:
                logger.debug(f"{strategy.value}: no candidate")
                continue

            text = text.strip()
            if len(text) <= threshold:
                logger.debug(f"{strategy.value}: rejected {len(text)}-char span (threshold {threshold})")
                continue

            return AlignmentResult(
                text=text,
                strategy=strategy,
                confidence=classify_confidence(strategy),
                reference=reference,
            )

        return AlignmentResult.unaligned(reference=reference)


def align_excerpt(
    excerpt: str,
    source_full: str,
    target_full: str,
    source_profile: LanguageProfile,
    target_profile: LanguageProfile,
    *,
    monologue: bool = False,
    settings: Optional[CrossquoteSettings] = None,
    strategies: Optional[Sequence[AlignmentStrategy]] = None,
) -> AlignmentResult:
    """
    Align one excerpt with a one-off Aligner.

    See Aligner.align for the arguments.
    """
    aligner = Aligner(settings=settings, strategies=strategies)
    return aligner.align(
        excerpt,
        source_full,
        target_full,
        source_profile,
        target_profile,
        monologue=monologue,
    )


def get_alignment_stats(results: Iterable[AlignmentResult]) -> dict:
    """
    Summarize a batch of alignment results.

    Returns:
        Dict with total, aligned and unaligned counts, plus counts per
        strategy, per confidence and per unresolved reason
    """
    results = list(results)
    aligned = [r for r in results if r.is_aligned]

    by_strategy = Counter(r.strategy.value for r in aligned)
    by_confidence = Counter(r.confidence.value for r in aligned if r.confidence)
    by_reason = Counter(r.unresolved_reason.value for r in results if r.unresolved_reason)

    return {
        "total": len(results),
        "aligned": len(aligned),
        "unaligned": len(results) - len(aligned),
        "by_strategy": dict(sorted(by_strategy.items())),
        "by_confidence": dict(sorted(by_confidence.items())),
        "by_reason": dict(sorted(by_reason.items())),
    }
