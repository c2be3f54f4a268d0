"""
Confidence grading of alignment and validation outcomes.
"""

from typing import Optional

from crossquote.models import AlignmentStrategy, Confidence, ValidationStatus


_STRATEGY_CONFIDENCE = {
    AlignmentStrategy.PROPORTIONAL_SENTENCE: Confidence.HIGH,
    AlignmentStrategy.CHARACTER_OFFSET: Confidence.MEDIUM,
    AlignmentStrategy.LEAD_SPAN: Confidence.LOW,
}


def classify_confidence(strategy: AlignmentStrategy) -> Optional[Confidence]:
    """Confidence of a successful strategy; None when nothing was aligned."""
    return _STRATEGY_CONFIDENCE.get(strategy)


def validation_confidence(status: ValidationStatus) -> Optional[Confidence]:
    """A valid claim is high confidence; findings are reported, not graded."""
    if status == ValidationStatus.VALID:
        return Confidence.HIGH
    return None
