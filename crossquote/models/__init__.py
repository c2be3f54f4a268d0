"""
Data models for the crossquote library.

These models represent the core data structures used throughout the library:
- UnitKey: Composite key of a bilingual unit
- LanguageProfile: Structural cues of one language
- Sentence: A sentence of a unit's normalized text
- ExcerptClaim: A quoted excerpt and the unit it cites
- AlignmentResult: Result of aligning an excerpt into a target text
- ValidationResult: Result of verifying a claim against the corpus
"""

from crossquote.models.enums import AlignmentStrategy, Confidence, ValidationStatus
from crossquote.models.unit import UnitKey
from crossquote.models.language import LanguageProfile
from crossquote.models.sentence import Sentence
from crossquote.models.claim import ExcerptClaim
from crossquote.models.result import AlignmentResult
from crossquote.models.validation import ValidationResult

__all__ = [
    "AlignmentStrategy",
    "Confidence",
    "ValidationStatus",
    "UnitKey",
    "LanguageProfile",
    "Sentence",
    "ExcerptClaim",
    "AlignmentResult",
    "ValidationResult",
]
