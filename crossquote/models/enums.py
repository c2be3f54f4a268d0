"""
Enumerations shared by the result models.
"""

from enum import Enum


class AlignmentStrategy(str, Enum):
    """Position-mapping strategy that produced an alignment."""

    PROPORTIONAL_SENTENCE = "proportional_sentence"
    CHARACTER_OFFSET = "character_offset"
    LEAD_SPAN = "lead_span"
    NONE = "none"


class Confidence(str, Enum):
    """Confidence label derived from the strategy that succeeded."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ValidationStatus(str, Enum):
    """Outcome of checking a claimed excerpt against the corpus."""

    VALID = "valid"
    WRONG_REFERENCE = "wrong_reference"
    QUOTE_NOT_FOUND = "quote_not_found"
    MISSING_TRANSLATION = "missing_translation"
    INVALID_REFERENCE = "invalid_reference"
    SESSION_NOT_FOUND = "session_not_found"
