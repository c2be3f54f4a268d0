"""
crossquote - Cross-lingual excerpt alignment and validation for bilingual corpora.

Usage:
    from crossquote import ExcerptEngine, ExcerptClaim
    from crossquote.data import JsonSectionStore

    engine = ExcerptEngine(JsonSectionStore("public/sections"))
    claim = ExcerptClaim(reference="16.51", excerpts={"en": "Love is unity."})

    # Find the French counterpart of the English excerpt
    aligned = engine.align_one(claim, "fr")
    print(aligned.text, aligned.confidence)

    # Check that the English excerpt really is in 16.51
    report = engine.verify_one(claim)
    print(report.status)
"""

from crossquote.models import (
    AlignmentResult,
    AlignmentStrategy,
    Confidence,
    ExcerptClaim,
    LanguageProfile,
    Sentence,
    UnitKey,
    ValidationResult,
    ValidationStatus,
)
from crossquote.config import CrossquoteSettings, get_settings, configure
from crossquote.exceptions import (
    CrossquoteError,
    StoreError,
    ConfigurationError,
    UnsupportedLanguageError,
    ClaimDataError,
)
from crossquote.engine import ExcerptEngine, claims_missing, summarize_validation, to_report

__version__ = "0.1.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "UnitKey",
    "LanguageProfile",
    "Sentence",
    "ExcerptClaim",
    "AlignmentResult",
    "AlignmentStrategy",
    "Confidence",
    "ValidationResult",
    "ValidationStatus",
    # Engine
    "ExcerptEngine",
    "claims_missing",
    "to_report",
    "summarize_validation",
    # Config
    "CrossquoteSettings",
    "get_settings",
    "configure",
    # Exceptions
    "CrossquoteError",
    "StoreError",
    "ConfigurationError",
    "UnsupportedLanguageError",
    "ClaimDataError",
]
