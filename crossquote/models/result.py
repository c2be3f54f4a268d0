"""
Alignment result data model.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from crossquote.models.enums import AlignmentStrategy, Confidence, ValidationStatus


class AlignmentResult(BaseModel):
    """
    Result of locating an excerpt's counterpart span in a target text.

    Attributes:
        text: The aligned target span (whole target sentences), or None
        strategy: Strategy that produced the span (NONE if nothing qualified)
        confidence: Confidence label for the strategy, or None
        reference: Reference of the aligned unit, when known
        unresolved_reason: Why alignment could not even be attempted
    """

    text: Optional[str] = Field(
        default=None,
        description="Aligned target span",
    )
    strategy: AlignmentStrategy = Field(
        default=AlignmentStrategy.NONE,
        description="Strategy that produced the span",
    )
    confidence: Optional[Confidence] = Field(
        default=None,
        description="Confidence label derived from the strategy",
    )
    reference: Optional[str] = Field(
        default=None,
        description="Reference of the aligned unit",
    )
    unresolved_reason: Optional[ValidationStatus] = Field(
        default=None,
        description="Precondition gap that prevented alignment",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "text": "L'amour est l'unité.",
                    "strategy": "proportional_sentence",
                    "confidence": "high",
                    "reference": "16.51",
                    "unresolved_reason": None,
                }
            ]
        },
    }

    @model_validator(mode="after")
    def _check_consistency(self) -> "AlignmentResult":
        if self.text is not None:
            if not self.text or self.text != self.text.strip():
                raise ValueError("text must be non-empty and whitespace-trimmed")
            if self.strategy == AlignmentStrategy.NONE:
                raise ValueError("an aligned text requires a strategy")
            if self.unresolved_reason is not None:
                raise ValueError("unresolved_reason is only set when text is absent")
        elif self.strategy != AlignmentStrategy.NONE:
            raise ValueError("strategy must be NONE when text is absent")
        return self

    @classmethod
    def unaligned(
        cls,
        reference: Optional[str] = None,
        reason: Optional[ValidationStatus] = None,
    ) -> "AlignmentResult":
        """Build the empty result returned when no strategy qualifies."""
        return cls(reference=reference, unresolved_reason=reason)

    @computed_field
    @property
    def is_aligned(self) -> bool:
        """Whether a target span was found."""
        return self.text is not None

    def __str__(self) -> str:
        if self.text is None:
            reason = f", reason={self.unresolved_reason.value}" if self.unresolved_reason else ""
            return f"AlignmentResult({self.reference}, unaligned{reason})"
        return (
            f"AlignmentResult({self.reference}, {self.strategy.value}, "
            f"confidence={self.confidence.value if self.confidence else None}, "
            f"chars={len(self.text)})"
        )
