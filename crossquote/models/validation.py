"""
Validation result data model.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from crossquote.models.enums import ValidationStatus


class ValidationResult(BaseModel):
    """
    Result of verifying one excerpt claim.

    Every status is an expected outcome when auditing a large, partially
    translated corpus, so none of them is raised as an exception.

    Attributes:
        status: Classification of the claim
        reference: The reference the claim cited
        language: Language the claim was checked in
        coverage: Signature coverage against the cited unit (0.0-1.0), if computed
        suggested_reference: Where the excerpt really is (WRONG_REFERENCE only)
        evidence_snippet: Text from the matching unit around the first signature hit
    """

    status: ValidationStatus = Field(
        ...,
        description="Classification of the claim",
    )
    reference: str = Field(
        ...,
        description="Reference cited by the claim",
    )
    language: Optional[str] = Field(
        default=None,
        description="Language the claim was checked in",
    )
    coverage: Optional[float] = Field(
        default=None,
        description="Signature coverage against the cited unit (0.0-1.0)",
        ge=0.0,
        le=1.0,
    )
    suggested_reference: Optional[str] = Field(
        default=None,
        description="Reference of the unit that actually contains the excerpt",
    )
    evidence_snippet: Optional[str] = Field(
        default=None,
        description="Snippet of the matching unit's text",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "status": "wrong_reference",
                    "reference": "16.50",
                    "language": "en",
                    "coverage": 0.2,
                    "suggested_reference": "16.51",
                    "evidence_snippet": "Love is unity. It is the Creator.",
                }
            ]
        },
    }

    @model_validator(mode="after")
    def _suggestion_only_for_wrong_reference(self) -> "ValidationResult":
        has_suggestion = self.suggested_reference is not None
        if has_suggestion != (self.status == ValidationStatus.WRONG_REFERENCE):
            raise ValueError("suggested_reference is required for, and only for, wrong_reference")
        return self

    @property
    def is_finding(self) -> bool:
        """Whether this result reports a content-integrity or data problem."""
        return self.status != ValidationStatus.VALID

    def to_record(self) -> dict:
        """Flat report record: ``{reference, status, suggestedReference?}``."""
        record = {"reference": self.reference, "status": self.status.value}
        if self.suggested_reference is not None:
            record["suggestedReference"] = self.suggested_reference
        return record

    def __str__(self) -> str:
        suffix = f" -> {self.suggested_reference}" if self.suggested_reference else ""
        return f"ValidationResult({self.reference}, {self.status.value}{suffix})"
