"""
Language profile data model.
"""

from pydantic import BaseModel, Field, field_validator


class LanguageProfile(BaseModel):
    """
    Per-language structural cues used by the normalizer and segmenter.

    Profiles are built once and passed explicitly into every call; they are
    never mutated.

    Attributes:
        code: Language code (e.g. "fr")
        name: Display name (e.g. "French")
        speaker_prefixes: Speaker labels that open a segment ("Questionneur:", "Ra:")
        greetings: Forms of the entity's opening greeting ("Je suis Ra.")
    """

    code: str = Field(
        ...,
        description="Language code",
        min_length=2,
    )
    name: str = Field(
        ...,
        description="Display name",
    )
    speaker_prefixes: tuple[str, ...] = Field(
        default=(),
        description="Speaker labels stripped at segment starts",
    )
    greetings: tuple[str, ...] = Field(
        default=(),
        description="Opening greeting forms",
    )

    model_config = {"frozen": True}

    @field_validator("code")
    @classmethod
    def _lowercase_code(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("speaker_prefixes", "greetings")
    @classmethod
    def _drop_blank(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(v.strip() for v in value if v and v.strip())

    def __str__(self) -> str:
        return f"LanguageProfile({self.code}, {self.name})"
