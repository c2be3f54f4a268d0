"""
Excerpt claim data model.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ExcerptClaim(BaseModel):
    """
    A quoted excerpt together with the unit it claims to come from.

    Claims are owned by whatever content cites the quote (a glossary entry,
    a lesson step); the engine is handed one claim at a time and neither
    owns nor persists it.

    Attributes:
        reference: Citation reference, e.g. "16.51"
        excerpts: Excerpt text per language code
        monologue: Caller asserts the excerpt is from the unit's sole-speaker opening
    """

    reference: str = Field(
        ...,
        description="Citation reference of the unit",
    )
    excerpts: dict[str, str] = Field(
        default_factory=dict,
        description="Excerpt text per language code",
    )
    monologue: bool = Field(
        default=False,
        description="Excerpt comes from an opening monologue with no interleaved dialogue",
    )

    model_config = {
        "frozen": True,
        # Fields this model does not know (conceptId, context, ...) are kept
        "extra": "allow",
        "json_schema_extra": {
            "examples": [
                {
                    "reference": "16.51",
                    "excerpts": {
                        "en": "Love is unity.",
                        "fr": "L'amour est l'unité.",
                    },
                    "monologue": False,
                }
            ]
        },
    }

    def excerpt_for(self, language: str) -> Optional[str]:
        """Return the stripped excerpt for a language, or None if absent or blank."""
        text = self.excerpts.get(language)
        if text is None or not text.strip():
            return None
        return text.strip()

    def with_excerpt(self, language: str, text: str) -> "ExcerptClaim":
        """Return a copy of this claim with an excerpt recorded for ``language``."""
        excerpts = dict(self.excerpts)
        excerpts[language] = text
        return self.model_copy(update={"excerpts": excerpts})

    def __str__(self) -> str:
        langs = ",".join(sorted(self.excerpts))
        return f"ExcerptClaim({self.reference}, languages={langs})"
