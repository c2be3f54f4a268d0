"""
Unit key data model.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field


# "16.51", "Ra 16.51", "ra 16.51"
REFERENCE_PATTERN = re.compile(
    r"^\s*(?:(?P<collection>[^\W\d_][\w-]*)\s+)?(?P<sequence>\d+)\.(?P<subsequence>\d+)\s*$"
)


class UnitKey(BaseModel):
    """
    Composite key addressing one unit of bilingual source material.

    A unit is a question/answer pair or transcript block, addressed as
    ``collection`` x ``sequence`` x ``subsequence`` (for example the Ra
    Material's session 16, question 51).

    Attributes:
        collection: Collection name, lowercased (e.g. "ra")
        sequence: Sequence number within the collection (session)
        subsequence: Number within the sequence (question)
    """

    collection: str = Field(
        default="ra",
        description="Collection name (lowercase)",
        min_length=1,
    )
    sequence: int = Field(
        ...,
        description="Sequence number within the collection",
        ge=0,
    )
    subsequence: int = Field(
        ...,
        description="Number within the sequence",
        ge=0,
    )

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, reference: object, collection: str = "ra") -> Optional["UnitKey"]:
        """
        Parse a citation reference into a key.

        Args:
            reference: Reference such as "16.51" or "Ra 16.51"
            collection: Collection used when the reference carries none

        Returns:
            UnitKey, or None if the reference is malformed
        """
        if not isinstance(reference, str):
            return None
        match = REFERENCE_PATTERN.match(reference)
        if match is None:
            return None
        return cls(
            collection=(match.group("collection") or collection).lower(),
            sequence=int(match.group("sequence")),
            subsequence=int(match.group("subsequence")),
        )

    @property
    def sort_key(self) -> tuple[str, int, int]:
        return (self.collection, self.sequence, self.subsequence)

    @property
    def qualified(self) -> str:
        """Reference including the collection, e.g. "ra 16.51"."""
        return f"{self.collection} {self}"

    def __lt__(self, other: "UnitKey") -> bool:
        if not isinstance(other, UnitKey):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        return f"{self.sequence}.{self.subsequence}"
