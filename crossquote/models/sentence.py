"""
Sentence data model.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Sentence:
    """A trimmed sentence and its index in the filtered sentence sequence."""
    index: int
    text: str

    def __str__(self) -> str:
        return self.text
