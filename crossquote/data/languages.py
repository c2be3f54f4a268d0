"""
Language profile registry.

The built-in profiles carry the speaker labels and greeting forms used by the
Ra Material translations. A registry is an immutable value: adding a
language produces a new registry and never changes an existing one.
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Iterator

from crossquote.exceptions import UnsupportedLanguageError
from crossquote.models import LanguageProfile


DEFAULT_PROFILES: tuple[LanguageProfile, ...] = (
    LanguageProfile(
        code="en",
        name="English",
        speaker_prefixes=("Questioner:", "Ra:"),
        greetings=("I am Ra.",),
    ),
    LanguageProfile(
        code="es",
        name="Spanish",
        speaker_prefixes=("Interrogador:", "Cuestionador:", "Ra:"),
        greetings=("Soy Ra.",),
    ),
    LanguageProfile(
        code="de",
        name="German",
        speaker_prefixes=("Fragesteller:", "Ra:"),
        greetings=("Ich bin Ra.",),
    ),
    LanguageProfile(
        code="fr",
        name="French",
        speaker_prefixes=("Questionneur:", "Ra:"),
        greetings=("Je suis Ra.",),
    ),
    LanguageProfile(
        code="pt",
        name="Portuguese",
        speaker_prefixes=("Questionador:", "Ra:"),
        greetings=("Eu sou Ra.",),
    ),
    LanguageProfile(
        code="it",
        name="Italian",
        speaker_prefixes=("Interrogante:", "Ra:"),
        greetings=("Io sono Ra.",),
    ),
    LanguageProfile(
        code="nl",
        name="Dutch",
        speaker_prefixes=("Vraagsteller:", "Ra:"),
        greetings=("Ik ben Ra.",),
    ),
    LanguageProfile(
        code="pl",
        name="Polish",
        speaker_prefixes=("Pytający:", "Ra:"),
        greetings=("Jestem Ra.",),
    ),
    LanguageProfile(
        code="ru",
        name="Russian",
        speaker_prefixes=("Вопрошающий:", "Ра:", "Ra:"),
        greetings=("Я есть Ра.",),
    ),
)


class LanguageRegistry:
    """
    Immutable mapping of language codes to profiles.

    Example:
        registry = default_registry().with_profile(
            LanguageProfile(code="sv", name="Swedish",
                            speaker_prefixes=("Frågeställare:", "Ra:"),
                            greetings=("Jag är Ra.",))
        )
        swedish = registry.get("sv")
    """

    def __init__(self, profiles: Iterable[LanguageProfile] = ()):
        table: dict[str, LanguageProfile] = {}
        for profile in profiles:
            table[profile.code] = profile
        self._profiles = MappingProxyType(table)

    def get(self, code: str) -> LanguageProfile:
        """
        Look up the profile for a language code.

        Raises:
            UnsupportedLanguageError: If no profile is registered for the code
        """
        profile = self._profiles.get(code.strip().lower()) if isinstance(code, str) else None
        if profile is None:
            raise UnsupportedLanguageError(str(code), available=self.codes())
        return profile

    def with_profile(self, profile: LanguageProfile) -> "LanguageRegistry":
        """Return a new registry with ``profile`` added (or replaced)."""
        return LanguageRegistry([*self._profiles.values(), profile])

    def codes(self) -> list[str]:
        """Registered language codes, in registration order."""
        return list(self._profiles)

    def all_greetings(self) -> tuple[str, ...]:
        """Greeting forms of every registered language, without duplicates."""
        seen: list[str] = []
        for profile in self._profiles.values():
            for greeting in profile.greetings:
                if greeting not in seen:
                    seen.append(greeting)
        return tuple(seen)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.strip().lower() in self._profiles

    def __iter__(self) -> Iterator[LanguageProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"LanguageRegistry({', '.join(self._profiles)})"


@lru_cache(maxsize=1)
def default_registry() -> LanguageRegistry:
    """Registry holding the built-in profiles."""
    return LanguageRegistry(DEFAULT_PROFILES)
