"""
Document store: the engine's only source of unit texts.

The engine reads through BaseDocumentStore and never writes. A missing
document is an ordinary absent value; an unreadable or corrupt store raises
StoreError, which aborts a batch.
"""

import json
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from crossquote.exceptions import StoreError
from crossquote.models import UnitKey


class BaseDocumentStore(ABC):
    """
    Abstract read-only lookup of unit texts by key and language.

    Implementations must be deterministic for a given key and language for
    the duration of a batch.

    Example:
        class MyStore(BaseDocumentStore):
            def get_unit_text(self, key, language):
                ...
    """

    @abstractmethod
    def get_unit_text(self, key: UnitKey, language: str) -> Optional[str]:
        """
        Full raw text of a unit in one language.

        Returns:
            The text, or None if the unit has no text in that language

        Raises:
            StoreError: If the store cannot be read
        """
        pass

    @abstractmethod
    def unit_keys(self, language: str) -> list[UnitKey]:
        """All unit keys that have text in ``language``, sorted."""
        pass

    @abstractmethod
    def languages(self) -> list[str]:
        """Language codes present in the store, sorted."""
        pass

    def has_unit(self, key: UnitKey) -> bool:
        """Whether the unit has text in at least one language."""
        return any(self.get_unit_text(key, language) is not None for language in self.languages())


class InMemoryDocumentStore(BaseDocumentStore):
    """
    Store backed by an in-memory mapping ``{language: {reference: text}}``.

    Example:
        store = InMemoryDocumentStore({
            "en": {"16.51": "Questioner: ... Ra: I am Ra. ..."},
            "fr": {"16.51": "Questionneur: ... Ra: Je suis Ra. ..."},
        })
    """

    def __init__(self, documents: Mapping[str, Mapping[str, str]], collection: str = "ra"):
        self._collection = collection.lower()
        table: dict[str, Mapping[UnitKey, str]] = {}
        for language, units in documents.items():
            parsed: dict[UnitKey, str] = {}
            for reference, text in units.items():
                key = UnitKey.parse(reference, collection=self._collection)
                if key is None:
                    raise StoreError(f"Malformed unit reference '{reference}'", language=language)
                if not isinstance(text, str):
                    raise StoreError(f"Unit {reference} is not text", language=language)
                parsed[key] = text
            table[language.lower()] = MappingProxyType(parsed)
        self._documents = MappingProxyType(table)

    def get_unit_text(self, key: UnitKey, language: str) -> Optional[str]:
        units = self._documents.get(language.lower())
        if units is None:
            return None
        return units.get(key)

    def unit_keys(self, language: str) -> list[UnitKey]:
        return sorted(self._documents.get(language.lower(), {}))

    def languages(self) -> list[str]:
        return sorted(self._documents)


class JsonSectionStore(BaseDocumentStore):
    """
    Store reading a directory of per-session JSON section files.

    Layout::

        <root>/<language>/<sequence>.json   ->   {"16.51": "text", ...}

    Files are read lazily and cached for the lifetime of the store.
    """

    def __init__(self, root: str | Path, collection: str = "ra"):
        self._root = Path(root)
        self._collection = collection.lower()
        self._load = lru_cache(maxsize=None)(self._read_session)

    @property
    def root(self) -> Path:
        return self._root

    def _check_root(self) -> None:
        if not self._root.is_dir():
            raise StoreError("Section directory not found", path=str(self._root))

    def _read_session(self, language: str, sequence: int) -> Mapping[UnitKey, str]:
        path = self._root / language / f"{sequence}.json"
        if not path.is_file():
            return MappingProxyType({})

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt section file: {e}", path=str(path), language=language) from e
        except OSError as e:
            raise StoreError(f"Cannot read section file: {e}", path=str(path), language=language) from e

        if not isinstance(data, dict):
            raise StoreError("Section file must hold a JSON object", path=str(path), language=language)

        units: dict[UnitKey, str] = {}
        for reference, text in data.items():
            key = UnitKey.parse(reference, collection=self._collection)
            if key is None or not isinstance(text, str):
                raise StoreError(f"Malformed entry '{reference}'", path=str(path), language=language)
            units[key] = text
        return MappingProxyType(units)

    def get_unit_text(self, key: UnitKey, language: str) -> Optional[str]:
        self._check_root()
        if key.collection != self._collection:
            return None
        return self._load(language.lower(), key.sequence).get(key)

    def _sequences(self, language: str) -> list[int]:
        lang_dir = self._root / language
        if not lang_dir.is_dir():
            return []
        return sorted(int(p.stem) for p in lang_dir.glob("*.json") if p.stem.isdigit())

    def unit_keys(self, language: str) -> list[UnitKey]:
        self._check_root()
        language = language.lower()
        keys: list[UnitKey] = []
        for sequence in self._sequences(language):
            keys.extend(self._load(language, sequence))
        return sorted(keys)

    def languages(self) -> list[str]:
        self._check_root()
        return sorted(p.name for p in self._root.iterdir() if p.is_dir())
