"""
Data access for crossquote: document stores, language profiles, claim files
and inline quotes in content files.
"""

from crossquote.data.claims import apply_alignments, load_claim_document, load_claims, save_claims
from crossquote.data.languages import DEFAULT_PROFILES, LanguageRegistry, default_registry
from crossquote.data.store import BaseDocumentStore, InMemoryDocumentStore, JsonSectionStore
from crossquote.data.inline_quotes import InlineQuote, content_files, find_inline_quotes, load_inline_quotes

__all__ = [
    "BaseDocumentStore",
    "InMemoryDocumentStore",
    "JsonSectionStore",
    "DEFAULT_PROFILES",
    "LanguageRegistry",
    "default_registry",
    "load_claim_document",
    "load_claims",
    "save_claims",
    "apply_alignments",
    "InlineQuote",
    "find_inline_quotes",
    "load_inline_quotes",
    "content_files",
]
