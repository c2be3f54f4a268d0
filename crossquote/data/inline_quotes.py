"""
Inline quotes cited in prose content.

Study material often quotes a unit inside running text rather than as a
structured claim::

    Ra says "love is the great unity of all things" when asked ... (16.51)
    ... as in "the veil is the forgetting that each incarnation brings" (16.50).

The extractor finds such quotes, resolves the unit they cite and turns them
into ExcerptClaims that the verifier can check like any other claim. Content
files are scanned as raw text, so JSON-escaped quotes (``\\"``) work too.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from crossquote._logging import get_logger
from crossquote.core.normalizer import canonicalize_quotes, fold
from crossquote.exceptions import ClaimDataError
from crossquote.models import ExcerptClaim


logger = get_logger("inline_quotes")

DEFAULT_SPEAKERS = ("Ra",)
SPEECH_VERBS = (
    "says",
    "states",
    "asks",
    "explicitly states",
    "explicitly says",
    "describes",
    "explains",
    "confirms",
    "notes",
)

_QUOTE = r'\\?"'
# "quoted text" (16.51), with up to 30 characters between quote and reference
_CITED_QUOTE = re.compile(rf'{_QUOTE}([^"]{{20,}}?){_QUOTE}[^(]{{0,30}}\((\d+\.\d+)\)')
_INLINE_REFERENCE = re.compile(r"\((\d+\.\d+)\)")
_RELATED_PASSAGE = re.compile(r'"relatedPassage":\s*"(\d+\.\d+)"')

# Quotes holding formatted content rather than a citation
_MARKUP = ("**", "###", "\\n")
# Lines of embedded markdown documents are skipped wholesale
_MARKDOWN_LINE_CHARS = 500

# Lines searched for a "relatedPassage" field around an attributed quote
_LOOK_BEHIND_LINES = 3
_LOOK_AHEAD_LINES = 7


@dataclass(frozen=True)
class InlineQuote:
    """A quote found in content text, with the unit it cites."""
    source: str
    line: int
    quote: str
    reference: str

    def to_claim(self, language: str) -> ExcerptClaim:
        """Claim for the verifier; ``source`` and ``line`` ride along as extra fields."""
        return ExcerptClaim(
            reference=self.reference,
            excerpts={language: self.quote},
            source=self.source,
            line=self.line,
        )

    def __str__(self) -> str:
        return f"{self.source}:{self.line} ({self.reference})"


def _speech_pattern(speakers: tuple[str, ...]) -> re.Pattern:
    names = "|".join(re.escape(s) for s in speakers)
    verbs = "|".join(v.replace(" ", r"\s+") for v in SPEECH_VERBS)
    return re.compile(
        rf'\b(?:{names})\s+(?:{verbs})[:\s]+{_QUOTE}([^"]{{15,}}?){_QUOTE}',
        re.IGNORECASE,
    )


def _is_markup(quote: str) -> bool:
    return any(marker in quote for marker in _MARKUP)


def _nearby_reference(lines: list[str], index: int) -> Optional[str]:
    first = max(0, index - _LOOK_BEHIND_LINES)
    last = min(len(lines), index + _LOOK_AHEAD_LINES + 1)
    for line in lines[first:last]:
        match = _RELATED_PASSAGE.search(line)
        if match:
            return match.group(1)

    match = _INLINE_REFERENCE.search(lines[index])
    return match.group(1) if match else None


def find_inline_quotes(
    text: str,
    source: str = "",
    speakers: Iterable[str] = DEFAULT_SPEAKERS,
) -> list[InlineQuote]:
    """
    Find cited quotes in a piece of content.

    Two forms are recognized:
    - an attributed quote (``Ra says "..."``) of 15+ characters, citing the
      ``"relatedPassage"`` field of a nearby line or an inline ``(NN.NN)``
      on the same line;
    - any quote of 20+ characters followed within 30 characters by ``(NN.NN)``.

    Quotes are deduplicated on (reference, first 50 folded characters).

    Args:
        text: Raw content text
        source: Name reported for the content (e.g. its file name)
        speakers: Names an attributed quote may follow

    Returns:
        InlineQuote list in order of appearance
    """
    speech = _speech_pattern(tuple(speakers))
    lines = canonicalize_quotes(text).split("\n")

    found: list[InlineQuote] = []
    for index, line in enumerate(lines):
        if '"markdown"' in line and len(line) > _MARKDOWN_LINE_CHARS:
            continue

        for match in speech.finditer(line):
            quote = match.group(1).strip()
            if _is_markup(quote):
                continue
            reference = _nearby_reference(lines, index)
            if reference:
                found.append(InlineQuote(source=source, line=index + 1, quote=quote, reference=reference))

        for match in _CITED_QUOTE.finditer(line):
            quote = match.group(1).strip()
            if _is_markup(quote):
                continue
            found.append(InlineQuote(source=source, line=index + 1, quote=quote, reference=match.group(2)))

    seen: set[tuple[str, str]] = set()
    unique = []
    for item in found:
        key = (item.reference, fold(item.quote)[:50])
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def load_inline_quotes(
    paths: Iterable[str | Path],
    speakers: Iterable[str] = DEFAULT_SPEAKERS,
) -> list[InlineQuote]:
    """
    Extract inline quotes from content files, file by file in the given order.

    Raises:
        ClaimDataError: If a file cannot be read
    """
    speakers = tuple(speakers)
    quotes: list[InlineQuote] = []
    for path in paths:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ClaimDataError(f"Failed to read content file: {e}", path=str(path)) from e

        found = find_inline_quotes(text, source=path.name, speakers=speakers)
        logger.debug(f"{path.name}: {len(found)} inline quotes")
        quotes.extend(found)
    return quotes


def content_files(root: str | Path, pattern: str = "*.json") -> list[Path]:
    """
    Content files under ``root`` matching ``pattern``, sorted by name.

    Names starting with ``_`` are skipped. A file path is returned as is.

    Raises:
        ClaimDataError: If ``root`` does not exist
    """
    root = Path(root)
    if root.is_file():
        return [root]
    if not root.is_dir():
        raise ClaimDataError("Content path not found.", path=str(root))
    return sorted(p for p in root.glob(pattern) if p.is_file() and not p.name.startswith("_"))
