"""
Lexical matching helpers.

All functions expect folded text (see normalizer.fold) unless stated otherwise.
"""

from typing import Optional

from crossquote.core.normalizer import fold_with_offsets

# Stripped from both ends of a signature token
_EDGE_PUNCTUATION = ".,;:!?\"'()[]{}<>¿¡…-*"


def prefix_containment(
    a: str,
    b: str,
    contain_chars: int = 40,
    exact_chars: int = 30,
) -> bool:
    """
    Loose sentence equivalence used for sentence-level matching.

    True if either text contains the other's first ``contain_chars``
    characters, or both share the same first ``exact_chars`` characters.

    Args:
        a: First folded sentence
        b: Second folded sentence
        contain_chars: Prefix length for the containment test
        exact_chars: Prefix length for the exact-prefix test

    Returns:
        True if the sentences match
    """
    if not a or not b:
        return False
    if a[:contain_chars] in b or b[:contain_chars] in a:
        return True
    return a[:exact_chars] == b[:exact_chars]


def lexical_signature(
    folded_text: str,
    size: int = 15,
    min_chars: int = 5,
) -> list[str]:
    """
    Bounded list of an excerpt's longer words, in text order.

    Args:
        folded_text: Folded excerpt
        size: Maximum number of tokens
        min_chars: Minimum token length after stripping edge punctuation

    Returns:
        Up to ``size`` tokens (duplicates kept)

    Examples:
        >>> lexical_signature("love is the great unity of creation.")
        ['great', 'unity', 'creation']
    """
    tokens = []
    for raw in folded_text.split():
        token = raw.strip(_EDGE_PUNCTUATION)
        if len(token) >= min_chars:
            tokens.append(token)
        if len(tokens) >= size:
            break
    return tokens


def elided_parts(folded_excerpt: str, min_chars: int = 10) -> list[str]:
    """
    Parts of an excerpt elided with "...", keeping those of ``min_chars`` or more.

    Examples:
        >>> elided_parts("love is the great unity ... it is the creator.")
        ['love is the great unity', 'it is the creator.']
    """
    if "..." not in folded_excerpt:
        return []
    parts = (part.strip() for part in folded_excerpt.split("..."))
    return [part for part in parts if len(part) >= min_chars]


def compute_coverage(
    folded_excerpt: str,
    folded_unit: str,
    signature: Optional[list[str]] = None,
    size: int = 15,
    min_chars: int = 5,
) -> float:
    """
    Fraction of the excerpt's signature tokens found as substrings of a unit.

    An excerpt that occurs verbatim in the unit always scores 1.0, and so
    does an elided excerpt ("first part ... second part") whose every part
    occurs. An excerpt with an empty signature scores 0.0 otherwise.

    Args:
        folded_excerpt: Folded excerpt
        folded_unit: Folded unit text
        signature: Precomputed signature of the excerpt
        size: Signature size when computing it here
        min_chars: Minimum token length when computing it here

    Returns:
        Coverage between 0.0 and 1.0
    """
    if not folded_excerpt or not folded_unit:
        return 0.0
    if folded_excerpt in folded_unit:
        return 1.0

    parts = elided_parts(folded_excerpt)
    if parts and all(part in folded_unit for part in parts):
        return 1.0

    if signature is None:
        signature = lexical_signature(folded_excerpt, size=size, min_chars=min_chars)
    if not signature:
        return 0.0

    found = sum(1 for token in signature if token in folded_unit)
    return found / len(signature)


def evidence_snippet(
    unit_text: str,
    signature: list[str],
    length: int = 160,
) -> Optional[str]:
    """
    Snippet of a unit starting at the word containing the first signature hit.

    The hit is searched in the folded unit but the snippet is cut from
    ``unit_text`` itself, so its case and punctuation are kept.

    Args:
        unit_text: Normalized (not folded) unit text
        signature: Folded signature tokens
        length: Maximum snippet length

    Returns:
        Snippet text, or None if no signature token occurs in the unit
    """
    folded_unit, offsets = fold_with_offsets(unit_text)
    positions = [folded_unit.find(token) for token in signature if token]
    positions = [p for p in positions if p >= 0]
    if not positions:
        return None

    start = offsets[min(positions)]
    word_start = unit_text.rfind(" ", 0, start) + 1
    snippet = unit_text[word_start:word_start + length]
    if word_start + length < len(unit_text):
        cut = snippet.rfind(" ")
        if cut > 0:
            snippet = snippet[:cut]
    return snippet.strip() or None
