"""
Reading and writing excerpt claim files.

A claims file is a JSON list of claim objects, or an object holding that
list under ``"claims"`` next to other keys::

    {
      "version": "1.0",
      "claims": [
        {"reference": "16.51", "conceptId": "love", "excerpts": {"en": "Love is unity."}}
      ]
    }

Keys a claim record carries beyond the modelled fields are kept on the
claim and written back. Writing happens once, after a batch; the engine
itself never persists claims.
"""

import json
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

from crossquote.exceptions import ClaimDataError
from crossquote.models import AlignmentResult, ExcerptClaim


def load_claim_document(path: str | Path) -> tuple[list[ExcerptClaim], Optional[dict[str, Any]]]:
    """
    Load excerpt claims together with the object that wraps them.

    Returns:
        (claims, container). ``container`` is the top-level object when the
        claims sit under its ``"claims"`` key, or None for a bare list.

    Raises:
        ClaimDataError: If the file is missing, not JSON, or not a list of claims
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ClaimDataError("Claims file not found.", path=str(path)) from e
    except (OSError, json.JSONDecodeError) as e:
        raise ClaimDataError(f"Failed to load excerpt claims: {e}", path=str(path)) from e

    container = None
    if isinstance(data, dict):
        container = data
        data = data.get("claims")
    if not isinstance(data, list):
        raise ClaimDataError("Claims file must hold a list of claims.", path=str(path))

    claims = []
    for i, item in enumerate(data):
        try:
            claims.append(ExcerptClaim.model_validate(item))
        except ValidationError as e:
            raise ClaimDataError(f"Invalid claim at index {i}: {e.errors()[0]['msg']}", path=str(path)) from e
    return claims, container


def load_claims(path: str | Path) -> list[ExcerptClaim]:
    """
    Load excerpt claims from a JSON file.

    Raises:
        ClaimDataError: If the file is missing, not JSON, or not a list of claims
    """
    claims, _ = load_claim_document(path)
    return claims


def save_claims(
    claims: Iterable[ExcerptClaim],
    path: str | Path,
    container: Optional[dict[str, Any]] = None,
) -> Path:
    """
    Write claims as JSON (UTF-8, unescaped) and return the path.

    With ``container`` the claims replace its ``"claims"`` key and every
    other key is written unchanged; without it a bare list is written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [claim.model_dump(mode="json") for claim in claims]
    data = records if container is None else {**container, "claims": records}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.write("\n")
    return path


def apply_alignments(
    claims: Sequence[ExcerptClaim],
    results: Sequence[AlignmentResult],
    language: str,
) -> list[ExcerptClaim]:
    """
    Record aligned spans on the claims they belong to.

    ``results`` must be parallel to ``claims``. Claims whose result is
    unaligned are returned unchanged; the input claims are never modified.
    """
    if len(claims) != len(results):
        raise ValueError(f"Got {len(results)} results for {len(claims)} claims")

    updated = []
    for claim, result in zip(claims, results):
        if result.is_aligned:
            claim = claim.with_excerpt(language, result.text)
        updated.append(claim)
    return updated
