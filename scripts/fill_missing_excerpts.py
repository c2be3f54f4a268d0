#!/usr/bin/env python3
"""Fill missing translated excerpts in a claims file.

Aligns every claim that lacks an excerpt in a target language and records
the aligned span. The claims file is written once, after all languages are
processed, keeping the file's other keys and fields. Emits JSONL progress events to stdout.
"""

import argparse
import json
import sys
import time
from pathlib import Path

# Allow running without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from crossquote import AlignmentStrategy, CrossquoteError, ExcerptEngine, get_settings
from crossquote._logging import configure_logging, log_error
from crossquote.data import JsonSectionStore, apply_alignments, load_claim_document, save_claims


DEFAULT_LANGUAGES = "es,de,fr"


def emit(event: dict) -> None:
    print(json.dumps(event, ensure_ascii=False))
    sys.stdout.flush()


def parse_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [p.strip().lower() for p in raw.split(",") if p.strip()]


def parse_strategies(raw: str | None) -> list[AlignmentStrategy] | None:
    names = parse_list(raw)
    if not names:
        return None
    return [AlignmentStrategy(name) for name in names]


def main() -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Fill missing translated excerpts")
    parser.add_argument("--claims", required=True, help="JSON file with excerpt claims")
    parser.add_argument(
        "--sections-dir",
        default=str(settings.sections_dir) if settings.sections_dir else None,
        help="Section corpus root (<lang>/<session>.json)",
    )
    parser.add_argument("--languages", default=DEFAULT_LANGUAGES, help="Comma-separated target languages")
    parser.add_argument(
        "--strategies",
        default=None,
        help="Comma-separated strategies to enable (proportional_sentence,character_offset,lead_span)",
    )
    parser.add_argument("--output", default=None, help="Output file (default: overwrite --claims)")
    parser.add_argument("--dry-run", action="store_true", help="Align but do not write anything")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")

    args = parser.parse_args()
    configure_logging(args.log_level)

    if not args.sections_dir:
        parser.error("--sections-dir is required (or set CROSSQUOTE_SECTIONS_DIR)")

    try:
        strategies = parse_strategies(args.strategies)
    except ValueError as exc:
        parser.error(str(exc))

    claims_path = Path(args.claims)
    output_path = Path(args.output) if args.output else claims_path
    languages = parse_list(args.languages)

    try:
        claims, container = load_claim_document(claims_path)
        engine = ExcerptEngine(JsonSectionStore(args.sections_dir), settings=settings, strategies=strategies)
    except CrossquoteError as exc:
        log_error("Excerpt fill aborted", error=exc)
        emit({"type": "job_error", "message": str(exc)})
        return 2

    emit({"type": "job_start", "claims": len(claims), "languages": languages})
    start_time = time.time()

    filled = 0
    unresolved = 0

    try:
        for language in languages:
            missing = [i for i, claim in enumerate(claims) if claim.excerpt_for(language) is None]
            emit({"type": "language_start", "language": language, "missing": len(missing)})

            subset = [claims[i] for i in missing]
            results = []
            for result, claim in zip(engine.align_many(subset, language), subset):
                results.append(result)
                if result.is_aligned:
                    emit({
                        "type": "claim_aligned",
                        "reference": claim.reference,
                        "language": language,
                        "strategy": result.strategy.value,
                        "confidence": result.confidence.value,
                    })
                else:
                    reason = result.unresolved_reason.value if result.unresolved_reason else "no_match"
                    emit({
                        "type": "claim_unresolved",
                        "reference": claim.reference,
                        "language": language,
                        "reason": reason,
                    })

            for i, claim in zip(missing, apply_alignments(subset, results, language)):
                claims[i] = claim

            aligned = sum(1 for r in results if r.is_aligned)
            filled += aligned
            unresolved += len(results) - aligned
            emit({"type": "language_done", "language": language, "aligned": aligned, "total": len(results)})
    except CrossquoteError as exc:
        log_error("Excerpt fill aborted", error=exc)
        emit({"type": "job_error", "message": str(exc)})
        return 2

    if not args.dry_run and filled:
        save_claims(claims, output_path, container=container)

    emit({
        "type": "job_done",
        "filled": filled,
        "unresolved": unresolved,
        "written": str(output_path) if not args.dry_run and filled else None,
        "seconds": round(time.time() - start_time, 2),
    })
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
