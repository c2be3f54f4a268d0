#!/usr/bin/env python3
"""Validate quoted excerpts against the section corpus.

Checks that every claim's excerpt occurs in the unit it cites, prints a
summary, and optionally writes a JSON report of the findings. With --fix,
the cited unit's text is printed for every finding so the quote can be
corrected by hand. Exits with status 1 when any finding is reported.
"""

import argparse
import json
import sys
from pathlib import Path

# Allow running without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from crossquote import CrossquoteError, ExcerptEngine, get_settings, summarize_validation, to_report
from crossquote._logging import configure_logging, log_error
from crossquote.data import JsonSectionStore, load_claims


def print_summary(language: str, results: list, verbose: bool) -> None:
    counts = summarize_validation(results)
    print(f"\n{language}: {len(results)} claims")
    for status, count in counts.items():
        if count:
            print(f"  {status:<20} {count}")

    for result in results:
        if not result.is_finding:
            if verbose:
                print(f"  ok   {result.reference}")
            continue
        line = f"  FAIL {result.reference}: {result.status.value}"
        if result.suggested_reference:
            line += f" (found in {result.suggested_reference})"
        print(line)
        if verbose and result.evidence_snippet:
            print(f"       {result.evidence_snippet}")


def print_corrections(engine: ExcerptEngine, language: str, results: list) -> None:
    corrections = []
    for result in results:
        if not result.is_finding:
            continue
        text = engine.unit_text(result.reference, language)
        if text:
            corrections.append({"reference": result.reference, "text": text})

    if corrections:
        print(f"\n{language}: cited unit text for {len(corrections)} finding(s)")
        for correction in corrections:
            print(json.dumps(correction, ensure_ascii=False))


def main() -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Validate quoted excerpts against the section corpus")
    parser.add_argument("--claims", required=True, help="JSON file with excerpt claims")
    parser.add_argument(
        "--sections-dir",
        default=str(settings.sections_dir) if settings.sections_dir else None,
        help="Section corpus root (<lang>/<session>.json)",
    )
    parser.add_argument(
        "--languages",
        default=settings.source_language,
        help="Comma-separated languages to validate",
    )
    parser.add_argument("--report", default=None, help="Write the findings to this JSON file")
    parser.add_argument("--verbose", action="store_true", help="Also list valid claims and evidence")
    parser.add_argument("--fix", action="store_true", help="Print the cited unit text for every finding")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")

    args = parser.parse_args()
    configure_logging(args.log_level)

    if not args.sections_dir:
        parser.error("--sections-dir is required (or set CROSSQUOTE_SECTIONS_DIR)")

    languages = [p.strip().lower() for p in args.languages.split(",") if p.strip()]

    report: dict[str, list[dict]] = {}
    findings = 0

    try:
        claims = load_claims(args.claims)
        engine = ExcerptEngine(JsonSectionStore(args.sections_dir), settings=settings)

        for language in languages:
            results = list(engine.verify_many(claims, language))
            print_summary(language, results, args.verbose)
            if args.fix:
                print_corrections(engine, language, results)

            failed = [r for r in results if r.is_finding]
            findings += len(failed)
            report[language] = to_report(failed)
    except CrossquoteError as exc:
        log_error("Validation aborted", error=exc)
        return 2

    if args.report:
        report_path = Path(args.report)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(report, f, ensure_ascii=False, indent=2)
        print(f"\nReport written to {report_path}")

    print(f"\n{findings} finding(s)")
    return 1 if findings else 0


if __name__ == "__main__":
    raise SystemExit(main())
