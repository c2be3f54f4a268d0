#!/usr/bin/env python3
"""Validate quotes cited inline in prose content.

Scans content files for quoted passages that cite a unit, e.g.
``Ra says "..."`` next to a ``"relatedPassage"`` field or ``"..." (16.51)``,
and verifies each quote against the section corpus. Quotes elided with
"..." are accepted when every part occurs in the cited unit. Exits with
status 1 when any finding is reported.
"""

import argparse
import json
import sys
from pathlib import Path

# Allow running without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from crossquote import CrossquoteError, ExcerptEngine, get_settings, summarize_validation
from crossquote._logging import configure_logging, log_error
from crossquote.data import JsonSectionStore
from crossquote.data.inline_quotes import DEFAULT_SPEAKERS, content_files, load_inline_quotes


def _excerpt(text: str, limit: int = 100) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def print_results(quotes: list, results: list, verbose: bool) -> None:
    counts = summarize_validation(results)
    print(f"\nInline quotes found: {len(quotes)}")
    for status, count in counts.items():
        if count:
            print(f"  {status:<20} {count}")

    for quote, result in zip(quotes, results):
        if not result.is_finding:
            if verbose:
                print(f"  ok   {quote}")
            continue
        line = f"  FAIL {quote}: {result.status.value}"
        if result.suggested_reference:
            line += f" (found in {result.suggested_reference})"
        print(line)
        print(f'       "{_excerpt(quote.quote)}"')


def main() -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Validate quotes cited inline in prose content")
    parser.add_argument("--content", required=True, help="Content file or directory to scan")
    parser.add_argument("--pattern", default="*.json", help="File pattern inside a content directory")
    parser.add_argument(
        "--sections-dir",
        default=str(settings.sections_dir) if settings.sections_dir else None,
        help="Section corpus root (<lang>/<session>.json)",
    )
    parser.add_argument("--language", default=settings.source_language, help="Language of the quotes")
    parser.add_argument(
        "--speakers",
        default=",".join(DEFAULT_SPEAKERS),
        help="Comma-separated names an attributed quote may follow",
    )
    parser.add_argument("--report", default=None, help="Write the findings to this JSON file")
    parser.add_argument("--verbose", action="store_true", help="Also list valid quotes")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")

    args = parser.parse_args()
    configure_logging(args.log_level)

    if not args.sections_dir:
        parser.error("--sections-dir is required (or set CROSSQUOTE_SECTIONS_DIR)")

    language = args.language.strip().lower()
    speakers = [s.strip() for s in args.speakers.split(",") if s.strip()]

    try:
        quotes = load_inline_quotes(content_files(args.content, args.pattern), speakers=speakers)
        engine = ExcerptEngine(JsonSectionStore(args.sections_dir), settings=settings)
        results = list(engine.verify_many([q.to_claim(language) for q in quotes], language))
    except CrossquoteError as exc:
        log_error("Inline quote validation aborted", error=exc)
        return 2

    print_results(quotes, results, args.verbose)

    findings = [
        {"source": quote.source, "line": quote.line, **result.to_record()}
        for quote, result in zip(quotes, results)
        if result.is_finding
    ]

    if args.report:
        report_path = Path(args.report)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(findings, f, ensure_ascii=False, indent=2)
        print(f"\nReport written to {report_path}")

    print(f"\n{len(findings)} finding(s)")
    return 1 if findings else 0


if __name__ == "__main__":
    raise SystemExit(main())
