import importlib.util
import json
import sys
from pathlib import Path

import pytest

from conftest import EN_16_50, EN_16_51, FR_16_51


SCRIPTS_DIR = Path(__file__).resolve().parents[1] / "scripts"


def _load_script(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def corpus(tmp_path):
    sections = tmp_path / "sections"
    for language, units in {"en": {"16.50": EN_16_50, "16.51": EN_16_51}, "fr": {"16.51": FR_16_51}}.items():
        (sections / language).mkdir(parents=True)
        (sections / language / "16.json").write_text(json.dumps(units, ensure_ascii=False), encoding="utf-8")

    claims = tmp_path / "claims.json"
    claims.write_text(json.dumps([
        {"reference": "16.51", "excerpts": {"en": "Love is unity."}},
        {"reference": "16.50", "excerpts": {"en": "Love is unity. It is the Creator."}},
    ]), encoding="utf-8")
    return sections, claims


def _events(out: str) -> list[dict]:
    return [json.loads(line) for line in out.splitlines() if line.startswith("{")]


def test_fill_missing_excerpts(corpus, monkeypatch, capsys) -> None:
    sections, claims = corpus
    script = _load_script("fill_missing_excerpts")
    monkeypatch.setattr(sys, "argv", [
        "fill_missing_excerpts.py", "--claims", str(claims), "--sections-dir", str(sections), "--languages", "fr",
    ])

    assert script.main() == 0

    events = _events(capsys.readouterr().out)
    assert events[0]["type"] == "job_start"
    assert events[-1]["type"] == "job_done"
    assert events[-1]["filled"] == 1
    assert events[-1]["unresolved"] == 1

    saved = json.loads(claims.read_text(encoding="utf-8"))
    assert saved[0]["excerpts"]["fr"] == "L'amour est l'unité."
    assert "fr" not in saved[1]["excerpts"]


def test_fill_missing_excerpts_dry_run(corpus, monkeypatch, capsys) -> None:
    sections, claims = corpus
    before = claims.read_text(encoding="utf-8")
    script = _load_script("fill_missing_excerpts")
    monkeypatch.setattr(sys, "argv", [
        "fill_missing_excerpts.py", "--claims", str(claims), "--sections-dir", str(sections),
        "--languages", "fr", "--dry-run",
    ])

    assert script.main() == 0
    assert claims.read_text(encoding="utf-8") == before
    assert _events(capsys.readouterr().out)[-1]["written"] is None


def test_validate_quotes_reports_findings(corpus, tmp_path, monkeypatch, capsys) -> None:
    sections, claims = corpus
    report = tmp_path / "report.json"
    script = _load_script("validate_quotes")
    monkeypatch.setattr(sys, "argv", [
        "validate_quotes.py", "--claims", str(claims), "--sections-dir", str(sections), "--report", str(report),
    ])

    assert script.main() == 1

    assert "1 finding(s)" in capsys.readouterr().out
    assert json.loads(report.read_text(encoding="utf-8")) == {
        "en": [{"reference": "16.50", "status": "wrong_reference", "suggestedReference": "16.51"}],
    }


def test_fill_missing_excerpts_keeps_document_shape(corpus, monkeypatch, capsys) -> None:
    sections, claims = corpus
    context = {"sessionTitle": "Session 16", "speaker": "Ra"}
    claims.write_text(json.dumps({
        "version": "1.0",
        "claims": [
            {"reference": "16.51", "conceptId": "love", "context": context, "excerpts": {"en": "Love is unity."}},
        ],
    }), encoding="utf-8")
    script = _load_script("fill_missing_excerpts")
    monkeypatch.setattr(sys, "argv", [
        "fill_missing_excerpts.py", "--claims", str(claims), "--sections-dir", str(sections), "--languages", "fr",
    ])

    assert script.main() == 0
    capsys.readouterr()

    saved = json.loads(claims.read_text(encoding="utf-8"))
    assert saved["version"] == "1.0"
    record = saved["claims"][0]
    assert record["conceptId"] == "love"
    assert record["context"] == context
    assert record["excerpts"] == {"en": "Love is unity.", "fr": "L'amour est l'unité."}


def test_validate_quotes_fix_prints_cited_unit_text(corpus, monkeypatch, capsys) -> None:
    sections, claims = corpus
    script = _load_script("validate_quotes")
    monkeypatch.setattr(sys, "argv", [
        "validate_quotes.py", "--claims", str(claims), "--sections-dir", str(sections), "--fix",
    ])

    assert script.main() == 1

    out = capsys.readouterr().out
    corrections = [json.loads(line) for line in out.splitlines() if line.startswith("{")]
    assert corrections == [{
        "reference": "16.50",
        "text": "Can you tell me of the veil? The veil is the forgetting that each incarnation brings.",
    }]


def test_validate_inline_quotes(corpus, tmp_path, monkeypatch, capsys) -> None:
    sections, _ = corpus
    content = tmp_path / "content"
    content.mkdir()
    (content / "love.json").write_text(json.dumps({
        "body": 'Ra says "Love is unity. It is the Creator." here.',
        "relatedPassage": "16.51",
        "aside": 'As said, "Love is unity. It is the Creator." (16.50)',
        "elided": 'Compare "What is love ... Love is unity." (16.51)',
    }, indent=2), encoding="utf-8")
    report = tmp_path / "inline.json"
    script = _load_script("validate_inline_quotes")
    monkeypatch.setattr(sys, "argv", [
        "validate_inline_quotes.py", "--content", str(content), "--sections-dir", str(sections),
        "--report", str(report),
    ])

    assert script.main() == 1

    out = capsys.readouterr().out
    assert "Inline quotes found: 3" in out
    assert "FAIL love.json:4 (16.50): wrong_reference (found in 16.51)" in out
    assert json.loads(report.read_text(encoding="utf-8")) == [{
        "source": "love.json",
        "line": 4,
        "reference": "16.50",
        "status": "wrong_reference",
        "suggestedReference": "16.51",
    }]
