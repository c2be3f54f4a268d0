import json

import pytest

from crossquote.data import InlineQuote, content_files, find_inline_quotes, load_inline_quotes
from crossquote.exceptions import ClaimDataError


CONTENT = r'''{
  "title": "Love",
  "body": "Ra says \"love is the great unity of all things\" in answer to the question.",
  "relatedPassage": "16.51",
  "summary": "As noted, \"the veil is the forgetting that each incarnation brings\" (16.50).",
  "recap": "Again: \"The veil is the forgetting that each incarnation brings\" (16.50).",
  "notes": "\"**A heading that is long enough to match**\" (12.3)"
}'''


def test_quotes_in_json_content() -> None:
    quotes = find_inline_quotes(CONTENT, source="love.json")

    assert quotes == [
        InlineQuote(source="love.json", line=3, quote="love is the great unity of all things", reference="16.51"),
        InlineQuote(
            source="love.json",
            line=5,
            quote="the veil is the forgetting that each incarnation brings",
            reference="16.50",
        ),
    ]


def test_attributed_quote_in_prose() -> None:
    text = "As Ra states: “Love is the great unity of all things” (16.51)."

    quotes = find_inline_quotes(text, source="notes.md")

    assert [(q.line, q.reference, q.quote) for q in quotes] == [(1, "16.51", "Love is the great unity of all things")]


def test_attributed_quote_needs_a_reference() -> None:
    assert find_inline_quotes('Ra says "love is the great unity of all things" and more.') == []


def test_short_quotes_are_ignored() -> None:
    assert find_inline_quotes('He said "too short" (16.51).') == []


def test_other_speakers() -> None:
    text = 'Q\'uo explains "the heart is the seat of the soul"\n"relatedPassage": "2010.3"'

    assert [q.reference for q in find_inline_quotes(text, speakers=["Q'uo"])] == ["2010.3"]
    assert find_inline_quotes(text) == []


def test_quote_becomes_a_claim() -> None:
    quote = InlineQuote(source="love.json", line=3, quote="love is the great unity of all things", reference="16.51")

    claim = quote.to_claim("en")

    assert claim.reference == "16.51"
    assert claim.excerpt_for("en") == "love is the great unity of all things"
    assert claim.model_extra == {"source": "love.json", "line": 3}
    assert str(quote) == "love.json:3 (16.51)"


def test_content_files_skip_private_files(tmp_path) -> None:
    for name in ["b.json", "a.json", "_index.json", "notes.md"]:
        (tmp_path / name).write_text("{}", encoding="utf-8")

    assert [p.name for p in content_files(tmp_path)] == ["a.json", "b.json"]
    assert content_files(tmp_path / "notes.md") == [tmp_path / "notes.md"]


def test_content_path_must_exist(tmp_path) -> None:
    with pytest.raises(ClaimDataError):
        content_files(tmp_path / "missing")


def test_load_inline_quotes_from_files(tmp_path) -> None:
    path = tmp_path / "love.json"
    path.write_text(CONTENT, encoding="utf-8")

    quotes = load_inline_quotes([path])

    assert [q.reference for q in quotes] == ["16.51", "16.50"]
    assert all(q.source == "love.json" for q in quotes)


def test_unreadable_content_file(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(ClaimDataError) as excinfo:
        load_inline_quotes([path])
    assert excinfo.value.path == str(path)
