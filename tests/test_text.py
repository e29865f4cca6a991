# tests/test_text.py
from folio.app.utils.text import make_excerpt, parse_bool, reading_time, slugify, split_tags


def test_slugify_strips_punctuation_and_collapses_dashes():
    assert slugify("Hello, World! ") == "hello-world"
    assert slugify("A  B--C") == "a-b-c"


def test_slugify_trims_edge_hyphens_and_keeps_underscores():
    assert slugify("  --Snake_case Title--  ") == "snake_case-title"
    assert slugify("Ünïcode & symbols!") == "ncode-symbols"


def test_slugify_is_deterministic():
    title = "Getting Started with FastAPI 0.110"
    assert slugify(title) == slugify(title) == "getting-started-with-fastapi-0110"


def test_reading_time():
    assert reading_time(" ".join(["word"] * 400)) == 2
    assert reading_time(" ".join(["word"] * 150)) == 1
    assert reading_time(" ".join(["word"] * 401)) == 3
    assert reading_time("") == 1


def test_make_excerpt():
    assert make_excerpt("short") == "short..."
    assert make_excerpt("x" * 200) == "x" * 150 + "..."


def test_split_tags():
    assert split_tags("python, fastapi,, sql ") == ["python", "fastapi", "sql"]
    assert split_tags("") == []
    assert split_tags(None) == []


def test_parse_bool():
    assert parse_bool("true") is True
    assert parse_bool("TRUE") is True
    assert parse_bool("false") is False
    assert parse_bool("yes") is False
    assert parse_bool(True) is True
    assert parse_bool(None) is False
