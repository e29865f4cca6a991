# folio/app/utils/text.py
import math
import re
from typing import List, Optional

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150

_NON_SLUG_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-{2,}")


def slugify(title: str) -> str:
    """
    Derive a URL slug from a title.

    >>> slugify("Hello, World! ")
    'hello-world'
    >>> slugify("A  B--C")
    'a-b-c'
    """
    slug = _NON_SLUG_CHARS.sub("", title.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip().strip("-")


def reading_time(content: str) -> int:
    """Minutes to read at 200 words per minute, never less than 1."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def make_excerpt(text: str, length: int = EXCERPT_LENGTH) -> str:
    return text[:length] + "..."


def split_tags(raw: Optional[str]) -> List[str]:
    """'a, b,,c ' -> ['a', 'b', 'c']"""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def parse_bool(raw) -> bool:
    """Form fields carry booleans as the strings 'true' / 'false'."""
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() == "true"
