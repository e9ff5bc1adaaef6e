"""Pure text helpers: slugs, read-time estimates and excerpts."""

import math
import re
import unicodedata
from collections.abc import Iterator

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150
EXCERPT_MARKER = "..."

_SEPARATOR_RUNS = re.compile(r"[\s_-]+")
_WHITESPACE = re.compile(r"\s+")


def _is_slug_char(ch: str) -> bool:
    # Word characters plus combining marks (Devanagari/Tamil vowel signs).
    if ch.isalnum() or ch == "_" or ch == "-" or ch.isspace():
        return True
    return unicodedata.category(ch).startswith("M")


def slugify(text: str) -> str:
    """Turn a title or name into a lowercase, hyphen-separated slug.

    >>> slugify("Hello, World! 2024")
    'hello-world-2024'
    """
    lowered = text.lower()
    kept = "".join(ch for ch in lowered if _is_slug_char(ch))
    return _SEPARATOR_RUNS.sub("-", kept).strip("-")


def slug_candidates(base: str) -> Iterator[str]:
    """Yield ``base``, then ``base-2``, ``base-3`` ... for collision suffixing."""
    yield base
    n = 2
    while True:
        yield f"{base}-{n}"
        n += 1


def estimate_read_time(content: str) -> int:
    """Minutes needed to read ``content`` at 200 words per minute, at least 1."""
    words = [w for w in _WHITESPACE.split(content) if w]
    return max(1, math.ceil(len(words) / WORDS_PER_MINUTE))


def derive_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    """Default summary: the first ``length`` characters followed by an ellipsis."""
    return content[:length] + EXCERPT_MARKER
