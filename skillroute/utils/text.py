"""Text helpers shared by the parser, the matcher and the linter."""

from __future__ import annotations

import re
import unicodedata

_RE_NON_WORD = re.compile(r"[^\w\s]+")
_RE_UNDERSCORE = re.compile(r"_+")
_RE_WHITESPACE = re.compile(r"\s+")
_RE_SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")

# CJK Unified Ideographs (+ Extension A), CJK punctuation and full-width forms.
_RE_CJK = re.compile(r"[\u3000-\u303f\u3400-\u4dbf\u4e00-\u9fff\uff00-\uffef]")


def tokenize(text: str) -> list[str]:
    """Case-fold *text*, strip punctuation and split it into tokens.

    Every character that is not a letter or digit acts as a separator, so
    ``"Borrow-checker error!"`` becomes ``["borrow", "checker", "error"]``.
    """
    folded = unicodedata.normalize("NFKC", text or "").casefold()
    folded = _RE_NON_WORD.sub(" ", folded)
    folded = _RE_UNDERSCORE.sub(" ", folded)
    return folded.split()


def normalize(text: str) -> str:
    """Return the tokens of *text* joined by single spaces."""
    return " ".join(tokenize(text))


def collapse_whitespace(text: str) -> str:
    return _RE_WHITESPACE.sub(" ", text or "").strip()


def slugify(text: str) -> str:
    """Turn a declared skill name into a SkillID (``"Rust Error"`` -> ``"rust-error"``)."""
    folded = unicodedata.normalize("NFKC", text or "").casefold()
    return _RE_SLUG_SEPARATOR.sub("-", folded).strip("-")


def contains_cjk(text: str) -> bool:
    return bool(_RE_CJK.search(text or ""))


def display_width(text: str) -> int:
    """Length of *text* counting each CJK character as two columns."""
    return sum(2 if _RE_CJK.match(ch) else 1 for ch in text)
