"""Canonical text form shared by every matching and categorization step."""

from __future__ import annotations

import re
import unicodedata

# anything that is not a letter, digit or whitespace; \w also admits "_"
_NON_WORD = re.compile(r"[^\w\s]|_")
_SPACES = re.compile(r"\s+")


def normalize(value) -> str:
    """Lowercase, fold accents, turn punctuation into spaces and collapse whitespace.

    Total and idempotent: non-string input gives "", and
    normalize(normalize(x)) == normalize(x) for every string x.
    """
    if not isinstance(value, str) or not value:
        return ""
    s = unicodedata.normalize("NFKD", value.lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    # compatibility decompositions can produce uppercase letters (e.g. "ℌ" -> "H")
    s = s.lower()
    s = _NON_WORD.sub(" ", s)
    return _SPACES.sub(" ", s).strip()
