"""Strip quantities, units and prep descriptors from a recipe line.

The reducer is a best-effort filter, not a grammar parser: it removes the
leading quantity run ("2 cups", "1 1/2 tbsp", "a pinch of"), descriptor words
anywhere ("minced", "large") and filler phrases ("to taste"), leaving the
ingredient head noun phrase for matching. Comma clauses that open with a
descriptor (", drained and rinsed") are prep notes and are cut whole.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

DESCRIPTORS: Tuple[str, ...] = (
    "fresh",
    "freshly",
    "chopped",
    "minced",
    "diced",
    "cubed",
    "organic",
    "large",
    "medium",
    "small",
    "extra large",
    "finely",
    "coarsely",
    "roughly",
    "thinly",
    "sliced",
    "grated",
    "shredded",
    "peeled",
    "seeded",
    "crushed",
    "ground",
    "halved",
    "quartered",
    "melted",
    "softened",
    "beaten",
    "trimmed",
    "rinsed",
    "deveined",
    "drained",
    "packed",
    "heaping",
    "about",
    "approximately",
)

UNITS: Tuple[str, ...] = (
    "cup",
    "cups",
    "c",
    "tablespoon",
    "tablespoons",
    "tbsp",
    "tbs",
    "teaspoon",
    "teaspoons",
    "tsp",
    "ounce",
    "ounces",
    "oz",
    "pound",
    "pounds",
    "lb",
    "lbs",
    "gram",
    "grams",
    "g",
    "kilogram",
    "kilograms",
    "kg",
    "milliliter",
    "milliliters",
    "ml",
    "liter",
    "liters",
    "l",
    "pint",
    "pints",
    "quart",
    "quarts",
    "can",
    "cans",
    "jar",
    "jars",
    "package",
    "packages",
    "pkg",
    "clove",
    "cloves",
    "slice",
    "slices",
    "piece",
    "pieces",
    "strip",
    "strips",
    "chunk",
    "chunks",
    "stick",
    "sticks",
    "head",
    "heads",
    "bunch",
    "bunches",
    "sprig",
    "sprigs",
    "pinch",
    "pinches",
    "dash",
    "dashes",
    "handful",
    "handfuls",
)

FILLER_PHRASES: Tuple[str, ...] = (
    "to taste",
    "as needed",
    "for garnish",
    "for serving",
    "at room temperature",
    "room temperature",
    "plus more",
    "divided",
    "optional",
)

# words that only count as noise inside the leading quantity run
_LEADING_FILLERS = frozenset({"a", "an", "of", "x"})

_VULGAR_FRACTIONS = "¼½¾⅐⅑⅒⅓⅔⅕⅖⅗⅘⅙⅚⅛⅜⅝⅞"
_QUANTITY = re.compile(
    r"^(?:\d+(?:[.,]\d+)?|\d*[" + _VULGAR_FRACTIONS + r"]|\d+/\d+)"
    r"(?:[-–](?:\d+(?:[.,]\d+)?|\d+/\d+))?x?$"
)
_PARENTHETICAL = re.compile(r"\([^)]*\)|\[[^\]]*\]")
_SPACES = re.compile(r"\s+")
_EDGE_PUNCT = " ,;:-–."


def _word_pattern(words: Iterable[str]) -> Optional[re.Pattern]:
    # longest first so "extra large" wins over "large"
    ordered = sorted({w for w in words if w}, key=len, reverse=True)
    if not ordered:
        return None
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in ordered) + r")\b", re.IGNORECASE)


_DESCRIPTOR_RE = _word_pattern(DESCRIPTORS)
_FILLER_RE = _word_pattern(FILLER_PHRASES)

# stands in for a removed descriptor until the conjunctions between them are gone
_MARK = "\ue000"
_JOINED_DESCRIPTORS = re.compile(
    re.escape(_MARK) + r"[\s,]*\b(?:and|or)\b\s*(?=" + re.escape(_MARK) + ")", re.IGNORECASE
)


def _is_quantity_token(token: str, units: frozenset) -> bool:
    low = token.lower().strip(",.;:")
    if not low:
        return True
    if low in units or low in _LEADING_FILLERS:
        return True
    if _QUANTITY.match(low):
        return True
    # glued quantity and unit, e.g. "200g" or "2tbsp"
    m = re.match(r"^(\d+(?:[.,]\d+)?)([a-z]+)$", low)
    return bool(m and m.group(2) in units)


def _tidy(s: str) -> str:
    s = _SPACES.sub(" ", s).strip()
    s = re.sub(r"\s+([,;:])", r"\1", s)
    s = re.sub(r"([,;:])(?:\s*[,;:])+", r"\1", s)
    return s.strip(_EDGE_PUNCT)


def _strip_leading_quantities(s: str, units: frozenset) -> str:
    tokens = s.split()
    i = 0
    while i < len(tokens) and _is_quantity_token(tokens[i], units):
        # a trailing word is the ingredient itself ("1 tsp cloves"), not a unit
        if i == len(tokens) - 1 and tokens[i].strip(",.;:").isalpha():
            break
        i += 1
    return " ".join(tokens[i:])


def _drop_prep_clauses(s: str, desc_re: Optional[re.Pattern]) -> str:
    """Cut comma clauses that open with a descriptor ("..., drained and rinsed")."""
    if desc_re is None or "," not in s:
        return s
    head, *rest = s.split(",")
    kept = [head]
    for clause in rest:
        if desc_re.match(clause.strip()):
            break
        kept.append(clause)
    return ",".join(kept)


def _remove_descriptors(s: str, desc_re: Optional[re.Pattern]) -> str:
    if desc_re is None:
        return s
    s = desc_re.sub(f" {_MARK} ", s)
    # "drained and rinsed": the conjunction goes with the descriptors around it
    s = _JOINED_DESCRIPTORS.sub(" ", s)
    return s.replace(_MARK, " ")


def _prepare(phrase: str, desc_re: Optional[re.Pattern]) -> str:
    s = _PARENTHETICAL.sub(" ", phrase)
    if _FILLER_RE is not None:
        s = _FILLER_RE.sub(" ", s)
    return _drop_prep_clauses(s, desc_re)


def _descriptor_re(descriptors: Optional[Iterable[str]]) -> Optional[re.Pattern]:
    return _DESCRIPTOR_RE if descriptors is None else _word_pattern(descriptors)


def _unit_set(units: Optional[Iterable[str]]) -> frozenset:
    return frozenset(u.lower() for u in (UNITS if units is None else units))


def strip_quantity(
    phrase,
    descriptors: Optional[Iterable[str]] = None,
    units: Optional[Iterable[str]] = None,
) -> str:
    """Like reduce_to_ingredient_core, but descriptor words inside the name survive.

    "1 lb ground beef, drained" -> "ground beef"
    """
    if not isinstance(phrase, str):
        return ""
    if not phrase.strip():
        return phrase
    s = _prepare(phrase, _descriptor_re(descriptors))
    return _tidy(_strip_leading_quantities(_tidy(s), _unit_set(units)))


def reduce_to_ingredient_core(
    phrase,
    descriptors: Optional[Iterable[str]] = None,
    units: Optional[Iterable[str]] = None,
) -> str:
    """Return the ingredient core of a recipe line, or the phrase itself if nothing is left.

    "3 cloves garlic, minced" -> "garlic"
    "2 (14 oz) cans diced tomatoes" -> "tomatoes"
    "1 (15 oz) can black beans, drained and rinsed" -> "black beans"

    `descriptors` and `units` replace the module defaults when given.
    """
    if not isinstance(phrase, str):
        return ""
    if not phrase.strip():
        return phrase
    desc_re = _descriptor_re(descriptors)

    s = _remove_descriptors(_prepare(phrase, desc_re), desc_re)
    s = _strip_leading_quantities(_tidy(s), _unit_set(units))
    core = _tidy(s)
    if not core:
        logger.debug("reduce: nothing left of %r; keeping original", phrase)
        return phrase
    return core


def split_description(phrase) -> tuple[str, str]:
    """Return a tuple (description, core).

    Description lists the descriptor words found in the phrase (e.g. 'finely minced').
    core is reduce_to_ingredient_core(phrase).
    """
    if not isinstance(phrase, str) or not phrase.strip():
        return "", reduce_to_ingredient_core(phrase)
    found: list[str] = []
    if _DESCRIPTOR_RE is not None:
        for m in _DESCRIPTOR_RE.finditer(phrase):
            word = m.group(0).lower()
            if word not in found:
                found.append(word)
    return " ".join(found), reduce_to_ingredient_core(phrase)
