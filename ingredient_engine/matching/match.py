"""Tiered ingredient matching: exact, then partial (containment or shared words), then fuzzy.

Confidence bands never overlap, so a better tier always outscores a worse one:

* exact:   100
* partial: 60-89, from the length ratio of the shorter to the longer string;
  a query that only shares words with a key ("yellow onion" / "onions")
  scores 60-79 from the share of words in common
* fuzzy:   40-59, falling with edit distance relative to query length

Anything scoring under the acceptance threshold is reported as "none".
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ingredient_engine.catalog.index import CatalogIndex
from ingredient_engine.categories.categorize import categorize
from ingredient_engine.models.catalog_schema import IngredientEntry, Origin
from ingredient_engine.models.results import MatchKind, MatchResult
from ingredient_engine.settings import settings
from ingredient_engine.text.normalize import normalize
from ingredient_engine.text.reduce import reduce_to_ingredient_core, strip_quantity

logger = logging.getLogger(__name__)

EXACT_CONFIDENCE = 100
PARTIAL_FLOOR, PARTIAL_CEILING = 60, 89
WORD_OVERLAP_CEILING = 79
FUZZY_FLOOR, FUZZY_CEILING = 40, 59


def partial_confidence(query: str, key: str) -> int:
    shorter, longer = sorted((len(query), len(key)))
    if longer == 0:
        return 0
    score = PARTIAL_FLOOR + round((PARTIAL_CEILING - PARTIAL_FLOOR) * shorter / longer)
    return min(PARTIAL_CEILING, score)


def word_overlap_confidence(query: str, key: str, shared: int) -> int:
    words = max(len(query.split()), len(key.split()))
    if not words or shared <= 0:
        return 0
    score = PARTIAL_FLOOR + round((WORD_OVERLAP_CEILING - PARTIAL_FLOOR) * min(shared, words) / words)
    return min(WORD_OVERLAP_CEILING, score)


def fuzzy_confidence(query: str, distance: int) -> int:
    if not query:
        return 0
    # 36 puts a distance of a quarter of the query length exactly on 50
    score = FUZZY_CEILING - round(36 * distance / len(query))
    return max(FUZZY_FLOOR, min(FUZZY_CEILING, score))


def max_edit_distance(query: str, chars_per_edit: Optional[int] = None) -> int:
    per_edit = chars_per_edit or settings.FUZZY_CHARS_PER_EDIT
    return max(1, len(query) // max(1, per_edit))


def query_for(phrase) -> str:
    """Reduce then normalize a raw phrase into the matcher's query string."""
    return normalize(reduce_to_ingredient_core(phrase))


def _match(phrase: str, q: str, index: CatalogIndex, threshold: int, chars_per_edit: Optional[int]) -> MatchResult:
    entry = index.lookup_exact(q)
    if entry is not None:
        logger.debug("match: exact '%s' -> %s", q, entry.name)
        return MatchResult(
            match_kind=MatchKind.EXACT,
            confidence=EXACT_CONFIDENCE,
            matched_entry=entry,
            phrase=phrase,
            query=q,
        )

    hits = index.contains_hits(q)
    if hits:
        entry, key = hits[0]
        confidence = partial_confidence(q, key)
        if confidence >= threshold:
            logger.debug("match: partial '%s' ~ '%s' -> %s (%d)", q, key, entry.name, confidence)
            return MatchResult(
                match_kind=MatchKind.PARTIAL,
                confidence=confidence,
                matched_entry=entry,
                phrase=phrase,
                query=q,
            )
    else:
        words = index.word_hits(q)
        if words:
            entry, key, shared = words[0]
            confidence = word_overlap_confidence(q, key, shared)
            if confidence >= threshold:
                logger.debug("match: shared words '%s' ~ '%s' -> %s (%d)", q, key, entry.name, confidence)
                return MatchResult(
                    match_kind=MatchKind.PARTIAL,
                    confidence=confidence,
                    matched_entry=entry,
                    phrase=phrase,
                    query=q,
                )

    max_distance = max_edit_distance(q, chars_per_edit)
    fuzzy = index.fuzzy_hits(q, max_distance)
    if fuzzy:
        entry, distance, key = fuzzy[0]
        confidence = fuzzy_confidence(q, distance)
        if confidence >= threshold:
            logger.debug(
                "match: fuzzy '%s' ~ '%s' (distance %d) -> %s (%d)", q, key, distance, entry.name, confidence
            )
            return MatchResult(
                match_kind=MatchKind.FUZZY,
                confidence=confidence,
                matched_entry=entry,
                phrase=phrase,
                query=q,
            )
        logger.debug("match: best fuzzy '%s' for '%s' scored %d < threshold %d", key, q, confidence, threshold)

    logger.debug("match: no match for '%s'", q)
    return MatchResult.no_match(phrase, q)


def match(
    phrase,
    index: CatalogIndex,
    threshold: Optional[int] = None,
    chars_per_edit: Optional[int] = None,
) -> MatchResult:
    """Match a raw ingredient phrase against the catalog index.

    Never raises for odd input: empty, punctuation-only or non-string
    phrases come back as a "none" result.
    """
    threshold = settings.MATCH_THRESHOLD if threshold is None else threshold
    raw = phrase if isinstance(phrase, str) else ""
    try:
        # catalog names may contain descriptor words ("ground beef")
        for full in (normalize(raw), normalize(strip_quantity(raw))):
            entry = index.lookup_exact(full)
            if entry is not None:
                logger.debug("match: exact (descriptors kept) '%s' -> %s", full, entry.name)
                return MatchResult(
                    match_kind=MatchKind.EXACT,
                    confidence=EXACT_CONFIDENCE,
                    matched_entry=entry,
                    phrase=raw,
                    query=full,
                )
        q = query_for(raw)
        if not q:
            return MatchResult.no_match(raw, q)
        return _match(raw, q, index, threshold, chars_per_edit)
    except Exception:
        logger.exception("match: failed to analyse %r; reporting no match", phrase)
        return MatchResult.no_match(raw)


def has_ingredient(phrase, index: CatalogIndex, threshold: Optional[int] = None) -> bool:
    return match(phrase, index, threshold=threshold).matched


def bump_usage(entry: IngredientEntry) -> IngredientEntry:
    return entry.model_copy(update={"usage_count": entry.usage_count + 1})


def match_or_seed(
    phrase, index: CatalogIndex, threshold: Optional[int] = None
) -> Tuple[str, Optional[IngredientEntry], MatchResult]:
    """Return a tuple (status, entry, result).

    status is 'existing' or 'new'. If existing, entry is the matched catalog
    entry; if new, entry is a user-contributed entry built from the reduced
    phrase and categorized heuristically, ready for the caller to persist.
    Phrases with nothing to seed (empty after normalization) return
    ('new', None, result).
    """
    result = match(phrase, index, threshold=threshold)
    if result.matched:
        logger.debug("match_or_seed: existing %s for %r", result.matched_entry.id, phrase)
        return "existing", result.matched_entry, result

    core = reduce_to_ingredient_core(phrase)
    key = normalize(core)
    if not key:
        return "new", None, result
    entry = IngredientEntry(
        id=f"{Origin.USER.value}:{key}",
        name=core.strip(),
        category=categorize(core),
        origin=Origin.USER,
        usage_count=1,
    )
    logger.debug("match_or_seed: no match, seeding '%s' as %s", key, entry.category.value)
    return "new", entry, result
