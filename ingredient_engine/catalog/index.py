"""In-memory catalog index with exact, containment, shared-word and edit-distance lookups."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from ingredient_engine.models.catalog_schema import IngredientEntry, Origin
from ingredient_engine.settings import settings
from ingredient_engine.text.normalize import normalize

logger = logging.getLogger(__name__)


def entry_rank(entry: IngredientEntry) -> tuple:
    """Sort key among otherwise equal candidates: system first, then popularity, then name."""
    return (0 if entry.is_system else 1, -entry.usage_count, entry.normalized_name)


class CatalogIndex:
    """Immutable snapshot of the ingredient catalog.

    Build a new index when the catalog changes; instances are safe to share
    between threads because nothing mutates them after construction.
    """

    def __init__(self, entries: Iterable[IngredientEntry] = (), min_contains_length: Optional[int] = None):
        self.min_contains_length = (
            settings.MIN_CONTAINS_LENGTH if min_contains_length is None else min_contains_length
        )
        self._by_name: Dict[str, IngredientEntry] = {}
        self._by_synonym: Dict[str, IngredientEntry] = {}
        self._by_id: Dict[str, IngredientEntry] = {}

        for entry in sorted(entries, key=entry_rank):
            kept = self._by_name.get(entry.normalized_name)
            if kept is not None:
                logger.warning(
                    "CatalogIndex: duplicate normalized name '%s' (%s vs %s); keeping %s",
                    entry.normalized_name,
                    kept.id,
                    entry.id,
                    kept.id,
                )
                continue
            self._by_name[entry.normalized_name] = entry
            self._by_id[entry.id] = entry

        for entry in self._by_name.values():
            for key in entry.match_keys()[1:]:
                # names win over synonyms; better-ranked entries claim shared synonyms
                if key in self._by_name or key in self._by_synonym:
                    continue
                self._by_synonym[key] = entry

        # (key, owner) pairs for scans; names first so a name hit is preferred on ties
        self._keys: List[Tuple[str, IngredientEntry]] = [(k, e) for k, e in self._by_name.items()]
        self._keys.extend(
            (k, e)
            for e in self._by_name.values()
            for k in e.match_keys()[1:]
        )
        self._key_strings = [k for k, _ in self._keys]
        logger.info(
            "CatalogIndex built for %d entries (%d synonyms)",
            len(self._by_name),
            len(self._by_synonym),
        )

    @classmethod
    def build(cls, entries: Iterable[IngredientEntry], **kwargs) -> "CatalogIndex":
        return cls(entries, **kwargs)

    @classmethod
    def from_names(cls, names: Iterable[str], origin: Origin = Origin.USER, **kwargs) -> "CatalogIndex":
        """Build an index over plain names (e.g. a user's pantry); blank names are skipped."""
        entries = []
        seen = set()
        for name in names:
            key = normalize(name)
            if not key or key in seen:
                continue
            seen.add(key)
            entries.append(IngredientEntry(id=f"{origin.value}:{key}", name=name, origin=origin))
        return cls(entries, **kwargs)

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[IngredientEntry]:
        return iter(self._by_name.values())

    def get(self, entry_id: str) -> Optional[IngredientEntry]:
        return self._by_id.get(entry_id)

    def names(self) -> List[str]:
        return [e.name for e in self._by_name.values()]

    def lookup_exact(self, normalized: str) -> Optional[IngredientEntry]:
        """Entry whose name, else whose synonym, equals the normalized query."""
        if not normalized:
            return None
        entry = self._by_name.get(normalized)
        if entry is not None:
            return entry
        return self._by_synonym.get(normalized)

    def contains_hits(self, normalized: str) -> List[Tuple[IngredientEntry, str]]:
        """(entry, matched key) pairs where key and query contain one another.

        One pair per entry, keeping the key closest in length to the query.
        Ordered by length difference, then system before user, then usage.
        """
        if not normalized:
            return []
        qlen = len(normalized)
        best: Dict[str, Tuple[int, str, IngredientEntry]] = {}
        for key, entry in self._keys:
            if min(qlen, len(key)) < self.min_contains_length:
                continue
            if key not in normalized and normalized not in key:
                continue
            diff = abs(qlen - len(key))
            current = best.get(entry.id)
            if current is None or diff < current[0]:
                best[entry.id] = (diff, key, entry)
        ranked = sorted(best.values(), key=lambda t: (t[0],) + entry_rank(t[2]))
        return [(entry, key) for _, key, entry in ranked]

    def lookup_contains(self, normalized: str) -> List[IngredientEntry]:
        return [entry for entry, _ in self.contains_hits(normalized)]

    def word_hits(self, normalized: str) -> List[Tuple[IngredientEntry, str, int]]:
        """(entry, matched key, shared word count) for keys sharing a word with the query.

        Words shorter than min_contains_length are ignored. Two words are
        shared when one starts with the other, so "onion" meets "onions".
        Ordered by the share of words in common, then length difference,
        then system before user, then usage.
        """
        words = [w for w in normalized.split() if len(w) >= self.min_contains_length]
        if not words:
            return []
        qcount = len(normalized.split())
        best: Dict[str, Tuple[float, int, str, int, IngredientEntry]] = {}
        for key, entry in self._keys:
            key_words = key.split()
            shared = sum(
                1
                for kw in key_words
                if len(kw) >= self.min_contains_length and any(kw.startswith(w) or w.startswith(kw) for w in words)
            )
            if not shared:
                continue
            ratio = shared / max(qcount, len(key_words))
            diff = abs(len(normalized) - len(key))
            current = best.get(entry.id)
            if current is None or (-ratio, diff) < (-current[0], current[1]):
                best[entry.id] = (ratio, diff, key, shared, entry)
        ranked = sorted(best.values(), key=lambda t: (-t[0], t[1]) + entry_rank(t[4]))
        return [(entry, key, shared) for _, _, key, shared, entry in ranked]

    def fuzzy_hits(self, normalized: str, max_distance: int) -> List[Tuple[IngredientEntry, int, str]]:
        """(entry, distance, matched key) triples within max_distance edits, best first."""
        if not normalized or max_distance < 0 or not self._keys:
            return []
        qlen = len(normalized)
        candidates = process.extract(
            normalized,
            self._key_strings,
            scorer=Levenshtein.distance,
            score_cutoff=max_distance,
            limit=None,
        )
        best: Dict[str, Tuple[int, int, str, IngredientEntry]] = {}
        for key, distance, pos in candidates:
            entry = self._keys[pos][1]
            diff = abs(qlen - len(key))
            current = best.get(entry.id)
            if current is None or (distance, diff) < (current[0], current[1]):
                best[entry.id] = (int(distance), diff, key, entry)
        ranked = sorted(best.values(), key=lambda t: (t[0], t[1]) + entry_rank(t[3]))
        return [(entry, distance, key) for distance, _, key, entry in ranked]

    def lookup_fuzzy(self, normalized: str, max_distance: int) -> List[Tuple[IngredientEntry, int]]:
        return [(entry, distance) for entry, distance, _ in self.fuzzy_hits(normalized, max_distance)]
