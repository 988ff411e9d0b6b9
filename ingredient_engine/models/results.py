from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from ingredient_engine.models.catalog_schema import IngredientEntry


class MatchKind(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"
    FUZZY = "fuzzy"
    NONE = "none"


class MatchResult(BaseModel):
    match_kind: MatchKind = MatchKind.NONE
    confidence: int = Field(default=0, ge=0, le=100)
    matched_entry: Optional[IngredientEntry] = None
    phrase: str = ""
    query: str = ""

    @model_validator(mode="after")
    def _kind_and_entry_agree(self) -> "MatchResult":
        if (self.match_kind is MatchKind.NONE) != (self.matched_entry is None):
            raise ValueError("match_kind 'none' must come without an entry and vice versa")
        if self.match_kind is MatchKind.NONE and self.confidence != 0:
            raise ValueError("a 'none' match has confidence 0")
        return self

    @property
    def matched(self) -> bool:
        return self.match_kind is not MatchKind.NONE

    @classmethod
    def no_match(cls, phrase: str = "", query: str = "") -> "MatchResult":
        return cls(phrase=phrase, query=query)


class RecipeCompatibility(BaseModel):
    recipe_id: Optional[str] = None
    total_ingredients: int = 0
    available: List[MatchResult] = Field(default_factory=list)
    missing: List[MatchResult] = Field(default_factory=list)
    compatibility_score: int = 0
    confidence_score: int = 0

    @property
    def missing_ingredients(self) -> List[str]:
        return [m.phrase for m in self.missing]
