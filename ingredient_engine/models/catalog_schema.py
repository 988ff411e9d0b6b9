from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from ingredient_engine.categories.mapping import normalize_category
from ingredient_engine.models.category import Category
from ingredient_engine.text.normalize import normalize


class Origin(str, Enum):
    SYSTEM = "system"
    USER = "user"


class IngredientEntry(BaseModel):
    """One catalog record, as read from the ingredient store."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    normalized_name: str = Field(default="", validate_default=True)
    synonyms: List[str] = Field(default_factory=list)
    category: Category = Category.PANTRY_STAPLES
    origin: Origin = Origin.USER
    usage_count: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _from_storage_row(cls, data: Any) -> Any:
        # storage rows carry is_system instead of origin
        if isinstance(data, dict) and "origin" not in data and "is_system" in data:
            data = dict(data)
            data["origin"] = Origin.SYSTEM if data.pop("is_system") else Origin.USER
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, v: Any) -> Category:
        return normalize_category(v)

    @field_validator("synonyms", mode="before")
    @classmethod
    def _drop_empty_synonyms(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return [s for s in v if isinstance(s, str) and normalize(s)]
        return v

    @field_validator("normalized_name")
    @classmethod
    def _derive_normalized_name(cls, v: str, info: ValidationInfo) -> str:
        key = normalize(v or info.data.get("name", ""))
        if not key:
            raise ValueError("ingredient name normalizes to an empty string")
        return key

    @property
    def is_system(self) -> bool:
        return self.origin is Origin.SYSTEM

    def match_keys(self) -> List[str]:
        """Normalized name followed by the normalized synonyms (deduplicated, in order)."""
        out = [self.normalized_name]
        for s in self.synonyms:
            k = normalize(s)
            if k and k not in out:
                out.append(k)
        return out
