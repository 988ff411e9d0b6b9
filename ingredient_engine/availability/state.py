"""Per-user available / needed state for resolved ingredient names.

Each name is Unset (in neither set), Available (owned) or Unavailable
(needed, i.e. on the shopping list). Every transition returns the complete
new pair of sets; the caller persists it in one write and serializes
concurrent toggles for the same user.

An unrecorded name becomes Available on its first toggle.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


class ContractViolation(RuntimeError):
    """An availability record broke its disjointness invariant."""

    def __init__(self, message: str, overlap: Iterable[str] = ()):
        super().__init__(message)
        self.overlap = frozenset(overlap)


class AvailabilityState(str, Enum):
    UNSET = "unset"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class AvailabilityRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    available: FrozenSet[str] = Field(default_factory=frozenset)
    unavailable: FrozenSet[str] = Field(default_factory=frozenset)

    @model_validator(mode="after")
    def _disjoint(self) -> "AvailabilityRecord":
        _check_disjoint(self.available, self.unavailable)
        return self


def _check_disjoint(available: FrozenSet[str], unavailable: FrozenSet[str]) -> None:
    overlap = available & unavailable
    if overlap:
        raise ContractViolation(
            "ingredient(s) marked both available and unavailable: " + ", ".join(sorted(overlap)),
            overlap,
        )


def _checked(record: Optional[AvailabilityRecord]) -> AvailabilityRecord:
    if record is None:
        return AvailabilityRecord()
    # model_construct() skips validation, so re-check what we were handed
    _check_disjoint(frozenset(record.available), frozenset(record.unavailable))
    return record


def _checked_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"ingredient name must be a non-empty string, got {name!r}")
    return name


def state_of(record: Optional[AvailabilityRecord], name: str) -> AvailabilityState:
    record = _checked(record)
    if name in record.available:
        return AvailabilityState.AVAILABLE
    if name in record.unavailable:
        return AvailabilityState.UNAVAILABLE
    return AvailabilityState.UNSET


def toggle(record: Optional[AvailabilityRecord], name: str) -> AvailabilityRecord:
    """Available -> Unavailable; Unavailable or Unset -> Available."""
    record = _checked(record)
    name = _checked_name(name)
    available = set(record.available)
    unavailable = set(record.unavailable)
    if name in available:
        available.discard(name)
        unavailable.add(name)
    else:
        unavailable.discard(name)
        available.add(name)
    new = AvailabilityRecord(available=frozenset(available), unavailable=frozenset(unavailable))
    logger.debug("toggle: '%s' -> %s", name, state_of(new, name).value)
    return new


def add_available(record: Optional[AvailabilityRecord], names: Iterable[str]) -> AvailabilityRecord:
    """Mark every name as owned, taking it off the shopping list if it was there."""
    record = _checked(record)
    names = {_checked_name(n) for n in names}
    return AvailabilityRecord(
        available=frozenset(record.available | names),
        unavailable=frozenset(record.unavailable - names),
    )


def clear_all(record: Optional[AvailabilityRecord] = None) -> AvailabilityRecord:
    """Reset both sets; the previous record is only validated."""
    if record is not None:
        _checked(record)
        logger.info(
            "clear_all: dropping %d available and %d unavailable ingredients",
            len(record.available),
            len(record.unavailable),
        )
    return AvailabilityRecord()
