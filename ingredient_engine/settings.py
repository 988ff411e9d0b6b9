"""Engine settings loaded from environment (and .env).

This module provides a small Settings holder backed by environment variables.
Keep this file simple and import `settings` from other modules.
"""
from __future__ import annotations

from dataclasses import dataclass
import os


def _get(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    if v is None:
        return default
    return v


def _get_int(name: str, default: int) -> int:
    v = _get(name)
    if v is None or not v.strip():
        return default
    try:
        return int(v)
    except ValueError:
        # validate_settings() reports the bad value; keep the default meanwhile
        return default


@dataclass
class Settings:
    # Matching
    # Results scoring below MATCH_THRESHOLD are reported as "none".
    MATCH_THRESHOLD: int = _get_int("MATCH_THRESHOLD", 50)
    # One allowed edit per N characters of query (always at least one edit).
    FUZZY_CHARS_PER_EDIT: int = _get_int("FUZZY_CHARS_PER_EDIT", 4)
    # Shortest string allowed to satisfy a containment (partial) match.
    MIN_CONTAINS_LENGTH: int = _get_int("MIN_CONTAINS_LENGTH", 3)

    # Optional catalog JSON used by the CLI; the system catalog is used if unset
    CATALOG_PATH: str | None = _get("CATALOG_PATH", None)

    # Logging configuration
    # LOG_LEVEL can be DEBUG, INFO, WARNING, ERROR, or CRITICAL
    LOG_LEVEL: str = _get("LOG_LEVEL", "INFO")
    # Optional path to write logs to a file; if unset, logs go to stderr
    LOG_FILE: str | None = _get("LOG_FILE", None)


settings = Settings()


def validate_settings(cfg: Settings | None = None) -> None:
    """Validate settings and raise a helpful RuntimeError if any are unusable.

    Raw environment values are checked too, so a non-numeric MATCH_THRESHOLD
    is reported instead of silently falling back to the default.
    """
    cfg = cfg or settings
    problems = []
    for name in ("MATCH_THRESHOLD", "FUZZY_CHARS_PER_EDIT", "MIN_CONTAINS_LENGTH"):
        raw = os.getenv(name)
        if raw is not None and raw.strip():
            try:
                int(raw)
            except ValueError:
                problems.append(f"{name} must be an integer (got {raw!r})")
    if not 1 <= cfg.MATCH_THRESHOLD <= 100:
        problems.append(f"MATCH_THRESHOLD must be between 1 and 100 (got {cfg.MATCH_THRESHOLD})")
    if cfg.FUZZY_CHARS_PER_EDIT < 1:
        problems.append(f"FUZZY_CHARS_PER_EDIT must be >= 1 (got {cfg.FUZZY_CHARS_PER_EDIT})")
    if cfg.MIN_CONTAINS_LENGTH < 1:
        problems.append(f"MIN_CONTAINS_LENGTH must be >= 1 (got {cfg.MIN_CONTAINS_LENGTH})")
    if cfg.CATALOG_PATH and not os.path.exists(cfg.CATALOG_PATH):
        problems.append(f"CATALOG_PATH points to a missing file: {cfg.CATALOG_PATH}")
    if problems:
        msg = (
            "Invalid engine configuration: "
            + "; ".join(problems)
            + "\nPlease fix them in your .env or environment and try again."
        )
        raise RuntimeError(msg)
