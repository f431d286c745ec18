"""Static command category classification."""

from __future__ import annotations

from functools import lru_cache

from .constants import COMMAND_CATEGORIES, DEFAULT_CATEGORY


@lru_cache(maxsize=None)
def classify_command(command_id: str) -> str:
    """Return the first category listing ``command_id``, else "Other"."""
    for category, command_ids in COMMAND_CATEGORIES.items():
        if command_id in command_ids:
            return category
    return DEFAULT_CATEGORY


def command_category_names() -> list[str]:
    return list(COMMAND_CATEGORIES.keys())
