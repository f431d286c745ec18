"""Index document parsing and loading."""

from __future__ import annotations

import json
import logging
from typing import Any

from .constants import INDEX_FILENAME
from .errors import IndexFormatError, SourceError
from .logging_utils import log_event
from .models import CategoryIndex, IndexCategory
from .sources import DocumentSource


def parse_index(raw_text: str, *, member_key: str) -> CategoryIndex:
    """Parse index JSON text.

    ``member_key`` names the per-category member list ("commands" or
    "scripts"). Categories without that list are kept with no members.
    """
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise IndexFormatError(f"Invalid index JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise IndexFormatError("Index JSON must be an object")

    raw_categories = payload.get("categories", {})
    if not isinstance(raw_categories, dict):
        raise IndexFormatError("Index key 'categories' must be an object")

    categories: list[IndexCategory] = []
    for key, raw_category in raw_categories.items():
        if not isinstance(raw_category, dict):
            raise IndexFormatError(f"Index category '{key}' must be an object")
        name = raw_category.get("name", key)
        if not isinstance(name, str):
            raise IndexFormatError(f"Index category '{key}' name must be a string")
        members = _get_str_list(raw_category, member_key, context=f"category '{key}'")
        categories.append(IndexCategory(key=str(key), name=name, members=tuple(members)))

    raw_platforms = payload.get("platforms", {})
    if not isinstance(raw_platforms, dict):
        raise IndexFormatError("Index key 'platforms' must be an object")

    return CategoryIndex(
        categories=tuple(categories),
        windows=frozenset(_platform_members(raw_platforms, "windows", member_key)),
        unix=frozenset(_platform_members(raw_platforms, "unix", member_key)),
        archived=frozenset(_archived_members(payload.get("archived"), member_key)),
    )


async def load_index(source: DocumentSource, *, member_key: str) -> CategoryIndex | None:
    """Read and parse the index document; ``None`` when absent or unusable."""
    try:
        raw_text = await source.read_text(INDEX_FILENAME)
    except SourceError as exc:
        log_event(
            "index_load_error",
            level=logging.WARNING,
            source=source.describe(),
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return None

    if raw_text is None:
        return None

    try:
        return parse_index(raw_text, member_key=member_key)
    except IndexFormatError as exc:
        log_event(
            "index_load_error",
            level=logging.WARNING,
            source=source.describe(),
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return None


def _get_str_list(payload: dict[str, Any], key: str, *, context: str) -> list[str]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise IndexFormatError(f"Index {context} key '{key}' must be a list of strings")
    return value


def _platform_members(
    raw_platforms: dict[str, Any], platform: str, member_key: str
) -> list[str]:
    raw_platform = raw_platforms.get(platform)
    if raw_platform is None:
        return []
    if isinstance(raw_platform, list):
        return _get_str_list({member_key: raw_platform}, member_key, context=f"platform '{platform}'")
    if not isinstance(raw_platform, dict):
        raise IndexFormatError(f"Index platform '{platform}' must be an object")
    return _get_str_list(raw_platform, member_key, context=f"platform '{platform}'")


def _archived_members(raw_archived: Any, member_key: str) -> list[str]:
    if raw_archived is None:
        return []
    if isinstance(raw_archived, dict):
        return _get_str_list(raw_archived, member_key, context="archived")
    return _get_str_list({"archived": raw_archived}, "archived", context="archived")
