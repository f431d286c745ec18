"""Filter predicates and read-model helpers for listings."""

from __future__ import annotations

from typing import Iterable, TypeVar, Union

from .constants import ALL_FILTER, DEFAULT_CATEGORY, SPEED_KEYWORDS
from .models import CommandMetadata, Platform, ScriptMetadata

Item = TypeVar("Item", CommandMetadata, ScriptMetadata)
AnyItem = Union[CommandMetadata, ScriptMetadata]


def is_all(selector: str | None) -> bool:
    """Return True for the "no filter" sentinel (``None`` or ``"all"``)."""
    return selector is None or selector == ALL_FILTER


def _contains(fields: Iterable[str | None], query: str) -> bool:
    needle = query.lower()
    return any(value is not None and needle in value.lower() for value in fields)


def matches_command_query(command: CommandMetadata, query: str) -> bool:
    if not query:
        return True
    return _contains(
        (command.name, command.title, command.description, command.purpose, command.category),
        query,
    )


def matches_script_query(script: ScriptMetadata, query: str) -> bool:
    if not query:
        return True
    return _contains((script.name, script.description, script.filename, script.category), query)


def matches_category(item: AnyItem, category: str | None) -> bool:
    if is_all(category):
        return True
    return item.category == category


def matches_platform(script: ScriptMetadata, platform: Platform | str | None) -> bool:
    if is_all(platform):
        return True
    return script.platform.value == str(getattr(platform, "value", platform))


def filter_commands(
    commands: list[CommandMetadata],
    query: str = "",
    category: str | None = None,
) -> list[CommandMetadata]:
    """Return commands matching every active filter, in input order."""
    return [
        command
        for command in commands
        if matches_command_query(command, query) and matches_category(command, category)
    ]


def filter_scripts(
    scripts: list[ScriptMetadata],
    query: str = "",
    category: str | None = None,
    platform: Platform | str | None = None,
) -> list[ScriptMetadata]:
    """Return scripts matching every active filter, in input order."""
    return [
        script
        for script in scripts
        if matches_script_query(script, query)
        and matches_category(script, category)
        and matches_platform(script, platform)
    ]


def available_categories(items: Iterable[AnyItem]) -> list[str]:
    """Return the distinct categories present, sorted."""
    return sorted({item.category or DEFAULT_CATEGORY for item in items})


def group_by_category(items: Iterable[Item]) -> dict[str, list[Item]]:
    """Group items by category, keeping first-seen category order."""
    groups: dict[str, list[Item]] = {}
    for item in items:
        groups.setdefault(item.category or DEFAULT_CATEGORY, []).append(item)
    return groups


def featured_commands(
    commands: list[CommandMetadata], featured_ids: Iterable[str]
) -> list[CommandMetadata]:
    wanted = set(featured_ids)
    return [command for command in commands if command.id in wanted]


def speed_class(speed: str | None) -> str:
    """Classify a free-text speed note as fast, moderate, slow or unknown."""
    if not speed:
        return "unknown"
    lowered = speed.lower()
    for keyword, label in SPEED_KEYWORDS:
        if keyword in lowered:
            return label
    return "unknown"
