"""Dataclasses shared across cmdlib layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .constants import DEFAULT_CATEGORY


class Platform(str, Enum):
    """Platform affinity of a script."""

    WINDOWS = "windows"
    UNIX = "unix"
    BOTH = "both"


@dataclass(frozen=True)
class CommandMetadata:
    id: str
    name: str
    title: str
    description: str
    content: str
    purpose: str | None = None
    usage: str | None = None
    speed: str | None = None
    when_to_use: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class ScriptMetadata:
    id: str
    name: str
    title: str
    description: str
    platform: Platform
    category: str
    filename: str
    usage: str | None = None
    prerequisites: tuple[str, ...] = ()
    content: str | None = None

    @property
    def has_content(self) -> bool:
        return self.content is not None


@dataclass(frozen=True)
class IndexCategory:
    key: str
    name: str
    members: tuple[str, ...]


@dataclass(frozen=True)
class CategoryIndex:
    """Parsed index document: category, platform and archival membership."""

    categories: tuple[IndexCategory, ...] = ()
    windows: frozenset[str] = field(default_factory=frozenset)
    unix: frozenset[str] = field(default_factory=frozenset)
    archived: frozenset[str] = field(default_factory=frozenset)

    def member_ids(self) -> list[str]:
        """Return every member id once, in category order, without archived ids."""
        seen: set[str] = set()
        result: list[str] = []
        for category in self.categories:
            for member_id in category.members:
                if member_id in seen or member_id in self.archived:
                    continue
                seen.add(member_id)
                result.append(member_id)
        return result

    def category_for(self, member_id: str) -> str:
        for category in self.categories:
            if member_id in category.members:
                return category.name
        return DEFAULT_CATEGORY

    def declared_platform(self, member_id: str) -> Platform:
        if member_id in self.windows:
            return Platform.WINDOWS
        if member_id in self.unix:
            return Platform.UNIX
        return Platform.BOTH

    def contains(self, member_id: str) -> bool:
        return any(member_id in category.members for category in self.categories)
