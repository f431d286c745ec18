"""Profile loading and source location mapping."""

from __future__ import annotations

import json
import re
import unicodedata
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

_WINDOWS_DRIVE_RELATIVE_RE = re.compile(r"^[A-Za-z]:[^/\\]")
_URL_PREFIXES = ("http://", "https://")
_PROFILE_KEYS = {"commands_source", "scripts_source", "logs_dir", "featured_commands"}


@dataclass(frozen=True)
class LibraryProfile:
    """Where commands and scripts are read from, and where logs go."""

    commands_source: str | None = None
    scripts_source: str | None = None
    logs_dir: str | None = None
    featured_commands: tuple[str, ...] = field(default_factory=tuple)


def _runtime_app_root() -> Path:
    return Path(__file__).resolve().parent


def is_url(location: str) -> bool:
    return location.startswith(_URL_PREFIXES)


def map_path(path: str, profile_dir: str | None = None) -> str:
    """Resolve a location string to an absolute path string.

    ~ or ~/...  -> user home directory
    @ or @/...  -> runtime app root (package directory)
    http(s)://  -> kept as a URL
    Absolute    -> used as-is
    Relative    -> resolved relative to profile_dir if given, else the cwd
    """
    normalized = unicodedata.normalize("NFC", path)
    if "\0" in normalized:
        raise ConfigError("Path cannot contain NUL bytes")
    if not normalized.strip():
        raise ConfigError("Path cannot be empty")

    if is_url(normalized):
        return normalized

    if _WINDOWS_DRIVE_RELATIVE_RE.match(normalized) or (
        normalized.startswith("\\") and not normalized.startswith("\\\\")
    ):
        raise ConfigError(
            f"Invalid path: {path}. Windows rooted path must be fully qualified "
            "(e.g. 'C:\\\\folder', not 'C:folder' or '\\folder')."
        )

    if normalized.startswith("@"):
        suffix = re.sub(r"[\\/]+", "/", normalized[1:]).lstrip("/")
        result = (_runtime_app_root() / suffix) if suffix else _runtime_app_root()
        return str(result.resolve())

    try:
        candidate = Path(re.sub(r"[\\/]+", "/", normalized)).expanduser()
    except RuntimeError as exc:
        raise ConfigError(f"Failed to expand user home in path: {path}") from exc
    if candidate.is_absolute():
        return str(candidate.resolve())

    base = Path(profile_dir) if profile_dir is not None else Path.cwd()
    return str((base / candidate).resolve())


def validate_profile(profile: Any) -> None:
    if not isinstance(profile, dict):
        raise ConfigError("Profile must be a JSON object")

    unknown = set(profile.keys()) - _PROFILE_KEYS
    if unknown:
        raise ConfigError(f"Unknown profile keys: {', '.join(sorted(unknown))}")

    for key in ("commands_source", "scripts_source", "logs_dir"):
        value = profile.get(key)
        if value is not None and (not isinstance(value, str) or not value):
            raise ConfigError(f"{key} must be a non-empty string")

    featured = profile.get("featured_commands", [])
    if not isinstance(featured, list) or not all(isinstance(v, str) for v in featured):
        raise ConfigError("featured_commands must be a list of strings")


def load_profile(path: str) -> LibraryProfile:
    """Load and validate a profile JSON file, mapping its paths."""
    profile_path = Path(map_path(path))
    try:
        with open(profile_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Profile not found: {profile_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in profile: {profile_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read profile: {profile_path}: {exc}") from exc

    validate_profile(payload)
    profile_dir = str(profile_path.parent)

    def _mapped(key: str) -> str | None:
        value = payload.get(key)
        return None if value is None else map_path(value, profile_dir)

    return LibraryProfile(
        commands_source=_mapped("commands_source"),
        scripts_source=_mapped("scripts_source"),
        logs_dir=_mapped("logs_dir"),
        featured_commands=tuple(payload.get("featured_commands", [])),
    )
