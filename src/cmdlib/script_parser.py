"""Comment-header metadata extraction from script files."""

from __future__ import annotations

import re

from .constants import (
    DESCRIPTION_EXCLUDED_WORD,
    DESCRIPTION_MARKERS,
    DESCRIPTION_MIN_LENGTH,
    DESCRIPTION_SCAN_LINES,
)

_COMMENT_PREFIX_RE = re.compile(r"^#+\s*")
_USAGE_RE = re.compile(r"^#+\s*Usage:\s*(.*)$", re.IGNORECASE)
_PREREQUISITES_RE = re.compile(r"^#+\s*Prerequisites:\s*(.*)$", re.IGNORECASE)
_LIST_MARKER_RE = re.compile(r"^[-*]\s+")


def default_description(script_id: str) -> str:
    return f"Script: {script_id}"


def extract_script_description(script_id: str, content: str | None) -> str:
    """Return the first descriptive comment in the head of the script.

    Shebangs, marker lines (``Usage:``, ``Prerequisites:``, ``param(``), short
    lines and lines mentioning "script" are skipped.
    """
    if not content:
        return default_description(script_id)

    for raw_line in content.splitlines()[:DESCRIPTION_SCAN_LINES]:
        line = raw_line.strip()
        if not line.startswith("#") or line.startswith("#!"):
            continue
        if any(marker in line for marker in DESCRIPTION_MARKERS):
            continue
        text = _COMMENT_PREFIX_RE.sub("", line).strip()
        if len(text) <= DESCRIPTION_MIN_LENGTH:
            continue
        if DESCRIPTION_EXCLUDED_WORD in text.lower():
            continue
        return text

    return default_description(script_id)


def extract_script_usage(content: str | None) -> str | None:
    """Return the text of the first ``# Usage:`` comment.

    When the marker line carries no text, the following comment line is used.
    """
    if not content:
        return None

    lines = content.splitlines()
    for index, raw_line in enumerate(lines):
        match = _USAGE_RE.match(raw_line.strip())
        if match is None:
            continue
        value = match.group(1).strip()
        if value:
            return value
        if index + 1 < len(lines):
            following = lines[index + 1].strip()
            if following.startswith("#"):
                value = _COMMENT_PREFIX_RE.sub("", following).strip()
                return value or None
        return None
    return None


def extract_script_prerequisites(content: str | None) -> tuple[str, ...]:
    """Return the comment lines listed under ``# Prerequisites:``.

    An inline value on the marker line counts as the first item. Collection
    stops at the first blank comment or non-comment line.
    """
    if not content:
        return ()

    lines = content.splitlines()
    for index, raw_line in enumerate(lines):
        match = _PREREQUISITES_RE.match(raw_line.strip())
        if match is None:
            continue

        items: list[str] = []
        inline = match.group(1).strip()
        if inline:
            items.append(inline)
        for following in lines[index + 1 :]:
            stripped = following.strip()
            if not stripped.startswith("#"):
                break
            text = _COMMENT_PREFIX_RE.sub("", stripped).strip()
            if not text:
                break
            items.append(_LIST_MARKER_RE.sub("", text))
        return tuple(items)
    return ()
