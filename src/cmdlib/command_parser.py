"""Line-oriented metadata extraction from command documents."""

from __future__ import annotations

import re

from .constants import FRONT_MATTER_DELIMITER
from .models import CommandMetadata

_FRONT_MATTER_FIELD_RE = re.compile(r"^(name|description)[ \t]*:[ \t]*(.*)$", re.MULTILINE)
_HEADING_RE = re.compile(r"^#+\s*")
_SECTION_RE = re.compile(
    r"^##(?!#)\s*(purpose|usage|speed|when\s+to\s+use)\s*$", re.IGNORECASE
)
_BACKTICK_VALUE_RE = re.compile(r"^`([^`]+)`")

_SECTION_FIELDS = {
    "purpose": "purpose",
    "usage": "usage",
    "speed": "speed",
    "when to use": "when_to_use",
}


def parse_front_matter(text: str) -> tuple[dict[str, str], str]:
    """Split a leading ``---`` block from the body.

    Only ``name`` and ``description`` are extracted. A block without a closing
    delimiter is not front matter and stays in the body.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return {}, text

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            break
    else:
        return {}, text

    block = "".join(lines[1:end])
    body = "".join(lines[end + 1 :])

    fields: dict[str, str] = {}
    for match in _FRONT_MATTER_FIELD_RE.finditer(block):
        key, value = match.group(1), _strip_quotes(match.group(2).strip())
        if value and key not in fields:
            fields[key] = value
    return fields, body


def parse_command_document(
    command_id: str, text: str, category: str | None = None
) -> CommandMetadata:
    fields, body = parse_front_matter(text)
    lines = body.splitlines()

    title_index = _find_heading(lines)
    name = fields.get("name")
    if name is None:
        name = _heading_name(lines[title_index]) if title_index is not None else ""
        name = name or command_id

    description = fields.get("description")
    if description is None:
        start = title_index + 1 if title_index is not None else 0
        description = _first_text_line(lines, start) or ""

    sections = extract_sections(lines)

    return CommandMetadata(
        id=command_id,
        name=name,
        title=f"/{name}",
        description=description,
        content=body,
        purpose=sections.get("purpose"),
        usage=sections.get("usage"),
        speed=sections.get("speed"),
        when_to_use=sections.get("when_to_use"),
        category=category,
    )


def extract_sections(lines: list[str]) -> dict[str, str]:
    """Return the first value found under each known ``##`` subsection."""
    sections: dict[str, str] = {}
    for index, line in enumerate(lines):
        match = _SECTION_RE.match(line.strip())
        if match is None:
            continue
        field_name = _SECTION_FIELDS[" ".join(match.group(1).lower().split())]
        if field_name in sections:
            continue

        value = _next_non_blank(lines, index + 1)
        if value is None or value.startswith("#"):
            continue
        if field_name == "usage":
            usage_match = _BACKTICK_VALUE_RE.match(value)
            if usage_match is None:
                continue
            value = usage_match.group(1).strip()
        if value:
            sections[field_name] = value
    return sections


def _find_heading(lines: list[str]) -> int | None:
    for index, line in enumerate(lines):
        if line.lstrip().startswith("#"):
            return index
    return None


def _heading_name(line: str) -> str:
    stripped = _HEADING_RE.sub("", line.strip())
    if stripped.startswith("/"):
        stripped = stripped[1:]
    return stripped.strip()


def _first_text_line(lines: list[str], start: int) -> str | None:
    for line in lines[start:]:
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return stripped
    return None


def _next_non_blank(lines: list[str], start: int) -> str | None:
    for line in lines[start:]:
        if line.strip():
            return line.strip()
    return None


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1].strip()
    return value
