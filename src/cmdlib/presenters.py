"""User-facing text rendering."""

from __future__ import annotations

from .constants import DEFAULT_CATEGORY, ERROR_PREFIX, LIST_SEPARATOR, WARNING_PREFIX
from .models import CommandMetadata, Platform, ScriptMetadata
from .search import speed_class

_PLATFORM_LABELS = {
    Platform.WINDOWS: "PowerShell",
    Platform.UNIX: "Bash",
    Platform.BOTH: "Cross-platform",
}


def render_error(message: str) -> str:
    return f"{ERROR_PREFIX} {message}"


def render_warning(message: str) -> str:
    return f"{WARNING_PREFIX} {message}"


def render_summary(shown: int, total: int, noun: str) -> str:
    return f"Showing {shown} of {total} {noun}"


def render_command_rows(commands: list[CommandMetadata]) -> list[str]:
    return [
        LIST_SEPARATOR.join(
            (command.title, command.category or DEFAULT_CATEGORY, command.description)
        )
        for command in commands
    ]


def render_grouped_command_rows(groups: dict[str, list[CommandMetadata]]) -> list[str]:
    lines: list[str] = []
    for category, commands in groups.items():
        if lines:
            lines.append("")
        lines.append(f"## {category}")
        lines.extend(
            LIST_SEPARATOR.join((command.title, command.description)) for command in commands
        )
    return lines


def render_command_detail(command: CommandMetadata) -> list[str]:
    lines = [
        command.title,
        f"Category: {command.category or DEFAULT_CATEGORY}",
        f"Description: {command.description}",
    ]
    if command.purpose:
        lines.append(f"Purpose: {command.purpose}")
    if command.usage:
        lines.append(f"Usage: {command.usage}")
    if command.speed:
        lines.append(f"Speed: {command.speed} ({speed_class(command.speed)})")
    if command.when_to_use:
        lines.append(f"When to use: {command.when_to_use}")
    return lines


def render_script_rows(scripts: list[ScriptMetadata]) -> list[str]:
    return [
        LIST_SEPARATOR.join(
            (script.filename, script.platform.value, script.category, script.description)
        )
        for script in scripts
    ]


def render_script_detail(script: ScriptMetadata, *, include_content: bool = False) -> list[str]:
    lines = [
        script.title,
        f"File: {script.filename}",
        f"Platform: {_PLATFORM_LABELS[script.platform]}",
        f"Category: {script.category}",
        f"Description: {script.description}",
    ]
    if script.usage:
        lines.append(f"Usage: {script.usage}")
    if script.prerequisites:
        lines.append("Prerequisites:")
        lines.extend(f"- {item}" for item in script.prerequisites)
    if not script.has_content:
        lines.append(render_warning("Script file not available"))
    elif include_content:
        lines.append("")
        lines.append(script.content or "")
    return lines
