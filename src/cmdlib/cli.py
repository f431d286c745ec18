"""CLI entry and startup wiring."""

from __future__ import annotations

import argparse
import asyncio

from .command_repository import CommandRepository
from .config import LibraryProfile, load_profile, map_path
from .errors import CmdlibError, ConfigError
from .logging_utils import build_run_log_path, setup_logging
from .models import Platform
from .presenters import (
    render_command_detail,
    render_command_rows,
    render_error,
    render_grouped_command_rows,
    render_script_detail,
    render_script_rows,
    render_summary,
)
from .script_repository import ScriptRepository
from .search import (
    available_categories,
    featured_commands,
    filter_commands,
    filter_scripts,
    group_by_category,
)
from .sources import open_source

_PLATFORM_CHOICES = ["all", *(platform.value for platform in Platform)]


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        profile = load_profile(args.profile) if args.profile else LibraryProfile()
        log_file = map_path(args.log_file) if args.log_file is not None else None
        if log_file is None and profile.logs_dir is not None:
            log_file = build_run_log_path(profile.logs_dir)
        setup_logging(log_file)
        return asyncio.run(_run(args, profile))
    except CmdlibError as exc:
        print(render_error(str(exc)))
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdlib",
        description="Browse and search a library of command templates and scripts.",
    )
    parser.add_argument("--profile", help="Path to a profile JSON file.")
    parser.add_argument(
        "--commands",
        help="Commands directory or http(s) base URL (overrides the profile).",
    )
    parser.add_argument(
        "--scripts",
        help="Scripts directory or http(s) base URL (overrides the profile).",
    )
    parser.add_argument("--log-file", help="Write structured logs to this file.")

    subparsers = parser.add_subparsers(dest="action", required=True)

    commands_parser = subparsers.add_parser("commands", help="List commands.")
    commands_parser.add_argument("--query", default="", help="Case-insensitive search text.")
    commands_parser.add_argument("--category", default=None, help="Exact category name.")
    commands_parser.add_argument(
        "--grouped", action="store_true", help="Group output by category."
    )
    commands_parser.add_argument(
        "--featured", action="store_true", help="Only list the profile's featured commands."
    )

    command_parser = subparsers.add_parser("command", help="Show one command.")
    command_parser.add_argument("command_id")

    subparsers.add_parser("categories", help="List command categories in use.")

    scripts_parser = subparsers.add_parser("scripts", help="List scripts.")
    scripts_parser.add_argument("--query", default="", help="Case-insensitive search text.")
    scripts_parser.add_argument("--category", default=None, help="Exact category name.")
    scripts_parser.add_argument("--platform", choices=_PLATFORM_CHOICES, default="all")

    script_parser = subparsers.add_parser("script", help="Show one script.")
    script_parser.add_argument("script_id")
    script_parser.add_argument(
        "--content", action="store_true", help="Print the script body as well."
    )
    return parser


def _resolve_location(cli_value: str | None, profile_value: str | None, kind: str) -> str:
    if cli_value is not None:
        return map_path(cli_value)
    if profile_value is not None:
        return profile_value
    raise ConfigError(f"No {kind} source configured. Use --{kind} or a profile.")


async def _run(args: argparse.Namespace, profile: LibraryProfile) -> int:
    if args.action in ("commands", "command", "categories"):
        location = _resolve_location(args.commands, profile.commands_source, "commands")
        async with open_source(location) as source:
            repository = CommandRepository(source)
            if args.action == "command":
                return await _show_command(repository, args.command_id)
            commands = await repository.list_commands()

        if args.action == "categories":
            for category in available_categories(commands):
                print(category)
            return 0

        if args.featured:
            commands = featured_commands(commands, profile.featured_commands)
        matched = filter_commands(commands, args.query, args.category)
        if args.grouped:
            lines = render_grouped_command_rows(group_by_category(matched))
        else:
            lines = render_command_rows(matched)
        for line in lines:
            print(line)
        print(render_summary(len(matched), len(commands), "commands"))
        return 0

    location = _resolve_location(args.scripts, profile.scripts_source, "scripts")
    async with open_source(location) as source:
        script_repository = ScriptRepository(source)
        if args.action == "script":
            script = await script_repository.get_script(args.script_id)
            if script is None:
                print(render_error(f"Script not found: {args.script_id}"))
                return 1
            for line in render_script_detail(script, include_content=args.content):
                print(line)
            return 0
        scripts = await script_repository.list_scripts()

    matched_scripts = filter_scripts(scripts, args.query, args.category, args.platform)
    for line in render_script_rows(matched_scripts):
        print(line)
    print(render_summary(len(matched_scripts), len(scripts), "scripts"))
    return 0


async def _show_command(repository: CommandRepository, command_id: str) -> int:
    command = await repository.get_command(command_id)
    if command is None:
        print(render_error(f"Command not found: {command_id}"))
        return 1
    for line in render_command_detail(command):
        print(line)
    return 0
