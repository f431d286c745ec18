"""Pytest configuration and fixtures for cmdlib tests."""

import json
import logging
from pathlib import Path

import pytest


CLEANUP_DOC = """# /cleanup-unused-code

Remove dead code.

## Purpose
Find and delete unused exports, files and dependencies.

## Usage
`/cleanup-unused-code --dry-run`

## Speed
Fast (under a minute)

## When to use
Before opening a pull request.
"""

PR_READY_DOC = """---
name: pr-ready
description: "Get a branch ready for review."
---
# /pr-ready

Run every check before review.
"""

FIND_COMMAND_DOC = """# /find-command

Search the library for the right command.
"""


@pytest.fixture(autouse=True)
def reset_logging_disable():
    """CLI runs disable logging globally; restore it between tests."""
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def commands_dir(tmp_path: Path) -> Path:
    """Directory of command documents without an index."""
    root = tmp_path / "commands"
    root.mkdir()
    (root / "pr-ready.md").write_text(PR_READY_DOC, encoding="utf-8")
    (root / "cleanup-unused-code.md").write_text(CLEANUP_DOC, encoding="utf-8")
    (root / "find-command.md").write_text(FIND_COMMAND_DOC, encoding="utf-8")
    (root / "notes.txt").write_text("not a command", encoding="utf-8")
    return root


@pytest.fixture
def indexed_commands_dir(commands_dir: Path) -> Path:
    """Command documents plus an index with one archived and one missing member."""
    index = {
        "categories": {
            "quality": {"name": "Quality", "commands": ["cleanup-unused-code", "missing-doc"]},
            "workflow": {"name": "Workflow", "commands": ["pr-ready", "find-command"]},
        },
        "archived": ["find-command"],
    }
    (commands_dir / "index.json").write_text(json.dumps(index), encoding="utf-8")
    return commands_dir


@pytest.fixture
def scripts_dir(tmp_path: Path) -> Path:
    """Scripts directory with an index covering every platform case."""
    root = tmp_path / "scripts"
    root.mkdir()
    (root / "setup-env.ps1").write_text(
        "# Setup environment\n"
        "# Installs the toolchain for local development\n"
        "# Usage: .\\setup-env.ps1 -Force\n"
        "param([switch]$Force)\n",
        encoding="utf-8",
    )
    (root / "clean-cache.sh").write_text(
        "#!/usr/bin/env bash\n"
        "# This script cleans things\n"
        "# Removes build caches and temporary folders\n"
        "# Prerequisites:\n"
        "#   - bash 4+\n"
        "#   - git\n"
        "\n"
        "rm -rf .cache\n",
        encoding="utf-8",
    )
    index = {
        "categories": {
            "setup": {"name": "Setup", "scripts": ["setup-env", "declared-unix"]},
            "maintenance": {"name": "Maintenance", "scripts": ["clean-cache", "ghost"]},
        },
        "platforms": {
            "windows": {"scripts": ["setup-env"]},
            "unix": {"scripts": ["declared-unix", "setup-env"]},
        },
    }
    (root / "index.json").write_text(json.dumps(index), encoding="utf-8")
    return root
