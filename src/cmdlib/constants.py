"""Literal constants used by cmdlib."""

from types import MappingProxyType

APP_NAME = "cmdlib"

COMMAND_SUFFIX = ".md"
WINDOWS_SCRIPT_SUFFIX = ".ps1"
UNIX_SCRIPT_SUFFIX = ".sh"
INDEX_FILENAME = "index.json"

DEFAULT_CATEGORY = "Other"
ALL_FILTER = "all"

FRONT_MATTER_DELIMITER = "---"

# Scripts: only the head of the file is scanned for a description comment.
DESCRIPTION_SCAN_LINES = 10
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MARKERS = ("Usage:", "Prerequisites:", "param(")
DESCRIPTION_EXCLUDED_WORD = "script"

SPEED_KEYWORDS = (
    ("fast", "fast"),
    ("quick", "fast"),
    ("moderate", "moderate"),
    ("medium", "moderate"),
    ("slow", "slow"),
)

COMMAND_CATEGORIES = MappingProxyType(
    {
        "Code Quality & Cleanup": (
            "cleanup-unused-code",
            "fix-import-paths",
            "fix-spacing-layout",
            "refactor-cleanup",
        ),
        "UI Component Fixes": (
            "fix-filter-bar",
            "fix-data-table",
            "fix-form-fields",
            "implement-view-modes",
            "standardize-status-badges",
        ),
        "Testing & Debugging": (
            "test-page-quick",
            "test-feature-pages",
            "test-pages",
            "debug-failing-page",
        ),
        "Development Workflows": (
            "standardize-page",
            "pre-commit-checklist",
            "daily-cleanup",
            "pr-ready",
        ),
        "Discovery & Help": ("find-command", "suggest-command"),
        "Design System": ("design-token-check",),
        "Utilities": ("command-usage-report",),
    }
)

LIST_SEPARATOR = " | "
WARNING_PREFIX = "WARNING:"
ERROR_PREFIX = "ERROR:"

DATETIME_FORMAT_FILENAME = "%Y-%m-%d_%H-%M-%S"
LOG_FILE_EXTENSION = ".log"
