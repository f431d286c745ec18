"""Tests for script comment-header parsing."""

from cmdlib.script_parser import (
    extract_script_description,
    extract_script_prerequisites,
    extract_script_usage,
)


class TestExtractScriptDescription:
    """Test extract_script_description function."""

    def test_first_qualifying_comment_wins(self):
        content = "# Short\n# Rotates application log files nightly\n# Another long comment line\n"
        assert extract_script_description("rotate", content) == "Rotates application log files nightly"

    def test_skips_marker_lines(self):
        content = (
            "# Usage: rotate.sh --days 7 --verbose\n"
            "# Prerequisites: logrotate installed\n"
            "# param($Days = 7) declared below\n"
            "# Compresses old log archives\n"
        )
        assert extract_script_description("rotate", content) == "Compresses old log archives"

    def test_skips_lines_mentioning_script(self):
        content = "# This SCRIPT does a thing\n# Deletes merged git branches\n"
        assert extract_script_description("prune", content) == "Deletes merged git branches"

    def test_skips_shebang(self):
        content = "#!/usr/bin/env bash\n# Deletes merged git branches\n"
        assert extract_script_description("prune", content) == "Deletes merged git branches"

    def test_length_must_exceed_minimum(self):
        assert extract_script_description("x", "# 0123456789\n") == "Script: x"
        assert extract_script_description("x", "# 0123456789A\n") == "0123456789A"

    def test_only_first_ten_lines_are_scanned(self):
        content = "echo hi\n" * 10 + "# Deletes merged git branches\n"
        assert extract_script_description("prune", content) == "Script: prune"

    def test_missing_content_uses_default(self):
        assert extract_script_description("prune", None) == "Script: prune"
        assert extract_script_description("prune", "") == "Script: prune"


def test_extract_usage_inline():
    assert extract_script_usage("# Usage: ./deploy.sh prod\n") == "./deploy.sh prod"


def test_extract_usage_on_following_line():
    assert extract_script_usage("# Usage:\n#   ./deploy.sh prod\necho\n") == "./deploy.sh prod"


def test_extract_usage_absent():
    assert extract_script_usage("# Deploys things\n") is None
    assert extract_script_usage(None) is None


def test_extract_prerequisites_block():
    content = "# Prerequisites:\n#   - Node 20\n#   * pnpm\n#\n# Trailing comment\n"
    assert extract_script_prerequisites(content) == ("Node 20", "pnpm")


def test_extract_prerequisites_inline_value():
    content = "# Prerequisites: Docker\n# - Compose v2\nrun\n"
    assert extract_script_prerequisites(content) == ("Docker", "Compose v2")


def test_extract_prerequisites_absent():
    assert extract_script_prerequisites("# Nothing here\n") == ()
    assert extract_script_prerequisites(None) == ()
