"""Tests for directory and HTTP document sources."""

from pathlib import Path

import httpx
import pytest

from cmdlib.errors import SourceError
from cmdlib.sources import DirectorySource, HttpSource, is_safe_document_name, open_source


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("cleanup-unused-code.md", True),
        ("setup_env.ps1", True),
        ("index.json", True),
        ("../secret.md", False),
        ("a/b.md", False),
        ("a\\b.md", False),
        (".hidden", False),
        ("", False),
    ],
)
def test_is_safe_document_name(name: str, expected: bool) -> None:
    assert is_safe_document_name(name) is expected


class TestDirectorySource:
    """Test DirectorySource."""

    @pytest.mark.asyncio
    async def test_read_existing_document(self, tmp_path: Path):
        (tmp_path / "a.md").write_text("hello", encoding="utf-8")
        assert await DirectorySource(tmp_path).read_text("a.md") == "hello"

    @pytest.mark.asyncio
    async def test_missing_document_is_none(self, tmp_path: Path):
        assert await DirectorySource(tmp_path).read_text("nope.md") is None

    @pytest.mark.asyncio
    async def test_directory_named_like_document_is_none(self, tmp_path: Path):
        (tmp_path / "dir.md").mkdir()
        assert await DirectorySource(tmp_path).read_text("dir.md") is None

    @pytest.mark.asyncio
    async def test_unsafe_name_is_none(self, tmp_path: Path):
        (tmp_path / "inner").mkdir()
        (tmp_path / "outer.md").write_text("x", encoding="utf-8")
        assert await DirectorySource(tmp_path / "inner").read_text("../outer.md") is None

    @pytest.mark.asyncio
    async def test_invalid_utf8_raises_source_error(self, tmp_path: Path):
        (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(SourceError):
            await DirectorySource(tmp_path).read_text("bad.md")

    @pytest.mark.asyncio
    async def test_list_names_filters_by_suffix(self, tmp_path: Path):
        (tmp_path / "b.md").write_text("", encoding="utf-8")
        (tmp_path / "a.md").write_text("", encoding="utf-8")
        (tmp_path / "c.txt").write_text("", encoding="utf-8")
        (tmp_path / "sub.md").mkdir()
        assert await DirectorySource(tmp_path).list_names(".md") == ["a.md", "b.md"]

    @pytest.mark.asyncio
    async def test_list_names_missing_directory_is_empty(self, tmp_path: Path):
        assert await DirectorySource(tmp_path / "missing").list_names(".md") == []


class TestHttpSource:
    """Test HttpSource with a mock transport."""

    @pytest.mark.asyncio
    async def test_read_ok(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "https://example.com/commands/a.md"
            return httpx.Response(200, text="# /a\n")

        async with _mock_client(handler) as client:
            source = HttpSource("https://example.com/commands", client=client)
            assert await source.read_text("a.md") == "# /a\n"

    @pytest.mark.asyncio
    async def test_not_found_is_none(self):
        async with _mock_client(lambda request: httpx.Response(404)) as client:
            source = HttpSource("https://example.com/commands/", client=client)
            assert await source.read_text("a.md") is None

    @pytest.mark.asyncio
    async def test_server_error_raises_source_error(self):
        async with _mock_client(lambda request: httpx.Response(500)) as client:
            source = HttpSource("https://example.com/commands/", client=client)
            with pytest.raises(SourceError, match="HTTP 500"):
                await source.read_text("a.md")

    @pytest.mark.asyncio
    async def test_transport_error_raises_source_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _mock_client(handler) as client:
            source = HttpSource("https://example.com/commands/", client=client)
            with pytest.raises(SourceError, match="refused"):
                await source.read_text("a.md")

    @pytest.mark.asyncio
    async def test_invalid_url_raises_source_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.InvalidURL("Invalid URL")

        async with _mock_client(handler) as client:
            source = HttpSource("https://example.com/commands/", client=client)
            with pytest.raises(SourceError, match="Invalid URL"):
                await source.read_text("a.md")

    @pytest.mark.asyncio
    async def test_list_names_is_empty_and_injected_client_stays_open(self):
        async with _mock_client(lambda request: httpx.Response(200, text="x")) as client:
            async with HttpSource("https://example.com/", client=client) as source:
                assert await source.list_names(".md") == []
            assert not client.is_closed


def test_open_source_selects_backend(tmp_path: Path) -> None:
    assert isinstance(open_source(str(tmp_path)), DirectorySource)
    assert isinstance(open_source("https://example.com/commands"), HttpSource)
