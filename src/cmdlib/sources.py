"""Async document sources: a local directory or an HTTP base URL."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from types import TracebackType

import aiofiles  # type: ignore[import-untyped]
import httpx

from .errors import SourceError

_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$")
_NOT_FOUND_STATUSES = {404, 410}


def is_safe_document_name(name: str) -> bool:
    """Reject names that could escape the source root."""
    return bool(_SAFE_NAME_RE.match(name)) and ".." not in name


class DocumentSource(ABC):
    """Read-only access to named text documents.

    ``read_text`` returns ``None`` when the document does not exist and raises
    ``SourceError`` for any other failure.
    """

    @abstractmethod
    async def read_text(self, name: str) -> str | None: ...

    @abstractmethod
    async def list_names(self, suffix: str) -> list[str]: ...

    @abstractmethod
    def describe(self) -> str: ...

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "DocumentSource":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


class DirectorySource(DocumentSource):
    """Documents stored as files in one directory."""

    def __init__(self, root_dir: Path | str) -> None:
        self.root_dir = Path(root_dir)

    def describe(self) -> str:
        return str(self.root_dir)

    async def read_text(self, name: str) -> str | None:
        if not is_safe_document_name(name):
            return None
        path = self.root_dir / name
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                return await f.read()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None
        except UnicodeDecodeError as exc:
            raise SourceError(f"Document is not valid UTF-8: {path}") from exc
        except OSError as exc:
            raise SourceError(f"Failed to read document: {path}: {exc}") from exc

    async def list_names(self, suffix: str) -> list[str]:
        if not self.root_dir.is_dir():
            return []
        try:
            return sorted(
                p.name
                for p in self.root_dir.iterdir()
                if p.is_file() and p.name.endswith(suffix)
            )
        except OSError as exc:
            raise SourceError(f"Failed to list directory: {self.root_dir}: {exc}") from exc


class HttpSource(DocumentSource):
    """Documents fetched relative to a base URL.

    HTTP offers no directory listing, so ``list_names`` is always empty and
    readers depend on the index document to enumerate members.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout_sec: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_sec))

    def describe(self) -> str:
        return self.base_url

    async def read_text(self, name: str) -> str | None:
        if not is_safe_document_name(name):
            return None
        url = f"{self.base_url}{name}"
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise SourceError(f"Failed to fetch document: {url}: {exc}") from exc

        if response.status_code in _NOT_FOUND_STATUSES:
            return None
        if response.is_error:
            raise SourceError(
                f"Failed to fetch document: {url}: HTTP {response.status_code}"
            )
        return response.text

    async def list_names(self, suffix: str) -> list[str]:
        return []

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def open_source(location: str) -> DocumentSource:
    """Build a source from a directory path or an http(s) base URL."""
    if location.startswith(("http://", "https://")):
        return HttpSource(location)
    return DirectorySource(location)
