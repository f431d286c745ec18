"""Script discovery through the scripts index, with platform inference."""

from __future__ import annotations

import asyncio
import logging

from .catalog_index import load_index
from .constants import DEFAULT_CATEGORY, UNIX_SCRIPT_SUFFIX, WINDOWS_SCRIPT_SUFFIX
from .errors import SourceError
from .logging_utils import log_event
from .models import CategoryIndex, Platform, ScriptMetadata
from .script_parser import (
    extract_script_description,
    extract_script_prerequisites,
    extract_script_usage,
)
from .sources import DocumentSource

_INDEX_MEMBER_KEY = "scripts"

# Probe order: the first file found decides the platform.
_PLATFORM_PROBES = (
    (WINDOWS_SCRIPT_SUFFIX, Platform.WINDOWS),
    (UNIX_SCRIPT_SUFFIX, Platform.UNIX),
)
_PLATFORM_SUFFIXES = {platform: suffix for suffix, platform in _PLATFORM_PROBES}


class ScriptRepository:
    """Read-only view of the scripts listed in a source's index document.

    Index members with no resolvable file are kept in both listings and
    lookups, without content and with the platform the index declares.
    """

    def __init__(self, source: DocumentSource) -> None:
        self.source = source

    async def load_index(self) -> CategoryIndex | None:
        return await load_index(self.source, member_key=_INDEX_MEMBER_KEY)

    async def list_scripts(self) -> list[ScriptMetadata]:
        index = await self.load_index()
        if index is None:
            return []

        script_ids = index.member_ids()
        scripts = list(
            await asyncio.gather(*(self._resolve(script_id, index) for script_id in script_ids))
        )
        scripts.sort(key=lambda s: (s.name, s.id))

        log_event(
            "listing_complete",
            kind="scripts",
            source=self.source.describe(),
            requested=len(script_ids),
            loaded=sum(1 for script in scripts if script.has_content),
            skipped=sum(1 for script in scripts if not script.has_content),
        )
        return scripts

    async def get_script(self, script_id: str) -> ScriptMetadata | None:
        """Return one script, or ``None`` when it is neither indexed nor on disk."""
        index = await self.load_index()
        probe = await self._probe(script_id)
        if probe is None and (index is None or not index.contains(script_id)):
            return None
        return self._build(script_id, index, probe)

    async def _resolve(self, script_id: str, index: CategoryIndex) -> ScriptMetadata:
        probe = await self._probe(script_id)
        return self._build(script_id, index, probe)

    async def _probe(self, script_id: str) -> tuple[str, str, Platform] | None:
        for suffix, platform in _PLATFORM_PROBES:
            filename = f"{script_id}{suffix}"
            try:
                content = await self.source.read_text(filename)
            except SourceError as exc:
                log_event(
                    "script_probe_error",
                    level=logging.WARNING,
                    source=self.source.describe(),
                    script_id=script_id,
                    document=filename,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                continue
            if content is not None:
                return content, filename, platform
        return None

    def _build(
        self,
        script_id: str,
        index: CategoryIndex | None,
        probe: tuple[str, str, Platform] | None,
    ) -> ScriptMetadata:
        category = index.category_for(script_id) if index is not None else DEFAULT_CATEGORY

        content: str | None
        if probe is not None:
            content, filename, platform = probe
        else:
            content = None
            platform = index.declared_platform(script_id) if index is not None else Platform.BOTH
            suffix = _PLATFORM_SUFFIXES.get(platform)
            filename = f"{script_id}{suffix}" if suffix else script_id

        return ScriptMetadata(
            id=script_id,
            name=script_id,
            title=script_id,
            description=extract_script_description(script_id, content),
            platform=platform,
            category=category,
            filename=filename,
            usage=extract_script_usage(content),
            prerequisites=extract_script_prerequisites(content),
            content=content,
        )
