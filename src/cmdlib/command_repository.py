"""Command document discovery, loading and lookup."""

from __future__ import annotations

import asyncio
import logging

from .catalog_index import load_index
from .classifier import classify_command
from .command_parser import parse_command_document
from .constants import COMMAND_SUFFIX
from .errors import SourceError
from .logging_utils import log_event
from .models import CategoryIndex, CommandMetadata
from .sources import DocumentSource

_INDEX_MEMBER_KEY = "commands"


class CommandRepository:
    """Read-only view of the command documents held by a source.

    With an index document, members and categories come from the index and
    archived ids are hidden from listings. Without one, every ``*.md`` file
    is listed and categories come from the static classifier.
    """

    def __init__(self, source: DocumentSource, *, use_index: bool = True) -> None:
        self.source = source
        self.use_index = use_index

    async def load_index(self) -> CategoryIndex | None:
        if not self.use_index:
            return None
        return await load_index(self.source, member_key=_INDEX_MEMBER_KEY)

    async def list_commands(self) -> list[CommandMetadata]:
        """Return every loadable command sorted by name."""
        index = await self.load_index()
        command_ids = await self._discover_ids(index)

        results = await asyncio.gather(
            *(self._load(command_id, index, report_missing=True) for command_id in command_ids)
        )
        commands = [command for command in results if command is not None]
        commands.sort(key=lambda c: (c.name, c.id))

        log_event(
            "listing_complete",
            kind="commands",
            source=self.source.describe(),
            requested=len(command_ids),
            loaded=len(commands),
            skipped=len(command_ids) - len(commands),
        )
        return commands

    async def get_command(self, command_id: str) -> CommandMetadata | None:
        """Return one command, or ``None`` when it cannot be loaded."""
        index = await self.load_index()
        return await self._load(command_id, index, report_missing=False)

    async def _discover_ids(self, index: CategoryIndex | None) -> list[str]:
        if index is not None:
            return index.member_ids()

        try:
            names = await self.source.list_names(COMMAND_SUFFIX)
        except SourceError as exc:
            log_event(
                "document_load_error",
                level=logging.WARNING,
                source=self.source.describe(),
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return []
        return [name[: -len(COMMAND_SUFFIX)] for name in names]

    async def _load(
        self,
        command_id: str,
        index: CategoryIndex | None,
        *,
        report_missing: bool,
    ) -> CommandMetadata | None:
        document = f"{command_id}{COMMAND_SUFFIX}"
        try:
            text = await self.source.read_text(document)
        except SourceError as exc:
            log_event(
                "document_load_error",
                level=logging.WARNING,
                source=self.source.describe(),
                document=document,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return None

        if text is None:
            if report_missing:
                log_event(
                    "document_load_error",
                    level=logging.WARNING,
                    source=self.source.describe(),
                    document=document,
                    error="not found",
                )
            return None

        category = index.category_for(command_id) if index is not None else classify_command(command_id)
        return parse_command_document(command_id, text, category=category)
