"""Logging utilities for cmdlib."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .constants import APP_NAME, DATETIME_FORMAT_FILENAME, LOG_FILE_EXTENSION


_HEAD_KEYS = ("ts", "level")

# Keys listed after ts/level for each event; the rest follow sorted by name.
_EVENT_KEYS: dict[str, tuple[str, ...]] = {
    "document_load_error": ("source", "document", "error_type", "error"),
    "index_load_error": ("source", "error_type", "error"),
    "script_probe_error": ("source", "script_id", "document", "error_type", "error"),
    "listing_complete": ("kind", "source", "requested", "loaded", "skipped"),
}


def _decode_event(message: str) -> dict[str, Any] | None:
    """Return the payload of a ``log_event`` message, else ``None``."""
    if not (message.startswith("{") and message.endswith("}")):
        return None
    try:
        payload = json.loads(message)
    except json.JSONDecodeError:
        return None
    if not isinstance(payload, dict) or "event" not in payload:
        return None
    return payload


class StructuredTextFormatter(logging.Formatter):
    """Render each record as an ``=== event ===`` block of ``key: value`` lines.

    Records emitted by ``log_event`` are expanded from their JSON payload.
    Anything else, such as httpx request lines, is shown under its logger name
    with the raw message.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._entries_written = 0

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        fields: dict[str, Any] = {
            "ts": datetime.now().astimezone().isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }
        payload = _decode_event(message)
        if payload is None:
            event_name = record.name
            fields["message"] = message
        else:
            event_name = str(payload.pop("event"))
            fields.update(payload)

        lines = [f"=== {event_name} ==="]
        for key in _ordered_keys(event_name, fields):
            value = str(fields[key]).replace("\n", "\\n")
            lines.append(f"{key}: {value}")
        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        block = "\n".join(lines)
        self._entries_written += 1
        # Blank line between entries, none after the last.
        return block if self._entries_written == 1 else "\n" + block


def _ordered_keys(event_name: str, fields: dict[str, Any]) -> list[str]:
    preferred = _HEAD_KEYS + _EVENT_KEYS.get(event_name, ("logger",))
    present = [key for key in preferred if fields.get(key) is not None]
    rest = sorted(key for key, value in fields.items() if key not in preferred and value is not None)
    return present + rest


def _to_log_safe(value: Any) -> Any:
    """Convert values to JSON-serializable, log-safe representations."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _to_log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_log_safe(v) for v in value]
    return str(value)


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event."""
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        payload[key] = _to_log_safe(value)
    logging.getLogger(APP_NAME).log(
        level, json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    )


def build_run_log_path(logs_dir: str) -> str:
    """Build a unique run log path in the given logs directory."""
    logs_dir_path = Path(logs_dir)
    logs_dir_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime(DATETIME_FORMAT_FILENAME)
    base_name = f"{APP_NAME}_{timestamp}"
    candidate = logs_dir_path / f"{base_name}{LOG_FILE_EXTENSION}"

    suffix = 1
    while candidate.exists():
        candidate = logs_dir_path / f"{base_name}_{suffix}{LOG_FILE_EXTENSION}"
        suffix += 1

    return str(candidate)


def setup_logging(log_file: Optional[str] = None) -> None:
    """Set up logging configuration."""
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_path), encoding="utf-8")
        handler.setFormatter(StructuredTextFormatter())
        logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
        logging.disable(logging.NOTSET)
    else:
        logging.disable(logging.CRITICAL)
