"""Data models for audit logging."""

from dataclasses import dataclass
from typing import Any

__all__ = ["LogEvent", "LOG_EVENT_SCHEMA"]


@dataclass
class LogEvent:
    """Structured log event.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with microseconds (UTC).
    run_id : str
        Unique run identifier.
    level : str
        Log level ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type identifier.
    data : dict[str, Any]
        Event-specific data payload.
    stage : str | None
        Current stage identifier.
    contact_id : int | str | None
        Contact identifier if the event concerns one contact.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
    contact_id: int | str | None = None


# JSON Schema for one line of events.jsonl
LOG_EVENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "LogEvent",
    "type": "object",
    "required": ["ts", "run_id", "level", "event", "data"],
    "additionalProperties": False,
    "properties": {
        "ts": {"type": "string", "pattern": "Z$"},
        "run_id": {"type": "string", "minLength": 1},
        "level": {"enum": ["DEBUG", "INFO", "WARN", "ERROR"]},
        "event": {"type": "string", "minLength": 1},
        "data": {"type": "object"},
        "stage": {"type": ["string", "null"]},
        "contact_id": {"type": ["integer", "string", "null"]},
    },
}
