"""Audit logging for contactdedupe runs.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: structured event record
"""

from contactdedupe.audit.helpers import generate_run_id
from contactdedupe.audit.logger import AuditLogger
from contactdedupe.audit.models import LOG_EVENT_SCHEMA, LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "LOG_EVENT_SCHEMA",
    "generate_run_id",
]
