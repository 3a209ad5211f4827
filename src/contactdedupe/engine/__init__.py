"""Batch run orchestration.

This package provides the entry point for deduplicating a contact file,
including configuration and result types.
"""

from contactdedupe.engine.config import (
    CONFIG_SCHEMA,
    DedupeConfig,
    DedupeResult,
    load_config,
)
from contactdedupe.engine.runner import run_dedupe

__all__ = [
    "CONFIG_SCHEMA",
    "DedupeConfig",
    "DedupeResult",
    "load_config",
    "run_dedupe",
]
