"""Public API for contact deduplication.

This module gathers the high-level entry points:
- Pair discovery (all fields, or one field at a time)
- Grouping with primary-contact selection
- Loading contacts from JSON/JSONL and exporting results
- Running the batch deduplication over a file
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from contactdedupe.grouping import (
    find_duplicates,
    find_duplicates_by_email,
    find_duplicates_by_name,
    find_duplicates_by_phone,
    group_duplicates,
)
from contactdedupe.ingest import load_contacts, write_jsonl
from contactdedupe.models import ContactValidationError
from contactdedupe.scoring import compare_contacts

if TYPE_CHECKING:
    from contactdedupe.engine.config import DedupeResult

__all__ = [
    "compare_contacts",
    "find_duplicates",
    "find_duplicates_by_name",
    "find_duplicates_by_phone",
    "find_duplicates_by_email",
    "group_duplicates",
    "load_contacts",
    "write_jsonl",
    "dedupe",
    "ContactValidationError",
    "DedupeError",
]


class DedupeError(Exception):
    """Raised when a batch deduplication run fails."""


def dedupe(
    input_path: str | Path,
    *,
    output_dir: str | Path = "out",
    strategy: str = "seed",
    pair_threshold: float = 0.6,
    workers: int = 1,
) -> DedupeResult:
    """Deduplicate the contacts of a JSON or JSONL file.

    Simplified interface to the batch runner.

    Parameters
    ----------
    input_path : str | Path
        Path to the contact file.
    output_dir : str | Path, optional
        Directory for output files, by default "out".
    strategy : str, optional
        Grouping strategy, "seed" or "transitive", by default "seed".
    pair_threshold : float, optional
        Minimum (exclusive) pair similarity, by default 0.6.
    workers : int, optional
        Worker processes for pair scoring, by default 1.

    Returns
    -------
    DedupeResult
        Run result with counts and ``output_files``.

    Raises
    ------
    FileNotFoundError
        If input path does not exist.
    DedupeError
        If the run fails (e.g., invalid contacts).

    Examples
    --------
        >>> from contactdedupe import dedupe
        >>> result = dedupe("contacts.json", output_dir="results")
        >>> print(result.total_groups, result.output_files["groups"])
    """
    from contactdedupe.engine import DedupeConfig, run_dedupe
    from contactdedupe.grouping import GroupingConfig

    input_path_obj = Path(input_path)
    if not input_path_obj.exists():
        raise FileNotFoundError(f"Input path not found: {input_path}")

    config = DedupeConfig(
        output_dir=Path(output_dir),
        grouping=GroupingConfig(
            pair_threshold=pair_threshold,
            strategy=strategy,
            workers=workers,
        ),
    )

    result = run_dedupe(input_path=input_path_obj, config=config)

    if not result.success:
        raise DedupeError(f"Deduplication failed: {result.error_message}")

    return result
