"""Batch deduplication runner.

Chains loading, pair discovery and grouping over one contact file and
writes the results as JSONL artifacts.

Output layout::

    <output_dir>/
        matches.jsonl          pairwise matches (optional)
        groups.jsonl           duplicate groups
        reports/summary.json   run counters and configuration
"""

import json
import time
import traceback
from pathlib import Path

from contactdedupe.audit.logger import AuditLogger
from contactdedupe.engine.config import DedupeConfig, DedupeResult
from contactdedupe.grouping.group_builder import build_groups
from contactdedupe.grouping.pairs import find_matches
from contactdedupe.ingest import load_contacts, write_jsonl
from contactdedupe.utils import calculate_file_sha256

LOAD_STAGE = "load_contacts"


def _failed(error_message: str, **counts: int) -> DedupeResult:
    return DedupeResult(
        success=False,
        total_contacts=counts.get("total_contacts", 0),
        total_matches=counts.get("total_matches", 0),
        total_groups=counts.get("total_groups", 0),
        total_duplicates=0,
        output_files={},
        error_message=error_message,
    )


def _log_artifact(logger: AuditLogger | None, path: Path, record_count: int) -> None:
    if logger:
        logger.artifact_written(
            path=str(path),
            sha256=calculate_file_sha256(path),
            record_count=record_count,
        )


def _run_stages(
    input_path: Path,
    config: DedupeConfig,
    logger: AuditLogger | None,
) -> DedupeResult:
    """Execute load, match and group stages.

    Counts reached before a failure are kept in the returned result.
    """
    if not input_path.exists():
        return _failed(f"Input path does not exist: {input_path}")

    total_contacts = 0
    total_matches = 0

    try:
        start = time.perf_counter()
        if logger:
            logger.stage_started(LOAD_STAGE)
        contacts = load_contacts(input_path)
        total_contacts = len(contacts)
        if logger:
            logger.stage_finished(
                LOAD_STAGE,
                duration_seconds=time.perf_counter() - start,
                counters={"contacts": total_contacts},
            )

        if total_contacts == 0:
            return _failed("No contacts found in input")

        matches = find_matches(
            contacts,
            config=config.scoring,
            grouping=config.grouping,
            logger=logger,
        )
        total_matches = len(matches)

        groups = build_groups(
            contacts,
            matches,
            config=config.scoring,
            grouping=config.grouping,
            logger=logger,
        )

        output_dir = config.output_dir
        output_files: dict[str, str] = {}

        if config.write_matches:
            matches_path = output_dir / "matches.jsonl"
            _log_artifact(logger, matches_path, write_jsonl(matches, matches_path))
            output_files["matches"] = str(matches_path)

        groups_path = output_dir / "groups.jsonl"
        _log_artifact(logger, groups_path, write_jsonl(groups, groups_path))
        output_files["groups"] = str(groups_path)

        result = DedupeResult(
            success=True,
            total_contacts=total_contacts,
            total_matches=total_matches,
            total_groups=len(groups),
            total_duplicates=sum(len(group.duplicates) for group in groups),
            output_files=output_files,
        )

        summary_path = output_dir / "reports" / "summary.json"
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        output_files["summary"] = str(summary_path)
        with summary_path.open("w", encoding="utf-8") as f:
            json.dump(
                {"result": result.to_dict(), "config": config.to_dict()},
                f,
                indent=2,
                sort_keys=True,
            )

        return result

    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        if logger:
            logger.error(
                exception_class=type(e).__name__,
                message=str(e),
                stage=logger.current_stage,
                traceback=traceback.format_exc(),
            )
        return _failed(error_msg, total_contacts=total_contacts, total_matches=total_matches)


def run_dedupe(
    input_path: Path | str,
    config: DedupeConfig | None = None,
    logger: AuditLogger | None = None,
) -> DedupeResult:
    """Run the batch deduplication over one contact file.

    Parameters
    ----------
    input_path : Path | str
        Path to a JSON or JSONL contact file.
    config : DedupeConfig | None, optional
        Run configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Audit logger for tracking. If None, no logging.

    Returns
    -------
    DedupeResult
        Run results; ``success`` is False and ``error_message`` set when
        the input is missing, empty or invalid.

    Examples
    --------
    >>> from contactdedupe.engine import run_dedupe
    >>> result = run_dedupe("contacts.json")
    >>> if result.success:
    ...     print(f"{result.total_groups} duplicate groups")
    """
    if config is None:
        config = DedupeConfig()

    return _run_stages(Path(input_path), config, logger)
