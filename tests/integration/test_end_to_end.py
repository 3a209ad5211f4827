"""Integration tests for end-to-end batch deduplication.

This module runs the load, pair discovery and grouping stages over real
files and checks the written artifacts.
"""

import json
from pathlib import Path

import jsonschema
import pytest

from contactdedupe.audit import LOG_EVENT_SCHEMA, AuditLogger
from contactdedupe.engine import DedupeConfig, run_dedupe
from contactdedupe.grouping import GroupingConfig, GroupingStrategy

ADDRESS_BOOK = [
    {
        "id": 101,
        "first_name": "John",
        "last_name": "Smith",
        "phone": "415-555-0100",
        "company": "Acme",
    },
    {"id": 102, "first_name": "Jon", "last_name": "Smith", "phone": "+1 (415) 555-0100"},
    {"id": 103, "first_name": "Smith", "last_name": "John", "email": "jsmith@acme.com"},
    {"id": 201, "first_name": "Jane", "last_name": "Doe", "email": "jane.doe@example.com"},
    {
        "id": 202,
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "janedoe@example.com",
        "job_title": "CTO",
        "notes": "prefers email",
    },
    {"id": 301, "first_name": "Peter", "last_name": "Parker", "phone": "212-555-0199"},
    {"id": 302, "first_name": "Mary", "last_name": "Jones", "phone": "312-555-0123"},
]


def _read_jsonl(path: Path) -> list[dict]:
    with path.open(encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.fixture
def address_book_file(tmp_path: Path) -> Path:
    path = tmp_path / "contacts.json"
    path.write_text(json.dumps({"contacts": ADDRESS_BOOK, "total": 7}), encoding="utf-8")
    return path


@pytest.mark.integration
def test_end_to_end_seed_strategy(address_book_file: Path, tmp_path: Path) -> None:
    """Test full run writes matches, groups and summary."""
    output_dir = tmp_path / "out"
    config = DedupeConfig(output_dir=output_dir)

    result = run_dedupe(input_path=address_book_file, config=config)

    assert result.success
    assert result.error_message is None
    assert result.total_contacts == 7
    assert result.total_groups == 2
    assert result.total_duplicates == 3

    groups = _read_jsonl(output_dir / "groups.jsonl")
    assert [sorted(g["members"]) for g in groups] == [[101, 102, 103], [201, 202]]
    assert groups[0]["primary"] == 101
    assert groups[1]["primary"] == 202
    assert "Names appear reversed" in groups[0]["reasons"]

    matches = _read_jsonl(output_dir / "matches.jsonl")
    assert len(matches) == result.total_matches
    similarities = [m["similarity"] for m in matches]
    assert similarities == sorted(similarities, reverse=True)
    assert all(m["similarity"] > 0.6 for m in matches)

    summary = json.loads((output_dir / "reports" / "summary.json").read_text(encoding="utf-8"))
    assert summary["result"]["total_groups"] == 2
    assert summary["config"]["grouping"]["strategy"] == "seed"


@pytest.mark.integration
def test_end_to_end_strategies_agree_without_chains(
    address_book_file: Path, tmp_path: Path
) -> None:
    """Test both strategies find the same groups when every member matches a seed."""
    member_sets = {}
    for strategy in GroupingStrategy:
        config = DedupeConfig(
            output_dir=tmp_path / strategy.value,
            grouping=GroupingConfig(strategy=strategy),
        )
        result = run_dedupe(address_book_file, config)
        assert result.success
        groups = _read_jsonl(Path(result.output_files["groups"]))
        member_sets[strategy] = {frozenset(g["members"]) for g in groups}

    assert member_sets[GroupingStrategy.SEED] == member_sets[GroupingStrategy.TRANSITIVE]


@pytest.mark.integration
def test_end_to_end_parallel_matches_serial(address_book_file: Path, tmp_path: Path) -> None:
    """Test a process pool run writes byte-identical results."""
    serial = DedupeConfig(output_dir=tmp_path / "serial")
    parallel = DedupeConfig(
        output_dir=tmp_path / "parallel",
        grouping=GroupingConfig(workers=2, rows_per_task=2),
    )

    assert run_dedupe(address_book_file, serial).success
    assert run_dedupe(address_book_file, parallel).success

    for name in ("matches.jsonl", "groups.jsonl"):
        assert (tmp_path / "serial" / name).read_bytes() == (
            tmp_path / "parallel" / name
        ).read_bytes()


@pytest.mark.integration
def test_end_to_end_audit_log(address_book_file: Path, tmp_path: Path) -> None:
    """Test the audit log records every stage and artifact."""
    output_dir = tmp_path / "out"
    log_path = output_dir / "reports" / "events.jsonl"

    with AuditLogger(run_id="it_run", log_path=log_path) as logger:
        result = run_dedupe(address_book_file, DedupeConfig(output_dir=output_dir), logger)

    assert result.success
    events = _read_jsonl(log_path)
    for event in events:
        jsonschema.validate(event, LOG_EVENT_SCHEMA)

    stages = [e["stage"] for e in events if e["event"] == "stage_finished"]
    assert stages == ["load_contacts", "pair_discovery", "grouping"]

    artifacts = [e["data"] for e in events if e["event"] == "artifact_written"]
    assert [Path(a["path"]).name for a in artifacts] == ["matches.jsonl", "groups.jsonl"]
    assert all(a["sha256"].startswith("sha256:") for a in artifacts)
    assert sum(e["event"] == "group_formed" for e in events) == 2


@pytest.mark.integration
def test_end_to_end_invalid_input(tmp_path: Path) -> None:
    """Test invalid contacts fail the run with an error event."""
    path = tmp_path / "contacts.jsonl"
    path.write_text('{"id": 1}\n{"id": 1}\n', encoding="utf-8")
    log_path = tmp_path / "events.jsonl"

    with AuditLogger(run_id="bad_run", log_path=log_path) as logger:
        result = run_dedupe(path, DedupeConfig(output_dir=tmp_path / "out"), logger)

    assert not result.success
    assert "Duplicate contact id" in result.error_message
    assert result.output_files == {}

    errors = [e for e in _read_jsonl(log_path) if e["event"] == "error"]
    assert len(errors) == 1
    assert errors[0]["level"] == "ERROR"
    assert errors[0]["stage"] == "load_contacts"


@pytest.mark.integration
def test_end_to_end_missing_input(tmp_path: Path) -> None:
    """Test a missing input file fails without raising."""
    result = run_dedupe(tmp_path / "missing.json", DedupeConfig(output_dir=tmp_path / "out"))

    assert not result.success
    assert "does not exist" in result.error_message
