"""Pytest configuration and fixtures for test suite."""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from contactdedupe.models import Contact  # noqa: E402


@pytest.fixture
def make_contact() -> Callable[..., Contact]:
    """Factory for test contacts with minimal boilerplate.

    Only the id is required; every other field defaults to None.
    """

    def _factory(contact_id: int | str = 1, **fields: str | None) -> Contact:
        return Contact(id=contact_id, **fields)

    return _factory


@pytest.fixture
def seed_limitation_contacts() -> list[Contact]:
    """Four contacts whose grouping differs between strategies.

    1-2 share a name, 1-3 share a phone, 3-4 share a name and email;
    2-3 and 1-4 have nothing in common.
    """
    return [
        Contact(id=1, given_name="John", family_name="Smith", phone="415-555-0100"),
        Contact(id=2, given_name="John", family_name="Smith", phone="212-555-0199"),
        Contact(
            id=3,
            given_name="Mary",
            family_name="Jones",
            phone="+1 (415) 555-0100",
            email="mary@example.com",
        ),
        Contact(id=4, given_name="Mary", family_name="Jones", email="MARY@example.com"),
    ]


@pytest.fixture
def write_contacts(tmp_path: Path) -> Callable[..., Path]:
    """Write contact mappings to a JSON file and return its path."""

    def _write(rows: list[dict[str, Any]], name: str = "contacts.json") -> Path:
        path = tmp_path / name
        with path.open("w", encoding="utf-8") as f:
            if path.suffix == ".jsonl":
                for row in rows:
                    f.write(json.dumps(row) + "\n")
            else:
                json.dump(rows, f)
        return path

    return _write
