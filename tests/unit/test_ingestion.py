"""Tests for contact loading and JSONL export."""

import json
from pathlib import Path

import pytest

from contactdedupe.grouping import find_duplicates
from contactdedupe.ingest import load_contacts, write_jsonl
from contactdedupe.models import Contact, ContactValidationError

ROWS = [
    {"id": 1, "first_name": "Jane", "last_name": "Doe", "email": "jane@acme.com"},
    {"id": 2, "given_name": "Jane", "family_name": "Doe", "phone": None},
]


@pytest.mark.unit
def test_load_contacts_json_array(write_contacts) -> None:
    """Test a plain JSON array of contacts."""
    contacts = load_contacts(write_contacts(ROWS))

    assert [c.id for c in contacts] == [1, 2]
    assert contacts[0].family_name == "Doe"


@pytest.mark.unit
def test_load_contacts_api_response(tmp_path: Path) -> None:
    """Test a response body with a 'contacts' list and paging fields."""
    path = tmp_path / "response.json"
    path.write_text(json.dumps({"contacts": ROWS, "total": 2}), encoding="utf-8")

    assert len(load_contacts(path)) == 2


@pytest.mark.unit
def test_load_contacts_jsonl(write_contacts) -> None:
    """Test one contact per line, blank lines ignored."""
    path = write_contacts(ROWS, name="contacts.jsonl")
    with path.open("a", encoding="utf-8") as f:
        f.write("\n")

    assert [c.id for c in load_contacts(path)] == [1, 2]


@pytest.mark.unit
def test_load_contacts_nonexistent() -> None:
    """Test missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_contacts("nonexistent/contacts.json")


@pytest.mark.unit
def test_load_contacts_wrong_shape(tmp_path: Path) -> None:
    """Test a JSON object without a contact list is rejected."""
    path = tmp_path / "contacts.json"
    path.write_text(json.dumps({"items": ROWS}), encoding="utf-8")

    with pytest.raises(ContactValidationError, match="expected a JSON array"):
        load_contacts(path)


@pytest.mark.unit
def test_load_contacts_invalid_row(write_contacts) -> None:
    """Test a malformed contact fails the whole load."""
    path = write_contacts([*ROWS, {"id": 3, "email": ["a@b.c"]}])

    with pytest.raises(ContactValidationError, match="index 2"):
        load_contacts(path)


@pytest.mark.unit
def test_write_jsonl_creates_file(tmp_path: Path) -> None:
    """Test JSONL output with one object per line."""
    contacts = [Contact(id=1, given_name="Jane"), Contact(id=2, given_name="John")]
    output = tmp_path / "nested" / "contacts.jsonl"

    count = write_jsonl(contacts, output)

    assert count == 2
    lines = output.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line) for line in lines] == [
        {"id": 1, "given_name": "Jane"},
        {"id": 2, "given_name": "John"},
    ]


@pytest.mark.unit
def test_write_jsonl_deterministic(write_contacts, tmp_path: Path) -> None:
    """Test writing the same matches twice gives identical bytes."""
    contacts = load_contacts(write_contacts(ROWS))
    matches = find_duplicates(contacts)

    write_jsonl(matches, tmp_path / "a.jsonl")
    write_jsonl(matches, tmp_path / "b.jsonl")

    assert (tmp_path / "a.jsonl").read_bytes() == (tmp_path / "b.jsonl").read_bytes()
