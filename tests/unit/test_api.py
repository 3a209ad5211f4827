"""Tests for the public API module."""

from pathlib import Path

import pytest

import contactdedupe
from contactdedupe import (
    Contact,
    ContactValidationError,
    DedupeError,
    compare_contacts,
    dedupe,
    find_duplicates,
    group_duplicates,
    load_contacts,
)

ROWS = [
    {"id": "a", "first_name": "Jane", "last_name": "Doe", "phone": "415-555-0100"},
    {"id": "b", "first_name": "Jane", "last_name": "Doe", "email": "jane@acme.com"},
    {"id": "c", "first_name": "Peter", "last_name": "Parker"},
]


@pytest.mark.unit
def test_package_exports() -> None:
    """Test the top-level package exposes the public API."""
    assert contactdedupe.__version__
    for name in contactdedupe.__all__:
        assert hasattr(contactdedupe, name)


@pytest.mark.unit
def test_library_workflow(write_contacts) -> None:
    """Test load, find and group through the top-level imports."""
    contacts = load_contacts(write_contacts(ROWS))

    (match,) = find_duplicates(contacts)
    (group,) = group_duplicates(contacts)

    assert match.pair_id == "a|b"
    assert group.member_ids == ("a", "b")
    assert compare_contacts(contacts[0], contacts[2]).similarity == 0.0


@pytest.mark.unit
def test_group_duplicates_docstring_example() -> None:
    """Test the documented example."""
    contacts = [
        Contact(id=1, given_name="Jane", family_name="Doe", phone="415-555-0100"),
        Contact(id=2, given_name="Jane", family_name="Doe", email="jane@acme.com"),
    ]

    assert [group.member_ids for group in group_duplicates(contacts)] == [(1, 2)]


@pytest.mark.unit
def test_dedupe_writes_outputs(write_contacts, tmp_path: Path) -> None:
    """Test dedupe() runs the batch and returns output paths."""
    out = tmp_path / "results"

    result = dedupe(write_contacts(ROWS), output_dir=out, strategy="transitive")

    assert result.success
    assert result.total_contacts == 3
    assert result.total_groups == 1
    assert result.total_duplicates == 1
    assert Path(result.output_files["groups"]).parent == out


@pytest.mark.unit
def test_dedupe_nonexistent_raises_error() -> None:
    """Test missing input raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        dedupe("nonexistent/contacts.json")


@pytest.mark.unit
def test_dedupe_invalid_input_raises_dedupe_error(write_contacts, tmp_path: Path) -> None:
    """Test a failed run surfaces as DedupeError."""
    path = write_contacts([{"id": "a"}, {"id": "a"}])

    with pytest.raises(DedupeError, match="ContactValidationError"):
        dedupe(path, output_dir=tmp_path / "out")


@pytest.mark.unit
def test_contact_validation_error_is_value_error() -> None:
    """Test callers can catch validation failures as ValueError."""
    assert issubclass(ContactValidationError, ValueError)
