"""Reading contact lists and writing JSONL results.

Contacts are accepted as produced by the host application's API: a JSON
array of contact objects, a ``{"contacts": [...], "total": n}`` response
body, or JSONL with one contact per line.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from contactdedupe.models import Contact, ContactValidationError, contacts_from_dicts

__all__ = ["JSONL_SUFFIXES", "load_contacts", "write_jsonl"]

JSONL_SUFFIXES = frozenset({".jsonl", ".ndjson"})


class SupportsToDict(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


def _read_rows(path: Path) -> list[Any]:
    with path.open("r", encoding="utf-8") as f:
        if path.suffix.lower() in JSONL_SUFFIXES:
            return [json.loads(line) for line in f if line.strip()]
        data = json.load(f)

    if isinstance(data, dict) and isinstance(data.get("contacts"), list):
        return data["contacts"]
    if isinstance(data, list):
        return data
    raise ContactValidationError(
        f"{path.name}: expected a JSON array of contacts or an object with a 'contacts' list"
    )


def load_contacts(path: str | Path) -> list[Contact]:
    """Load and validate contacts from a JSON or JSONL file.

    Parameters
    ----------
    path : str | Path
        Path to ``.json`` (array or API response) or ``.jsonl`` file.

    Returns
    -------
    list[Contact]
        Contacts in file order.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ContactValidationError
        If the content is not a contact list or a contact is invalid.
    json.JSONDecodeError
        If the file is not valid JSON.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return contacts_from_dicts(_read_rows(file_path))


def write_jsonl(
    items: Iterable[SupportsToDict],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> int:
    """Write objects with ``to_dict()`` to a JSONL file.

    Parameters
    ----------
    items : Iterable[SupportsToDict]
        Matches, groups or contacts.
    path : str | Path
        Output file path; parent directories are created.
    sort_keys : bool, optional
        Sort keys for deterministic output, by default True.

    Returns
    -------
    int
        Number of lines written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for item in items:
            f.write(json.dumps(item.to_dict(), ensure_ascii=False, sort_keys=sort_keys))
            f.write("\n")
            count += 1
    return count
