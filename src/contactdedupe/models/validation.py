"""Boundary validation for contact input.

Contract violations (missing or duplicated identity, malformed fields) are
rejected here, before any pair is scored.
"""

from collections.abc import Iterable, Sequence
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from contactdedupe.models.contacts import FIELD_ALIASES, Contact

__all__ = [
    "CONTACT_SCHEMA",
    "ContactValidationError",
    "contacts_from_dicts",
    "validate_contacts",
]

_STRING_FIELDS = (
    "given_name",
    "family_name",
    "email",
    "phone",
    "company",
    "job_title",
    "address_street",
    "address_city",
    "address_state",
    "address_zip",
    "address_country",
    "website",
    "notes",
    *FIELD_ALIASES,
)

CONTACT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Contact",
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": {"type": ["integer", "string"], "minLength": 1},
        **{name: {"type": ["string", "null"]} for name in _STRING_FIELDS},
    },
}

_CONTACT_VALIDATOR = jsonschema.Draft202012Validator(CONTACT_SCHEMA)


class ContactValidationError(ValueError):
    """Raised when input contacts violate the engine's preconditions."""

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize validation error.

        Parameters
        ----------
        message : str
            Error message.
        index : int | None, optional
            Position of the offending record in the input, if known.
        """
        super().__init__(message)
        self.index = index


def validate_contacts(contacts: Sequence[Contact]) -> None:
    """Check that every contact carries a stable, unique identity.

    Parameters
    ----------
    contacts : Sequence[Contact]
        Contacts to check.

    Raises
    ------
    ContactValidationError
        If an id is missing, not an int/str, blank, or shared.
    """
    seen: dict[Any, int] = {}
    for index, contact in enumerate(contacts):
        contact_id = contact.id
        if contact_id is None or isinstance(contact_id, bool):
            raise ContactValidationError(f"Contact at index {index} has no identity", index)
        if not isinstance(contact_id, int | str):
            raise ContactValidationError(
                f"Contact at index {index} has unsupported id type "
                f"{type(contact_id).__name__}",
                index,
            )
        if isinstance(contact_id, str) and not contact_id.strip():
            raise ContactValidationError(f"Contact at index {index} has a blank id", index)
        if contact_id in seen:
            raise ContactValidationError(
                f"Duplicate contact id {contact_id!r} at indexes {seen[contact_id]} and {index}",
                index,
            )
        seen[contact_id] = index


def contacts_from_dicts(rows: Iterable[dict[str, Any]]) -> list[Contact]:
    """Validate raw contact mappings and convert them to contacts.

    Parameters
    ----------
    rows : Iterable[dict[str, Any]]
        Contact mappings (e.g., decoded JSON objects).

    Returns
    -------
    list[Contact]
        Validated contacts, in input order.

    Raises
    ------
    ContactValidationError
        If a row fails the contact schema or identities collide.
    """
    contacts: list[Contact] = []
    for index, row in enumerate(rows):
        error = best_match(_CONTACT_VALIDATOR.iter_errors(row))
        if error is not None:
            location = "/".join(str(p) for p in error.absolute_path) or "record"
            raise ContactValidationError(
                f"Invalid contact at index {index} ({location}): {error.message}",
                index,
            )
        contacts.append(Contact.from_dict(row))

    validate_contacts(contacts)
    return contacts
