"""Contact record data model.

Contacts are produced by the host application (storage, importers) and are
consumed read-only by the engine.
"""

from dataclasses import dataclass, fields
from typing import Any

ContactId = int | str

# Host application column names accepted as aliases in ``Contact.from_dict``
FIELD_ALIASES: dict[str, str] = {
    "first_name": "given_name",
    "last_name": "family_name",
}


@dataclass(frozen=True, slots=True)
class Contact:
    """Contact record with optional string fields.

    Attributes
    ----------
    id : ContactId
        Opaque unique identifier (int or str).
    given_name : str | None
        Given/first name.
    family_name : str | None
        Family/last name.
    email : str | None
        Email address.
    phone : str | None
        Phone number in any format.
    company : str | None
        Company or organisation.
    job_title : str | None
        Job title.
    address_street : str | None
        Street address.
    address_city : str | None
        City.
    address_state : str | None
        State or region.
    address_zip : str | None
        Postal code.
    address_country : str | None
        Country.
    website : str | None
        Web site URL.
    notes : str | None
        Free-text notes.
    """

    id: ContactId
    given_name: str | None = None
    family_name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    job_title: str | None = None
    address_street: str | None = None
    address_city: str | None = None
    address_state: str | None = None
    address_zip: str | None = None
    address_country: str | None = None
    website: str | None = None
    notes: str | None = None

    def completeness_score(self) -> int:
        """Count populated fields of the primary-selection checklist.

        Checklist (11 fields): given name, family name, email, phone,
        company, job title, street, city, state, web site, notes.
        Postal code and country are not part of it.

        Returns
        -------
        int
            Number of non-empty checklist fields (0-11).
        """
        checklist = (
            self.given_name,
            self.family_name,
            self.email,
            self.phone,
            self.company,
            self.job_title,
            self.address_street,
            self.address_city,
            self.address_state,
            self.website,
            self.notes,
        )
        return sum(1 for value in checklist if value)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contact":
        """Build a contact from a plain dictionary.

        Unknown keys are ignored so that full host-application rows
        (timestamps, social links, group memberships) can be passed as-is.

        Parameters
        ----------
        data : dict[str, Any]
            Contact mapping; ``first_name``/``last_name`` are accepted as
            aliases of ``given_name``/``family_name``.

        Returns
        -------
        Contact
            Contact instance.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = FIELD_ALIASES.get(key, key)
            if name in known and name not in values:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting empty fields."""
        result: dict[str, Any] = {"id": self.id}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name != "id" and value is not None:
                result[f.name] = value
        return result
