"""Shared data types for contactdedupe.

Domain-specific result types live closer to their consumers:
- Scoring types → contactdedupe.scoring.models
- Grouping types → contactdedupe.grouping.models
"""

from contactdedupe.models.contacts import FIELD_ALIASES, Contact, ContactId
from contactdedupe.models.validation import (
    CONTACT_SCHEMA,
    ContactValidationError,
    contacts_from_dicts,
    validate_contacts,
)

__all__ = [
    "Contact",
    "ContactId",
    "FIELD_ALIASES",
    "CONTACT_SCHEMA",
    "ContactValidationError",
    "contacts_from_dicts",
    "validate_contacts",
]
