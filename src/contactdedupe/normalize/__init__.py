"""Field normalization for contact comparison.

Each normalizer is a pure function over a single raw field value and never
raises on missing or malformed input; it returns an empty string instead.
"""

from contactdedupe.normalize.emails import normalize_email, split_email
from contactdedupe.normalize.names import full_name, normalize_name_part, reversed_name
from contactdedupe.normalize.phones import normalize_phone

__all__ = [
    "normalize_name_part",
    "full_name",
    "reversed_name",
    "normalize_phone",
    "normalize_email",
    "split_email",
]
