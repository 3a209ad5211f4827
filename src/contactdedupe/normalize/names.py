"""Person name normalization."""

import re

# Anything that is neither a word character nor whitespace
SPECIAL_CHARS_RE = re.compile(r"[^\w\s]")
WHITESPACE_RE = re.compile(r"\s+")


def normalize_name_part(value: str | None) -> str:
    """Normalize one name component for comparison.

    Lower-cases, strips special characters (punctuation, apostrophes,
    hyphens) and collapses whitespace.

    Parameters
    ----------
    value : str | None
        Raw name component.

    Returns
    -------
    str
        Normalized component, or "" when missing.

    Examples
    --------
    >>> normalize_name_part("  O'Brien-Smith ")
    'obriensmith'
    """
    if not value:
        return ""
    text = SPECIAL_CHARS_RE.sub("", value.lower().strip())
    return WHITESPACE_RE.sub(" ", text).strip()


def full_name(given: str | None, family: str | None) -> str:
    """Return the normalized ``"{given} {family}"`` form."""
    return f"{normalize_name_part(given)} {normalize_name_part(family)}".strip()


def reversed_name(given: str | None, family: str | None) -> str:
    """Return the normalized ``"{family} {given}"`` form."""
    return f"{normalize_name_part(family)} {normalize_name_part(given)}".strip()
