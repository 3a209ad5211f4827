"""Phone number normalization with country-code heuristics."""

import re

NON_DIGIT_RE = re.compile(r"\D", re.ASCII)

DOMESTIC_LENGTH = 10
DOMESTIC_COUNTRY_CODE = "1"


def normalize_phone(phone: str | None) -> str:
    """Normalize a phone number to a comparable digit string.

    All non-digit characters are removed, then:

    - 10 digits: assumed domestic, a leading "1" country code is added;
    - 11 digits starting with "1": kept as-is;
    - anything else (including longer, already-international numbers):
      kept as-is.

    Parameters
    ----------
    phone : str | None
        Raw phone number.

    Returns
    -------
    str
        Digit string, or "" when there are no digits.

    Examples
    --------
    >>> normalize_phone("+1 (415) 555-0100")
    '14155550100'
    >>> normalize_phone("415-555-0100")
    '14155550100'
    """
    if not phone:
        return ""
    digits = NON_DIGIT_RE.sub("", phone)
    if len(digits) == DOMESTIC_LENGTH:
        return DOMESTIC_COUNTRY_CODE + digits
    return digits
