"""Email address normalization."""


def normalize_email(email: str | None) -> str:
    """Lower-case and trim an email address ("" when missing)."""
    if not email:
        return ""
    return email.strip().lower()


def split_email(email: str) -> tuple[str, str]:
    """Split a normalized address into (local part, domain).

    The domain is the text between the first and second "@"; anything after
    a second "@" is dropped. The domain is "" when the address has no "@".
    """
    parts = email.split("@")
    domain = parts[1] if len(parts) > 1 else ""
    return parts[0], domain
