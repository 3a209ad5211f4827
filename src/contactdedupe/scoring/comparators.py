"""Field comparators for pairwise contact scoring.

Each comparator is a pure, deterministic function over the raw field values
of two contacts. It returns a bounded score and the reasons behind it, and
degrades to a zero score when a field is missing instead of failing.

Comparators are symmetric: swapping the two contacts never changes the
score.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from contactdedupe.models import Contact
from contactdedupe.normalize import (
    full_name,
    normalize_email,
    normalize_name_part,
    normalize_phone,
    reversed_name,
    split_email,
)
from contactdedupe.scoring.models import (
    DEFAULT_SCORING_CONFIG,
    NO_MATCH,
    FieldComparison,
    ScoringConfig,
)
from contactdedupe.scoring.similarity import similarity

LOCAL_NUMBER_DIGITS = 7
NATIONAL_NUMBER_DIGITS = 10


def _percent(value: float) -> int:
    """Round a similarity to a whole percentage, halves rounding up."""
    return math.floor(value * 100 + 0.5)


def compare_names(
    given_a: str | None,
    family_a: str | None,
    given_b: str | None,
    family_b: str | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> FieldComparison:
    """Compare person names with fuzzy matching.

    Parameters
    ----------
    given_a, family_a : str | None
        Name components of the first contact.
    given_b, family_b : str | None
        Name components of the second contact.
    config : ScoringConfig, optional
        Thresholds, by default the stock configuration.

    Returns
    -------
    FieldComparison
        Name score and reasons.

    Notes
    -----
    Checks, in order:

    1. Exact normalized match: 1.0, no further checks.
    2. Whole-name similarity above the fuzzy threshold: score = similarity.
    3. Given names similar: score raised to at least the component floor.
    4. Family names similar: same floor.
    5. Reversed order ("John Smith" vs "Smith John"), tried both ways:
       score raised to at least the reversed floor.

    Checks 2-5 only ever raise the score.
    """
    name_a = full_name(given_a, family_a)
    name_b = full_name(given_b, family_b)

    if not name_a or not name_b:
        return NO_MATCH

    if name_a == name_b:
        return FieldComparison(1.0, ("Exact name match",))

    threshold = config.fuzzy_threshold
    score = 0.0
    reasons: list[str] = []

    whole = similarity(name_a, name_b)
    if whole > threshold:
        score = whole
        reasons.append(f"Similar names ({_percent(whole)}% match)")

    first_a, first_b = normalize_name_part(given_a), normalize_name_part(given_b)
    if first_a and first_b and similarity(first_a, first_b) > threshold:
        score = max(score, config.name_component_floor)
        reasons.append("Similar first names")

    last_a, last_b = normalize_name_part(family_a), normalize_name_part(family_b)
    if last_a and last_b and similarity(last_a, last_b) > threshold:
        score = max(score, config.name_component_floor)
        reasons.append("Similar last names")

    reversed_a = reversed_name(given_a, family_a)
    reversed_b = reversed_name(given_b, family_b)
    if max(similarity(name_a, reversed_b), similarity(name_b, reversed_a)) > threshold:
        score = max(score, config.name_reversed_floor)
        reasons.append("Names appear reversed")

    return FieldComparison(score, tuple(reasons))


def compare_phones(
    phone_a: str | None,
    phone_b: str | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> FieldComparison:
    """Compare phone numbers across formatting and country-code conventions.

    Parameters
    ----------
    phone_a : str | None
        Raw phone number of the first contact.
    phone_b : str | None
        Raw phone number of the second contact.
    config : ScoringConfig, optional
        Scores, by default the stock configuration.

    Returns
    -------
    FieldComparison
        Phone score and reasons.

    Notes
    -----
    Identical normalized numbers score 1.0 and containment (international vs
    local format) scores ``phone_format_score``; both stop evaluation.
    Otherwise the local (last 7 digits) and national (last 10 digits) checks
    run independently: reasons accumulate and the higher score is kept.
    """
    normalized_a = normalize_phone(phone_a)
    normalized_b = normalize_phone(phone_b)

    if not normalized_a or not normalized_b:
        return NO_MATCH

    if normalized_a == normalized_b:
        return FieldComparison(1.0, ("Identical phone numbers",))

    if normalized_a in normalized_b or normalized_b in normalized_a:
        return FieldComparison(
            config.phone_format_score,
            ("Phone numbers match (different formats)",),
        )

    score = 0.0
    reasons: list[str] = []

    if _same_suffix(normalized_a, normalized_b, LOCAL_NUMBER_DIGITS):
        score = max(score, config.phone_local_score)
        reasons.append("Same local phone number")

    if _same_suffix(normalized_a, normalized_b, NATIONAL_NUMBER_DIGITS):
        score = max(score, config.phone_national_score)
        reasons.append("Same phone number (different country codes)")

    return FieldComparison(score, tuple(reasons))


def _same_suffix(a: str, b: str, digits: int) -> bool:
    """Check both numbers have at least ``digits`` digits and share them."""
    return len(a) >= digits and len(b) >= digits and a[-digits:] == b[-digits:]


def compare_emails(
    email_a: str | None,
    email_b: str | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> FieldComparison:
    """Compare email addresses, trusting near matches only on one domain.

    Parameters
    ----------
    email_a : str | None
        Raw email of the first contact.
    email_b : str | None
        Raw email of the second contact.
    config : ScoringConfig, optional
        Thresholds, by default the stock configuration.

    Returns
    -------
    FieldComparison
        Email score and reasons.

    Notes
    -----
    - Exact (case-insensitive, trimmed) match: 1.0.
    - Same non-empty domain and local parts above the fuzzy threshold:
      local-part similarity scaled by ``email_near_factor``.
    - Anything else: 0.0.
    """
    normalized_a = normalize_email(email_a)
    normalized_b = normalize_email(email_b)

    if not normalized_a or not normalized_b:
        return NO_MATCH

    if normalized_a == normalized_b:
        return FieldComparison(1.0, ("Identical email addresses",))

    local_a, domain_a = split_email(normalized_a)
    local_b, domain_b = split_email(normalized_b)

    if domain_a and domain_a == domain_b:
        local_similarity = similarity(local_a, local_b)
        if local_similarity > config.fuzzy_threshold:
            return FieldComparison(
                local_similarity * config.email_near_factor,
                (
                    "Similar email addresses on same domain "
                    f"({_percent(local_similarity)}% match)",
                ),
            )

    return NO_MATCH


# ---------------------------------------------------------------------------
# Field extractors
# ---------------------------------------------------------------------------


def _extract_name(a: Contact, b: Contact) -> dict[str, Any]:
    return {
        "given_a": a.given_name,
        "family_a": a.family_name,
        "given_b": b.given_name,
        "family_b": b.family_name,
    }


def _extract_phone(a: Contact, b: Contact) -> dict[str, Any]:
    return {"phone_a": a.phone, "phone_b": b.phone}


def _extract_email(a: Contact, b: Contact) -> dict[str, Any]:
    return {"email_a": a.email, "email_b": b.email}


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """A field comparator bound to its contact fields.

    Attributes
    ----------
    name : str
        Field name ('name', 'phone' or 'email').
    extractor : Callable[[Contact, Contact], dict[str, Any]]
        Function pulling the comparator inputs out of a contact pair.
    comparator : Callable[..., FieldComparison]
        Comparison function.
    """

    name: str
    extractor: Callable[[Contact, Contact], dict[str, Any]]
    comparator: Callable[..., FieldComparison]

    def compare(
        self,
        contact_a: Contact,
        contact_b: Contact,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    ) -> FieldComparison:
        """Extract fields and run the comparison."""
        return self.comparator(**self.extractor(contact_a, contact_b), config=config)

    def weight(self, config: ScoringConfig) -> float:
        """Weight of this field in the combined score."""
        match self.name:
            case "name":
                return config.name_weight
            case "phone":
                return config.phone_weight
            case "email":
                return config.email_weight
        raise KeyError(f"No weight configured for field {self.name!r}")


NAME_FIELD = FieldConfig(name="name", extractor=_extract_name, comparator=compare_names)
PHONE_FIELD = FieldConfig(name="phone", extractor=_extract_phone, comparator=compare_phones)
EMAIL_FIELD = FieldConfig(name="email", extractor=_extract_email, comparator=compare_emails)

# Ordered registry; reasons are concatenated in this order
FIELD_CONFIGS: tuple[FieldConfig, ...] = (NAME_FIELD, PHONE_FIELD, EMAIL_FIELD)
