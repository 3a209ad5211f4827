"""Pairwise contact matcher.

Combines the field comparators into one weighted similarity score and a
confidence tier for a single pair of contacts.
"""

from contactdedupe.models import Contact
from contactdedupe.scoring.comparators import FIELD_CONFIGS
from contactdedupe.scoring.models import (
    DEFAULT_SCORING_CONFIG,
    FieldComparison,
    PairwiseMatch,
    ScoringConfig,
)


def combine_scores(
    comparisons: list[tuple[FieldComparison, float]],
) -> float:
    """Combine weighted field scores into one similarity.

    Only fields with a non-zero score count toward the denominator, so a
    contact lacking a field is not penalized for it.

    Parameters
    ----------
    comparisons : list[tuple[FieldComparison, float]]
        (comparison, weight) per field, in comparator order.

    Returns
    -------
    float
        Similarity in [0.0, 1.0]; 0.0 when no field contributes.
    """
    total_score = 0.0
    total_weight = 0.0
    for comparison, weight in comparisons:
        if comparison.contributes and weight > 0.0:
            total_score += comparison.score * weight
            total_weight += weight

    if total_weight == 0.0:
        return 0.0
    return min(total_score / total_weight, 1.0)


def compare_contacts(
    contact_a: Contact,
    contact_b: Contact,
    config: ScoringConfig | None = None,
) -> PairwiseMatch:
    """Score a single contact pair.

    Parameters
    ----------
    contact_a : Contact
        First contact.
    contact_b : Contact
        Second contact.
    config : ScoringConfig | None, optional
        Weights and thresholds. If None, uses the stock configuration.

    Returns
    -------
    PairwiseMatch
        Similarity, confidence and the unfiltered reasons of every
        contributing comparator (name, phone, email order).

    Examples
    --------
    >>> a = Contact(id=1, given_name="John", family_name="Smith")
    >>> b = Contact(id=2, given_name="john", family_name="smith")
    >>> compare_contacts(a, b).similarity
    1.0
    """
    if config is None:
        config = DEFAULT_SCORING_CONFIG

    comparisons: list[tuple[FieldComparison, float]] = []
    reasons: list[str] = []

    for field in FIELD_CONFIGS:
        comparison = field.compare(contact_a, contact_b, config)
        weight = field.weight(config)
        comparisons.append((comparison, weight))
        if comparison.contributes and weight > 0.0:
            reasons.extend(comparison.reasons)

    similarity = combine_scores(comparisons)

    return PairwiseMatch(
        contact_a=contact_a,
        contact_b=contact_b,
        similarity=similarity,
        reasons=tuple(reasons),
        confidence=config.confidence_for(similarity),
    )
