"""Pairwise contact scoring.

This module implements the scoring layer: an edit-distance similarity
primitive, three field comparators (name, phone, email) and the matcher
that combines them into an explainable similarity and confidence tier.
"""

from contactdedupe.scoring.comparators import (
    EMAIL_FIELD,
    FIELD_CONFIGS,
    NAME_FIELD,
    PHONE_FIELD,
    FieldConfig,
    compare_emails,
    compare_names,
    compare_phones,
)
from contactdedupe.scoring.matcher import combine_scores, compare_contacts
from contactdedupe.scoring.models import (
    DEFAULT_SCORING_CONFIG,
    Confidence,
    FieldComparison,
    PairwiseMatch,
    ScoringConfig,
)
from contactdedupe.scoring.similarity import levenshtein_distance, similarity

__all__ = [
    # Models
    "Confidence",
    "FieldComparison",
    "PairwiseMatch",
    "ScoringConfig",
    "DEFAULT_SCORING_CONFIG",
    # Primitive
    "levenshtein_distance",
    "similarity",
    # Comparators
    "FieldConfig",
    "FIELD_CONFIGS",
    "NAME_FIELD",
    "PHONE_FIELD",
    "EMAIL_FIELD",
    "compare_names",
    "compare_phones",
    "compare_emails",
    # Matcher
    "combine_scores",
    "compare_contacts",
]
