"""Data models and configuration for pairwise scoring."""

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

from contactdedupe.models import Contact

# Decimal places kept when serializing scores
ROUND_DECIMALS = 6


class Confidence(StrEnum):
    """Coarse confidence tier derived from a similarity score.

    Attributes
    ----------
    HIGH : str
        Very likely the same person.
    MEDIUM : str
        Probably the same person.
    LOW : str
        Weak evidence.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True, slots=True)
class ScoringConfig:
    """Weights and thresholds used by the field comparators and matcher.

    Attributes
    ----------
    name_weight : float
        Weight of the name comparator, by default 0.40.
    phone_weight : float
        Weight of the phone comparator, by default 0.35.
    email_weight : float
        Weight of the email comparator, by default 0.25.
    fuzzy_threshold : float
        Minimum (exclusive) edit-distance similarity for a fuzzy match,
        by default 0.8.
    name_component_floor : float
        Score floor when given or family names match, by default 0.7.
    name_reversed_floor : float
        Score floor when names appear reversed, by default 0.8.
    phone_format_score : float
        Score when one number contains the other, by default 0.9.
    phone_local_score : float
        Score when the last 7 digits match, by default 0.8.
    phone_national_score : float
        Score when the last 10 digits match, by default 0.85.
    email_near_factor : float
        Multiplier applied to near-identical local parts, by default 0.9.
    high_confidence : float
        Minimum similarity for HIGH confidence, by default 0.85.
    medium_confidence : float
        Minimum similarity for MEDIUM confidence, by default 0.70.
    """

    name_weight: float = 0.40
    phone_weight: float = 0.35
    email_weight: float = 0.25
    fuzzy_threshold: float = 0.8
    name_component_floor: float = 0.7
    name_reversed_floor: float = 0.8
    phone_format_score: float = 0.9
    phone_local_score: float = 0.8
    phone_national_score: float = 0.85
    email_near_factor: float = 0.9
    high_confidence: float = 0.85
    medium_confidence: float = 0.70

    def __post_init__(self) -> None:
        """Validate ranges."""
        for name, value in asdict(self).items():
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

        if self.name_weight + self.phone_weight + self.email_weight <= 0.0:
            raise ValueError("At least one comparator weight must be positive")

        if self.medium_confidence > self.high_confidence:
            raise ValueError(
                f"medium_confidence ({self.medium_confidence}) must not exceed "
                f"high_confidence ({self.high_confidence})"
            )

    def confidence_for(self, similarity: float) -> Confidence:
        """Map a combined similarity to its confidence tier."""
        if similarity >= self.high_confidence:
            return Confidence.HIGH
        if similarity >= self.medium_confidence:
            return Confidence.MEDIUM
        return Confidence.LOW

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


DEFAULT_SCORING_CONFIG = ScoringConfig()


@dataclass(frozen=True, slots=True)
class FieldComparison:
    """Result of one field comparator.

    Attributes
    ----------
    score : float
        Field score in [0.0, 1.0]; 0.0 means no evidence.
    reasons : tuple[str, ...]
        Human-readable explanations, in the order they were found.
    """

    score: float = 0.0
    reasons: tuple[str, ...] = ()

    @property
    def contributes(self) -> bool:
        """Whether this comparison counts toward the combined score."""
        return self.score > 0.0


NO_MATCH = FieldComparison()


@dataclass(frozen=True, slots=True)
class PairwiseMatch:
    """Combined similarity between two contacts.

    Attributes
    ----------
    contact_a : Contact
        First contact.
    contact_b : Contact
        Second contact.
    similarity : float
        Weighted similarity in [0.0, 1.0].
    reasons : tuple[str, ...]
        Reasons from all contributing comparators (name, phone, email).
    confidence : Confidence
        Confidence tier for display.
    """

    contact_a: Contact
    contact_b: Contact
    similarity: float
    reasons: tuple[str, ...]
    confidence: Confidence

    @property
    def pair_id(self) -> str:
        """Pair identifier in the form ``"id_a|id_b"``."""
        return f"{self.contact_a.id}|{self.contact_b.id}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Contacts are referenced by id; the caller already holds the records.
        """
        return {
            "pair_id": self.pair_id,
            "contact_a": self.contact_a.id,
            "contact_b": self.contact_b.id,
            "similarity": round(self.similarity, ROUND_DECIMALS),
            "reasons": list(self.reasons),
            "confidence": self.confidence.value,
        }
