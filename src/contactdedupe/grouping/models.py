"""Data models for duplicate grouping."""

import hashlib
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from contactdedupe.models import Contact, ContactId
from contactdedupe.scoring.models import ROUND_DECIMALS


class GroupingStrategy(StrEnum):
    """How pairwise matches are combined into groups.

    Attributes
    ----------
    SEED : str
        Greedy single pass: each group grows only from contacts similar to
        one of its two seed contacts.
    TRANSITIVE : str
        Full transitive closure (union-find) over all matches.
    """

    SEED = "seed"
    TRANSITIVE = "transitive"


@dataclass(frozen=True, slots=True)
class GroupingConfig:
    """Configuration for pair discovery and grouping.

    Attributes
    ----------
    pair_threshold : float
        Minimum (exclusive) similarity for a pair to count as a match,
        by default 0.6.
    strategy : GroupingStrategy
        Grouping strategy, by default SEED.
    workers : int
        Worker processes for pair evaluation; 1 runs serially, by default 1.
    rows_per_task : int
        Rows of the pair matrix handed to each worker task, by default 32.
    """

    pair_threshold: float = 0.6
    strategy: GroupingStrategy = GroupingStrategy.SEED
    workers: int = 1
    rows_per_task: int = 32

    def __post_init__(self) -> None:
        """Coerce strategy and validate."""
        if not isinstance(self.strategy, GroupingStrategy):
            object.__setattr__(self, "strategy", GroupingStrategy(self.strategy))

        if not 0.0 <= self.pair_threshold <= 1.0:
            raise ValueError(f"pair_threshold must be in [0, 1], got {self.pair_threshold}")

        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

        if self.rows_per_task < 1:
            raise ValueError(f"rows_per_task must be at least 1, got {self.rows_per_task}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "pair_threshold": self.pair_threshold,
            "strategy": self.strategy.value,
            "workers": self.workers,
            "rows_per_task": self.rows_per_task,
        }


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Group of contacts believed to be the same person.

    Attributes
    ----------
    group_id : str
        Deterministic group identifier.
    members : tuple[Contact, ...]
        All contacts in the group (at least two).
    primary : Contact
        Proposed canonical contact (most complete).
    duplicates : tuple[Contact, ...]
        Members other than the primary.
    aggregate_similarity : float
        Accumulated match similarity divided by member count.
    reasons : tuple[str, ...]
        Deduplicated reasons, first-seen order.
    """

    group_id: str
    members: tuple[Contact, ...]
    primary: Contact
    duplicates: tuple[Contact, ...]
    aggregate_similarity: float
    reasons: tuple[str, ...]

    @property
    def member_ids(self) -> tuple[ContactId, ...]:
        """Ids of all members, in member order."""
        return tuple(contact.id for contact in self.members)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "group_id": self.group_id,
            "primary": self.primary.id,
            "duplicates": [contact.id for contact in self.duplicates],
            "members": list(self.member_ids),
            "aggregate_similarity": round(self.aggregate_similarity, ROUND_DECIMALS),
            "reasons": list(self.reasons),
        }


def compute_group_id(contact_ids: Iterable[ContactId]) -> str:
    """Compute deterministic group ID from member ids.

    Parameters
    ----------
    contact_ids : Iterable[ContactId]
        Member ids, in any order.

    Returns
    -------
    str
        Group ID in format "g:{sha256_prefix}".
    """
    content = "\n".join(sorted(str(contact_id) for contact_id in contact_ids))
    hash_digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
    return f"g:{hash_digest[:12]}"
