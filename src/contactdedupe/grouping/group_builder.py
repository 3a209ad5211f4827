"""Build duplicate groups from pairwise matches.

Two strategies are available (see ``GroupingStrategy``):

- ``seed``: greedy single pass. Matches are visited best-first; each
  unused pair seeds a group, which then absorbs every ungrouped contact
  similar to either seed. Contacts similar only to a later member are
  not picked up.
- ``transitive``: union-find over every match, i.e. full transitive
  closure of the "similar enough" relation.

Either way each contact ends up in at most one group.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass

from contactdedupe.audit.logger import AuditLogger
from contactdedupe.grouping.models import (
    DuplicateGroup,
    GroupingConfig,
    GroupingStrategy,
    compute_group_id,
)
from contactdedupe.grouping.pairs import find_matches
from contactdedupe.grouping.primary import select_primary
from contactdedupe.grouping.union_find import UnionFind
from contactdedupe.models import Contact, ContactId, validate_contacts
from contactdedupe.scoring.matcher import compare_contacts
from contactdedupe.scoring.models import DEFAULT_SCORING_CONFIG, PairwiseMatch, ScoringConfig

STAGE_NAME = "grouping"


@dataclass(frozen=True, slots=True)
class GroupAccumulator:
    """Running state of a group under construction.

    Attributes
    ----------
    members : tuple[Contact, ...]
        Members so far, in the order they joined.
    total_similarity : float
        Sum of the similarities that brought members in.
    reasons : tuple[str, ...]
        Reasons collected so far, duplicates included.
    """

    members: tuple[Contact, ...]
    total_similarity: float
    reasons: tuple[str, ...]

    @classmethod
    def from_match(cls, match: PairwiseMatch) -> "GroupAccumulator":
        """Start a group from a seed match."""
        return cls(
            members=(match.contact_a, match.contact_b),
            total_similarity=match.similarity,
            reasons=match.reasons,
        )

    def add(
        self,
        contact: Contact,
        similarity: float,
        reasons: tuple[str, ...],
    ) -> "GroupAccumulator":
        """Return a new accumulator with ``contact`` joined."""
        return GroupAccumulator(
            members=(*self.members, contact),
            total_similarity=self.total_similarity + similarity,
            reasons=(*self.reasons, *reasons),
        )

    def finalize(self) -> DuplicateGroup:
        """Turn the accumulated state into a duplicate group."""
        primary = select_primary(self.members)
        return DuplicateGroup(
            group_id=compute_group_id(contact.id for contact in self.members),
            members=self.members,
            primary=primary,
            duplicates=tuple(contact for contact in self.members if contact.id != primary.id),
            aggregate_similarity=self.total_similarity / len(self.members),
            reasons=tuple(dict.fromkeys(self.reasons)),
        )


# ---------------------------------------------------------------------------
# Seed strategy
# ---------------------------------------------------------------------------


def grow_seed_group(
    seed: PairwiseMatch,
    contacts: Sequence[Contact],
    grouped: frozenset[ContactId],
    threshold: float,
    config: ScoringConfig,
) -> GroupAccumulator:
    """Grow a group from its two seed contacts.

    Every contact not yet grouped is compared against both seeds only
    (never against members added during this pass). It joins when either
    similarity exceeds ``threshold``; the larger similarity is added to the
    total, along with the reasons of that comparison (the second seed's
    on a tie).

    Parameters
    ----------
    seed : PairwiseMatch
        Seed match.
    contacts : Sequence[Contact]
        All contacts, scanned in input order.
    grouped : frozenset[ContactId]
        Ids already assigned to earlier groups.
    threshold : float
        Minimum (exclusive) similarity to join.
    config : ScoringConfig
        Scoring configuration.

    Returns
    -------
    GroupAccumulator
        Seeds followed by the joined contacts.
    """
    seed_a, seed_b = seed.contact_a, seed.contact_b
    skip = grouped | {seed_a.id, seed_b.id}
    group = GroupAccumulator.from_match(seed)

    for contact in contacts:
        if contact.id in skip:
            continue

        match_a = compare_contacts(contact, seed_a, config)
        match_b = compare_contacts(contact, seed_b, config)
        if match_a.similarity > threshold or match_b.similarity > threshold:
            best = match_a if match_a.similarity > match_b.similarity else match_b
            group = group.add(contact, best.similarity, best.reasons)

    return group


def _seed_groups(
    contacts: Sequence[Contact],
    matches: Sequence[PairwiseMatch],
    threshold: float,
    config: ScoringConfig,
) -> list[GroupAccumulator]:
    groups: list[GroupAccumulator] = []
    grouped: frozenset[ContactId] = frozenset()

    for match in matches:
        if match.contact_a.id in grouped or match.contact_b.id in grouped:
            continue

        group = grow_seed_group(match, contacts, grouped, threshold, config)
        grouped = grouped | {contact.id for contact in group.members}
        groups.append(group)

    return groups


# ---------------------------------------------------------------------------
# Transitive strategy
# ---------------------------------------------------------------------------


def _transitive_groups(
    contacts: Sequence[Contact],
    matches: Sequence[PairwiseMatch],
) -> list[GroupAccumulator]:
    """Group the connected components of the match graph.

    Matches are visited best-first; a match that joins two components is a
    spanning edge and contributes its similarity and reasons to the group.
    Members keep input order.
    """
    position = {contact.id: index for index, contact in enumerate(contacts)}
    uf = UnionFind(len(contacts))

    spanning: list[tuple[int, PairwiseMatch]] = []
    for match in matches:
        index_a = position[match.contact_a.id]
        if uf.union(index_a, position[match.contact_b.id]):
            spanning.append((index_a, match))

    totals: dict[int, float] = {}
    reasons: dict[int, list[str]] = {}
    for index_a, match in spanning:
        root = uf.find(index_a)
        totals[root] = totals.get(root, 0.0) + match.similarity
        reasons.setdefault(root, []).extend(match.reasons)

    groups: list[GroupAccumulator] = []
    for component in uf.get_components():
        if len(component) < 2:
            continue
        root = uf.find(component[0])
        groups.append(
            GroupAccumulator(
                members=tuple(contacts[index] for index in component),
                total_similarity=totals[root],
                reasons=tuple(reasons[root]),
            )
        )

    return groups


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_groups(
    contacts: Sequence[Contact],
    matches: Sequence[PairwiseMatch],
    *,
    config: ScoringConfig | None = None,
    grouping: GroupingConfig | None = None,
    logger: AuditLogger | None = None,
) -> list[DuplicateGroup]:
    """Build duplicate groups from already-discovered matches.

    Parameters
    ----------
    contacts : Sequence[Contact]
        Contacts the matches were computed over.
    matches : Sequence[PairwiseMatch]
        Matches sorted by similarity, highest first.
    config : ScoringConfig | None, optional
        Scoring configuration (seed strategy re-scores candidates).
    grouping : GroupingConfig | None, optional
        Threshold and strategy.
    logger : AuditLogger | None, optional
        Audit logger for stage events.

    Returns
    -------
    list[DuplicateGroup]
        Groups sorted by aggregate similarity, highest first.
    """
    if config is None:
        config = DEFAULT_SCORING_CONFIG
    if grouping is None:
        grouping = GroupingConfig()

    start = time.perf_counter()
    if logger:
        logger.stage_started(STAGE_NAME, expected_contacts=len(contacts))

    if grouping.strategy is GroupingStrategy.TRANSITIVE:
        accumulators = _transitive_groups(contacts, matches)
    else:
        accumulators = _seed_groups(contacts, matches, grouping.pair_threshold, config)

    groups = sorted(
        (group.finalize() for group in accumulators if len(group.members) >= 2),
        key=lambda g: g.aggregate_similarity,
        reverse=True,
    )

    if logger:
        for group in groups:
            logger.group_formed(
                group_id=group.group_id,
                primary_id=group.primary.id,
                member_count=len(group.members),
                aggregate_similarity=group.aggregate_similarity,
            )
        logger.stage_finished(
            STAGE_NAME,
            duration_seconds=time.perf_counter() - start,
            counters={
                "groups": len(groups),
                "grouped_contacts": sum(len(group.members) for group in groups),
                "largest_group": max((len(group.members) for group in groups), default=0),
            },
        )

    return groups


def group_duplicates(
    contacts: Sequence[Contact],
    *,
    config: ScoringConfig | None = None,
    grouping: GroupingConfig | None = None,
    logger: AuditLogger | None = None,
) -> list[DuplicateGroup]:
    """Find duplicate pairs and combine them into groups.

    Parameters
    ----------
    contacts : Sequence[Contact]
        Contacts to deduplicate (read-only).
    config : ScoringConfig | None, optional
        Comparator weights and thresholds.
    grouping : GroupingConfig | None, optional
        Pair threshold, strategy and parallelism.
    logger : AuditLogger | None, optional
        Audit logger for stage events.

    Returns
    -------
    list[DuplicateGroup]
        Groups sorted by aggregate similarity, highest first. No contact
        appears in more than one group.

    Raises
    ------
    ContactValidationError
        If a contact has no identity or ids are not unique.

    Examples
    --------
    >>> contacts = [
    ...     Contact(id=1, given_name="Jane", family_name="Doe", phone="415-555-0100"),
    ...     Contact(id=2, given_name="Jane", family_name="Doe", email="jane@acme.com"),
    ... ]
    >>> [group.member_ids for group in group_duplicates(contacts)]
    [(1, 2)]
    """
    validate_contacts(contacts)
    if grouping is None:
        grouping = GroupingConfig()

    matches = find_matches(contacts, config=config, grouping=grouping, logger=logger)
    return build_groups(contacts, matches, config=config, grouping=grouping, logger=logger)
