"""Pair discovery over a contact list.

Every unordered pair ``(i, j), i < j`` is scored. The work is split into
row chunks of the pair matrix which can be evaluated in a process pool;
chunks are reassembled in order so parallel and serial runs return the
same list.
"""

import time
from collections import Counter
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, replace

from contactdedupe.audit.logger import AuditLogger
from contactdedupe.grouping.models import GroupingConfig
from contactdedupe.models import Contact, validate_contacts
from contactdedupe.scoring.comparators import (
    EMAIL_FIELD,
    NAME_FIELD,
    PHONE_FIELD,
    FieldConfig,
)
from contactdedupe.scoring.matcher import compare_contacts
from contactdedupe.scoring.models import (
    DEFAULT_SCORING_CONFIG,
    Confidence,
    PairwiseMatch,
    ScoringConfig,
)

STAGE_NAME = "pair_discovery"


def _sort_matches(matches: list[PairwiseMatch]) -> list[PairwiseMatch]:
    """Sort by similarity, highest first; ties keep discovery order."""
    return sorted(matches, key=lambda m: m.similarity, reverse=True)


def _row_chunks(size: int, rows_per_task: int) -> list[range]:
    return [
        range(start, min(start + rows_per_task, size))
        for start in range(0, size, rows_per_task)
    ]


def _score_rows(
    contacts: Sequence[Contact],
    rows: range,
    threshold: float,
    config: ScoringConfig,
) -> list[tuple[int, int, PairwiseMatch]]:
    """Score rows of the pair matrix, keeping matches above threshold.

    Returns (i, j, match) so the caller can re-attach its own contact
    objects after a round trip through a worker process.
    """
    found: list[tuple[int, int, PairwiseMatch]] = []
    for i in rows:
        contact_a = contacts[i]
        for j in range(i + 1, len(contacts)):
            match = compare_contacts(contact_a, contacts[j], config)
            if match.similarity > threshold:
                found.append((i, j, match))
    return found


def _evaluate_pairs(
    contacts: Sequence[Contact],
    threshold: float,
    config: ScoringConfig,
    grouping: GroupingConfig,
) -> list[PairwiseMatch]:
    """Score all pairs, serially or in a process pool.

    Any failing worker task cancels the remaining tasks and re-raises, so
    a partial match list is never returned.
    """
    chunks = _row_chunks(len(contacts), grouping.rows_per_task)

    if grouping.workers == 1 or len(chunks) <= 1:
        return [
            match
            for rows in chunks
            for _, _, match in _score_rows(contacts, rows, threshold, config)
        ]

    shared = tuple(contacts)
    matches: list[PairwiseMatch] = []
    with ProcessPoolExecutor(max_workers=grouping.workers) as executor:
        futures = [
            executor.submit(_score_rows, shared, rows, threshold, config) for rows in chunks
        ]
        try:
            for future in futures:
                for i, j, match in future.result():
                    matches.append(replace(match, contact_a=shared[i], contact_b=shared[j]))
        except BaseException:
            executor.shutdown(wait=True, cancel_futures=True)
            raise

    return matches


def find_matches(
    contacts: Sequence[Contact],
    *,
    threshold: float | None = None,
    config: ScoringConfig | None = None,
    grouping: GroupingConfig | None = None,
    logger: AuditLogger | None = None,
) -> list[PairwiseMatch]:
    """Find matches without validating the input.

    Same contract as :func:`find_duplicates`; callers that already validated
    their contacts use this to avoid checking twice.
    """
    if config is None:
        config = DEFAULT_SCORING_CONFIG
    if grouping is None:
        grouping = GroupingConfig()
    if threshold is None:
        threshold = grouping.pair_threshold

    start = time.perf_counter()
    if logger:
        logger.stage_started(STAGE_NAME, expected_contacts=len(contacts))

    matches = _sort_matches(_evaluate_pairs(contacts, threshold, config, grouping))

    if logger:
        tiers = Counter(match.confidence.value for match in matches)
        logger.stage_finished(
            STAGE_NAME,
            duration_seconds=time.perf_counter() - start,
            counters={
                "pairs_evaluated": len(contacts) * (len(contacts) - 1) // 2,
                "matches": len(matches),
                **{f"confidence_{tier.value}": tiers.get(tier.value, 0) for tier in Confidence},
            },
        )

    return matches


def find_duplicates(
    contacts: Sequence[Contact],
    *,
    threshold: float | None = None,
    config: ScoringConfig | None = None,
    grouping: GroupingConfig | None = None,
    logger: AuditLogger | None = None,
) -> list[PairwiseMatch]:
    """Find all likely duplicate pairs in a contact list.

    Parameters
    ----------
    contacts : Sequence[Contact]
        Contacts to compare (read-only).
    threshold : float | None, optional
        Minimum (exclusive) similarity. If None, uses
        ``grouping.pair_threshold`` (0.6 by default).
    config : ScoringConfig | None, optional
        Comparator weights and thresholds.
    grouping : GroupingConfig | None, optional
        Pair threshold and parallelism settings.
    logger : AuditLogger | None, optional
        Audit logger for stage events.

    Returns
    -------
    list[PairwiseMatch]
        Matches sorted by similarity, highest first; ties keep pair
        discovery order.

    Raises
    ------
    ContactValidationError
        If a contact has no identity or ids are not unique.
    """
    validate_contacts(contacts)
    return find_matches(
        contacts,
        threshold=threshold,
        config=config,
        grouping=grouping,
        logger=logger,
    )


# ---------------------------------------------------------------------------
# Single-field scans
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FieldScan:
    """A single-comparator duplicate scan.

    Attributes
    ----------
    field : FieldConfig
        Comparator to run.
    default_threshold : float
        Minimum (inclusive) field score when no override is given.
    high_confidence : float
        Minimum score for HIGH confidence.
    medium_confidence : float
        Minimum score for MEDIUM confidence; below it is LOW.
    present : Callable[[Contact], bool] | None
        When set, pairs where either contact lacks the field are skipped.
    """

    field: FieldConfig
    default_threshold: float
    high_confidence: float
    medium_confidence: float
    present: Callable[[Contact], bool] | None = None

    def confidence_for(self, score: float) -> Confidence:
        """Map a field score to its confidence tier."""
        if score >= self.high_confidence:
            return Confidence.HIGH
        if score >= self.medium_confidence:
            return Confidence.MEDIUM
        return Confidence.LOW


NAME_SCAN = FieldScan(
    field=NAME_FIELD,
    default_threshold=0.8,
    high_confidence=0.9,
    medium_confidence=0.8,
)
PHONE_SCAN = FieldScan(
    field=PHONE_FIELD,
    default_threshold=0.8,
    high_confidence=0.9,
    medium_confidence=0.8,
    present=lambda contact: bool(contact.phone),
)
EMAIL_SCAN = FieldScan(
    field=EMAIL_FIELD,
    default_threshold=0.9,
    high_confidence=0.95,
    medium_confidence=0.0,
    present=lambda contact: bool(contact.email),
)


def scan_field(
    contacts: Sequence[Contact],
    scan: FieldScan,
    threshold: float | None = None,
    config: ScoringConfig | None = None,
) -> list[PairwiseMatch]:
    """Find duplicate pairs using one field comparator only.

    Parameters
    ----------
    contacts : Sequence[Contact]
        Contacts to compare.
    scan : FieldScan
        Scan definition (comparator, default threshold, confidence tiers).
    threshold : float | None, optional
        Minimum (inclusive) field score. If None, uses the scan default.
    config : ScoringConfig | None, optional
        Comparator thresholds.

    Returns
    -------
    list[PairwiseMatch]
        Matches whose similarity is the field score, highest first.
    """
    validate_contacts(contacts)
    if config is None:
        config = DEFAULT_SCORING_CONFIG
    if threshold is None:
        threshold = scan.default_threshold

    matches: list[PairwiseMatch] = []
    for i, contact_a in enumerate(contacts):
        if scan.present and not scan.present(contact_a):
            continue
        for contact_b in contacts[i + 1 :]:
            if scan.present and not scan.present(contact_b):
                continue
            comparison = scan.field.compare(contact_a, contact_b, config)
            if comparison.score >= threshold:
                matches.append(
                    PairwiseMatch(
                        contact_a=contact_a,
                        contact_b=contact_b,
                        similarity=comparison.score,
                        reasons=comparison.reasons,
                        confidence=scan.confidence_for(comparison.score),
                    )
                )

    return _sort_matches(matches)


def find_duplicates_by_name(
    contacts: Sequence[Contact],
    threshold: float | None = None,
    *,
    config: ScoringConfig | None = None,
) -> list[PairwiseMatch]:
    """Find duplicate pairs by name alone (default threshold 0.8)."""
    return scan_field(contacts, NAME_SCAN, threshold, config)


def find_duplicates_by_phone(
    contacts: Sequence[Contact],
    threshold: float | None = None,
    *,
    config: ScoringConfig | None = None,
) -> list[PairwiseMatch]:
    """Find duplicate pairs by phone number alone (default threshold 0.8).

    Contacts without a phone number are skipped.
    """
    return scan_field(contacts, PHONE_SCAN, threshold, config)


def find_duplicates_by_email(
    contacts: Sequence[Contact],
    threshold: float | None = None,
    *,
    config: ScoringConfig | None = None,
) -> list[PairwiseMatch]:
    """Find duplicate pairs by email alone (default threshold 0.9).

    Contacts without an email address are skipped.
    """
    return scan_field(contacts, EMAIL_SCAN, threshold, config)
