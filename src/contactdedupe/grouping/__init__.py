"""Duplicate discovery and grouping.

This module scores every contact pair, keeps the likely duplicates and
combines them into non-overlapping groups, each with a proposed primary
contact.
"""

from contactdedupe.grouping.group_builder import build_groups, group_duplicates
from contactdedupe.grouping.models import (
    DuplicateGroup,
    GroupingConfig,
    GroupingStrategy,
    compute_group_id,
)
from contactdedupe.grouping.pairs import (
    EMAIL_SCAN,
    NAME_SCAN,
    PHONE_SCAN,
    FieldScan,
    find_duplicates,
    find_duplicates_by_email,
    find_duplicates_by_name,
    find_duplicates_by_phone,
    find_matches,
    scan_field,
)
from contactdedupe.grouping.primary import select_primary

__all__ = [
    # Models
    "DuplicateGroup",
    "GroupingConfig",
    "GroupingStrategy",
    "compute_group_id",
    # Pairs
    "find_matches",
    "find_duplicates",
    "FieldScan",
    "NAME_SCAN",
    "PHONE_SCAN",
    "EMAIL_SCAN",
    "scan_field",
    "find_duplicates_by_name",
    "find_duplicates_by_phone",
    "find_duplicates_by_email",
    # Groups
    "build_groups",
    "group_duplicates",
    "select_primary",
]
