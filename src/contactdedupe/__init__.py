"""Explainable duplicate detection for contact records.

This package provides:
- Data models (contactdedupe.models): Contact and input validation
- Normalization (contactdedupe.normalize): name, phone, email normalization
- Scoring (contactdedupe.scoring): field comparators and pairwise matcher
- Grouping (contactdedupe.grouping): pair discovery, grouping, primary selection
- Engine (contactdedupe.engine): batch runs over contact files
- Audit (contactdedupe.audit): JSONL event logging
- CLI (contactdedupe.cli): command-line interface
- Public API (contactdedupe.api): high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from contactdedupe.api import (
    ContactValidationError,
    DedupeError,
    compare_contacts,
    dedupe,
    find_duplicates,
    find_duplicates_by_email,
    find_duplicates_by_name,
    find_duplicates_by_phone,
    group_duplicates,
    load_contacts,
    write_jsonl,
)
from contactdedupe.grouping import DuplicateGroup, GroupingConfig, GroupingStrategy
from contactdedupe.models import Contact
from contactdedupe.scoring import Confidence, PairwiseMatch, ScoringConfig

__all__ = [
    "__version__",
    "__license__",
    "Contact",
    "Confidence",
    "PairwiseMatch",
    "DuplicateGroup",
    "ScoringConfig",
    "GroupingConfig",
    "GroupingStrategy",
    "compare_contacts",
    "find_duplicates",
    "find_duplicates_by_name",
    "find_duplicates_by_phone",
    "find_duplicates_by_email",
    "group_duplicates",
    "load_contacts",
    "write_jsonl",
    "dedupe",
    "ContactValidationError",
    "DedupeError",
]
