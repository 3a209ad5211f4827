"""Run configuration and result dataclasses."""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import jsonschema

from contactdedupe.grouping.models import GroupingConfig, GroupingStrategy
from contactdedupe.scoring.models import ScoringConfig

_UNIT_INTERVAL: dict[str, Any] = {"type": "number", "minimum": 0, "maximum": 1}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "DedupeConfig",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "output_dir": {"type": "string"},
        "write_matches": {"type": "boolean"},
        "grouping": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "pair_threshold": _UNIT_INTERVAL,
                "strategy": {"enum": [s.value for s in GroupingStrategy]},
                "workers": {"type": "integer", "minimum": 1},
                "rows_per_task": {"type": "integer", "minimum": 1},
            },
        },
        "scoring": {
            "type": "object",
            "additionalProperties": False,
            "properties": {f.name: _UNIT_INTERVAL for f in fields(ScoringConfig)},
        },
    },
}


@dataclass
class DedupeConfig:
    """Configuration for a batch deduplication run.

    Attributes
    ----------
    output_dir : Path
        Base directory for all outputs.
    scoring : ScoringConfig
        Comparator weights and thresholds.
    grouping : GroupingConfig
        Pair threshold, grouping strategy and parallelism.
    write_matches : bool
        Also write every pairwise match to ``matches.jsonl``.
    """

    output_dir: Path = Path("out")
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    grouping: GroupingConfig = field(default_factory=GroupingConfig)
    write_matches: bool = True

    def __post_init__(self) -> None:
        """Coerce paths."""
        self.output_dir = Path(self.output_dir)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DedupeConfig":
        """Build a config from a mapping, validating it first.

        Parameters
        ----------
        data : dict[str, Any]
            Mapping shaped like ``CONFIG_SCHEMA``; missing keys take defaults.

        Returns
        -------
        DedupeConfig
            Configuration.

        Raises
        ------
        jsonschema.ValidationError
            If the mapping does not match the schema.
        ValueError
            If values are individually valid but inconsistent.
        """
        jsonschema.validate(instance=data, schema=CONFIG_SCHEMA)

        kwargs: dict[str, Any] = {
            "scoring": ScoringConfig(**data.get("scoring", {})),
            "grouping": GroupingConfig(**data.get("grouping", {})),
        }
        if "output_dir" in data:
            kwargs["output_dir"] = Path(data["output_dir"])
        if "write_matches" in data:
            kwargs["write_matches"] = data["write_matches"]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "output_dir": str(self.output_dir),
            "scoring": self.scoring.to_dict(),
            "grouping": self.grouping.to_dict(),
            "write_matches": self.write_matches,
        }


def load_config(path: Path | str) -> DedupeConfig:
    """Load a run configuration from a JSON file.

    Parameters
    ----------
    path : Path | str
        Path to JSON config file.

    Returns
    -------
    DedupeConfig
        Validated configuration.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    jsonschema.ValidationError
        If the file does not match ``CONFIG_SCHEMA``.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        return DedupeConfig.from_dict(json.load(f))


@dataclass
class DedupeResult:
    """Results from a batch run.

    Attributes
    ----------
    success : bool
        Whether the run completed successfully.
    total_contacts : int
        Contacts loaded.
    total_matches : int
        Pairwise matches above the pair threshold.
    total_groups : int
        Duplicate groups formed.
    total_duplicates : int
        Contacts proposed for merging into a primary (group size - 1, summed).
    output_files : dict[str, str]
        Map of artifact type to file path.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    total_contacts: int
    total_matches: int
    total_groups: int
    total_duplicates: int
    output_files: dict[str, str]
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
