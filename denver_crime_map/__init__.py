"""Denver crime data exploration and incident map."""

from .cli import main as cli_main
from .ingest import CrimeDataLoader, CrimeDataset, IngestionStats, run_ingestion
from .mapping import build_incident_map, save_map
from .transform import (
    BoundingBox,
    ExplorationResult,
    merge_offense_codes,
    normalize_offense_code_columns,
    run_exploration,
)

__all__ = [
    "cli_main",
    "CrimeDataLoader",
    "CrimeDataset",
    "IngestionStats",
    "run_ingestion",
    "build_incident_map",
    "save_map",
    "BoundingBox",
    "ExplorationResult",
    "merge_offense_codes",
    "normalize_offense_code_columns",
    "run_exploration",
]
