"""Relational transformations over the Denver incident and offense code tables."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

import pandas as pd
from pandas.api.types import is_datetime64_any_dtype, is_numeric_dtype

from . import config

logger = logging.getLogger(__name__)

CATEGORY_COLUMN = "offense_category_id"
TYPE_COLUMN = "offense_type_id"
VICTIM_COLUMN = "victim_count"
REPORTED_COLUMN = "reported_date"
LON_COLUMN = "geo_lon"
LAT_COLUMN = "geo_lat"


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive longitude/latitude rectangle. No antimeridian wraparound."""

    min_lon: float
    max_lon: float
    min_lat: float
    max_lat: float

    def __post_init__(self) -> None:
        if self.min_lon > self.max_lon or self.min_lat > self.max_lat:
            raise ValueError(f"Invalid bounding box: {self}")

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "BoundingBox":
        if len(values) != 4:
            raise ValueError("Bounding box needs min_lon, max_lon, min_lat, max_lat")
        min_lon, max_lon, min_lat, max_lat = (float(value) for value in values)
        return cls(min_lon=min_lon, max_lon=max_lon, min_lat=min_lat, max_lat=max_lat)

    def contains(self, lon: pd.Series, lat: pd.Series) -> pd.Series:
        # NaN coordinates compare false on every edge
        return lon.between(self.min_lon, self.max_lon) & lat.between(self.min_lat, self.max_lat)


DEFAULT_BBOX = BoundingBox.from_sequence(config.DEFAULT_BBOX)


def distinct_categories(incidents: pd.DataFrame) -> list:
    """Unique offense categories in order of first appearance."""
    return incidents[CATEGORY_COLUMN].drop_duplicates().tolist()


def filter_by_category(incidents: pd.DataFrame, category: str) -> pd.DataFrame:
    selected = incidents.loc[incidents[CATEGORY_COLUMN] == category, [TYPE_COLUMN, CATEGORY_COLUMN]]
    return selected.drop_duplicates().reset_index(drop=True)


def top_by_victim_count(
    incidents: pd.DataFrame,
    n: int = config.DEFAULT_TOP_N,
    *,
    per_category: bool = False,
) -> pd.DataFrame:
    """Return the incidents with the most victims.

    Rows are partitioned by category, then sorted descending by victim count
    and cut to the first ``n``. The sort and the head are global, so the
    partition does not change which rows come back. Ties keep their original
    order. With ``per_category=True`` the head is taken within each category
    instead, which yields up to ``n`` rows per category.
    """
    ordered = incidents.sort_values(VICTIM_COLUMN, ascending=False, kind="stable")
    if per_category:
        ordered = ordered.groupby(CATEGORY_COLUMN, sort=False, dropna=False).head(n)
    else:
        ordered = ordered.head(n)
    return ordered.reset_index(drop=True)


def normalize_offense_code_columns(offense_codes: pd.DataFrame) -> pd.DataFrame:
    """Lower-case the lookup table's column names so they match the incident table."""
    return offense_codes.rename(columns=str.lower)


def _empty_join(incidents: pd.DataFrame, offense_codes: pd.DataFrame) -> pd.DataFrame:
    columns = list(incidents.columns) + [c for c in offense_codes.columns if c not in incidents.columns]
    return pd.DataFrame(columns=columns)


def merge_offense_codes(
    incidents: pd.DataFrame,
    offense_codes: pd.DataFrame,
    *,
    keys: Iterable[str] = config.JOIN_KEYS,
) -> pd.DataFrame:
    """Inner join incidents to offense codes on the composite offense key.

    Column names must already match exactly. A key column missing on either
    side, or keys that can never compare equal, give an empty frame instead
    of an error. Null keys never match. Duplicate keys fan out.
    """
    keys = list(keys)
    missing = [key for key in keys if key not in incidents.columns or key not in offense_codes.columns]
    if missing:
        logger.warning("Join keys %s missing from one side; join result is empty", missing)
        return _empty_join(incidents, offense_codes)

    # int64 never equals str, but pandas refuses to merge them rather than matching nothing
    mismatched = [
        key for key in keys if is_numeric_dtype(incidents[key]) != is_numeric_dtype(offense_codes[key])
    ]
    if mismatched:
        logger.warning("Join keys %s have incomparable types; join result is empty", mismatched)
        return _empty_join(incidents, offense_codes)

    left = incidents.dropna(subset=keys)
    right = offense_codes.dropna(subset=keys)
    merged = left.merge(right, how="inner", on=keys)

    logger.debug(
        "Joined %s incidents with %s offense codes into %s rows",
        len(incidents),
        len(offense_codes),
        len(merged),
    )
    if len(merged) > len(left):
        logger.debug("Offense code keys are not unique; join fanned out")
    return merged


def lookup_offense_type(merged: pd.DataFrame, offense_type: str) -> pd.DataFrame:
    # reindex keeps an empty join (which may lack the lookup columns) from raising
    selected = merged.loc[merged[TYPE_COLUMN] == offense_type].reindex(columns=list(config.LOOKUP_COLUMNS))
    return selected.reset_index(drop=True)


def describe_offense_type(merged: pd.DataFrame, offense_type: str) -> Optional[dict]:
    """First lookup row for an offense type, or None if the join produced nothing for it."""
    rows = lookup_offense_type(merged, offense_type)
    if rows.empty:
        return None
    return rows.iloc[0].to_dict()


def parse_reported_dates(
    incidents: pd.DataFrame,
    column: str = REPORTED_COLUMN,
    date_format: str = config.REPORTED_DATE_FORMAT,
) -> pd.DataFrame:
    """Return a copy with ``column`` reparsed from month/day/year text to dates.

    Any time of day after the date is dropped. Values that do not parse
    become NaT.
    """
    date_text = incidents[column].astype("string").str.strip().str.split(" ", n=1).str[0]
    parsed = pd.to_datetime(date_text, format=date_format, errors="coerce")
    return incidents.assign(**{column: parsed})


def filter_incidents_in_area(
    incidents: pd.DataFrame,
    offense_type: str,
    start_date: date | str,
    end_date: date | str,
    bbox: BoundingBox = DEFAULT_BBOX,
) -> pd.DataFrame:
    """Rows of one offense type reported within [start_date, end_date] inside ``bbox``."""
    start = pd.Timestamp(start_date).normalize()
    end = pd.Timestamp(end_date).normalize()
    if start > end:
        raise ValueError(f"start_date {start.date()} is after end_date {end.date()}")

    reported = incidents[REPORTED_COLUMN]
    if not is_datetime64_any_dtype(reported):
        raise ValueError(f"{REPORTED_COLUMN} is not parsed; run parse_reported_dates first")

    mask = (
        (incidents[TYPE_COLUMN] == offense_type)
        & reported.between(start, end)
        & bbox.contains(incidents[LON_COLUMN], incidents[LAT_COLUMN])
    )
    filtered = incidents[mask].reset_index(drop=True)
    logger.info(
        "Selected %s %s incidents between %s and %s",
        len(filtered),
        offense_type,
        start.date(),
        end.date(),
    )
    return filtered


@dataclass
class ExplorationResult:
    categories: list
    category_types: pd.DataFrame
    top_victims: pd.DataFrame
    merged: pd.DataFrame
    offense_lookup: pd.DataFrame
    map_points: pd.DataFrame


def run_exploration(
    incidents: pd.DataFrame,
    offense_codes: pd.DataFrame,
    *,
    category: str = config.DEFAULT_CATEGORY,
    lookup_offense_type_id: str = config.DEFAULT_LOOKUP_OFFENSE_TYPE,
    map_offense_type_id: str = config.DEFAULT_MAP_OFFENSE_TYPE,
    start_date: date | str = config.DEFAULT_START_DATE,
    end_date: date | str = config.DEFAULT_END_DATE,
    bbox: BoundingBox = DEFAULT_BBOX,
    top_n: int = config.DEFAULT_TOP_N,
) -> ExplorationResult:
    """Run every query of the walkthrough in order. The inputs are left untouched."""
    merged = merge_offense_codes(incidents, normalize_offense_code_columns(offense_codes))
    dated = parse_reported_dates(incidents)

    return ExplorationResult(
        categories=distinct_categories(incidents),
        category_types=filter_by_category(incidents, category),
        top_victims=top_by_victim_count(incidents, top_n),
        merged=merged,
        offense_lookup=lookup_offense_type(merged, lookup_offense_type_id),
        map_points=filter_incidents_in_area(dated, map_offense_type_id, start_date, end_date, bbox),
    )


__all__ = [
    "BoundingBox",
    "ExplorationResult",
    "describe_offense_type",
    "distinct_categories",
    "filter_by_category",
    "filter_incidents_in_area",
    "lookup_offense_type",
    "merge_offense_codes",
    "normalize_offense_code_columns",
    "parse_reported_dates",
    "run_exploration",
    "top_by_victim_count",
]
