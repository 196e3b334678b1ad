"""Configuration constants for the Denver crime exploration pipeline."""
from __future__ import annotations

import os
from datetime import date
from pathlib import Path

# Denver Open Data catalog resources (comma separated, header row)
INCIDENTS_URL: str = os.environ.get(
    "DENVER_CRIME_INCIDENTS_URL",
    "https://www.denvergov.org/media/gis/DataCatalog/crime/csv/crime.csv",
)
OFFENSE_CODES_URL: str = os.environ.get(
    "DENVER_CRIME_OFFENSE_CODES_URL",
    "https://www.denvergov.org/media/gis/DataCatalog/crime/csv/offense_codes.csv",
)

# Timeout (seconds) for HTTP requests to the catalog
HTTP_TIMEOUT: int = 120

# Directory for derived datasets and rendered maps
DERIVED_DATA_DIR: Path = Path("data/derived")

# Incident columns as delivered by the incident resource.
INCIDENT_FIELDS: tuple[str, ...] = (
    "incident_id",
    "offense_id",
    "offense_code",
    "offense_code_extension",
    "offense_type_id",
    "offense_category_id",
    "first_occurrence_date",
    "last_occurrence_date",
    "reported_date",
    "incident_address",
    "geo_lon",
    "geo_lat",
    "neighborhood_id",
    "district_id",
    "is_crime",
    "is_traffic",
    "victim_count",
)

# Lookup columns arrive upper-cased and must be renamed before joining.
OFFENSE_CODE_FIELDS: tuple[str, ...] = (
    "OFFENSE_CODE",
    "OFFENSE_CODE_EXTENSION",
    "OFFENSE_TYPE_ID",
    "OFFENSE_CATEGORY_ID",
    "OFFENSE_TYPE_NAME",
    "OFFENSE_CATEGORY_NAME",
)

JOIN_KEYS: tuple[str, ...] = (
    "offense_code",
    "offense_code_extension",
    "offense_type_id",
    "offense_category_id",
)

LOOKUP_COLUMNS: tuple[str, ...] = (
    "offense_code",
    "offense_type_id",
    "offense_type_name",
    "offense_category_name",
)

# Reported dates look like "11/15/2021 8:30:00 AM"; only the date part is kept.
REPORTED_DATE_FORMAT: str = "%m/%d/%Y"

# Defaults for the walkthrough queries
DEFAULT_CATEGORY: str = "other-crimes-against-persons"
DEFAULT_LOOKUP_OFFENSE_TYPE: str = "weapon-fire-into-occ-bldg"
DEFAULT_MAP_OFFENSE_TYPE: str = "theft-of-motor-vehicle"
DEFAULT_TOP_N: int = 10
DEFAULT_START_DATE: date = date(2021, 10, 1)
DEFAULT_END_DATE: date = date(2021, 12, 31)

# (min_lon, max_lon, min_lat, max_lat) around downtown Denver
DEFAULT_BBOX: tuple[float, float, float, float] = (-105.01, -104.97, 39.72, 39.76)

# Map defaults: (latitude, longitude) of the Denver civic center
MAP_CENTER: tuple[float, float] = (39.7392, -104.9903)
MAP_ZOOM: float = 13

TILE_PROVIDERS = {
    "openstreetmap": "https://tile.openstreetmap.org/{z}/{x}/{y}.png",
    "cartodb-positron": "https://a.basemaps.cartocdn.com/light_all/{z}/{x}/{y}.png",
    "cartodb-dark": "https://a.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}.png",
}
DEFAULT_TILE_PROVIDER: str = "openstreetmap"
