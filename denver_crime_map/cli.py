"""Command line interface for the Denver crime exploration pipeline."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

from . import config
from .ingest import CrimeDataLoader
from .mapping import build_incident_map, save_map
from .transform import (
    BoundingBox,
    distinct_categories,
    filter_by_category,
    filter_incidents_in_area,
    lookup_offense_type,
    merge_offense_codes,
    normalize_offense_code_columns,
    parse_reported_dates,
    top_by_victim_count,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Denver crime data exploration")
    parser.add_argument(
        "command",
        choices=["categories", "category-types", "top-victims", "lookup", "map"],
        help="Query to execute",
    )
    parser.add_argument("--incidents", dest="incidents_source", default=config.INCIDENTS_URL, help="Incident CSV URL or path")
    parser.add_argument("--offense-codes", dest="offense_codes_source", default=config.OFFENSE_CODES_URL, help="Offense code CSV URL or path")
    parser.add_argument("--category", dest="category", default=config.DEFAULT_CATEGORY, help="Offense category tag for category-types")
    parser.add_argument("--offense-type", dest="offense_type", default=None, help="Offense type tag for lookup and map")
    parser.add_argument("--start-date", dest="start_date", default=config.DEFAULT_START_DATE.isoformat(), help="Inclusive reported date lower bound (YYYY-MM-DD)")
    parser.add_argument("--end-date", dest="end_date", default=config.DEFAULT_END_DATE.isoformat(), help="Inclusive reported date upper bound (YYYY-MM-DD)")
    parser.add_argument(
        "--bbox",
        dest="bbox",
        type=float,
        nargs=4,
        metavar=("MIN_LON", "MAX_LON", "MIN_LAT", "MAX_LAT"),
        default=list(config.DEFAULT_BBOX),
        help="Inclusive bounding box for the map",
    )
    parser.add_argument("--limit", dest="limit", type=int, default=config.DEFAULT_TOP_N, help="Number of rows for top-victims")
    parser.add_argument("--per-category", dest="per_category", action="store_true", help="Take top-victims within each category")
    parser.add_argument("--tiles", dest="tile_provider", default=config.DEFAULT_TILE_PROVIDER, choices=sorted(config.TILE_PROVIDERS), help="Map tile provider")
    parser.add_argument("--output", dest="output_path", default=None, help="Write the result to this path (CSV, or HTML for map)")
    parser.add_argument("--verbose", dest="verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def _emit(frame: pd.DataFrame, output_path: Optional[str]) -> None:
    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(path, index=False)
        logger.info("Wrote %s rows to %s", len(frame), path)
        return
    print(frame.to_string(index=False))


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    loader = CrimeDataLoader()
    incidents = loader.load_incidents(args.incidents_source)

    if args.command == "categories":
        _emit(pd.DataFrame({"offense_category_id": distinct_categories(incidents)}), args.output_path)
        return 0

    if args.command == "category-types":
        _emit(filter_by_category(incidents, args.category), args.output_path)
        return 0

    if args.command == "top-victims":
        _emit(top_by_victim_count(incidents, args.limit, per_category=args.per_category), args.output_path)
        return 0

    if args.command == "lookup":
        offense_codes = normalize_offense_code_columns(loader.load_offense_codes(args.offense_codes_source))
        merged = merge_offense_codes(incidents, offense_codes)
        _emit(lookup_offense_type(merged, args.offense_type or config.DEFAULT_LOOKUP_OFFENSE_TYPE), args.output_path)
        return 0

    if args.command == "map":
        points = filter_incidents_in_area(
            parse_reported_dates(incidents),
            args.offense_type or config.DEFAULT_MAP_OFFENSE_TYPE,
            args.start_date,
            args.end_date,
            BoundingBox.from_sequence(args.bbox),
        )
        deck = build_incident_map(points, tile_provider=args.tile_provider)
        save_map(deck, args.output_path)
        return 0

    raise ValueError(f"Unsupported command: {args.command}")


if __name__ == "__main__":
    sys.exit(main())
