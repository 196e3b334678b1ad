"""Utilities to download the Denver crime tables from the open data catalog."""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import requests

from . import config

logger = logging.getLogger(__name__)


@dataclass
class IngestionStats:
    """Capture summary statistics for an ingestion run."""

    incident_rows: int = 0
    offense_code_rows: int = 0
    tables_fetched: int = 0
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> Dict[str, int]:
        return {
            "incident_rows": self.incident_rows,
            "offense_code_rows": self.offense_code_rows,
            "tables_fetched": self.tables_fetched,
            "duration_seconds": int((datetime.now(timezone.utc) - self.start_time).total_seconds()),
        }


@dataclass
class CrimeDataset:
    incidents: pd.DataFrame
    offense_codes: pd.DataFrame
    stats: IngestionStats


def _is_remote(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


class CrimeDataLoader:
    """Fetches the incident and offense code tables into DataFrames."""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: int = config.HTTP_TIMEOUT,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_table(self, source: str | Path) -> pd.DataFrame:
        """Read one CSV resource, letting pandas infer the column types.

        Network and parse errors are not caught here.
        """
        if not _is_remote(source):
            logger.debug("Reading local table %s", source)
            return pd.read_csv(source)

        logger.debug("Requesting %s", source)
        response = self.session.get(source, timeout=self.timeout)
        response.raise_for_status()
        # text/csv without a charset makes requests guess ISO-8859-1; the catalog serves UTF-8
        return pd.read_csv(io.BytesIO(response.content), encoding="utf-8")

    def load_incidents(self, source: str | Path = config.INCIDENTS_URL) -> pd.DataFrame:
        incidents = self.fetch_table(source)
        logger.info("Loaded %s incident rows from %s", len(incidents), source)
        return incidents

    def load_offense_codes(self, source: str | Path = config.OFFENSE_CODES_URL) -> pd.DataFrame:
        offense_codes = self.fetch_table(source)
        logger.info("Loaded %s offense code rows from %s", len(offense_codes), source)
        return offense_codes

    def load(
        self,
        *,
        incidents_source: str | Path = config.INCIDENTS_URL,
        offense_codes_source: str | Path = config.OFFENSE_CODES_URL,
    ) -> CrimeDataset:
        stats = IngestionStats()

        incidents = self.load_incidents(incidents_source)
        stats.tables_fetched += 1
        stats.incident_rows = len(incidents)

        offense_codes = self.load_offense_codes(offense_codes_source)
        stats.tables_fetched += 1
        stats.offense_code_rows = len(offense_codes)

        logger.info("Ingestion completed: %s", stats.as_dict())
        return CrimeDataset(incidents=incidents, offense_codes=offense_codes, stats=stats)


def run_ingestion(
    *,
    incidents_source: str | Path | None = None,
    offense_codes_source: str | Path | None = None,
    session: Optional[requests.Session] = None,
) -> CrimeDataset:
    loader = CrimeDataLoader(session=session)
    return loader.load(
        incidents_source=incidents_source or config.INCIDENTS_URL,
        offense_codes_source=offense_codes_source or config.OFFENSE_CODES_URL,
    )


__all__ = ["CrimeDataLoader", "CrimeDataset", "IngestionStats", "run_ingestion"]
