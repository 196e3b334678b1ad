"""
Tests for downloading the incident and offense code tables.
"""

from unittest.mock import MagicMock

import pytest
import requests

from denver_crime_map.ingest import CrimeDataLoader, run_ingestion

INCIDENT_CSV = (
    "incident_id,offense_code,offense_code_extension,offense_type_id,offense_category_id,reported_date,victim_count\n"
    "1,2404,0,theft-of-motor-vehicle,auto-theft,11/15/2021 8:30:00 AM,1\n"
    "2,9997,0,weapon-fire-into-occ-bldg,other-crimes-against-persons,11/16/2021 9:00:00 PM,3\n"
)

OFFENSE_CODE_CSV = (
    "OFFENSE_CODE,OFFENSE_CODE_EXTENSION,OFFENSE_TYPE_ID,OFFENSE_CATEGORY_ID,OFFENSE_TYPE_NAME,OFFENSE_CATEGORY_NAME\n"
    "9997,0,weapon-fire-into-occ-bldg,other-crimes-against-persons,Weapon - fire into occupied building,Other Crimes Against Persons\n"
)


def _csv_response(body):
    response = requests.Response()
    response.status_code = 200
    response.headers["Content-Type"] = "text/csv"
    response._content = body.encode("utf-8")
    response.encoding = requests.utils.get_encoding_from_headers(response.headers)
    return response


def _session_returning(*bodies):
    session = MagicMock()
    session.get.side_effect = [_csv_response(body) for body in bodies]
    return session


def test_fetch_table_parses_csv_body():
    """The response body is read as CSV with inferred column types."""
    session = _session_returning(INCIDENT_CSV)
    loader = CrimeDataLoader(session=session, timeout=5)

    frame = loader.fetch_table("https://example.test/crime.csv")

    session.get.assert_called_once_with("https://example.test/crime.csv", timeout=5)
    assert len(frame) == 2
    assert frame["victim_count"].tolist() == [1, 3]
    # dates are left as text until parse_reported_dates runs
    assert frame["reported_date"].iloc[0] == "11/15/2021 8:30:00 AM"


def test_fetch_table_decodes_utf8_without_charset():
    """text/csv without a charset still decodes non-ASCII values as UTF-8."""
    session = _session_returning("neighborhood_id,offense_code\nsan-josé,1\n")

    frame = CrimeDataLoader(session=session).fetch_table("https://example.test/crime.csv")

    assert frame["neighborhood_id"].tolist() == ["san-josé"]


def test_fetch_table_propagates_http_errors():
    session = MagicMock()
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
    session.get.return_value = response

    with pytest.raises(requests.HTTPError):
        CrimeDataLoader(session=session).fetch_table("https://example.test/crime.csv")


def test_fetch_table_propagates_connection_errors():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("unreachable")

    with pytest.raises(requests.ConnectionError):
        CrimeDataLoader(session=session).fetch_table("https://example.test/crime.csv")


def test_fetch_table_reads_local_files(tmp_path):
    path = tmp_path / "offense_codes.csv"
    path.write_text(OFFENSE_CODE_CSV, encoding="utf-8")
    session = MagicMock()

    frame = CrimeDataLoader(session=session).fetch_table(path)

    session.get.assert_not_called()
    assert frame["OFFENSE_TYPE_ID"].tolist() == ["weapon-fire-into-occ-bldg"]


def test_run_ingestion_loads_both_tables():
    session = _session_returning(INCIDENT_CSV, OFFENSE_CODE_CSV)

    dataset = run_ingestion(
        incidents_source="https://example.test/crime.csv",
        offense_codes_source="https://example.test/offense_codes.csv",
        session=session,
    )

    assert session.get.call_count == 2
    assert len(dataset.incidents) == 2
    assert len(dataset.offense_codes) == 1
    stats = dataset.stats.as_dict()
    assert stats["incident_rows"] == 2
    assert stats["offense_code_rows"] == 1
    assert stats["tables_fetched"] == 2
