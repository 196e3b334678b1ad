"""Shared synthetic tables for the test suite."""

import pandas as pd
import pytest


def _incident(**overrides):
    row = {
        "incident_id": 1,
        "offense_id": 1,
        "offense_code": "2404",
        "offense_code_extension": "0",
        "offense_type_id": "theft-of-motor-vehicle",
        "offense_category_id": "auto-theft",
        "first_occurrence_date": "11/14/2021 10:00:00 PM",
        "last_occurrence_date": "11/15/2021 6:00:00 AM",
        "reported_date": "11/15/2021 8:30:00 AM",
        "incident_address": "1400 N LOGAN ST",
        "geo_lon": -104.99,
        "geo_lat": 39.74,
        "neighborhood_id": "capitol-hill",
        "district_id": 6,
        "is_crime": 1,
        "is_traffic": 0,
        "victim_count": 1,
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_incident():
    return _incident


@pytest.fixture
def incidents():
    return pd.DataFrame(
        [
            _incident(incident_id=1, offense_id=1),
            _incident(
                incident_id=2,
                offense_id=2,
                offense_code="9997",
                offense_type_id="weapon-fire-into-occ-bldg",
                offense_category_id="other-crimes-against-persons",
                victim_count=3,
                neighborhood_id="five-points",
            ),
            _incident(
                incident_id=3,
                offense_id=3,
                offense_code="1316",
                offense_type_id="threats-to-injure",
                offense_category_id="other-crimes-against-persons",
                victim_count=2,
            ),
            _incident(
                incident_id=4,
                offense_id=4,
                offense_code="1316",
                offense_type_id="threats-to-injure",
                offense_category_id="other-crimes-against-persons",
                victim_count=1,
                reported_date="9/15/2021 1:00:00 PM",
            ),
            _incident(
                incident_id=5,
                offense_id=5,
                offense_code="2305",
                offense_type_id="theft-items-from-vehicle",
                offense_category_id="theft-from-motor-vehicle",
                victim_count=0,
                geo_lon=-104.90,
                geo_lat=39.68,
            ),
        ]
    )


@pytest.fixture
def offense_codes():
    return pd.DataFrame(
        {
            "OFFENSE_CODE": ["2404", "9997", "1316", "2305"],
            "OFFENSE_CODE_EXTENSION": ["0", "0", "0", "0"],
            "OFFENSE_TYPE_ID": [
                "theft-of-motor-vehicle",
                "weapon-fire-into-occ-bldg",
                "threats-to-injure",
                "theft-items-from-vehicle",
            ],
            "OFFENSE_CATEGORY_ID": [
                "auto-theft",
                "other-crimes-against-persons",
                "other-crimes-against-persons",
                "theft-from-motor-vehicle",
            ],
            "OFFENSE_TYPE_NAME": [
                "Theft of a motor vehicle",
                "Weapon - fire into occupied building",
                "Threats to injure",
                "Theft of items from vehicle",
            ],
            "OFFENSE_CATEGORY_NAME": [
                "Auto Theft",
                "Other Crimes Against Persons",
                "Other Crimes Against Persons",
                "Theft from Motor Vehicle",
            ],
        }
    )
