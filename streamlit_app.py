"""Interactive walkthrough of the Denver crime dataset."""
from __future__ import annotations

from typing import Tuple

import pandas as pd
import streamlit as st

from denver_crime_map import config
from denver_crime_map.ingest import CrimeDataLoader
from denver_crime_map.mapping import build_incident_map
from denver_crime_map.transform import (
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


@st.cache_data(show_spinner="Downloading incident and offense code tables...")
def load_tables() -> Tuple[pd.DataFrame, pd.DataFrame]:
    loader = CrimeDataLoader()
    dataset = loader.load()
    return dataset.incidents, dataset.offense_codes


def main() -> None:
    st.set_page_config(page_title="Denver Crime Explorer", layout="wide")

    st.title("Denver Crime Explorer")
    st.caption(
        "Explore offense categories, look up offense codes, and map incidents reported to the Denver Police Department."
    )

    incidents, offense_codes = load_tables()

    categories = distinct_categories(incidents)
    offense_types = sorted(incidents["offense_type_id"].dropna().unique().tolist())

    with st.sidebar:
        st.header("Filters")
        st.caption("Choose the offense category, offense type and area to explore.")
        category = st.selectbox(
            "Offense Category",
            options=categories,
            index=categories.index(config.DEFAULT_CATEGORY) if config.DEFAULT_CATEGORY in categories else 0,
        )
        map_type = st.selectbox(
            "Offense Type (map)",
            options=offense_types,
            index=offense_types.index(config.DEFAULT_MAP_OFFENSE_TYPE)
            if config.DEFAULT_MAP_OFFENSE_TYPE in offense_types
            else 0,
        )
        date_range = st.date_input(
            "Reported date range", value=(config.DEFAULT_START_DATE, config.DEFAULT_END_DATE)
        )
        min_lon, max_lon, min_lat, max_lat = config.DEFAULT_BBOX
        lon_range = st.slider("Longitude", min_value=-105.2, max_value=-104.6, value=(min_lon, max_lon), step=0.005)
        lat_range = st.slider("Latitude", min_value=39.6, max_value=39.9, value=(min_lat, max_lat), step=0.005)
        top_n = st.slider("Top incidents by victim count", min_value=1, max_value=50, value=config.DEFAULT_TOP_N)
        st.divider()
        st.caption("Date and area bounds are inclusive.")

    st.markdown("### Offense categories")
    st.write(", ".join(str(value) for value in categories))

    st.markdown(f"### Offense types in `{category}`")
    st.dataframe(filter_by_category(incidents, category), use_container_width=True)

    st.markdown("### Incidents with the most victims")
    st.dataframe(top_by_victim_count(incidents, top_n), use_container_width=True)

    st.markdown("### Offense code lookup")
    merged = merge_offense_codes(incidents, normalize_offense_code_columns(offense_codes))
    lookup_type = st.selectbox(
        "Offense Type (lookup)",
        options=offense_types,
        index=offense_types.index(config.DEFAULT_LOOKUP_OFFENSE_TYPE)
        if config.DEFAULT_LOOKUP_OFFENSE_TYPE in offense_types
        else 0,
    )
    st.dataframe(lookup_offense_type(merged, lookup_type).head(1), use_container_width=True)

    st.divider()

    if not isinstance(date_range, tuple) or len(date_range) != 2:
        st.info("Select both ends of the reported date range.")
        st.stop()

    points = filter_incidents_in_area(
        parse_reported_dates(incidents),
        map_type,
        date_range[0],
        date_range[1],
        BoundingBox(min_lon=lon_range[0], max_lon=lon_range[1], min_lat=lat_range[0], max_lat=lat_range[1]),
    )
    st.metric("Incidents on map", f"{len(points):,}")

    map_tab, table_tab = st.tabs(["Interactive Map", "Incident Table"])

    with map_tab:
        st.pydeck_chart(build_incident_map(points), use_container_width=True)
        st.caption("Hover over a marker to see the neighborhood and reported date.")

    with table_tab:
        st.dataframe(
            points[["incident_address", "neighborhood_id", "reported_date", "geo_lon", "geo_lat"]].rename(
                columns={
                    "incident_address": "Address",
                    "neighborhood_id": "Neighborhood",
                    "reported_date": "Reported",
                    "geo_lon": "Longitude",
                    "geo_lat": "Latitude",
                }
            ),
            use_container_width=True,
        )

    st.divider()
    with st.expander("How this dataset is built"):
        st.markdown(
            """
            Incidents come from the Denver Police Department crime dataset on the Denver Open Data catalog,
            classified by offense type and category under NIBRS. Offense codes are joined to incidents on the
            code, extension, type and category to attach human-readable names.
            """
        )


if __name__ == "__main__":
    main()
