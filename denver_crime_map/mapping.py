"""Render filtered incidents as markers on a pydeck tile map."""
from __future__ import annotations

import html
import logging
from pathlib import Path

import pandas as pd
import pydeck as pdk

from . import config

logger = logging.getLogger(__name__)


def format_popup(neighborhood: object, reported: object) -> str:
    """Popup text: neighborhood and reported date separated by a line break."""
    neighborhood_text = "" if pd.isna(neighborhood) else html.escape(str(neighborhood))
    if pd.isna(reported):
        reported_text = ""
    elif hasattr(reported, "strftime"):
        reported_text = reported.strftime("%Y-%m-%d")
    else:
        reported_text = html.escape(str(reported))
    return f"{neighborhood_text}<br>{reported_text}"


def build_marker_frame(
    points: pd.DataFrame,
    *,
    lon_col: str = "geo_lon",
    lat_col: str = "geo_lat",
    label_col: str = "neighborhood_id",
    date_col: str = "reported_date",
) -> pd.DataFrame:
    """One marker row (longitude, latitude, popup) per input row."""
    popups = [format_popup(label, reported) for label, reported in zip(points[label_col], points[date_col])]
    return pd.DataFrame(
        {
            "longitude": points[lon_col].astype(float).to_numpy(),
            "latitude": points[lat_col].astype(float).to_numpy(),
            "popup": popups,
        }
    )


def build_incident_map(
    points: pd.DataFrame,
    *,
    center: tuple[float, float] = config.MAP_CENTER,
    zoom: float = config.MAP_ZOOM,
    tile_provider: str = config.DEFAULT_TILE_PROVIDER,
) -> pdk.Deck:
    if tile_provider not in config.TILE_PROVIDERS:
        raise ValueError(
            f"Unknown tile provider {tile_provider!r}; choose from {', '.join(sorted(config.TILE_PROVIDERS))}"
        )

    markers = build_marker_frame(points)

    tile_layer = pdk.Layer(
        "TileLayer",
        data=config.TILE_PROVIDERS[tile_provider],
        min_zoom=0,
        max_zoom=19,
        tile_size=256,
    )
    marker_layer = pdk.Layer(
        "ScatterplotLayer",
        data=markers,
        get_position="[longitude, latitude]",
        get_fill_color=[200, 30, 0, 160],
        get_radius=30,
        radius_min_pixels=4,
        pickable=True,
    )

    latitude, longitude = center
    deck = pdk.Deck(
        map_style=None,
        initial_view_state=pdk.ViewState(latitude=latitude, longitude=longitude, zoom=zoom),
        layers=[tile_layer, marker_layer],
        tooltip={"html": "{popup}"},
    )
    logger.info("Built map with %s markers on %s tiles", len(markers), tile_provider)
    return deck


def save_map(deck: pdk.Deck, output_path: Path | str | None = None) -> Path:
    output_path = Path(output_path) if output_path else config.DERIVED_DATA_DIR / "incident_map.html"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    deck.to_html(str(output_path), open_browser=False, notebook_display=False)
    logger.info("Wrote map to %s", output_path)
    return output_path


__all__ = ["build_incident_map", "build_marker_frame", "format_popup", "save_map"]
