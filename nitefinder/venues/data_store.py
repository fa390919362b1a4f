from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from .config import DEFAULT_VENUE_STORE_CONFIG, VenueStoreConfig
from .models import Venue

logger = logging.getLogger(__name__)

LIST_COLUMNS = ["longest_line_days", "top_music", "live_music_days"]
BOOL_COLUMNS = [
    "has_patio",
    "has_rooftop",
    "has_dancefloor",
    "has_food",
    "has_pool_table",
    "has_arcade_games",
]
OPTIONAL_COLUMNS = [
    "neighbourhood",
    "address",
    "description",
    "typical_lineup_min",
    "typical_lineup_max",
    "cover_frequency",
    "cover_amount",
    "typical_vibe",
    "age_group_min",
    "age_group_max",
    "capacity_size",
]

_df: pd.DataFrame | None = None
_venues: dict[str, Venue] | None = None


def _split_list(value: Any, separator: str) -> list[str]:
    if not isinstance(value, str):
        return []
    return [v.strip() for v in value.split(separator) if v.strip()]


def _to_bool(value: Any) -> bool:
    return str(value).strip().lower() in ("true", "1", "yes")


def _load(config: VenueStoreConfig = DEFAULT_VENUE_STORE_CONFIG) -> pd.DataFrame:
    df = pd.read_csv(config.catalog_path, dtype={"id": str})

    for col in LIST_COLUMNS:
        df[col] = df[col].apply(lambda s: _split_list(s, config.list_separator))
    for col in BOOL_COLUMNS:
        df[col] = df[col].apply(_to_bool) if col in df.columns else False

    # Lowercase text columns for case-insensitive search
    df["name_lower"] = df["name"].fillna("").str.lower()
    df["description_lower"] = df["description"].fillna("").str.lower()

    logger.info("Loaded %d venues from %s", len(df), config.catalog_path)
    return df


def get_dataframe() -> pd.DataFrame:
    """Return the in-memory venue DataFrame, loading it on first call."""
    global _df
    if _df is None:
        _df = _load()
    return _df


def row_to_venue(row: pd.Series) -> Venue:
    """Build a validated ``Venue`` from one catalog row."""
    optional = {
        col: row[col] if pd.notna(row.get(col)) else None
        for col in OPTIONAL_COLUMNS
    }
    rating = row.get("service_rating")
    return Venue(
        id=str(row["id"]),
        name=row["name"],
        slug=row["slug"],
        service_rating=float(rating) if pd.notna(rating) else None,
        **optional,
        **{col: row[col] for col in LIST_COLUMNS},
        **{col: bool(row[col]) for col in BOOL_COLUMNS},
    )


def _venue_index() -> dict[str, Venue]:
    global _venues
    if _venues is None:
        _venues = {}
        for _, row in get_dataframe().iterrows():
            venue = row_to_venue(row)
            _venues[venue.id] = venue
    return _venues


def list_venues() -> list[Venue]:
    """Return every catalog venue in catalog order."""
    return list(_venue_index().values())


def get_venue(venue_id: str) -> Venue | None:
    return _venue_index().get(venue_id)


def get_venue_by_slug(slug: str) -> Venue | None:
    for venue in _venue_index().values():
        if venue.slug == slug:
            return venue
    return None


def reset_catalog() -> None:
    """Drop the cached catalog so the next access reloads it."""
    global _df, _venues
    _df = None
    _venues = None
