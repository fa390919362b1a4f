from __future__ import annotations

import pandas as pd

from .data_store import get_dataframe, row_to_venue
from .models import VenueSearchFilters, VenueSearchResponse


def _values(items) -> set[str]:
    return {item.value for item in items}


def search_venues(filters: VenueSearchFilters) -> VenueSearchResponse:
    """Apply the browse-page filters to the catalog, best rated first."""
    df = get_dataframe()
    mask = pd.Series(True, index=df.index)

    if filters.query and filters.query.strip():
        q = filters.query.strip().lower()
        mask = mask & (
            df["name_lower"].str.contains(q, regex=False)
            | df["description_lower"].str.contains(q, regex=False)
        )

    if filters.neighbourhoods:
        mask = mask & df["neighbourhood"].isin(_values(filters.neighbourhoods))

    if filters.lineup_time:
        mask = mask & df["typical_lineup_min"].isin(_values(filters.lineup_time))

    if filters.cover_frequency:
        mask = mask & df["cover_frequency"].isin(_values(filters.cover_frequency))

    if filters.cover_amount:
        mask = mask & df["cover_amount"].isin(_values(filters.cover_amount))

    if filters.age_groups:
        wanted_ages = _values(filters.age_groups)
        mask = mask & (
            df["age_group_min"].isin(wanted_ages) | df["age_group_max"].isin(wanted_ages)
        )

    if filters.music_genres:
        wanted_genres = _values(filters.music_genres)
        mask = mask & df["top_music"].apply(lambda genres: bool(wanted_genres & set(genres)))

    if filters.days:
        wanted_days = _values(filters.days)
        mask = mask & df["longest_line_days"].apply(lambda days: bool(wanted_days & set(days)))

    if filters.min_service_rating > 0:
        mask = mask & (df["service_rating"] >= filters.min_service_rating)

    matches = df.loc[mask]
    # Stable sort keeps catalog order among equal ratings
    top = matches.sort_values(
        "service_rating", ascending=False, kind="mergesort", na_position="last",
    ).head(filters.limit)

    return VenueSearchResponse(
        venues=[row_to_venue(row) for _, row in top.iterrows()],
        total_matches=len(matches),
    )
