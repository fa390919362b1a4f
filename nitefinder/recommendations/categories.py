from __future__ import annotations

import pandas as pd

from ..profiles.models import UserProfile
from ..venues.data_store import get_dataframe, row_to_venue
from ..venues.models import LineupTimeRange, Venue
from .models import CategoryFeedResponse

CATEGORY_SIZE = 10
PERFECT_FOR_TONIGHT_MIN_RATING = 4.0


def _to_venues(rows: pd.DataFrame) -> list[Venue]:
    return [row_to_venue(row) for _, row in rows.head(CATEGORY_SIZE).iterrows()]


def get_category_feed(profile: UserProfile) -> CategoryFeedResponse:
    """Build the four "for you" rows shown on the home feed."""
    df = get_dataframe()

    # Perfect for tonight: well-serviced venues, best first
    perfect = df[df["service_rating"] >= PERFECT_FOR_TONIGHT_MIN_RATING].sort_values(
        "service_rating", ascending=False, kind="mergesort",
    )

    # Your vibe: any overlap with the user's music
    preferred = {g.value for g in profile.preferred_music}
    if preferred:
        your_vibe = df[df["top_music"].apply(lambda genres: bool(preferred & set(genres)))]
    else:
        your_vibe = df.iloc[0:0]

    # Quick entry: short lineups
    quick = df[df["typical_lineup_min"] == LineupTimeRange.short.value]

    # Trending in area: the first-choice neighbourhood, else the top of the catalog
    if profile.first_neighbourhood is not None:
        area = profile.first_neighbourhood.value.lower()
        trending = df[
            df["neighbourhood"].fillna("").str.lower().str.contains(area, regex=False)
        ]
    else:
        trending = df

    feed = CategoryFeedResponse(
        perfect_for_tonight=_to_venues(perfect),
        your_vibe=_to_venues(your_vibe),
        quick_entry=_to_venues(quick),
        trending_in_area=_to_venues(trending),
    )

    seen: set[str] = set()
    for venue in (
        *feed.perfect_for_tonight, *feed.your_vibe, *feed.quick_entry, *feed.trending_in_area,
    ):
        if venue.id not in seen:
            seen.add(venue.id)
            feed.venues.append(venue)
    return feed
