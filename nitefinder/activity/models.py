from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field

from ..venues.models import AgeGroup, CoverAmount, LineupTimeRange, MusicGenre, Venue


class VisitTimeOfDay(str, Enum):
    afternoon = "afternoon"
    early_evening = "early_evening"
    peak_night = "peak_night"
    late_night = "late_night"


class GroupSize(str, Enum):
    solo = "solo"
    couple = "couple"
    small_group = "small_group"
    large_group = "large_group"


class FavoriteRequest(BaseModel):
    venue_id: str = Field(..., min_length=1)


class Favorite(BaseModel):
    user_id: str
    venue_id: str
    created_at: dt.datetime


class FavoriteOut(BaseModel):
    venue_id: str
    created_at: dt.datetime
    venue: Venue


class FavoritesResponse(BaseModel):
    favorites: list[FavoriteOut]
    count: int


class VisitRequest(BaseModel):
    venue_id: str = Field(..., min_length=1)
    visit_date: dt.date = Field(default_factory=dt.date.today)
    experience_rating: int = Field(..., ge=1, le=10)
    comment: str | None = Field(default=None, max_length=1000)
    reported_wait_time: LineupTimeRange | None = None
    reported_cover_charge: CoverAmount | None = None
    reported_music_genres: list[MusicGenre] = Field(default_factory=list)
    reported_vibe: str | None = Field(default=None, max_length=200)
    reported_age_group: AgeGroup | None = None
    reported_service_rating: int | None = Field(default=None, ge=1, le=10)
    time_of_visit: VisitTimeOfDay | None = None
    group_size: GroupSize | None = None
    special_event: str | None = Field(default=None, max_length=200)


class Visit(VisitRequest):
    id: str
    user_id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class VisitsResponse(BaseModel):
    visits: list[Visit]
    count: int
