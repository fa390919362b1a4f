from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class MusicGenre(str, Enum):
    house = "House"
    edm = "EDM"
    hip_hop = "Hip-hop"
    rap = "Rap"
    top_40 = "Top 40"
    pop = "Pop"
    mixed = "Mixed/Variety"
    live_bands = "Live bands"
    city_pop = "City-pop"
    jazz = "Jazz"


class Neighbourhood(str, Enum):
    king_west = "King West"
    queen_west = "Queen West"
    entertainment_district = "Entertainment District"
    financial_district = "Financial District"
    distillery_district = "Distillery District"
    kensington_market = "Kensington Market"
    ossington = "Ossington"
    dundas_west = "Dundas West"
    junction = "Junction"
    leslieville = "Leslieville"
    riverdale = "Riverdale"
    corktown = "Corktown"
    liberty_village = "Liberty Village"
    cityplace = "CityPlace"
    harbourfront = "Harbourfront"
    st_lawrence_market = "St. Lawrence Market"
    church_wellesley = "Church-Wellesley"
    yorkville = "Yorkville"
    annex = "Annex"
    little_italy = "Little Italy"
    little_portugal = "Little Portugal"
    chinatown = "Chinatown"
    parkdale = "Parkdale"
    roncesvalles = "Roncesvalles"
    high_park = "High Park"
    bloor_west = "Bloor West"
    danforth = "Danforth"
    beaches = "Beaches"
    other = "Other"


class CapacitySize(str, Enum):
    intimate = "Intimate (<50)"
    medium = "Medium (50-150)"
    large = "Large (150-300)"
    very_large = "Very Large (300+)"


class CoverFrequency(str, Enum):
    no_cover = "No cover"
    sometimes = "Sometimes"
    always = "Yes-always"


class CoverAmount(str, Enum):
    under_10 = "Under $10"
    between_10_20 = "$10-$20"
    over_20 = "Over $20"


class LineupTimeRange(str, Enum):
    short = "0-10 min"
    medium = "15-30 min"
    long = "30+ min"


class AgeGroup(str, Enum):
    early_twenties = "18-21"
    mid_twenties = "22-25"
    late_twenties = "25-30"


class DayOfWeek(str, Enum):
    mon = "Mon"
    tue = "Tue"
    wed = "Wed"
    thu = "Thu"
    fri = "Fri"
    sat = "Sat"
    sun = "Sun"


class Venue(BaseModel):
    id: str
    name: str
    slug: str
    neighbourhood: Neighbourhood | None = None
    address: str | None = None
    description: str | None = None
    typical_lineup_min: LineupTimeRange | None = None
    typical_lineup_max: LineupTimeRange | None = None
    longest_line_days: list[DayOfWeek] = Field(default_factory=list)
    cover_frequency: CoverFrequency | None = None
    cover_amount: CoverAmount | None = None
    typical_vibe: str | None = None
    top_music: list[MusicGenre] = Field(default_factory=list)
    age_group_min: AgeGroup | None = None
    age_group_max: AgeGroup | None = None
    service_rating: float | None = Field(default=None, ge=0.0, le=10.0)
    live_music_days: list[DayOfWeek] = Field(default_factory=list)
    has_patio: bool = False
    has_rooftop: bool = False
    has_dancefloor: bool = False
    has_food: bool = False
    capacity_size: CapacitySize | None = None
    has_pool_table: bool = False
    has_arcade_games: bool = False


class VenueSearchFilters(BaseModel):
    query: str | None = Field(default=None, description="Matched against name and description")
    lineup_time: list[LineupTimeRange] = Field(default_factory=list)
    cover_frequency: list[CoverFrequency] = Field(default_factory=list)
    cover_amount: list[CoverAmount] = Field(default_factory=list)
    music_genres: list[MusicGenre] = Field(default_factory=list)
    age_groups: list[AgeGroup] = Field(default_factory=list)
    neighbourhoods: list[Neighbourhood] = Field(default_factory=list)
    min_service_rating: float = Field(default=0.0, ge=0.0, le=10.0)
    days: list[DayOfWeek] = Field(default_factory=list)
    limit: int = Field(default=20, ge=1, le=100)


class VenueSearchResponse(BaseModel):
    venues: list[Venue]
    total_matches: int
