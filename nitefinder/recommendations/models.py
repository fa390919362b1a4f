from __future__ import annotations

from pydantic import BaseModel, Field

from ..venues.models import Venue


class RecommendationScore(BaseModel):
    venue: Venue
    total_score: float
    music_match_score: float
    neighbourhood_match_score: float
    similarity_score: float
    exploration_bonus: float
    community_score: float
    reasoning: list[str] = Field(default_factory=list)


class PersonalizedRecommendationResponse(BaseModel):
    recommendations: list[RecommendationScore]
    algorithm_version: str
    total_candidates: int
    message: str | None = None


class CategoryFeedResponse(BaseModel):
    perfect_for_tonight: list[Venue]
    your_vibe: list[Venue]
    quick_entry: list[Venue]
    trending_in_area: list[Venue]
    venues: list[Venue] = Field(
        default_factory=list, description="All categories flattened, without duplicates"
    )
