from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from ..activity.favorites import favorite_venue_ids
from ..activity.visits import high_rated_venue_ids
from ..analytics.store import record_event
from ..profiles.store import get_profile
from ..venues.data_store import get_venue, list_venues
from ..venues.models import Venue
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import PersonalizedRecommendationResponse
from .scoring import rank_venues

logger = logging.getLogger(__name__)

NO_CANDIDATES_MESSAGE = "No new venues to recommend"


class UnauthorizedError(Exception):
    """Raised when recommendations are requested without a user id."""


class ProfileNotFoundError(Exception):
    """Raised when the requesting user has no profile."""


def _venues_for(venue_ids: Iterable[str]) -> list[Venue]:
    venues: list[Venue] = []
    for venue_id in venue_ids:
        venue = get_venue(venue_id)
        if venue is not None:
            venues.append(venue)
    return venues


def _reason_kind(reason: str) -> str:
    """``"Great music match: House"`` -> ``"Great music match"``."""
    for sep in (":", " ("):
        if sep in reason:
            return reason.split(sep, 1)[0]
    return reason


def get_personalized_recommendations(
    user_id: str | None,
    limit: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> PersonalizedRecommendationResponse:
    start_time = time.time()

    if not user_id:
        raise UnauthorizedError("User ID required")

    profile = get_profile(user_id)
    if profile is None:
        raise ProfileNotFoundError(user_id)

    favorite_ids = favorite_venue_ids(user_id)
    favorited = _venues_for(favorite_ids)
    high_rated_ids = high_rated_venue_ids(user_id, config.liked_visit_threshold)
    high_rated = _venues_for(high_rated_ids)

    # Favorites and high-rated visits are not candidates; a poorly rated
    # visit leaves the venue in play
    known_ids = set(favorite_ids) | set(high_rated_ids)
    candidates = [v for v in list_venues() if v.id not in known_ids]

    if not candidates:
        logger.info("No candidate venues left for user %s", user_id)
        record_event("personalized_recommendations", {
            "user_id": user_id,
            "total_candidates": 0,
            "results_returned": 0,
            "venue_ids": [],
            "reason_kinds": [],
            "response_time_ms": round((time.time() - start_time) * 1000, 1),
        })
        return PersonalizedRecommendationResponse(
            recommendations=[],
            algorithm_version=config.algorithm_version,
            total_candidates=0,
            message=NO_CANDIDATES_MESSAGE,
        )

    ranked = rank_venues(candidates, profile, favorited, high_rated, limit=limit, config=config)

    logger.info(
        "Scored %d candidates for user %s, returning %d",
        len(candidates), user_id, len(ranked),
    )
    record_event("personalized_recommendations", {
        "user_id": user_id,
        "total_candidates": len(candidates),
        "results_returned": len(ranked),
        "venue_ids": [r.venue.id for r in ranked],
        "reason_kinds": [_reason_kind(reason) for r in ranked for reason in r.reasoning],
        "response_time_ms": round((time.time() - start_time) * 1000, 1),
    })

    return PersonalizedRecommendationResponse(
        recommendations=ranked,
        algorithm_version=config.algorithm_version,
        total_candidates=len(candidates),
    )
