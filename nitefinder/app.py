from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .activity.favorites import add_favorite, get_favorites, remove_favorite
from .activity.models import (
    FavoriteOut,
    FavoriteRequest,
    FavoritesResponse,
    Visit,
    VisitRequest,
    VisitsResponse,
)
from .activity.visits import delete_visit, get_visits, log_visit, update_visit
from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .auth.dependencies import require_admin, require_user, require_user_id
from .auth.models import LoginRequest
from .auth.users import authenticate
from .profiles.models import UpdatePreferencesRequest, UserProfile
from .profiles.store import get_profile, update_preferences
from .recommendations.categories import get_category_feed
from .recommendations.config import DEFAULT_SCORING_CONFIG
from .recommendations.models import (
    CategoryFeedResponse,
    PersonalizedRecommendationResponse,
)
from .recommendations.retrieval import (
    ProfileNotFoundError,
    UnauthorizedError,
    get_personalized_recommendations,
)
from .venues.data_store import get_venue, get_venue_by_slug
from .venues.models import (
    AgeGroup,
    CapacitySize,
    CoverAmount,
    CoverFrequency,
    DayOfWeek,
    LineupTimeRange,
    MusicGenre,
    Neighbourhood,
    Venue,
    VenueSearchFilters,
    VenueSearchResponse,
)
from .venues.search import search_venues

logger = logging.getLogger(__name__)

app = FastAPI(title="NiteFinder API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "nitefinder-secret-change-in-production"),
)


# ── Error handling ───────────────────────────────────────────────────────


@app.exception_handler(UnauthorizedError)
def _unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"detail": str(exc)})


@app.exception_handler(ProfileNotFoundError)
def _profile_not_found(request: Request, exc: ProfileNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": "User not found"})


@app.exception_handler(Exception)
def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def _require_venue(venue_id: str) -> Venue:
    venue = get_venue(venue_id)
    if venue is None:
        raise HTTPException(status_code=404, detail="Venue not found")
    return venue


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "music_genres": [g.value for g in MusicGenre],
        "neighbourhoods": [n.value for n in Neighbourhood],
        "capacity_sizes": [c.value for c in CapacitySize],
        "cover_frequencies": [c.value for c in CoverFrequency],
        "cover_amounts": [c.value for c in CoverAmount],
        "lineup_times": [t.value for t in LineupTimeRange],
        "age_groups": [a.value for a in AgeGroup],
        "days": [d.value for d in DayOfWeek],
        "algorithm_version": DEFAULT_SCORING_CONFIG.algorithm_version,
    }


@app.get("/venues", response_model=VenueSearchResponse)
def venues(
    q: str | None = None,
    neighbourhood: list[Neighbourhood] = Query(default=[]),
    music: list[MusicGenre] = Query(default=[]),
    lineup: list[LineupTimeRange] = Query(default=[]),
    cover_frequency: list[CoverFrequency] = Query(default=[]),
    cover_amount: list[CoverAmount] = Query(default=[]),
    age_group: list[AgeGroup] = Query(default=[]),
    day: list[DayOfWeek] = Query(default=[]),
    min_rating: float = Query(default=0.0, ge=0.0, le=10.0),
    limit: int = Query(default=20, ge=1, le=100),
) -> VenueSearchResponse:
    filters = VenueSearchFilters(
        query=q,
        neighbourhoods=neighbourhood,
        music_genres=music,
        lineup_time=lineup,
        cover_frequency=cover_frequency,
        cover_amount=cover_amount,
        age_groups=age_group,
        days=day,
        min_service_rating=min_rating,
        limit=limit,
    )
    return search_venues(filters)


@app.get("/venues/{slug}", response_model=Venue)
def venue_detail(slug: str) -> Venue:
    venue = get_venue_by_slug(slug)
    if venue is None:
        raise HTTPException(status_code=404, detail="Venue not found")
    return venue


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.get("/personalized-recommendations", response_model=PersonalizedRecommendationResponse)
def personalized_recommendations(
    limit: int = Query(
        default=DEFAULT_SCORING_CONFIG.default_limit,
        ge=1,
        le=DEFAULT_SCORING_CONFIG.max_limit,
    ),
    user_id: str = Depends(require_user_id),
) -> PersonalizedRecommendationResponse:
    return get_personalized_recommendations(user_id, limit)


@app.get("/recommendations", response_model=CategoryFeedResponse)
def category_feed(user_id: str = Depends(require_user_id)) -> CategoryFeedResponse:
    profile = get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return get_category_feed(profile)


# ── Preferences ──────────────────────────────────────────────────────────


@app.get("/preferences", response_model=UserProfile)
def read_preferences(user_id: str = Depends(require_user_id)) -> UserProfile:
    profile = get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return profile


@app.put("/preferences", response_model=UserProfile)
def write_preferences(
    body: UpdatePreferencesRequest,
    user_id: str = Depends(require_user_id),
) -> UserProfile:
    try:
        return update_preferences(user_id, body)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=[err["msg"] for err in exc.errors()],
        ) from exc


# ── Favorites ────────────────────────────────────────────────────────────


@app.get("/favorites", response_model=FavoritesResponse)
def list_favorites(user_id: str = Depends(require_user_id)) -> FavoritesResponse:
    favorites = [
        FavoriteOut(venue_id=f.venue_id, created_at=f.created_at, venue=venue)
        for f in get_favorites(user_id)
        if (venue := get_venue(f.venue_id)) is not None
    ]
    return FavoritesResponse(favorites=favorites, count=len(favorites))


@app.post("/favorites", response_model=FavoriteOut)
def create_favorite(
    body: FavoriteRequest,
    user_id: str = Depends(require_user_id),
) -> FavoriteOut:
    venue = _require_venue(body.venue_id)
    favorite = add_favorite(user_id, venue.id)
    if favorite is None:
        raise HTTPException(status_code=409, detail="Venue already in favorites")
    record_event("favorite_added", {"user_id": user_id, "venue_id": venue.id})
    return FavoriteOut(venue_id=venue.id, created_at=favorite.created_at, venue=venue)


@app.delete("/favorites/{venue_id}")
def delete_favorite(venue_id: str, user_id: str = Depends(require_user_id)) -> dict:
    if not remove_favorite(user_id, venue_id):
        raise HTTPException(status_code=404, detail="Favorite not found")
    return {"success": True}


# ── Visits ───────────────────────────────────────────────────────────────


@app.get("/visits", response_model=VisitsResponse)
def list_visits(
    venue_id: str | None = None,
    user_id: str = Depends(require_user_id),
) -> VisitsResponse:
    visits = get_visits(user_id, venue_id)
    return VisitsResponse(visits=visits, count=len(visits))


@app.post("/visits", response_model=Visit)
def create_visit(body: VisitRequest, user_id: str = Depends(require_user_id)) -> Visit:
    _require_venue(body.venue_id)
    visit = log_visit(user_id, body)
    record_event("visit_logged", {
        "user_id": user_id,
        "venue_id": body.venue_id,
        "experience_rating": body.experience_rating,
    })
    return visit


@app.put("/visits/{visit_id}", response_model=Visit)
def edit_visit(
    visit_id: str,
    body: VisitRequest,
    user_id: str = Depends(require_user_id),
) -> Visit:
    _require_venue(body.venue_id)
    visit = update_visit(user_id, visit_id, body)
    if visit is None:
        raise HTTPException(status_code=404, detail="Visit not found")
    return visit


@app.delete("/visits/{visit_id}")
def remove_visit(visit_id: str, user_id: str = Depends(require_user_id)) -> dict:
    if not delete_visit(user_id, visit_id):
        raise HTTPException(status_code=404, detail="Visit not found")
    return {"success": True}


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
