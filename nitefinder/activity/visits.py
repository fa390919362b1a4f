from __future__ import annotations

import datetime as dt
import uuid

from .models import Visit, VisitRequest

HIGH_RATING_THRESHOLD = 7

_visits: dict[str, Visit] = {}


def log_visit(user_id: str, body: VisitRequest) -> Visit:
    now = dt.datetime.now(dt.timezone.utc)
    visit = Visit(
        id=f"visit-{uuid.uuid4().hex[:12]}",
        user_id=user_id,
        created_at=now,
        updated_at=now,
        **body.model_dump(),
    )
    _visits[visit.id] = visit
    return visit


def update_visit(user_id: str, visit_id: str, body: VisitRequest) -> Visit | None:
    """Replace a visit's details. Users can only update their own visits."""
    existing = _visits.get(visit_id)
    if existing is None or existing.user_id != user_id:
        return None
    updated = Visit(
        id=existing.id,
        user_id=user_id,
        created_at=existing.created_at,
        updated_at=dt.datetime.now(dt.timezone.utc),
        **body.model_dump(),
    )
    _visits[visit_id] = updated
    return updated


def delete_visit(user_id: str, visit_id: str) -> bool:
    existing = _visits.get(visit_id)
    if existing is None or existing.user_id != user_id:
        return False
    del _visits[visit_id]
    return True


def get_visits(user_id: str, venue_id: str | None = None) -> list[Visit]:
    """Return the user's visits, most recent visit date first."""
    visits = [v for v in _visits.values() if v.user_id == user_id]
    if venue_id:
        visits = [v for v in visits if v.venue_id == venue_id]
    return sorted(visits, key=lambda v: v.visit_date, reverse=True)


def high_rated_venue_ids(user_id: str, threshold: int = HIGH_RATING_THRESHOLD) -> list[str]:
    """Venue ids the user visited with an experience rating of at least *threshold*."""
    ids: list[str] = []
    for visit in get_visits(user_id):
        if visit.experience_rating >= threshold and visit.venue_id not in ids:
            ids.append(visit.venue_id)
    return ids


def clear_visits() -> None:
    _visits.clear()
