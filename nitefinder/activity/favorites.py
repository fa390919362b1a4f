from __future__ import annotations

import datetime as dt

from .models import Favorite

_favorites: list[Favorite] = []


def add_favorite(user_id: str, venue_id: str) -> Favorite | None:
    """Favorite *venue_id* for *user_id*. Returns ``None`` if it already is."""
    if venue_id in favorite_venue_ids(user_id):
        return None
    favorite = Favorite(
        user_id=user_id,
        venue_id=venue_id,
        created_at=dt.datetime.now(dt.timezone.utc),
    )
    _favorites.append(favorite)
    return favorite


def remove_favorite(user_id: str, venue_id: str) -> bool:
    for i, fav in enumerate(_favorites):
        if fav.user_id == user_id and fav.venue_id == venue_id:
            del _favorites[i]
            return True
    return False


def get_favorites(user_id: str) -> list[Favorite]:
    """Return the user's favorites, newest first."""
    mine = [f for f in _favorites if f.user_id == user_id]
    return list(reversed(mine))


def favorite_venue_ids(user_id: str) -> list[str]:
    return [f.venue_id for f in _favorites if f.user_id == user_id]


def clear_favorites() -> None:
    _favorites.clear()
