from __future__ import annotations

from ..venues.models import MusicGenre, Neighbourhood
from .models import UpdatePreferencesRequest, UserProfile

_profiles: dict[str, UserProfile] = {}


def _seed_profiles() -> None:
    """Pre-seed demo profiles matching the demo accounts."""
    _profiles["user"] = UserProfile(
        id="user",
        full_name="Demo User",
        preferred_music=[MusicGenre.house, MusicGenre.edm],
        first_neighbourhood=Neighbourhood.king_west,
        second_neighbourhood=Neighbourhood.entertainment_district,
        third_neighbourhood=Neighbourhood.queen_west,
    )
    # No preferences yet: music match is neutral for every venue
    _profiles["explorer"] = UserProfile(id="explorer", full_name="New Explorer")
    _profiles["admin"] = UserProfile(id="admin", full_name="Demo Admin")


def get_profile(user_id: str) -> UserProfile | None:
    return _profiles.get(user_id)


def save_profile(profile: UserProfile) -> UserProfile:
    _profiles[profile.id] = profile
    return profile


def update_preferences(user_id: str, update: UpdatePreferencesRequest) -> UserProfile:
    """Apply only the fields present in *update* on top of the stored profile.

    Raises ``pydantic.ValidationError`` when the merged profile picks the
    same neighbourhood twice.
    """
    current = _profiles.get(user_id) or UserProfile(id=user_id)
    merged = {**current.model_dump(), **update.model_dump(exclude_unset=True)}
    if merged.get("preferred_music") is None:
        merged["preferred_music"] = []
    return save_profile(UserProfile(**merged))


def reset_profiles() -> None:
    _profiles.clear()
    _seed_profiles()


_seed_profiles()
