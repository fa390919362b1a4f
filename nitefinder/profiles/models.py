from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from ..venues.models import MusicGenre, Neighbourhood


class UserProfile(BaseModel):
    id: str
    full_name: str | None = None
    preferred_music: list[MusicGenre] = Field(default_factory=list)
    first_neighbourhood: Neighbourhood | None = None
    second_neighbourhood: Neighbourhood | None = None
    third_neighbourhood: Neighbourhood | None = None

    @field_validator("preferred_music")
    @classmethod
    def dedupe_genres(cls, genres: list[MusicGenre]) -> list[MusicGenre]:
        # Keeps the order the user picked them in
        return list(dict.fromkeys(genres))

    @model_validator(mode="after")
    def distinct_neighbourhoods(self) -> UserProfile:
        chosen = [n for n in self.ranked_neighbourhoods if n is not None]
        if len(chosen) != len(set(chosen)):
            raise ValueError("Each neighbourhood can only be chosen once")
        return self

    @property
    def ranked_neighbourhoods(self) -> list[Neighbourhood | None]:
        """First, second and third choice, in priority order."""
        return [self.first_neighbourhood, self.second_neighbourhood, self.third_neighbourhood]


class UpdatePreferencesRequest(BaseModel):
    full_name: str | None = Field(default=None, max_length=100)
    preferred_music: list[MusicGenre] | None = None
    first_neighbourhood: Neighbourhood | None = None
    second_neighbourhood: Neighbourhood | None = None
    third_neighbourhood: Neighbourhood | None = None
