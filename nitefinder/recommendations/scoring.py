"""
Weighted venue scoring
======================

Every candidate venue is scored on five independent components, each on a
nominal 0-10 scale:

* **Music match** (30 %) - overlap between the user's preferred genres and
  the venue's genres.
* **Neighbourhood match** (25 %) - whether the venue sits in the user's
  first, second or third choice neighbourhood.
* **Similarity** (20 %) - shared features (patio, rooftop, dancefloor,
  size) with the venues the user already likes.
* **Exploration bonus** (15 %) - rewards vibes, sizes and features the user
  has not tried yet.
* **Community score** (10 %) - the venue's crowd-sourced service rating.

The total is the weighted sum rounded half-up to one decimal place::

    total = 0.30 × music + 0.25 × neighbourhood + 0.20 × similarity
          + 0.15 × exploration + 0.10 × community

Each component returns its score together with the reasoning strings it
produced. The reasons are concatenated in component order, so the
explanation shown to the user is reproducible for a given input.

A "liked venue" is one the user favorited or visited with an experience
rating of at least 7. Missing data (no genres, no neighbourhood, no liked
venues, no rating) falls back to a neutral 5 instead of failing.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..profiles.models import UserProfile
from ..venues.models import Venue
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import RecommendationScore

_NEIGHBOURHOOD_RANKS = (
    (10.0, "Located in your primary area: {}"),
    (8.0, "Located in your secondary area: {}"),
    (6.0, "Located in your third preferred area: {}"),
)


@dataclass(frozen=True)
class ComponentScore:
    score: float
    reasons: tuple[str, ...] = ()


def _join(values: Iterable) -> str:
    return ", ".join(getattr(v, "value", v) for v in values)


def _format_number(value: float) -> str:
    """Render 9.0 as ``9`` and 8.2 as ``8.2``, other values in full."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def combine_liked_venues(
    favorited_venues: Sequence[Venue],
    high_rated_visited_venues: Sequence[Venue],
) -> list[Venue]:
    """Union of favorites and high-rated visits, first occurrence wins."""
    liked: dict[str, Venue] = {}
    for venue in [*favorited_venues, *high_rated_visited_venues]:
        liked.setdefault(venue.id, venue)
    return list(liked.values())


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def score_music_match(
    venue: Venue,
    profile: UserProfile,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ComponentScore:
    user_genres = profile.preferred_music
    if not user_genres or not venue.top_music:
        return ComponentScore(config.neutral_score)

    venue_genres = set(venue.top_music)
    matching = [g for g in user_genres if g in venue_genres]
    match_pct = len(matching) / len(user_genres)

    if match_pct >= 0.5:
        return ComponentScore(
            8 + match_pct * 2,
            (f"Great music match: {_join(matching)}",),
        )
    if match_pct > 0:
        return ComponentScore(
            6 + match_pct * 2,
            (f"Some music overlap: {_join(matching)}",),
        )
    return ComponentScore(
        config.mismatch_score,
        (f"Different music style for exploration ({_join(venue.top_music)})",),
    )


def score_neighbourhood_match(
    venue: Venue,
    profile: UserProfile,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ComponentScore:
    if venue.neighbourhood is None:
        return ComponentScore(config.neutral_score)

    for choice, (score, template) in zip(profile.ranked_neighbourhoods, _NEIGHBOURHOOD_RANKS):
        if choice is not None and venue.neighbourhood == choice:
            return ComponentScore(score, (template.format(venue.neighbourhood.value),))

    return ComponentScore(config.mismatch_score)


def _shared_features(venue: Venue, liked: Venue) -> list[str]:
    features: list[str] = []
    if venue.has_patio and liked.has_patio:
        features.append("patio")
    if venue.has_rooftop and liked.has_rooftop:
        features.append("rooftop")
    if venue.has_dancefloor and liked.has_dancefloor:
        features.append("dancefloor")
    if venue.capacity_size is not None and venue.capacity_size == liked.capacity_size:
        features.append("similar size")
    return features


def score_similarity(
    venue: Venue,
    liked_venues: Sequence[Venue],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ComponentScore:
    if not liked_venues:
        return ComponentScore(config.neutral_score)

    reasons: list[str] = []
    total_matches = 0
    for liked in liked_venues:
        features = _shared_features(venue, liked)
        # One line per liked venue with anything in common
        if features:
            reasons.append(f"Similar features to your favorites: {', '.join(features)}")
        total_matches += len(features)

    avg_similarity = total_matches / len(liked_venues)
    return ComponentScore(min(avg_similarity * 2 + 4, config.max_score), tuple(reasons))


def score_exploration(
    venue: Venue,
    liked_venues: Sequence[Venue],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ComponentScore:
    if not liked_venues:
        return ComponentScore(config.neutral_score)

    liked_vibes = {v.typical_vibe for v in liked_venues if v.typical_vibe}
    liked_sizes = {v.capacity_size for v in liked_venues if v.capacity_size}

    score = config.neutral_score
    reasons: list[str] = []

    if venue.typical_vibe and venue.typical_vibe not in liked_vibes:
        score += 2
        reasons.append(f"New experience: {venue.typical_vibe}")

    if venue.capacity_size and venue.capacity_size not in liked_sizes:
        score += 1

    if venue.has_rooftop and not any(v.has_rooftop for v in liked_venues):
        score += 1
        reasons.append("New feature: rooftop")

    if venue.live_music_days and not any(v.live_music_days for v in liked_venues):
        score += 1
        reasons.append("New feature: live music")

    return ComponentScore(min(score, config.max_score), tuple(reasons))


def score_community(
    venue: Venue,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ComponentScore:
    rating = venue.service_rating or config.neutral_score
    if rating >= config.highly_rated_threshold:
        return ComponentScore(
            rating,
            (f"Highly rated by community ({_format_number(rating)}/10)",),
        )
    return ComponentScore(rating)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def weighted_total(
    components: dict[str, float],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """Weighted sum of the component scores, rounded half-up to one decimal."""
    total = sum(
        Decimal(str(components[name])) * Decimal(str(weight))
        for name, weight in config.weights.items()
    )
    return float(total.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def score_venue(
    venue: Venue,
    profile: UserProfile,
    liked_venues: Sequence[Venue],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> RecommendationScore:
    music = score_music_match(venue, profile, config)
    neighbourhood = score_neighbourhood_match(venue, profile, config)
    similarity = score_similarity(venue, liked_venues, config)
    exploration = score_exploration(venue, liked_venues, config)
    community = score_community(venue, config)

    components = {
        "music": music,
        "neighbourhood": neighbourhood,
        "similarity": similarity,
        "exploration": exploration,
        "community": community,
    }
    reasoning = [reason for part in components.values() for reason in part.reasons]

    return RecommendationScore(
        venue=venue,
        total_score=weighted_total({k: c.score for k, c in components.items()}, config),
        music_match_score=music.score,
        neighbourhood_match_score=neighbourhood.score,
        similarity_score=similarity.score,
        exploration_bonus=exploration.score,
        community_score=community.score,
        reasoning=reasoning,
    )


def rank_venues(
    candidate_venues: Sequence[Venue],
    profile: UserProfile,
    favorited_venues: Sequence[Venue],
    high_rated_visited_venues: Sequence[Venue],
    limit: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[RecommendationScore]:
    """Score every candidate and return the top *limit*, best first.

    Ties keep the candidates' original order.
    """
    if limit is None:
        limit = config.default_limit
    if limit < 0:
        raise ValueError("limit must not be negative")

    liked = combine_liked_venues(favorited_venues, high_rated_visited_venues)
    scored = [score_venue(venue, profile, liked, config) for venue in candidate_venues]
    # sorted() is stable, including with reverse=True
    ranked = sorted(scored, key=lambda s: s.total_score, reverse=True)
    return ranked[:limit]
