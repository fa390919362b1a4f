from __future__ import annotations

import pytest

from nitefinder.profiles.models import UserProfile
from nitefinder.recommendations.config import ScoringConfig
from nitefinder.recommendations.scoring import (
    combine_liked_venues,
    rank_venues,
    score_community,
    score_exploration,
    score_music_match,
    score_neighbourhood_match,
    score_similarity,
    score_venue,
    weighted_total,
)
from nitefinder.venues.models import CapacitySize, DayOfWeek, MusicGenre, Neighbourhood, Venue

HOUSE, EDM, JAZZ, POP = MusicGenre.house, MusicGenre.edm, MusicGenre.jazz, MusicGenre.pop


def _venue(venue_id: str = "v-1", **kwargs) -> Venue:
    return Venue(id=venue_id, name=f"Venue {venue_id}", slug=venue_id, **kwargs)


def _profile(**kwargs) -> UserProfile:
    return UserProfile(id="u-1", **kwargs)


def _components(rec) -> dict[str, float]:
    return {
        "music": rec.music_match_score,
        "neighbourhood": rec.neighbourhood_match_score,
        "similarity": rec.similarity_score,
        "exploration": rec.exploration_bonus,
        "community": rec.community_score,
    }


# ── Music match ──────────────────────────────────────────────────────────


class TestMusicMatch:
    def test_no_preferred_genres_is_neutral(self):
        result = score_music_match(_venue(top_music=[HOUSE]), _profile())
        assert result.score == 5
        assert result.reasons == ()

    def test_venue_without_genres_is_neutral(self):
        result = score_music_match(_venue(), _profile(preferred_music=[HOUSE]))
        assert result.score == 5
        assert result.reasons == ()

    def test_full_overlap_scores_ten(self):
        result = score_music_match(
            _venue(top_music=[HOUSE, EDM]), _profile(preferred_music=[HOUSE, EDM]),
        )
        assert result.score == 10
        assert result.reasons == ("Great music match: House, EDM",)

    def test_half_overlap_is_a_great_match(self):
        result = score_music_match(
            _venue(top_music=[HOUSE, JAZZ]), _profile(preferred_music=[HOUSE, EDM]),
        )
        assert result.score == 9
        assert result.reasons == ("Great music match: House",)

    def test_partial_overlap(self):
        result = score_music_match(
            _venue(top_music=[JAZZ, POP]), _profile(preferred_music=[HOUSE, EDM, JAZZ]),
        )
        assert result.score == pytest.approx(6 + 2 / 3)
        assert result.reasons == ("Some music overlap: Jazz",)

    def test_no_overlap_scores_four(self):
        result = score_music_match(
            _venue(top_music=[JAZZ, MusicGenre.city_pop]), _profile(preferred_music=[HOUSE]),
        )
        assert result.score == 4
        assert result.reasons == ("Different music style for exploration (Jazz, City-pop)",)

    def test_matches_listed_in_user_order(self):
        result = score_music_match(
            _venue(top_music=[HOUSE, EDM]), _profile(preferred_music=[EDM, HOUSE]),
        )
        assert result.reasons == ("Great music match: EDM, House",)


# ── Neighbourhood match ──────────────────────────────────────────────────


class TestNeighbourhoodMatch:
    profile = _profile(
        first_neighbourhood=Neighbourhood.king_west,
        second_neighbourhood=Neighbourhood.entertainment_district,
        third_neighbourhood=Neighbourhood.queen_west,
    )

    def test_venue_without_neighbourhood_is_neutral(self):
        result = score_neighbourhood_match(_venue(), self.profile)
        assert result.score == 5
        assert result.reasons == ()

    def test_first_choice(self):
        result = score_neighbourhood_match(
            _venue(neighbourhood=Neighbourhood.king_west), self.profile,
        )
        assert result.score == 10
        assert result.reasons == ("Located in your primary area: King West",)

    def test_second_choice(self):
        result = score_neighbourhood_match(
            _venue(neighbourhood=Neighbourhood.entertainment_district), self.profile,
        )
        assert result.score == 8
        assert result.reasons == ("Located in your secondary area: Entertainment District",)

    def test_third_choice(self):
        result = score_neighbourhood_match(
            _venue(neighbourhood=Neighbourhood.queen_west), self.profile,
        )
        assert result.score == 6
        assert result.reasons == ("Located in your third preferred area: Queen West",)

    def test_no_match_scores_four_without_reason(self):
        result = score_neighbourhood_match(
            _venue(neighbourhood=Neighbourhood.danforth), self.profile,
        )
        assert result.score == 4
        assert result.reasons == ()

    def test_unset_first_choice_still_matches_second(self):
        profile = _profile(second_neighbourhood=Neighbourhood.king_west)
        result = score_neighbourhood_match(_venue(neighbourhood=Neighbourhood.king_west), profile)
        assert result.score == 8


# ── Similarity ───────────────────────────────────────────────────────────


class TestSimilarity:
    def test_no_liked_venues_is_neutral(self):
        result = score_similarity(_venue(has_patio=True), [])
        assert result.score == 5
        assert result.reasons == ()

    def test_averages_matches_across_liked_venues(self):
        candidate = _venue(has_patio=True, has_dancefloor=True, capacity_size=CapacitySize.medium)
        liked = [
            _venue("l-1", has_patio=True, has_dancefloor=True, capacity_size=CapacitySize.medium),
            _venue("l-2", capacity_size=CapacitySize.large),
        ]
        result = score_similarity(candidate, liked)
        # (3 + 0) / 2 = 1.5 -> 1.5 * 2 + 4
        assert result.score == 7
        assert result.reasons == (
            "Similar features to your favorites: patio, dancefloor, similar size",
        )

    def test_one_reason_per_matching_liked_venue(self):
        candidate = _venue(has_rooftop=True)
        liked = [_venue("l-1", has_rooftop=True), _venue("l-2", has_rooftop=True)]
        result = score_similarity(candidate, liked)
        assert result.reasons == (
            "Similar features to your favorites: rooftop",
            "Similar features to your favorites: rooftop",
        )

    def test_feature_must_be_present_on_candidate(self):
        candidate = _venue(has_patio=False)
        result = score_similarity(candidate, [_venue("l-1", has_patio=True)])
        assert result.score == 4
        assert result.reasons == ()

    def test_missing_capacity_is_not_a_size_match(self):
        result = score_similarity(_venue(), [_venue("l-1")])
        assert result.score == 4

    def test_capped_at_ten(self):
        features = dict(
            has_patio=True, has_rooftop=True, has_dancefloor=True,
            capacity_size=CapacitySize.medium,
        )
        result = score_similarity(_venue(**features), [_venue("l-1", **features)])
        assert result.score == 10


# ── Exploration ──────────────────────────────────────────────────────────


class TestExploration:
    def test_no_liked_venues_is_neutral(self):
        result = score_exploration(_venue(typical_vibe="Loud", has_rooftop=True), [])
        assert result.score == 5
        assert result.reasons == ()

    def test_every_bonus(self):
        liked = [_venue("l-1", typical_vibe="Drinks & talk", capacity_size=CapacitySize.medium)]
        candidate = _venue(
            typical_vibe="Mostly dancing",
            capacity_size=CapacitySize.large,
            has_rooftop=True,
            live_music_days=[DayOfWeek.fri],
        )
        result = score_exploration(candidate, liked)
        assert result.score == 10
        assert result.reasons == (
            "New experience: Mostly dancing",
            "New feature: rooftop",
            "New feature: live music",
        )

    def test_familiar_venue_gets_base_score(self):
        liked = [_venue("l-1", typical_vibe="Drinks & talk", capacity_size=CapacitySize.medium)]
        candidate = _venue(typical_vibe="Drinks & talk", capacity_size=CapacitySize.medium)
        result = score_exploration(candidate, liked)
        assert result.score == 5
        assert result.reasons == ()

    def test_new_size_has_no_reason(self):
        liked = [_venue("l-1", typical_vibe="Chill", capacity_size=CapacitySize.medium)]
        candidate = _venue(typical_vibe="Chill", capacity_size=CapacitySize.very_large)
        result = score_exploration(candidate, liked)
        assert result.score == 6
        assert result.reasons == ()

    def test_rooftop_already_liked(self):
        liked = [_venue("l-1", typical_vibe="Chill", has_rooftop=True)]
        candidate = _venue(typical_vibe="Chill", has_rooftop=True)
        assert score_exploration(candidate, liked).score == 5


# ── Community ────────────────────────────────────────────────────────────


class TestCommunity:
    def test_highly_rated(self):
        result = score_community(_venue(service_rating=9.0))
        assert result.score == 9
        assert result.reasons == ("Highly rated by community (9/10)",)

    def test_fractional_rating_in_reason(self):
        result = score_community(_venue(service_rating=8.2))
        assert result.reasons == ("Highly rated by community (8.2/10)",)

    def test_precise_rating_is_not_truncated(self):
        result = score_community(_venue(service_rating=8.1234567))
        assert result.reasons == ("Highly rated by community (8.1234567/10)",)

    def test_below_threshold_has_no_reason(self):
        result = score_community(_venue(service_rating=7.0))
        assert result.score == 7
        assert result.reasons == ()

    @pytest.mark.parametrize("rating", [None, 0.0])
    def test_missing_rating_defaults_to_five(self, rating):
        assert score_community(_venue(service_rating=rating)).score == 5


# ── Aggregation ──────────────────────────────────────────────────────────


class TestAggregation:
    def test_rounds_half_up(self):
        # 3.0 + 1.0 + 0.8 + 0.75 + 0.5 = 6.05
        total = weighted_total({
            "music": 10, "neighbourhood": 4, "similarity": 4,
            "exploration": 5, "community": 5,
        })
        assert total == 6.1

    def test_all_neutral(self):
        total = weighted_total({
            "music": 5, "neighbourhood": 5, "similarity": 5,
            "exploration": 5, "community": 5,
        })
        assert total == 5.0

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError):
            ScoringConfig(music_weight=0.5)

    def test_reasoning_in_component_order(self):
        profile = _profile(preferred_music=[HOUSE], first_neighbourhood=Neighbourhood.king_west)
        liked = [_venue("l-1", has_patio=True, typical_vibe="Chill")]
        venue = _venue(
            top_music=[HOUSE],
            neighbourhood=Neighbourhood.king_west,
            has_patio=True,
            typical_vibe="Loud",
            service_rating=8.5,
        )
        rec = score_venue(venue, profile, liked)
        assert rec.reasoning == [
            "Great music match: House",
            "Located in your primary area: King West",
            "Similar features to your favorites: patio",
            "New experience: Loud",
            "Highly rated by community (8.5/10)",
        ]

    def test_first_choice_scenario(self):
        profile = _profile(preferred_music=[HOUSE, EDM], first_neighbourhood=Neighbourhood.king_west)
        venue = _venue(
            top_music=[HOUSE, EDM], neighbourhood=Neighbourhood.king_west, service_rating=9.0,
        )
        rec = score_venue(venue, profile, [])
        assert rec.music_match_score == 10
        assert rec.neighbourhood_match_score == 10
        assert rec.similarity_score == 5
        assert rec.exploration_bonus == 5
        assert rec.community_score == 9
        assert rec.total_score == 8.2
        assert "Highly rated by community (9/10)" in rec.reasoning


# ── Ranking ──────────────────────────────────────────────────────────────


def _catalog() -> list[Venue]:
    hoods = list(Neighbourhood)
    genres = list(MusicGenre)
    return [
        _venue(
            f"v-{i}",
            neighbourhood=hoods[i % 4],
            top_music=[genres[i % len(genres)]],
            service_rating=float(4 + i % 6),
            has_patio=i % 2 == 0,
            capacity_size=list(CapacitySize)[i % 4],
            typical_vibe=f"vibe {i % 3}",
        )
        for i in range(15)
    ]


class TestRanking:
    profile = _profile(
        preferred_music=[HOUSE, MusicGenre.hip_hop],
        first_neighbourhood=Neighbourhood.king_west,
        second_neighbourhood=Neighbourhood.queen_west,
    )

    def test_sorted_descending(self):
        ranked = rank_venues(_catalog(), self.profile, [], [], limit=15)
        scores = [r.total_score for r in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_total_is_rederivable_from_components(self):
        liked = [_venue("l-1", has_patio=True, capacity_size=CapacitySize.medium)]
        for rec in rank_venues(_catalog(), self.profile, liked, [], limit=15):
            assert rec.total_score == weighted_total(_components(rec))

    def test_component_ranges(self):
        liked = [_venue("l-1", has_patio=True, typical_vibe="vibe 1")]
        for rec in rank_venues(_catalog(), self.profile, liked, [], limit=15):
            assert 4 <= rec.music_match_score <= 10
            assert 4 <= rec.neighbourhood_match_score <= 10
            assert 4 <= rec.similarity_score <= 10
            assert 5 <= rec.exploration_bonus <= 10
            assert rec.community_score == rec.venue.service_rating

    def test_default_limit_is_ten(self):
        assert len(rank_venues(_catalog(), self.profile, [], [])) == 10

    def test_limit_returns_the_top_n(self):
        everything = rank_venues(_catalog(), self.profile, [], [], limit=15)
        top_three = rank_venues(_catalog(), self.profile, [], [], limit=3)
        assert [r.venue.id for r in top_three] == [r.venue.id for r in everything[:3]]

    def test_ties_keep_candidate_order(self):
        twins = [_venue(f"t-{i}", service_rating=7.0) for i in range(5)]
        ranked = rank_venues(twins, self.profile, [], [])
        assert [r.venue.id for r in ranked] == ["t-0", "t-1", "t-2", "t-3", "t-4"]

    def test_deterministic(self):
        first = rank_venues(_catalog(), self.profile, [], [], limit=15)
        second = rank_venues(_catalog(), self.profile, [], [], limit=15)
        assert [r.venue.id for r in first] == [r.venue.id for r in second]

    def test_empty_candidates(self):
        assert rank_venues([], self.profile, [], []) == []

    def test_negative_limit_rejected(self):
        with pytest.raises(ValueError):
            rank_venues(_catalog(), self.profile, [], [], limit=-1)

    def test_no_preferred_genres_keeps_music_neutral(self):
        profile = _profile(first_neighbourhood=Neighbourhood.king_west)
        for rec in rank_venues(_catalog(), profile, [], [], limit=15):
            assert rec.music_match_score == 5
            assert not any("music" in reason.lower() for reason in rec.reasoning)

    def test_liked_venues_are_combined_once(self):
        liked = _venue("l-1", has_patio=True)
        assert combine_liked_venues([liked], [liked]) == [liked]
