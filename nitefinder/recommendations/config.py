from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    music_weight: float = 0.30
    neighbourhood_weight: float = 0.25
    similarity_weight: float = 0.20
    exploration_weight: float = 0.15
    community_weight: float = 0.10

    neutral_score: float = 5.0
    mismatch_score: float = 4.0
    max_score: float = 10.0
    highly_rated_threshold: float = 8.0
    liked_visit_threshold: int = 7

    default_limit: int = 10
    max_limit: int = 50
    algorithm_version: str = "weighted_scoring_v1"

    def __post_init__(self) -> None:
        total = sum(self.weights.values())
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}")

    @property
    def weights(self) -> dict[str, float]:
        return {
            "music": self.music_weight,
            "neighbourhood": self.neighbourhood_weight,
            "similarity": self.similarity_weight,
            "exploration": self.exploration_weight,
            "community": self.community_weight,
        }


DEFAULT_SCORING_CONFIG = ScoringConfig()
