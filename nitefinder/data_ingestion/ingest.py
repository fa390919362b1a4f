from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path
from typing import List, Type

import pandas as pd

from ..venues.models import (
    AgeGroup,
    CoverAmount,
    CoverFrequency,
    DayOfWeek,
    LineupTimeRange,
    MusicGenre,
    Neighbourhood,
)
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "id",
    "name",
    "slug",
    "neighbourhood",
    "address",
    "description",
    "typical_lineup_min",
    "typical_lineup_max",
    "longest_line_days",
    "cover_frequency",
    "cover_amount",
    "typical_vibe",
    "top_music",
    "age_group_min",
    "age_group_max",
    "service_rating",
    "live_music_days",
    "has_patio",
    "has_rooftop",
    "has_dancefloor",
    "has_food",
    "capacity_size",
    "has_pool_table",
    "has_arcade_games",
]

_EMPTY_MARKERS = {"", "—", "-", "n/a"}


def create_slug(name: str) -> str:
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _is_empty(raw: object) -> bool:
    return raw is None or pd.isna(raw) or str(raw).strip().lower() in _EMPTY_MARKERS


def _coerce(raw: str | None, enum_cls: Type[Enum]) -> str | None:
    """Return *raw* if it is a valid value of *enum_cls*, else ``None``."""
    if raw is None:
        return None
    value = raw.strip()
    try:
        return enum_cls(value).value
    except ValueError:
        logger.warning("Dropping unknown %s value %r", enum_cls.__name__, value)
        return None


def _alternatives(raw: object) -> list[str]:
    """Split survey answers like ``"22-25 or 25-30"``."""
    if _is_empty(raw):
        return []
    return [part.strip() for part in str(raw).split(" or ") if part.strip()]


def parse_lineup(raw: object) -> tuple[str | None, str | None]:
    """``"30 + min or 15-30 min"`` -> ``("30+ min", "15-30 min")``."""
    normalized = None if _is_empty(raw) else str(raw).replace("30 + min", "30+ min")
    times = _alternatives(normalized)
    low = _coerce(times[0], LineupTimeRange) if times else None
    high = _coerce(times[1], LineupTimeRange) if len(times) > 1 else None
    return low, high


def parse_cover(raw: object) -> tuple[str | None, str | None]:
    """``"Yes-always or Sometimes / $10-$20"`` -> ``("Yes-always", "$10-$20")``.

    When the survey lists several answers, the first one wins.
    """
    if _is_empty(raw):
        return None, None
    parts = str(raw).split(" / ")
    frequencies = _alternatives(parts[0])
    frequency = _coerce(frequencies[0], CoverFrequency) if frequencies else None
    amount = None
    if len(parts) > 1:
        amounts = _alternatives(parts[1])
        amount = _coerce(amounts[0], CoverAmount) if amounts else None
    return frequency, amount


def parse_age_group(raw: object) -> tuple[str | None, str | None]:
    ages = _alternatives(raw)
    low = _coerce(ages[0], AgeGroup) if ages else None
    high = _coerce(ages[1], AgeGroup) if len(ages) > 1 else None
    return low, high


def parse_list(raw: object, enum_cls: Type[Enum]) -> list[str]:
    """``"Fri, Sat"`` -> ``["Fri", "Sat"]``; ``"—"`` -> ``[]``."""
    if _is_empty(raw):
        return []
    values = [_coerce(part, enum_cls) for part in str(raw).split(",")]
    return [v for v in values if v is not None]


def _normalize_rating(rating: object) -> float | None:
    if _is_empty(rating):
        return None
    try:
        value = float(str(rating).split("/")[0].strip())
    except (TypeError, ValueError):
        return None
    # Clamp to [0, 10]
    return max(0.0, min(10.0, value))


def normalize_survey(raw: pd.DataFrame, id_prefix: str = "bar-") -> pd.DataFrame:
    """Map the raw survey table onto ``CANONICAL_COLUMNS``."""
    records: list[dict] = []
    for i, row in enumerate(raw.to_dict(orient="records"), start=1):
        lineup_min, lineup_max = parse_lineup(row.get("typical_lineup"))
        cover_frequency, cover_amount = parse_cover(row.get("cover"))
        age_min, age_max = parse_age_group(row.get("age_group"))
        neighbourhood = row.get("neighbourhood")
        records.append({
            "id": f"{id_prefix}{i}",
            "name": str(row["name"]).strip(),
            "slug": create_slug(str(row["name"])),
            "neighbourhood": None if _is_empty(neighbourhood) else _coerce(str(neighbourhood), Neighbourhood),
            "address": None if _is_empty(row.get("address")) else str(row["address"]).strip(),
            "description": None if _is_empty(row.get("description")) else str(row["description"]).strip(),
            "typical_lineup_min": lineup_min,
            "typical_lineup_max": lineup_max,
            "longest_line_days": ", ".join(parse_list(row.get("longest_line_days"), DayOfWeek)),
            "cover_frequency": cover_frequency,
            "cover_amount": cover_amount,
            "typical_vibe": None if _is_empty(row.get("typical_vibe")) else str(row["typical_vibe"]).strip(),
            "top_music": ", ".join(parse_list(row.get("top_music"), MusicGenre)),
            "age_group_min": age_min,
            "age_group_max": age_max,
            "service_rating": _normalize_rating(row.get("service_rating")),
            "live_music_days": ", ".join(parse_list(row.get("live_music_days"), DayOfWeek)),
            # The survey does not ask about amenities
            "has_patio": False,
            "has_rooftop": False,
            "has_dancefloor": False,
            "has_food": False,
            "capacity_size": None,
            "has_pool_table": False,
            "has_arcade_games": False,
        })
    return pd.DataFrame(records, columns=CANONICAL_COLUMNS)


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the catalog ingestion pipeline.

    Steps:
    - Read the raw survey CSV.
    - Map survey answers into the canonical Venue schema.
    - Persist the cleaned catalog as CSV for the venue store.
    """

    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    raw = pd.read_csv(config.raw_survey_path)
    logger.info("Read %d survey rows from %s", len(raw), config.raw_survey_path)

    canonical = normalize_survey(raw, id_prefix=config.id_prefix)

    output_path = config.processed_path
    canonical.to_csv(output_path, index=False)
    logger.info("Wrote %d venues to %s", len(canonical), output_path)
    return output_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    path = run_ingestion()
    print(f"Ingestion complete. Processed catalog saved to: {path}")
