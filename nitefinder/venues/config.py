from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class VenueStoreConfig:
    catalog_path: Path = field(
        default_factory=lambda: Path(
            os.getenv("NITEFINDER_VENUES_CSV", str(_DATA_DIR / "venues.csv"))
        )
    )
    list_separator: str = ","


DEFAULT_VENUE_STORE_CONFIG = VenueStoreConfig()
