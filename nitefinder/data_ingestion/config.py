"""
Configuration for the venue catalog ingestion pipeline.
"""

from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Where the raw survey lives and where the canonical catalog is written.
    """

    raw_survey_path: Path = _DATA_DIR / "raw" / "bar_survey.csv"
    processed_data_dir: Path = _DATA_DIR / "processed"
    processed_filename: str = "venues.csv"
    id_prefix: str = "bar-"

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
