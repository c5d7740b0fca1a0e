# path: navigoplan-api/navigoplan/core/config.py

from __future__ import annotations

from pathlib import Path
import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    # General
    LOG_LEVEL: str = Field(default="INFO", description="Application log level")

    # CORS
    CORS_ALLOW_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed origins")

    # Port datasets
    PORTS_CANONICAL_PATH: Path = Field(
        default=DATA_DIR / "ports.v1.json",
        description="Canonical port list (id/name/lat/lon/region/category/aliases)",
    )
    PORTS_SEAGUIDE_PATH: Path = Field(
        default=DATA_DIR / "sea_guide_vol3_master.json",
        description="Sea guide port list (bilingual names, nested crew coordinates)",
    )

    # Leg estimation
    LEG_TIME_MARGIN: float = Field(default=0.15, ge=0, description="Extra passage time over straight-line distance")
    DEFAULT_DEPARTURE_TIME: str = Field(
        default="09:00",
        pattern=r"^([01]\d|2[0-3]):[0-5]\d$",
        description="Departure time used when the yacht does not supply one",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()


def init_logging(level: str | None = None) -> None:
    lvl = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(level=lvl, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    # Reduce verbosity of noisy loggers
    for noisy in ("httpx", "urllib3", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
