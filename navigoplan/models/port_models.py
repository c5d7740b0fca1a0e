# path: navigoplan-api/navigoplan/models/port_models.py

from __future__ import annotations

from typing import List, Literal, Optional, Union, get_args
import math

from pydantic import BaseModel, ConfigDict, Field, field_validator


RegionKey = Literal["Saronic", "Cyclades", "Ionian", "Dodecanese", "Sporades", "NorthAegean", "Crete"]
PortCategory = Literal["harbor", "marina", "anchorage", "spot"]
PortSource = Literal["canonical", "seaguide"]

REGION_KEYS: List[str] = list(get_args(RegionKey))
PORT_CATEGORIES: List[str] = list(get_args(PortCategory))


def _finite_or_none(v):
    if v is None:
        return None
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    v = float(v)
    return v if math.isfinite(v) else None


# --- Raw source rows (one strict schema per source file) ---


class CanonicalPortRow(BaseModel):
    """One element of ports.v1.json."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str = ""
    lat: Optional[float] = None
    lon: Optional[float] = None
    region: Optional[str] = None
    category: Optional[str] = None
    aliases: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return None if v is None else str(v)

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def coerce_coord(cls, v):
        return _finite_or_none(v)

    @field_validator("aliases", mode="before")
    @classmethod
    def coerce_aliases(cls, v):
        if not isinstance(v, list):
            return []
        return [str(x) for x in v if x is not None]


class SeaGuideName(BaseModel):
    model_config = ConfigDict(extra="ignore")

    el: Optional[str] = None
    en: Optional[str] = None


class SeaGuideCrew(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def coerce_coord(cls, v):
        return _finite_or_none(v)


class SeaGuideRow(BaseModel):
    """One element of sea_guide_vol3_master.json."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Union[SeaGuideName, str, None] = None
    region: Optional[str] = None
    area: Optional[str] = None
    category: Optional[str] = None
    crew: Optional[SeaGuideCrew] = None
    aliases: List[str] = Field(default_factory=list)
    alt_names: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return None if v is None else str(v)

    @field_validator("aliases", "alt_names", mode="before")
    @classmethod
    def coerce_names(cls, v):
        if not isinstance(v, list):
            return []
        return [str(x) for x in v if x is not None]


# --- Catalog ---


class PortRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    lat: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    lon: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)
    region: RegionKey
    category: PortCategory = "harbor"
    aliases: List[str] = Field(default_factory=list)
    source: PortSource = "canonical"


class PortResolution(BaseModel):
    query: str
    port: PortRecord
    label: str
