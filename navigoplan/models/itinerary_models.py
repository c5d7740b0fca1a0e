# path: navigoplan-api/navigoplan/models/itinerary_models.py

from __future__ import annotations

import datetime as dt
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from navigoplan.models.port_models import RegionKey


YachtType = Literal["Motor", "Sailing"]
Audience = Literal["Captain", "VIP"]
Preference = Literal["family", "nightlife", "gastronomy"]
PlannerMode = Literal["Region", "Custom"]
RegionChoice = Union[Literal["Auto"], RegionKey]

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
MAX_DAYS = 30


class Yacht(BaseModel):
    type: YachtType = "Motor"
    cruise_speed_knots: float = Field(default=20.0, gt=0, le=60)
    liters_per_hour: float = Field(default=180.0, ge=0)  # motor only
    price_per_liter: float = Field(default=1.80, ge=0)  # motor only
    departure_time: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)


# --- Requests ---


class RegionRouteRequest(BaseModel):
    mode: Literal["Region"] = "Region"
    start: str = Field(min_length=1, max_length=80)
    end: str = Field(default="", max_length=80)
    days: int = Field(default=7, ge=2, le=MAX_DAYS)
    region: RegionChoice = "Auto"
    vias: List[str] = Field(default_factory=list, max_length=MAX_DAYS)

    @field_validator("start")
    @classmethod
    def start_not_blank(cls, v: str):
        if not v.strip():
            raise ValueError("start must not be blank")
        return v.strip()


class CustomRouteRequest(BaseModel):
    mode: Literal["Custom"] = "Custom"
    start: str = Field(min_length=1, max_length=80)
    day_stops: List[str] = Field(min_length=1, max_length=MAX_DAYS)
    days: Optional[int] = Field(default=None, ge=1, le=MAX_DAYS)

    @model_validator(mode="after")
    def validate_days(self):
        if self.days is not None and self.days != len(self.day_stops):
            raise ValueError("day_stops must contain exactly one stop per day")
        return self


RouteRequest = Union[RegionRouteRequest, CustomRouteRequest]


class UserNotes(BaseModel):
    marina: Optional[str] = Field(default=None, max_length=500)
    food: Optional[str] = Field(default=None, max_length=500)
    beach: Optional[str] = Field(default=None, max_length=500)


class DayAnnotation(UserNotes):
    day: int = Field(ge=1, le=MAX_DAYS)


class ItineraryRequest(BaseModel):
    route: RouteRequest = Field(discriminator="mode")
    start_date: dt.date = Field(default_factory=dt.date.today)
    yacht: Yacht = Field(default_factory=Yacht)
    preferences: List[Preference] = Field(default_factory=list)
    audience: Audience = "Captain"
    weather_aware: bool = False
    annotations: List[DayAnnotation] = Field(default_factory=list)


# --- Results ---


class Leg(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    distance_nm: int = Field(ge=1)
    hours: float = Field(gt=0)
    fuel_liters: int = Field(ge=0)
    cost: int = Field(ge=0)
    departure: str = Field(pattern=HHMM_PATTERN)
    arrival: str = Field(pattern=HHMM_PATTERN)
    window: str
    bearing_deg_true: float = Field(ge=0, lt=360)


class DayCard(BaseModel):
    day: int = Field(ge=1)
    date: dt.date
    leg: Optional[Leg] = None  # None: layover day
    notes: str = ""
    user_notes: Optional[UserNotes] = None


class ItineraryTotals(BaseModel):
    distance_nm: int = Field(ge=0)
    hours: float = Field(ge=0)
    time_label: str
    fuel_liters: int = Field(ge=0)
    cost: int = Field(ge=0)


class BBoxWGS84(BaseModel):
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float


class Itinerary(BaseModel):
    mode: PlannerMode
    region: Optional[RegionKey] = None
    audience: Audience
    stops: List[str]
    days: List[DayCard]
    totals: ItineraryTotals
    bbox_wgs84: Optional[BBoxWGS84] = None
    request_hash: Optional[str] = None
    created_at_utc: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))

    @model_validator(mode="after")
    def validate_days(self):
        for idx, card in enumerate(self.days, start=1):
            if card.day != idx:
                raise ValueError("day cards must be numbered contiguously from 1")
        return self


class ShareLinkResponse(BaseModel):
    query: str


class PlanSuggestionRequest(BaseModel):
    mode: PlannerMode
    text: str = Field(max_length=20_000, description="Raw model answer, JSON possibly fenced")
    days: int = Field(default=7, ge=1, le=MAX_DAYS)


class PlanSuggestion(BaseModel):
    mode: PlannerMode
    vias: List[str] = Field(default_factory=list)
    day_stops: List[str] = Field(default_factory=list)
