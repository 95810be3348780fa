"""
Itinerary and cost models embedded in trip documents
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer
from pydantic.alias_generators import to_camel

from trip_planner.core.dates import utc_isoformat


class Activity(BaseModel):
    """
    A single planned event within a day.
    `cost` stays None when nothing (or nothing numeric) was entered, so totals
    can tell "no cost" apart from a real zero.
    """

    start_time: str = Field(default="", description="Free-text start time")
    activity: str = Field(default="", description="What is planned")
    cost: float | None = Field(default=None, description="Cost in trip currency, or null")
    notes: str = Field(default="", description="Free-text notes")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class DayPlan(BaseModel):
    label: str = Field(default="", alias="day", description="Display label, e.g. 'Day 1'")
    activities: list[Activity] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "day": "Day 1",
                "activities": [
                    {"startTime": "09:00", "activity": "Louvre", "cost": 22.0, "notes": "Book ahead"}
                ],
            }
        }


class DayCost(BaseModel):
    label: str = Field(..., alias="day")
    date: datetime | None = Field(default=None, description="Calendar date of the day, if known")
    subtotal: float = 0.0

    @field_serializer("date", when_used="json-unless-none")
    def serialize_date(self, value: datetime) -> str:
        return utc_isoformat(value)

    class Config:
        populate_by_name = True


class CostSummary(BaseModel):
    """
    Aggregated cost of an itinerary. Computed on every read, never stored.
    """

    total: float = 0.0
    per_traveler: float = 0.0
    travelers: int = Field(default=1, description="Divisor used for per_traveler")
    days: list[DayCost] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "total": 120.5,
                "perTraveler": 60.25,
                "travelers": 2,
                "days": [{"day": "Day 1", "date": "2024-03-01T00:00:00.000Z", "subtotal": 120.5}],
            }
        }
