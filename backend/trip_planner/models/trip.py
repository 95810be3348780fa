"""
Trip models for MongoDB persistence and the trips API
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from trip_planner.core.dates import utc_isoformat, utc_midnight
from trip_planner.models.itinerary import DayPlan


def _calendar_date(value: Any) -> Any:
    if value is None or value == "":
        return None
    return utc_midnight(value)


class TripSummary(BaseModel):
    """
    Trip metadata without the itinerary, as shown in a user's trip list
    """

    id: str | None = Field(default=None, description="Opaque trip id (MongoDB ObjectId)")
    trip_name: str = Field(..., description="Trip name")
    destination: str = Field(..., description="Free-text destination")
    start_date: datetime = Field(..., description="First day, UTC midnight")
    end_date: datetime = Field(..., description="Last day, UTC midnight; may precede start_date")
    travelers: int = Field(..., description="Number of travelers")
    owner: str = Field(..., alias="username", description="Username of the owning account")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_dates(cls, value: Any) -> Any:
        return _calendar_date(value)

    @field_serializer("start_date", "end_date", "created_at", when_used="json")
    def serialize_timestamps(self, value: datetime) -> str:
        return utc_isoformat(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Trip(TripSummary):
    """
    Full trip document
    """

    itinerary: list[DayPlan] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "id": "65f1c0ffee0000000000abcd",
                "tripName": "Spring in Paris",
                "destination": "Paris, France",
                "startDate": "2024-03-01T00:00:00.000Z",
                "endDate": "2024-03-03T00:00:00.000Z",
                "travelers": 2,
                "username": "traveler1",
                "itinerary": [
                    {"day": "Day 1", "activities": []},
                    {"day": "Day 2", "activities": []},
                    {"day": "Day 3", "activities": []},
                ],
                "createdAt": "2024-02-01T12:00:00.000Z",
            }
        }

    def to_document(self) -> dict:
        """Field-name dump for MongoDB; the id lives in `_id`."""
        return self.model_dump(exclude={"id"})


class TripCreateRequest(BaseModel):
    trip_name: str | None = None
    destination: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    travelers: int | None = None
    owner: str | None = Field(default=None, alias="username")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_dates(cls, value: Any) -> Any:
        return _calendar_date(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def is_complete(self) -> bool:
        return all(
            [
                self.trip_name,
                self.destination,
                self.start_date,
                self.end_date,
                self.travelers,
                self.owner,
            ]
        )


class TripUpdateRequest(BaseModel):
    """
    Partial trip update.

    Only fields present in the request body are applied. A metadata field sent
    as null or "" is rejected instead of being cleared, since every trip field
    is required. `itinerary` replaces the whole itinerary when present; a
    non-list value empties it.
    """

    trip_name: str | None = None
    destination: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    travelers: int | None = None
    itinerary: Any = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_dates(cls, value: Any) -> Any:
        return _calendar_date(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def metadata_changes(self) -> dict[str, Any]:
        """
        Return the metadata fields to set, keyed by document field name.
        Raises ValueError naming the first field that would be cleared.
        """
        changes: dict[str, Any] = {}
        for name in ("trip_name", "destination", "start_date", "end_date", "travelers"):
            if name not in self.model_fields_set:
                continue
            value = getattr(self, name)
            if value is None or value == "":
                raise ValueError(f"{to_camel(name)} cannot be empty")
            changes[name] = value
        return changes

    @property
    def replaces_itinerary(self) -> bool:
        return "itinerary" in self.model_fields_set
