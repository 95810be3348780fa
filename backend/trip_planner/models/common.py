"""
Common API models
"""

from typing import Any

from pydantic import BaseModel, Field

from trip_planner.models.itinerary import CostSummary
from trip_planner.models.trip import Trip, TripSummary


class APIResponse(BaseModel):
    """
    Unified API response envelope
    """

    code: int = Field(default=0, description="0 means success; non-zero means error")
    msg: str = Field(default="ok", description="Human-readable message")
    data: Any | None = Field(default=None, description="Payload data")

    class Config:
        json_schema_extra = {"example": {"code": 0, "msg": "ok", "data": {"items": []}}}


class MessageResponse(BaseModel):
    message: str


class TripResponse(BaseModel):
    trip: Trip


class TripMessageResponse(BaseModel):
    message: str
    trip: Trip


class TripListResponse(BaseModel):
    trips: list[TripSummary]


class CostSummaryResponse(BaseModel):
    trip_id: str = Field(..., alias="tripId")
    cost_summary: CostSummary = Field(..., alias="costSummary")

    class Config:
        populate_by_name = True
