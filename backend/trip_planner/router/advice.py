"""
Advice Router
Forwards a trip's destination, dates and party size to the safety-tips and
itinerary-suggestion microservices
"""

from fastapi import APIRouter, Depends, HTTPException

from trip_planner.core.dates import utc_isoformat
from trip_planner.db.stores import TripStore
from trip_planner.dependencies import get_microservices, get_trip_store
from trip_planner.models.trip import Trip
from trip_planner.router.trip import get_trip_or_404
from trip_planner.services.microservices import (
    MicroserviceClient,
    UpstreamError,
    UpstreamUnavailableError,
)

router = APIRouter(prefix="/trips", tags=["Advice"])

_NOT_FOUND = {"success": False, "error": "Trip not found"}


def advice_request(trip: Trip) -> dict:
    """Payload shape shared by the advice microservices."""
    return {
        "location": trip.destination,
        "startDate": utc_isoformat(trip.start_date),
        "endDate": utc_isoformat(trip.end_date),
        "numberOfTravelers": trip.travelers,
    }


def _upstream_failure(e: UpstreamError, failure: str) -> HTTPException:
    if isinstance(e, UpstreamUnavailableError):
        return HTTPException(
            status_code=503,
            detail={"success": False, "error": f"{e.service} service is currently unavailable", "details": e.message},
        )
    return HTTPException(status_code=500, detail={"success": False, "error": failure, "details": e.message})


@router.post("/{trip_id}/safety-tips")
async def get_safety_tips(
    trip_id: str,
    trips: TripStore = Depends(get_trip_store),
    services: MicroserviceClient = Depends(get_microservices),
):
    trip = await get_trip_or_404(trips, trip_id, detail=_NOT_FOUND)
    payload = advice_request(trip)
    print(f"[advice] Calling safety tips microservice with data: {payload}")

    try:
        safety_tips = await services.safety_tips(payload)
    except UpstreamError as e:
        print(f"[advice] Error fetching safety tips: {e}")
        raise _upstream_failure(e, "Failed to fetch safety tips")

    return {"success": True, "tripId": trip_id, "safetyTips": safety_tips}


@router.post("/{trip_id}/itinerary-suggestions")
async def get_itinerary_suggestions(
    trip_id: str,
    trips: TripStore = Depends(get_trip_store),
    services: MicroserviceClient = Depends(get_microservices),
):
    """
    Relay every field of the upstream suggestion payload next to the trip id.
    """
    trip = await get_trip_or_404(trips, trip_id, detail=_NOT_FOUND)
    payload = advice_request(trip)
    print(f"[advice] Calling itinerary microservice with data: {payload}")

    try:
        suggestions = await services.itinerary_suggestions(payload)
    except UpstreamError as e:
        print(f"[advice] Error fetching itinerary suggestions: {e}")
        raise _upstream_failure(e, "Failed to fetch itinerary suggestions")

    extra = suggestions if isinstance(suggestions, dict) else {"suggestions": suggestions}
    return {"success": True, "tripId": trip_id, **extra}
