"""
Trip Router
Handles trip creation, listing, itinerary edits and cost summaries
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from trip_planner.db.stores import TripStore
from trip_planner.dependencies import get_trip_store
from trip_planner.models.common import (
    CostSummaryResponse,
    MessageResponse,
    TripListResponse,
    TripMessageResponse,
    TripResponse,
)
from trip_planner.models.trip import Trip, TripCreateRequest, TripUpdateRequest
from trip_planner.services.costs import summarize_costs
from trip_planner.services.itinerary import build_empty_itinerary, normalize_itinerary

router = APIRouter(prefix="/trips", tags=["Trips"])

TRIP_NOT_FOUND = "Trip not found"


async def get_trip_or_404(trips: TripStore, trip_id: str, detail: str | dict = TRIP_NOT_FOUND) -> Trip:
    trip = await trips.find(trip_id)
    if trip is None:
        print(f"[trip] Trip not found for id: {trip_id}")
        raise HTTPException(status_code=404, detail=detail)
    return trip


@router.post("", status_code=201, response_model=TripMessageResponse)
async def create_trip(body: TripCreateRequest, trips: TripStore = Depends(get_trip_store)):
    """
    Create a trip with one empty day per calendar day in its date range.
    """
    if not body.is_complete():
        raise HTTPException(status_code=400, detail="All fields are required, including username")

    try:
        trip = Trip(
            trip_name=body.trip_name,
            destination=body.destination,
            start_date=body.start_date,
            end_date=body.end_date,
            travelers=body.travelers,
            owner=body.owner,
            itinerary=build_empty_itinerary(body.start_date, body.end_date),
            created_at=datetime.utcnow(),
        )
        trip.id = await trips.insert(trip)
    except Exception as e:
        print(f"[trip] Trip creation error: {e}")
        raise HTTPException(status_code=500, detail={"error": "Server error", "details": str(e)})

    print(f"[trip] Created trip id={trip.id} owner={trip.owner} days={len(trip.itinerary)}")
    return TripMessageResponse(message="Trip created successfully", trip=trip)


@router.get("", response_model=TripListResponse)
async def list_trips(
    username: str | None = Query(None, description="Owner whose trips to list"),
    trips: TripStore = Depends(get_trip_store),
):
    """
    List a user's trips, newest first. Itineraries are left out.
    """
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")

    try:
        return TripListResponse(trips=await trips.find_by_owner(username))
    except Exception as e:
        print(f"[trip] Get all trips error: {e}")
        raise HTTPException(status_code=500, detail={"error": "Server error", "details": str(e)})


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(trip_id: str, trips: TripStore = Depends(get_trip_store)):
    return TripResponse(trip=await get_trip_or_404(trips, trip_id))


@router.put("/{trip_id}", response_model=TripMessageResponse)
async def update_trip(
    trip_id: str,
    body: TripUpdateRequest,
    trips: TripStore = Depends(get_trip_store),
):
    """
    Apply a partial update.

    Metadata fields present in the body replace the stored ones. When
    `itinerary` is present the whole itinerary is swapped for its normalized
    form.
    """
    trip = await get_trip_or_404(trips, trip_id)

    try:
        changes = body.metadata_changes()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if body.replaces_itinerary:
        itinerary = normalize_itinerary(body.itinerary)
        changes["itinerary"] = [day.model_dump() for day in itinerary]
        print(f"[trip] Replacing itinerary of {trip_id} with {len(itinerary)} day(s)")

    updated = Trip.model_validate({**trip.model_dump(), **changes})

    if changes:
        try:
            saved = await trips.update_fields(trip_id, changes)
        except Exception as e:
            print(f"[trip] Error saving trip {trip_id}: {e}")
            raise HTTPException(status_code=500, detail={"error": "Failed to save trip", "details": str(e)})
        if not saved:
            raise HTTPException(status_code=404, detail=TRIP_NOT_FOUND)

    print(f"[trip] Trip {trip_id} updated: {sorted(changes)}")
    return TripMessageResponse(message="Trip updated successfully", trip=updated)


@router.delete("/{trip_id}", response_model=MessageResponse)
async def delete_trip(trip_id: str, trips: TripStore = Depends(get_trip_store)):
    try:
        deleted = await trips.delete(trip_id)
    except Exception as e:
        print(f"[trip] Delete trip error: {e}")
        raise HTTPException(status_code=500, detail={"error": "Server error", "details": str(e)})

    if not deleted:
        raise HTTPException(status_code=404, detail=TRIP_NOT_FOUND)
    return MessageResponse(message="Trip deleted successfully")


@router.get("/{trip_id}/cost-summary", response_model=CostSummaryResponse)
async def get_cost_summary(trip_id: str, trips: TripStore = Depends(get_trip_store)):
    """
    Total, per-traveler and per-day cost of the stored itinerary.
    """
    trip = await get_trip_or_404(trips, trip_id)
    summary = summarize_costs(trip.itinerary, trip.travelers, start_date=trip.start_date)
    return CostSummaryResponse(trip_id=trip_id, cost_summary=summary)
