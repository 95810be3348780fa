"""
Export Router
Sends a trip and its cost summary to the export microservice and streams the
resulting PDF back to the client
"""

from collections.abc import AsyncIterator
from urllib.parse import quote

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from trip_planner.db.stores import TripStore
from trip_planner.dependencies import get_microservices, get_trip_store
from trip_planner.models.trip import Trip
from trip_planner.router.trip import get_trip_or_404
from trip_planner.services.costs import summarize_costs
from trip_planner.services.microservices import (
    MicroserviceClient,
    UpstreamError,
    UpstreamUnavailableError,
)

router = APIRouter(prefix="/api/trips", tags=["Export"])


async def relay_stream(upstream: httpx.Response) -> AsyncIterator[bytes]:
    """Yield the upstream body, closing the upstream response however the relay ends."""
    try:
        async for chunk in upstream.aiter_bytes():
            yield chunk
    finally:
        await upstream.aclose()


def export_request(trip: Trip) -> dict:
    summary = summarize_costs(trip.itinerary, trip.travelers)
    return {
        "trip": trip.model_dump(mode="json", by_alias=True),
        "costSummary": {"total": summary.total, "perTraveler": summary.per_traveler},
    }


def content_disposition(trip_name: str | None) -> str:
    filename = f"{trip_name or 'trip'}_export.pdf"
    ascii_name = filename.encode("ascii", "ignore").decode("ascii").replace('"', "").replace("\\", "")
    return f"attachment; filename=\"{ascii_name or 'trip_export.pdf'}\"; filename*=UTF-8''{quote(filename)}"


@router.post("/{trip_id}/export")
async def export_trip(
    trip_id: str,
    trips: TripStore = Depends(get_trip_store),
    services: MicroserviceClient = Depends(get_microservices),
):
    trip = await get_trip_or_404(trips, trip_id, detail={"success": False, "error": "Trip not found"})
    print(f"[export] Calling export microservice for trip {trip_id}")

    try:
        upstream = await services.export_document(export_request(trip))
    except UpstreamUnavailableError as e:
        print(f"[export] Export microservice unavailable: {e}")
        raise HTTPException(
            status_code=503,
            detail={"success": False, "error": "Export service is currently unavailable", "details": e.message},
        )
    except UpstreamError as e:
        print(f"[export] Error exporting trip: {e}")
        raise HTTPException(status_code=500, detail={"success": False, "error": e.message})

    print(f"[export] Microservice response status: {upstream.status_code}")
    return StreamingResponse(
        relay_stream(upstream),
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(trip.trip_name)},
    )
