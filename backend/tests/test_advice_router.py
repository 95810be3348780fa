import json

import httpx


def test_safety_tips_forwards_trip_details(client, create_trip, upstream):
    trip = create_trip(destination="Kyoto, Japan", travelers=3)
    upstream.handler = lambda request: httpx.Response(200, json={"tips": ["Carry cash"]})

    response = client.post(f"/trips/{trip['id']}/safety-tips")

    assert response.status_code == 200
    assert response.json() == {"success": True, "tripId": trip["id"], "safetyTips": {"tips": ["Carry cash"]}}

    [request] = upstream.calls
    assert str(request.url) == "http://safety.test/safety-tips"
    assert json.loads(request.content) == {
        "location": "Kyoto, Japan",
        "startDate": "2024-03-01T00:00:00.000Z",
        "endDate": "2024-03-03T00:00:00.000Z",
        "numberOfTravelers": 3,
    }


def test_itinerary_suggestions_spreads_upstream_fields(client, create_trip, upstream):
    trip = create_trip()
    upstream.handler = lambda request: httpx.Response(
        200, json={"itinerary": [{"day": 1, "plan": "Louvre"}], "source": "generator"}
    )

    response = client.post(f"/trips/{trip['id']}/itinerary-suggestions")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "tripId": trip["id"],
        "itinerary": [{"day": 1, "plan": "Louvre"}],
        "source": "generator",
    }
    assert str(upstream.calls[0].url) == "http://itinerary.test/generate-itinerary"


def test_advice_for_missing_trip_does_not_call_upstream(client, upstream):
    response = client.post("/trips/000000000000000000000000/safety-tips")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Trip not found"}
    assert upstream.calls == []


def test_upstream_error_status_becomes_500(client, create_trip, upstream):
    trip = create_trip()
    upstream.handler = lambda request: httpx.Response(502, json={"error": "model overloaded"})

    response = client.post(f"/trips/{trip['id']}/itinerary-suggestions")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to fetch itinerary suggestions",
        "details": "model overloaded",
    }


def test_unreachable_upstream_is_service_unavailable(client, create_trip, upstream):
    trip = create_trip()

    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    upstream.handler = refuse

    response = client.post(f"/trips/{trip['id']}/safety-tips")

    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Safety tips service is currently unavailable"


def test_upstream_timeout_is_service_unavailable(client, create_trip, upstream):
    trip = create_trip()

    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.handler = slow

    response = client.post(f"/trips/{trip['id']}/itinerary-suggestions")

    assert response.status_code == 503
