import httpx
import pytest

from trip_planner.services.microservices import (
    MicroserviceClient,
    UpstreamError,
    UpstreamUnavailableError,
)


def _client(handler) -> MicroserviceClient:
    return MicroserviceClient(
        httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        safety_url="http://safety.test/",
        phrase_url="http://phrases.test",
        itinerary_url="http://itinerary.test",
        export_url="http://export.test",
    )


@pytest.mark.asyncio
async def test_post_json_returns_decoded_body():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"tips": []})

    services = _client(handler)
    try:
        assert await services.safety_tips({"location": "Oslo"}) == {"tips": []}
    finally:
        await services.aclose()

    assert str(seen[0].url) == "http://safety.test/safety-tips"
    assert seen[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_error_status_carries_upstream_message():
    services = _client(lambda request: httpx.Response(400, json={"error": "bad phrase type"}))

    with pytest.raises(UpstreamError) as exc_info:
        await services.generate_phrases({"languageOrCountry": "French", "phraseType": "?"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "bad phrase type"
    assert not isinstance(exc_info.value, UpstreamUnavailableError)


@pytest.mark.asyncio
async def test_connect_error_is_unavailable():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await _client(handler).itinerary_suggestions({})

    assert exc_info.value.service == "Itinerary suggestions"
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_other_transport_errors_are_plain_upstream_errors():
    def handler(request):
        raise httpx.RemoteProtocolError("peer closed connection", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await _client(handler).safety_tips({})

    assert not isinstance(exc_info.value, UpstreamUnavailableError)


@pytest.mark.asyncio
async def test_export_document_returns_open_stream():
    services = _client(lambda request: httpx.Response(200, content=b"%PDF-1.4"))

    response = await services.export_document({"trip": {}, "costSummary": {"total": 0, "perTraveler": 0}})
    try:
        assert b"".join([chunk async for chunk in response.aiter_bytes()]) == b"%PDF-1.4"
    finally:
        await response.aclose()


def test_from_config_uses_configured_timeout(monkeypatch):
    from trip_planner.core import config

    monkeypatch.setattr(config, "UPSTREAM_TIMEOUT_SECONDS", 3)

    services = MicroserviceClient.from_config(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

    assert services._client.timeout.connect == 3
    assert services._client.timeout.read == 3
