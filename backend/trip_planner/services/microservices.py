"""
Client for the external microservices (safety tips, phrase translation,
itinerary suggestions and PDF export).

A single httpx.AsyncClient is shared across requests. It is created at
startup and closed at shutdown, and routes receive it as a dependency so tests
can swap in an httpx.MockTransport.
"""

from typing import Any

import httpx

from trip_planner.core import config


class UpstreamError(Exception):
    """A microservice call failed or returned an error response."""

    def __init__(self, service: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.service = service
        self.message = message
        self.status_code = status_code


class UpstreamUnavailableError(UpstreamError):
    """The microservice could not be reached or did not answer in time."""


def _error_message(response: httpx.Response) -> str:
    fallback = f"Microservice responded with status: {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return fallback


class MicroserviceClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        safety_url: str = config.SAFETY_MICROSERVICE_URL,
        phrase_url: str = config.PHRASE_MICROSERVICE_URL,
        itinerary_url: str = config.ITINERARY_MICROSERVICE_URL,
        export_url: str = config.EXPORT_MICROSERVICE_URL,
    ):
        self._client = client
        self.safety_url = safety_url.rstrip("/")
        self.phrase_url = phrase_url.rstrip("/")
        self.itinerary_url = itinerary_url.rstrip("/")
        self.export_url = export_url.rstrip("/")

    @classmethod
    def from_config(cls, transport: httpx.AsyncBaseTransport | None = None) -> "MicroserviceClient":
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.UPSTREAM_TIMEOUT_SECONDS),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        return cls(client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, service: str, url: str, payload: dict, *, stream: bool = False) -> httpx.Response:
        request = self._client.build_request("POST", url, json=payload)
        try:
            response = await self._client.send(request, stream=stream)
        except (httpx.ConnectError, httpx.TimeoutException) as e:
            raise UpstreamUnavailableError(service, f"{service} service unreachable: {e}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(service, f"{service} request failed: {e}") from e

        if response.is_error:
            if stream:
                await response.aread()
                await response.aclose()
            print(f"[microservices] {service} responded {response.status_code}: {response.text[:200]}")
            raise UpstreamError(service, _error_message(response), status_code=response.status_code)
        return response

    async def _post_json(self, service: str, url: str, payload: dict) -> Any:
        response = await self._send(service, url, payload)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(service, f"{service} service returned invalid JSON") from e

    async def safety_tips(self, payload: dict) -> Any:
        return await self._post_json("Safety tips", f"{self.safety_url}/safety-tips", payload)

    async def itinerary_suggestions(self, payload: dict) -> Any:
        return await self._post_json(
            "Itinerary suggestions", f"{self.itinerary_url}/generate-itinerary", payload
        )

    async def generate_phrases(self, payload: dict) -> Any:
        return await self._post_json("Translation", f"{self.phrase_url}/generate-phrases", payload)

    async def export_document(self, payload: dict) -> httpx.Response:
        """
        Start the export call and return the open streaming response.
        The caller must close it once the body has been relayed.
        """
        return await self._send("Export", f"{self.export_url}/export", payload, stream=True)
