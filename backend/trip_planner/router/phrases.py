"""
Phrase translation proxy
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from trip_planner.dependencies import get_microservices
from trip_planner.services.microservices import (
    MicroserviceClient,
    UpstreamError,
    UpstreamUnavailableError,
)

router = APIRouter(prefix="/api/phrases", tags=["Phrases"])

MAX_LANGUAGE_LENGTH = 50
MAX_PHRASE_TYPE_LENGTH = 30


class PhraseRequest(BaseModel):
    language_or_country: str | None = None
    phrase_type: str | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


def _failure(status_code: int, error: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"success": False, "error": error})


@router.post("/translate")
async def translate_phrases(
    body: PhraseRequest,
    services: MicroserviceClient = Depends(get_microservices),
):
    """
    Ask the translation service for common phrases.

    Inputs are trimmed and capped before forwarding. Upstream HTTP errors are
    relayed with the upstream status code.
    """
    if not body.language_or_country or not body.phrase_type:
        raise _failure(400, "Both languageOrCountry and phraseType are required")

    language = body.language_or_country.strip()[:MAX_LANGUAGE_LENGTH]
    phrase_type = body.phrase_type.strip()[:MAX_PHRASE_TYPE_LENGTH]
    if not language or not phrase_type:
        raise _failure(400, "Invalid input parameters")

    print(f"[phrases] Requesting phrases for {language} - {phrase_type}")
    try:
        data = await services.generate_phrases({"languageOrCountry": language, "phraseType": phrase_type})
    except UpstreamUnavailableError as e:
        print(f"[phrases] Error calling phrase microservice: {e}")
        raise _failure(503, "Translation service is currently unavailable")
    except UpstreamError as e:
        print(f"[phrases] Error calling phrase microservice: {e}")
        if e.status_code is not None:
            raise _failure(e.status_code, e.message or "Translation service error")
        raise _failure(500, "Internal server error")

    if not isinstance(data, dict) or not data.get("success"):
        error = data.get("error") if isinstance(data, dict) else None
        raise _failure(400, error or "Microservice returned an error")

    return {
        "success": True,
        "phrases": data.get("phrases", []),
        "language": data.get("language"),
        "phraseType": data.get("phraseType"),
    }
