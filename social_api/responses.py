# responses.py
"""JSON envelope helpers shared by every handler."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type, x-session-token",
}


def json_response(payload: Any, status_code: int = 200) -> JSONResponse:
    """Serialize ``payload`` (datetimes included) with the CORS headers attached."""
    return JSONResponse(
        content=jsonable_encoder(payload),
        status_code=status_code,
        headers=dict(CORS_HEADERS),
    )


def error_response(error: str, status_code: int, details: Any = None) -> JSONResponse:
    body = {"error": error}
    if details:
        body["details"] = details
    return json_response(body, status_code=status_code)


def preflight_response() -> Response:
    return Response(status_code=200, headers=dict(CORS_HEADERS))
