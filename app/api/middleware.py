# app/api/middleware.py
from fastapi import Request, Response
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware

JSON_CONTENT_TYPE = "application/json"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class PreflightCORSMiddleware(BaseHTTPMiddleware):
    """
    Statyczne nagłówki CORS na każdej odpowiedzi.
    OPTIONS (preflight) kończy się tutaj: 200, pusta treść, niezależnie od ścieżki.
    """

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
            response.headers["Content-Type"] = JSON_CONTENT_TYPE
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response


class JSONContentTypeMiddleware(BaseHTTPMiddleware):
    """Wymusza Content-Type: application/json, także dla błędów i pustych odpowiedzi."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Content-Type"] = JSON_CONTENT_TYPE
        return response


def build_middleware() -> list[Middleware]:
    """Kolejność ma znaczenie: pierwszy element jest najbardziej zewnętrzny."""
    return [
        Middleware(PreflightCORSMiddleware),
        Middleware(JSONContentTypeMiddleware),
    ]
