# folio/app/core/errors.py
"""
Exception types and the handlers that turn them into HTTP responses.

Endpoints raise HTTPException directly for expected failures. The handlers
here cover the rest:
- request validation → 400 with a one-line message
- media host failures → 502, logged
- admin page guard redirects → 307 to /login or /unauthorized
- anything unexpected → 500, logged, generic message
"""
import logging
from typing import Any, Iterable, Mapping

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from folio.app.security.cookies import clear_session_cookie

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds in front of the field path
_LOCATION_ROOTS = {"body", "query", "path", "cookie", "header", "form"}


class MediaHostError(Exception):
    """The external media host rejected or failed a request."""

    def __init__(self, message: str = "Media host request failed"):
        super().__init__(message)
        self.message = message


class PageRedirect(Exception):
    """Raised by the admin page guard to send the browser elsewhere."""

    def __init__(self, location: str, clear_cookie: bool = False):
        super().__init__(location)
        self.location = location
        self.clear_cookie = clear_cookie


def first_error_message(errors: Iterable[Mapping[str, Any]]) -> str:
    """Render the first pydantic error as a single human-readable line."""
    for error in errors:
        parts = [
            str(part) for part in error.get("loc", ())
            if part not in _LOCATION_ROOTS
        ]
        field = ".".join(parts) or "request"

        if error.get("type") == "missing":
            return f"{field} is required"

        ctx = error.get("ctx") or {}
        if "error" in ctx:
            # Message of a ValueError raised inside a validator
            return str(ctx["error"])

        return f"{field}: {error.get('msg', 'invalid value')}"
    return "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": first_error_message(exc.errors())},
    )


async def media_host_exception_handler(request: Request, exc: MediaHostError):
    logger.error("Media host failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.message},
    )


async def page_redirect_handler(request: Request, exc: PageRedirect):
    response = RedirectResponse(exc.location, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    if exc.clear_cookie:
        clear_session_cookie(response)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(MediaHostError, media_host_exception_handler)
    app.add_exception_handler(PageRedirect, page_redirect_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
