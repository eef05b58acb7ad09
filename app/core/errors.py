import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def parse_exception_to_error_message(e: Exception) -> str:
    """
    Turn a caught exception into the message sent back to the client.
    Driver errors are unwrapped so the caller sees the database's own text.
    """
    if isinstance(e, DBAPIError) and e.orig is not None:
        return str(e.orig).strip()
    return str(e) or e.__class__.__name__


def format_validation_errors(e, prefix: str = "") -> str:
    """Flatten RequestValidationError or pydantic ValidationError into one line."""
    parts = []
    for error in e.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        if prefix:
            loc.insert(0, prefix)
        location = ".".join(loc)
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = format_validation_errors(exc)
    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    # Every failure is reported the same way, bad input included
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
