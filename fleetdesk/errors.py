"""
Error taxonomy and the JSON error envelope returned by the API.
"""
import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FleetError(Exception):
    """Base class for errors reported to API callers."""

    status_code = 500
    error_type = "server_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FleetError):
    """User-correctable input error, optionally keyed by field."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.fields = fields or {}


class NotFoundError(FleetError):
    """Referenced id does not exist."""

    status_code = 404
    error_type = "not_found"


class ReferenceConflictError(FleetError):
    """Operation would leave a dangling reference."""

    status_code = 409
    error_type = "conflict"


class IncompleteDataError(FleetError):
    """Stored data lacks what the requested output needs."""

    status_code = 422
    error_type = "incomplete_data"


class PermissionDeniedError(FleetError):
    status_code = 403
    error_type = "forbidden"


class UpstreamError(FleetError):
    """Record store or blob store call failed."""

    status_code = 502
    error_type = "upstream_error"


def error_payload(error: FleetError) -> dict:
    payload = {
        "success": False,
        "message": error.message,
        "error_type": error.error_type,
    }
    if isinstance(error, ValidationError) and error.fields:
        payload["fields"] = error.fields
    return payload


async def handle_fleet_error(request: Request, error: FleetError) -> JSONResponse:
    """Render a FleetError with the standard envelope."""
    if isinstance(error, UpstreamError):
        logger.error("Upstream failure on %s %s: %s", request.method, request.url.path, error.message)
    return JSONResponse(status_code=error.status_code, content=error_payload(error))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FleetError, handle_fleet_error)
