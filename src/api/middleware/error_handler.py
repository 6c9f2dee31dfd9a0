"""
Error handling middleware for API

FastAPI calls the matching handler for any exception raised while serving
a request. Handlers here convert:
- Validation errors (bad request body)
- Domain errors (clock not started, bad time zone offset)
- Unexpected errors
into the ErrorResponse envelope.
"""

import json
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas.error import ErrorDetail, ErrorResponse, ValidationErrorResponse
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class ClockNotStartedError(DomainError):
    """No frame has been rendered since the last start()"""
    def __init__(self, running: bool):
        super().__init__(
            code="CLOCK_NOT_STARTED",
            message="Clock has not rendered a frame yet",
            details={"running": running},
            status_code=409
        )


class InvalidTimeZoneOffsetError(DomainError):
    """Offset rejected by the clock engine"""
    def __init__(self, minutes, reason: str):
        super().__init__(
            code="INVALID_TIME_ZONE_OFFSET",
            message=reason,
            details={"minutes": minutes},
            status_code=422
        )


def _json(model) -> dict:
    return json.loads(model.model_dump_json())


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error: {len(errors)} error(s)", request_id=request_id, path=request.url.path)

        validation_errors = [
            {
                "field": ".".join(str(x) for x in error["loc"][1:]),  # Skip "body"
                "message": error["msg"],
                "type": error["type"],
            }
            for error in errors
        ]

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
            ),
            validation_errors=validation_errors,
            request_id=request_id
        )
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=_json(response))

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        request_id = str(uuid.uuid4())

        log.warn(f"Domain error: {exc.code} - {exc.message}", request_id=request_id)

        response = ErrorResponse(
            error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details),
            request_id=request_id
        )
        return JSONResponse(status_code=exc.status_code, content=_json(response))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            request_id=request_id,
            path=request.url.path,
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again.",
                details={"request_id": request_id},
            ),
            request_id=request_id
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_json(response))
