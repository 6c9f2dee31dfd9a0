"""
Error schemas - Pydantic models for error responses

Every API error uses the same envelope so clients can handle failures
predictably.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional context (field names, valid ranges, etc.)"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the error occurred"
    )


class ErrorResponse(BaseModel):
    """API error response - standardized format"""
    error: ErrorDetail = Field(description="Error information")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")

    class Config:
        json_schema_extra = {
            "example": {
                "error": {
                    "code": "CLOCK_NOT_STARTED",
                    "message": "Clock has not rendered a frame yet",
                    "details": {"running": False},
                    "timestamp": "2026-10-18T10:30:00Z"
                },
                "request_id": "3f2b8c1e-6a0d-4c1b-9a57-0f2d9e4b7c11"
            }
        }


class ValidationErrorResponse(BaseModel):
    """Validation error - when the request body is invalid"""
    error: ErrorDetail = Field(description="Error information")
    validation_errors: list[Dict[str, Any]] = Field(
        description="Per-field validation errors"
    )
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")

    class Config:
        json_schema_extra = {
            "example": {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": {"error_count": 1},
                    "timestamp": "2026-10-18T10:30:00Z"
                },
                "validation_errors": [
                    {
                        "field": "minutes",
                        "message": "Input should be less than or equal to 1440",
                        "type": "less_than_equal"
                    }
                ],
                "request_id": "3f2b8c1e-6a0d-4c1b-9a57-0f2d9e4b7c11"
            }
        }
