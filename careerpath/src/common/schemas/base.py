from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class SuccessResponse(BaseModel):
    """
    Standard acknowledgement for mutations without a payload.

    Example:
        ```json
        {"success": true}
        ```
    """

    success: bool = Field(default=True, description="Operation result")


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Used for all API error responses.

    Example:
        ```json
        {
            "error": "DuplicateEntity",
            "message": "A filter named 'Government Jobs' already exists at this level",
            "status_code": 409,
            "timestamp": "2026-01-21T10:30:00Z"
        }
        ```
    """

    error: str = Field(..., description="Error type/category")
    message: str = Field(..., description="Human-readable error message")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Error occurrence time")
    details: dict | None = Field(None, description="Additional error context")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "EntityNotFound",
                "message": "Filter node not found",
                "status_code": 404,
                "timestamp": "2026-01-21T10:30:00Z",
            }
        }
    )


__all__ = ["SuccessResponse", "ErrorResponse"]
