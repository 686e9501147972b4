"""Common response schemas."""
from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer

from app.core.sanitization import (
    parse_timestamp,
    sanitize_icon,
    sanitize_name,
    validate_id_format,
)
from app.core.utils import isoformat
from app.services.week import local_timezone


class SuccessResponse(BaseModel):
    """Standard success response."""
    success: bool = True
    message: Optional[str] = None


class ErrorDetail(BaseModel):
    """Error detail structure."""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response for documentation."""
    success: bool = False
    error: ErrorDetail


class CountResponse(BaseModel):
    count: int


class ORMModel(BaseModel):
    """Response model read straight from SQLAlchemy rows."""
    model_config = ConfigDict(from_attributes=True)


# Stored timestamps are UTC; responses show them in the configured timezone
LocalDateTime = Annotated[
    datetime,
    PlainSerializer(lambda dt: isoformat(dt, local_timezone()), return_type=str),
]

# Client timestamps: epoch milliseconds or ISO-8601 with an offset
ClientTimestamp = Annotated[Optional[datetime], BeforeValidator(parse_timestamp)]

RecordId = Annotated[str, BeforeValidator(validate_id_format)]
Name = Annotated[str, BeforeValidator(lambda v: sanitize_name(v))]
Icon = Annotated[str, BeforeValidator(sanitize_icon)]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Insufficient permissions"},
    404: {"model": ErrorResponse, "description": "Record not found"},
    409: {"model": ErrorResponse, "description": "Declined by policy"},
}
