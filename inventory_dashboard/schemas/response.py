import uuid
from typing import Any, Optional
from pydantic import BaseModel, Field


def new_request_id() -> str:
    """Generates a unique request ID for tracing."""
    return uuid.uuid4().hex


class SuccessResponse(BaseModel):
    """Envelope for every successful API response."""
    success: bool = True
    request_id: str = Field(default_factory=new_request_id)
    message: Optional[str] = None
    data: Optional[Any] = None


class ErrorDetail(BaseModel):
    code: str # e.g. 'http_error', 'validation_error', 'insufficient_stock'
    message: str
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Envelope returned by the exception handlers."""
    success: bool = False
    error: ErrorDetail
    request_id: str = Field(default_factory=new_request_id)
