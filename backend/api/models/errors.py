"""
Error response models.

Domain failures reach clients as FastAPI's ``{"detail": message}`` body;
this model documents that shape in the OpenAPI schema.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    detail: str
