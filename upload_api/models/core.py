"""Core models for request/response handling."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Wire shape for every error reply."""

    error: str
