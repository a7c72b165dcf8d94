"""API request and response schemas.

This module contains Pydantic models for API response serialization.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class ShortURLResponse(BaseModel):
    """Response schema for a shortened URL."""
    original_url: str
    short_url: int


class InvalidURLResponse(BaseModel):
    """Response schema for a URL whose hostname does not resolve."""
    error: str = "invalid url"


class ComponentStatus(BaseModel):
    """Health of a single dependency."""
    status: str
    latency_ms: Optional[int] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""
    status: str
    version: str
    environment: str
    timestamp: float
    components: Dict[str, ComponentStatus]


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    error_code: Optional[str] = None
    field_errors: Optional[Dict[str, List[str]]] = None
