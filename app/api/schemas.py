"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class URLCreateRequest(BaseModel):
    """Request schema for creating a shortened URL.

    The URL is checked by the service so that bad URLs and malformed
    bodies produce distinct messages.
    """
    url: str


class ShortenResponse(BaseModel):
    """Response schema for a freshly shortened URL."""
    short_url: str


class URLResponse(BaseModel):
    """Response schema for a stored URL record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    original_url: str
    short_code: str
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    """Response schema carrying a human readable message."""
    message: str


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    message: str
    error: Optional[str] = None  # Backend error text, only on 500 responses
