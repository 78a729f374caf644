"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

from app.models.url import (
    ShortURL,
    ShortURLBase,
    ShortURLCreate,
)

__all__ = [
    "ShortURL",
    "ShortURLBase",
    "ShortURLCreate",
]
