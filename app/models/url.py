"""URL shortener data models.

This module defines the ShortURL model for storing shortened URLs in the database.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ShortURLBase(SQLModel):
    """Base model for short URL data."""

    original_url: str = Field(
        min_length=1,
        description="The original (long) URL to redirect to"
    )
    short_code: str = Field(
        max_length=32,
        description="Unique code for the shortened URL",
        unique=True,   # Creates the unique index that arbitrates code races
    )
    user_id: Optional[int] = Field(
        default=None,
        index=True,
        description="Id of the user who created the short URL"
    )


class ShortURL(ShortURLBase, table=True):
    """
    Short URL model for storing shortened URLs in the database.

    Records are created once and never updated; they only leave the table
    when their owner deletes them.
    """

    __tablename__ = "urls"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Timestamp when this short URL was created"
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
        description="Timestamp of the last change to this short URL"
    )

    __table_args__ = (
        Index("ix_urls_user_id_id", "user_id", "id"),
    )

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        """Check whether ``user_id`` is the owner of this short URL."""
        return self.user_id is not None and self.user_id == user_id


class ShortURLCreate(ShortURLBase):
    """Schema for creating a new short URL."""
    pass

