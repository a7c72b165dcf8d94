"""URL shortener data models.

This module defines the UrlRecord model mapping an original URL to its
serial short identifier.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import field_validator
from sqlalchemy import Column, DateTime, Index
from sqlmodel import Field, SQLModel


class UrlRecordBase(SQLModel):
    """Base model for short URL data."""

    original_url: str = Field(
        unique=True,  # Creates necessary index
        description="The URL exactly as submitted by the client",
    )
    short_url: int = Field(
        unique=True,
        description="Serial identifier used as the redirect path segment",
    )


class UrlRecord(UrlRecordBase, table=True):
    """
    Persisted mapping between an original URL and its short identifier.

    Both ``original_url`` and ``short_url`` carry unique constraints, so two
    requests racing for the same candidate identifier cannot both commit.
    """

    __tablename__ = "url_records"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Timestamp when this record was created"
    )

    __table_args__ = (
        Index("ix_url_records_created_at", "created_at"),
    )


class UrlRecordCreate(SQLModel):
    """Schema for creating a new record."""
    original_url: str
    short_url: int = Field(gt=0)

    @field_validator("original_url", mode="before")
    def ensure_str_url(cls, v):
        return str(v)


class UrlRecordRead(SQLModel):
    """Schema for reading a record."""
    id: int
    original_url: str
    short_url: int
    created_at: datetime
