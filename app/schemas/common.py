"""Response envelope and shared value schemas."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping every successful response."""
    success: bool = True
    data: DataT
    timestamp: datetime = Field(default_factory=utc_now)


class ErrorResponse(BaseModel):
    """Envelope wrapping every failed response."""
    success: bool = False
    error: str
    timestamp: datetime = Field(default_factory=utc_now)


class DistributionEntry(BaseModel):
    """
    One label of a distribution over a filtered set.

    ratio is count / total at full precision; rounding is left to display.
    """
    label: str
    count: int
    ratio: float
