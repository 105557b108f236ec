"""
CONTRACT 1: Price History

Input: raw bar records from the history provider (unvalidated)
Output: Bar (validated, immutable)

The history provider is an external collaborator; this module only
describes what it hands over and what the indicator engine consumes.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _coerce_time(value: Any) -> Any:
    """Accept dates and date-only strings as midnight; pin everything to UTC."""
    if isinstance(value, str) and _DATE_ONLY.match(value):
        value = date.fromisoformat(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, datetime.min.time())
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return value


class RawBar(BaseModel):
    """
    Bar as received from the history provider.

    Every field may be missing; the preprocessor decides what survives.
    """

    model_config = ConfigDict(extra="ignore")

    time: Optional[datetime] = None
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None

    @field_validator("time", mode="before")
    @classmethod
    def _normalize_time(cls, value: Any) -> Any:
        return _coerce_time(value)

    @field_validator("time", mode="after")
    @classmethod
    def _pin_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _coerce_time(value) if value is not None else None


class Bar(BaseModel):
    """Single OHLCV observation. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    open: float = Field(..., gt=0)
    high: float = Field(..., gt=0)
    low: float = Field(..., gt=0)
    close: float = Field(..., gt=0)
    volume: float = Field(default=0.0, ge=0)

    @field_validator("time", mode="before")
    @classmethod
    def _normalize_time(cls, value: Any) -> Any:
        return _coerce_time(value)

    @field_validator("time", mode="after")
    @classmethod
    def _pin_utc(cls, value: datetime) -> datetime:
        return _coerce_time(value)

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3"""
        return (self.high + self.low + self.close) / 3


# Anything the preprocessor will accept as one record
BarLike = Union[RawBar, Bar, dict]
