"""Time window data model."""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo

from pydantic import BaseModel, ConfigDict, model_validator

from .payload import IntervalRequest

WALL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_wall_time(moment: datetime, tz: tzinfo) -> str:
    """Render an aware datetime as wall-clock time in ``tz``."""
    return moment.astimezone(tz).strftime(WALL_TIME_FORMAT)


class TimeWindow(BaseModel):
    """Half-open time window [start, end) dispatched as one unit.

    The formatted strings are the wall-clock rendering the remote endpoint
    expects (``YYYY-MM-DD HH:MM:SS`` in the run's timezone).
    """

    start: datetime
    end: datetime
    start_formatted: str
    end_formatted: str

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_bounds(self) -> TimeWindow:
        """Validate start < end."""
        if self.start >= self.end:
            raise ValueError("window start must be before window end")
        return self

    @classmethod
    def from_bounds(cls, start: datetime, end: datetime, tz: tzinfo) -> TimeWindow:
        return cls(
            start=start,
            end=end,
            start_formatted=format_wall_time(start, tz),
            end_formatted=format_wall_time(end, tz),
        )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def label(self) -> str:
        return f"{self.start_formatted} - {self.end_formatted}"

    def to_request(self) -> IntervalRequest:
        return IntervalRequest(start_time=self.start_formatted, end_time=self.end_formatted)
