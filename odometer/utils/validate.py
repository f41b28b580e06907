"""
Pydantic schemas to validate parser outputs and report rows.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from odometer.utils.timeutils import to_utc


class TrackSample(BaseModel):
    """
    Single timestamped GPS fix read from a track file.

    `ts` is None when the file carries no (or an unreadable) timestamp for the
    point; otherwise it is normalized to aware UTC, naive values taken as UTC.
    """
    ts: Optional[datetime]
    lat: float
    lon: float

    @field_validator("ts")
    @classmethod
    def _ts_to_utc(cls, ts: Optional[datetime]) -> Optional[datetime]:
        if ts is None:
            return None
        return to_utc(ts)


class MileageRow(BaseModel):
    """
    One row of the emitted report: trailing-window mileage ending at `time`.
    """
    time: datetime
    miles: float
