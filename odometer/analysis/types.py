# odometer/analysis/types.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterator, List, Optional

from odometer.utils.timeutils import round_instant


@dataclass
class BucketSeries:
    """
    Dense per-bucket mileage over the collection horizon.

    Parameters
    ----------
    start : datetime
        Key of the first bucket, `now - (lookback + window)`.
    end : datetime
        Exclusive upper bound, `now`.
    granularity : timedelta
        Width of one bucket.
    miles : List[float]
        Mileage per bucket; `miles[i]` belongs to key `start + i * granularity`.
    """
    start: datetime
    end: datetime
    granularity: timedelta
    miles: List[float] = field(default_factory=list)

    @classmethod
    def zeroed(cls, start: datetime, end: datetime, granularity: timedelta) -> "BucketSeries":
        """Every key in [start, end) present and set to 0."""
        n = -(-(end - start) // granularity)
        return cls(start, end, granularity, [0.0] * n)

    def __len__(self) -> int:
        return len(self.miles)

    def key(self, offset: int) -> datetime:
        return self.start + offset * self.granularity

    def keys(self) -> Iterator[datetime]:
        for i in range(len(self.miles)):
            yield self.key(i)

    def offset(self, instant: datetime) -> Optional[int]:
        """
        Offset of the bucket whose key is `instant` rounded to the granularity,
        or None when that key lies outside [start, end).
        """
        i = (round_instant(instant, self.granularity) - self.start) // self.granularity
        if 0 <= i < len(self.miles):
            return i
        return None

    def add(self, instant: datetime, miles: float) -> bool:
        """Accumulate into the bucket for `instant`; False if it has no bucket."""
        i = self.offset(instant)
        if i is None:
            return False
        self.miles[i] += miles
        return True


@dataclass
class AggregateSeries:
    """
    Trailing-window sums for the reported keys [start, start + len * granularity).

    Parameters
    ----------
    start : datetime
        First reported key, `now - lookback`.
    granularity : timedelta
        Step between consecutive keys.
    miles : List[float]
        `miles[i]` is the sum over the window ending at key `start + i * granularity`.
    """
    start: datetime
    granularity: timedelta
    miles: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.miles)

    def items(self) -> Iterator[tuple[datetime, float]]:
        for i, value in enumerate(self.miles):
            yield self.start + i * self.granularity, value


@dataclass
class CollectionReport:
    """
    Counters describing one collection pass over a directory.
    """
    files_seen: int = 0
    files_parsed: int = 0
    files_skipped: int = 0
    samples_used: int = 0
    samples_untimed: int = 0
    samples_out_of_range: int = 0
    skipped_files: List[str] = field(default_factory=list)
