# odometer/analysis/config.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from odometer.utils.timeutils import round_instant

# how far past the current time the reference instant is pushed, so that the
# current partial bucket is still inside [.., now)
NOW_LEAD = timedelta(days=1)


class OutputFormat(str, Enum):
    """Report renderers selectable from the command line."""
    CSV = "csv"
    CHART = "chart"


@dataclass(frozen=True)
class MileageConfig:
    """
    Bucketing and windowing parameters for the mileage report.

    Attributes
    ----------
    granularity
        Width of one time bucket.
    window
        Width of the trailing interval summed for each reported bucket.
    lookback
        How far back from `now` the reported series extends.
    """
    granularity: timedelta = timedelta(days=1)
    window:      timedelta = timedelta(days=30)
    lookback:    timedelta = timedelta(days=365)

    def __post_init__(self) -> None:
        for name in ("granularity", "window", "lookback"):
            value = getattr(self, name)
            if value <= timedelta(0):
                raise ValueError(f"{name} must be positive, got {value}")
        for name in ("window", "lookback"):
            if getattr(self, name) % self.granularity:
                raise ValueError(
                    f"{name} ({getattr(self, name)}) is not a whole number of "
                    f"granularity steps ({self.granularity})"
                )

    @classmethod
    def daily(cls):
        """Preset: daily buckets, 30-day window, one year of output (default)."""
        return cls()

    @classmethod
    def hourly(cls):
        """Preset: hourly buckets with the same window and lookback."""
        return cls(granularity=timedelta(hours=1))

    @property
    def horizon(self) -> timedelta:
        """Span of raw buckets needed to give the earliest output a full window."""
        return self.lookback + self.window

    @property
    def n_buckets(self) -> int:
        return -(-self.horizon // self.granularity)

    @property
    def window_steps(self) -> int:
        return self.window // self.granularity

    @property
    def lookback_steps(self) -> int:
        return self.lookback // self.granularity


PRESETS = {
    "daily": MileageConfig.daily,
    "hourly": MileageConfig.hourly,
}


def default_now(cfg: MileageConfig, clock: datetime | None = None) -> datetime:
    """
    Reference instant for a run: one day past `clock` (default: current time),
    rounded to the configured granularity.
    """
    current = clock if clock is not None else datetime.now(timezone.utc)
    return round_instant(current + NOW_LEAD, cfg.granularity)
