"""
Trailing-window mileage over a dense BucketSeries.
"""

from __future__ import annotations

from odometer.analysis.config import MileageConfig
from odometer.analysis.types import AggregateSeries, BucketSeries
from odometer.utils.log import get_logger

logger = get_logger(__name__)


def aggregate_mileage(series: BucketSeries, cfg: MileageConfig) -> AggregateSeries:
    """
    Running sum over the trailing `cfg.window` for every bucket in
    [now - lookback, now).

    A single pass keeps `count` equal to the sum over (key - window, key]: each
    step adds the newest bucket and, once past the warm-up, drops the bucket that
    just left the window. The first `window_steps` buckets only fill the window
    and are not reported.

    Parameters
    ----------
    series
        Dense bucket series covering `[now - (lookback + window), now)`.
    cfg
        Configuration the series was built with.

    Returns
    -------
    AggregateSeries
        One value per reported key, oldest first.
    """
    warmup = cfg.window_steps
    miles = series.miles
    out: list[float] = []

    count = 0.0
    for i, value in enumerate(miles):
        count += value
        if i >= warmup:
            count -= miles[i - warmup]
            out.append(count)

    logger.info("Aggregated %d buckets into %d windowed values", len(miles), len(out))
    return AggregateSeries(series.key(warmup), series.granularity, out)
