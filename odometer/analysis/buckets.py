"""
Accumulate distance travelled per time bucket from GPX track files.

Each file is scanned on its own: consecutive in-range samples form pairs, and a
pair's distance is credited to the bucket of its later sample. Nothing is
carried from one file into the next.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from gpxpy.gpx import GPXException

from odometer.analysis.config import MileageConfig
from odometer.analysis.types import BucketSeries, CollectionReport
from odometer.parsers import gpx
from odometer.utils.geo import distance_2d, meters_to_miles
from odometer.utils.log import get_logger
from odometer.utils.timeutils import round_instant
from odometer.utils.validate import TrackSample

logger = get_logger(__name__)

DistanceFn = Callable[[TrackSample, TrackSample], float]


def oldest_collected_time(now: datetime, cfg: MileageConfig) -> datetime:
    return now - cfg.horizon


def new_bucket_series(now: datetime, cfg: MileageConfig) -> BucketSeries:
    """
    Zeroed series with one bucket per granularity step in
    [now - (lookback + window), now).

    Raises
    ------
    ValueError
        If `now` is not an aware instant on a granularity boundary.
    """
    if round_instant(now, cfg.granularity) != now:
        raise ValueError(f"now ({now.isoformat()}) is not aligned to the granularity ({cfg.granularity})")
    return BucketSeries.zeroed(oldest_collected_time(now, cfg), now, cfg.granularity)


class MileageCollector:
    """
    Stateful accumulator turning track files into a dense BucketSeries.
    """
    def __init__(
        self,
        cfg: MileageConfig,
        now: datetime,
        distance: DistanceFn = distance_2d,
    ) -> None:
        self.cfg = cfg
        self.now = now
        self.distance = distance
        self.series = new_bucket_series(now, cfg)
        self.report = CollectionReport()

    def collect_samples(self, samples: Iterable[TrackSample]) -> None:
        """
        Scan one file's samples in order and accumulate pair distances.

        Parameters
        ----------
        samples
            Samples of a single file, in file order.
        """
        oldest = self.series.start
        last: Optional[TrackSample] = None
        for point in samples:
            if point.ts is None:
                self.report.samples_untimed += 1
                continue
            if point.ts < oldest or point.ts >= self.now:
                self.report.samples_out_of_range += 1
                continue

            self.report.samples_used += 1
            if last is None:
                last = point
                continue

            miles = meters_to_miles(self.distance(last, point))
            self.series.add(point.ts, miles)
            last = point

    def collect_file(self, file_path: str | Path) -> bool:
        """
        Parse and collect a single track file.

        Returns
        -------
        bool
            True if the file was parsed, False if it was skipped.
        """
        self.report.files_seen += 1
        try:
            samples = gpx.parse_gpx(file_path)
        except (GPXException, OSError, ValueError) as exc:
            logger.error("Skipping unreadable track file %s: %s", file_path, exc)
            self.report.files_skipped += 1
            self.report.skipped_files.append(str(file_path))
            return False

        self.collect_samples(samples)
        self.report.files_parsed += 1
        return True

    def collect_files(self, paths: Iterable[str | Path]) -> BucketSeries:
        for path in paths:
            self.collect_file(path)

        r = self.report
        logger.info(
            "Collected %d/%d files: %d samples used, %d without timestamp, %d outside horizon",
            r.files_parsed, r.files_seen, r.samples_used, r.samples_untimed, r.samples_out_of_range,
        )
        if r.files_skipped:
            logger.warning("Skipped %d of %d track files", r.files_skipped, r.files_seen)
        return self.series
