import math
from datetime import datetime, timedelta, timezone

import pytest

from odometer.analysis.config import MileageConfig
from odometer.utils.geo import METERS_PER_MILE

NOW = datetime(2024, 1, 10, tzinfo=timezone.utc)
DAY = timedelta(days=1)

_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
)


def gpx_text(*segments):
    """Build a one-track GPX document; each segment is a list of (lat, lon, time_or_None)."""
    parts = [_HEADER, "<trk><name>t</name>\n"]
    for seg in segments:
        parts.append("<trkseg>\n")
        for lat, lon, ts in seg:
            time_tag = f"<time>{ts}</time>" if ts is not None else ""
            parts.append(f'<trkpt lat="{lat}" lon="{lon}">{time_tag}</trkpt>\n')
        parts.append("</trkseg>\n")
    parts.append("</trk>\n</gpx>\n")
    return "".join(parts)


def planar_miles(a, b):
    """Test distance: one degree of coordinate difference is one mile."""
    return math.hypot(b.lat - a.lat, b.lon - a.lon) * METERS_PER_MILE


@pytest.fixture
def small_cfg():
    # 5 buckets: 2 of warm-up, 3 reported
    return MileageConfig(granularity=DAY, window=2 * DAY, lookback=3 * DAY)


@pytest.fixture
def write_gpx(tmp_path):
    def _write(name, *segments):
        path = tmp_path / name
        path.write_text(gpx_text(*segments), encoding="utf-8")
        return path
    return _write
