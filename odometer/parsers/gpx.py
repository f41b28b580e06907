"""
GPX parser: read track points from .gpx files as validated TrackSample records.
"""

from pathlib import Path
from typing import Iterator

import gpxpy
import gpxpy.gpx

from odometer.utils.validate import TrackSample

TRACK_SUFFIX = "gpx"


def is_track_file(path: Path) -> bool:
    """
    True for regular files whose name ends in the track suffix.
    """
    return path.name.endswith(TRACK_SUFFIX) and path.is_file()


def parse_gpx(file_path: str | Path) -> Iterator[TrackSample]:
    """
    Read a .gpx file and return a generator over its track points.

    The file is parsed eagerly so that malformed input raises here, before any
    sample is yielded.

    Parameters
    ----------
    file_path : str | Path
        Path to the .gpx file.

    Returns
    -------
    Iterator[TrackSample]
        Points of every track and segment, in file order.

    Raises
    ------
    gpxpy.gpx.GPXException
        If the document is not valid GPX.
    OSError
        If the file cannot be read.
    ValueError
        If the file is not valid UTF-8 text.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        doc = gpxpy.parse(f)
    return _gen_samples(doc)


def _gen_samples(doc: gpxpy.gpx.GPX) -> Iterator[TrackSample]:
    """
    Walk tracks -> segments -> points → TrackSample
    """
    for track in doc.tracks:
        for segment in track.segments:
            for point in segment.points:
                yield TrackSample(
                    ts=point.time,
                    lat=point.latitude,
                    lon=point.longitude,
                )

