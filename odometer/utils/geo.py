# odometer/utils/geo.py

"""
Geospatial utility functions.
"""

import gpxpy.geo

from odometer.utils.validate import TrackSample

METERS_PER_MILE = 1609.34


def distance_2d(a: TrackSample, b: TrackSample) -> float:
    """
    Compute the planar (elevation-free) distance between two samples.

    Uses gpxpy's distance so results match what gpxpy reports for the same
    track: a flat-earth approximation for short hops, great-circle otherwise.

    Parameters
    ----------
    a
        First sample.
    b
        Second sample.

    Returns
    -------
    float
        Distance between A and B in metres.
    """
    return gpxpy.geo.distance(a.lat, a.lon, None, b.lat, b.lon, None)


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE
