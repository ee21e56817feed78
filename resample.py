"""
Per-Second Track Resampler

This module walks consecutive pairs of track points and emits one sample per
whole second of elapsed time, interpolating latitude, longitude and elevation
linearly between the two points. The speed of every sample of a pair is the
pair's great-circle distance over its elapsed time.

The legacy mode reproduces the original ebike-connect CSV export bit for bit:
positions are stepped by whole point-to-point deltas instead of fractions,
sample times count from the later point and speed uses LEGACY_SPEED_DIVISOR.
"""

import calendar
import logging
import math

from geomath import distance, legacy_speed, mps_to_kmh
from parse_gpx import TimestampError

logger = logging.getLogger(__name__)


def unix_time(dt):
    """
    Converts a datetime to whole seconds since the epoch. Naive datetimes are
    taken as UTC.
    """
    return calendar.timegm(dt.utctimetuple())


def interpolate(value1, value2, step):
    return value1 + (value2 - value1) * step


def _check_time(point, index):
    if point.get('time') is None:
        raise TimestampError(f"Track point {index} has no valid time")
    return point['time']


def resample_segment(points, legacy=False):
    """
    Generates one sample per second between consecutive track points.

    The last point of every pair is not emitted, so the final point of the
    segment never appears in the output.

    Args:
        points (list): Track points as returned by parse_gpx().
        legacy (bool): Reproduce the original export instead of normalized
                       interpolation and km/h speed.

    Yields:
        dict: Samples keyed by the CSV column names.

    Raises:
        TimestampError: When a point without a time is reached.
    """
    if not points:
        return
    last = points[0]
    last_time = _check_time(last, 0)

    for index in range(1, len(points)):
        nxt = points[index]
        nxt_time = _check_time(nxt, index)

        elapsed = (nxt_time - last_time).total_seconds()

        if elapsed <= 0:
            if elapsed < 0:
                logger.warning(f"Track point {index} is {-elapsed:.1f}s older than its predecessor, skipping pair")
            last, last_time = nxt, nxt_time
            continue

        d = distance(nxt['latitude'], nxt['longitude'], last['latitude'], last['longitude'])
        speed_kmh = mps_to_kmh(d / elapsed)
        logger.debug(f"d = {d:.3f}m, v = {speed_kmh:.3f}km/h, dt = {elapsed:.1f}s")

        if legacy:
            speed = legacy_speed(d, elapsed)
            base_time = unix_time(nxt_time)
        else:
            speed = speed_kmh
            base_time = unix_time(last_time)

        for i in range(math.floor(elapsed)):
            step = i if legacy else i / elapsed
            yield {
                'time': base_time + i,
                'lat': interpolate(last['latitude'], nxt['latitude'], step),
                'lon': interpolate(last['longitude'], nxt['longitude'], step),
                'speed': speed,
                'altitude': interpolate(last['elevation'], nxt['elevation'], step),
                'riderCadence': 0,
                'remainingEnergy': 0,
                'power': 0,
            }

        last, last_time = nxt, nxt_time


def count_samples(points):
    """
    Counts the samples resample_segment() yields for the given points without
    building them.
    """
    total = 0
    for index in range(1, len(points)):
        elapsed = (_check_time(points[index], index) - _check_time(points[index - 1], index - 1)).total_seconds()
        if elapsed > 0:
            total += math.floor(elapsed)
    return total
