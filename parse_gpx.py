"""
GPX Track Reader

This module reads a GPX file and extracts the fixes of the first segment of the
first track as a list of dictionaries with latitude, longitude, elevation and
time. Tracks without segments or points, documents that are not valid GPX and
points without a usable timestamp are rejected with a TrackError.

Usage:
    points = parse_gpx('ride.gpx')
"""

import logging

import gpxpy
import gpxpy.gpx

logger = logging.getLogger(__name__)


class TrackError(ValueError):
    """The GPX document cannot be used as a track."""


class EmptyTrackError(TrackError):
    """The GPX document has no track segment or no track points."""


class TimestampError(TrackError):
    """A track point has a missing or unparseable <time>."""


def parse_gpx(file_path):
    """
    Parses the GPX file and extracts the points of its first track segment.

    Args:
        file_path (str): Path to the GPX file.

    Returns:
        list: A list of dictionaries with the keys latitude, longitude,
              elevation and time.

    Raises:
        TrackError: If the file is not a valid GPX document.
        EmptyTrackError: If there is no segment or the segment has no points.
        TimestampError: If a point has no usable timestamp.
    """
    with open(file_path, 'r', encoding='utf-8') as gpx_file:
        try:
            gpx = gpxpy.parse(gpx_file)
        except (gpxpy.gpx.GPXException, UnicodeDecodeError) as e:
            raise TrackError(f"Could not parse {file_path}: {e}") from e

    if not gpx.tracks or not gpx.tracks[0].segments:
        raise EmptyTrackError(f"No track segment in {file_path}")
    if len(gpx.tracks) > 1 or len(gpx.tracks[0].segments) > 1:
        logger.info("Using the first segment of the first track, ignoring the rest")

    segment = gpx.tracks[0].segments[0]
    if not segment.points:
        raise EmptyTrackError(f"No track points in {file_path}")

    points = []
    for index, point in enumerate(segment.points):
        # gpxpy leaves time as None when <time> is missing or malformed
        if point.time is None:
            raise TimestampError(f"Track point {index} has no valid time")
        points.append({
            'latitude': point.latitude,
            'longitude': point.longitude,
            'elevation': point.elevation if point.elevation is not None else 0.0,
            'time': point.time,
        })
    logger.debug(f"Read {len(points)} track points from {file_path}")
    return points
