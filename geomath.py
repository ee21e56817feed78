"""
Spherical Earth Geometry

Great-circle distance, initial bearing and destination point on a sphere of
radius EARTH_RADIUS_M, plus the speed unit conversions used when resampling.
"""

import math
from geopy.distance import great_circle

from constants import EARTH_RADIUS_M, KMH_PER_MPS, LEGACY_SPEED_DIVISOR


def distance(lat1, lon1, lat2, lon2):
    """
    Calculates the haversine distance between two points.

    Args:
        lat1 (float): Latitude of the first point in degrees.
        lon1 (float): Longitude of the first point in degrees.
        lat2 (float): Latitude of the second point in degrees.
        lon2 (float): Longitude of the second point in degrees.

    Returns:
        float: The distance in meters.
    """
    rlat1 = math.radians(lat1)
    rlat2 = math.radians(lat2)
    phi = math.sin((rlat2 - rlat1) / 2.0)
    lam = math.sin(math.radians(lon2 - lon1) / 2.0)
    h = phi * phi + math.cos(rlat1) * math.cos(rlat2) * lam * lam
    # Rounding can push h slightly past 1 for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def bearing(lat1, lon1, lat2, lon2):
    """
    Calculates the initial great-circle bearing from the first point to the second.

    Returns:
        float: Bearing in degrees, clockwise from north, in [0, 360).
    """
    rlat1 = math.radians(lat1)
    rlat2 = math.radians(lat2)
    dlon = math.radians(lon2 - lon1)
    y = math.sin(dlon) * math.cos(rlat2)
    x = math.cos(rlat1) * math.sin(rlat2) - math.sin(rlat1) * math.cos(rlat2) * math.cos(dlon)
    return math.degrees(math.atan2(y, x)) % 360.0


def destination(lat, lon, bearing_degrees, distance_meters):
    """
    Calculates the point reached by travelling along a great circle.

    Args:
        lat (float): Start latitude in degrees.
        lon (float): Start longitude in degrees.
        bearing_degrees (float): Initial bearing, clockwise from north.
        distance_meters (float): Distance to travel in meters.

    Returns:
        tuple: (latitude, longitude) of the destination in degrees.
    """
    sphere = great_circle(radius=EARTH_RADIUS_M / 1000)
    point = sphere.destination((lat, lon), bearing_degrees, distance=distance_meters / 1000)
    return point.latitude, point.longitude


def mps_to_kmh(speed_mps):
    return speed_mps * KMH_PER_MPS


def legacy_speed(distance_meters, elapsed_seconds):
    """
    Speed as written by the original ebike-connect export: meters per hour
    divided by LEGACY_SPEED_DIVISOR.
    """
    elapsed_hours = elapsed_seconds / 3600.0
    return distance_meters / elapsed_hours / LEGACY_SPEED_DIVISOR
