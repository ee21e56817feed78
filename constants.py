"""
Constants for GPX Resampling

This module defines the shared defaults used by the resampler, the
pipeline and the CSV export.
"""

# Earth radius used by both distance() and destination(), in meters
EARTH_RADIUS_M = 6378137.0

# Speed conversions
KMH_PER_MPS = 3.6
LEGACY_SPEED_DIVISOR = 10.0

# Handoff queue between the resampler and the CSV writer
DEFAULT_QUEUE_SIZE = 1024

DEFAULT_OUTPUT_FILE = 'output.csv'

CSV_COLUMNS = ['time', 'lat', 'lon', 'speed', 'altitude', 'riderCadence', 'remainingEnergy', 'power']
