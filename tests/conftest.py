import datetime

import pytest

GPX_HEADER = ('<?xml version="1.0" encoding="UTF-8"?>\n'
              '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">\n')


def make_gpx(segments):
    """Builds a GPX document with one track; segments is a list of lists of trkpt XML strings."""
    body = ''.join('<trkseg>' + ''.join(points) + '</trkseg>' for points in segments)
    return GPX_HEADER + '<trk><name>ride</name>' + body + '</trk>\n</gpx>\n'


def trkpt(lat, lon, ele=None, time=None):
    children = ''
    if ele is not None:
        children += f'<ele>{ele}</ele>'
    if time is not None:
        children += f'<time>{time}</time>'
    return f'<trkpt lat="{lat}" lon="{lon}">{children}</trkpt>'


@pytest.fixture
def write_gpx(tmp_path):
    def write(text, name='track.gpx'):
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return str(path)
    return write


@pytest.fixture
def sample_gpx_path(write_gpx):
    return write_gpx(make_gpx([[
        trkpt(0.0, 0.0, 0, '2023-01-01T00:00:00Z'),
        trkpt(0.001, 0.0, 10, '2023-01-01T00:00:03Z'),
        trkpt(0.002, 0.0, 10, '2023-01-01T00:00:05Z'),
    ]]))


@pytest.fixture
def two_fixes():
    t0 = datetime.datetime(2023, 1, 1, tzinfo=datetime.timezone.utc)
    return [
        {'latitude': 0.0, 'longitude': 0.0, 'elevation': 0.0, 'time': t0},
        {'latitude': 0.001, 'longitude': 0.0, 'elevation': 10.0, 'time': t0 + datetime.timedelta(seconds=3)},
    ]
