import datetime

import pytest

from conftest import GPX_HEADER, make_gpx, trkpt
from parse_gpx import EmptyTrackError, TimestampError, TrackError, parse_gpx


def test_parse_first_segment(sample_gpx_path):
    points = parse_gpx(sample_gpx_path)

    assert len(points) == 3
    assert points[0]['latitude'] == 0.0
    assert points[1]['latitude'] == pytest.approx(0.001)
    assert points[1]['elevation'] == 10
    assert points[1]['time'] - points[0]['time'] == datetime.timedelta(seconds=3)
    assert points[0]['time'].utcoffset() == datetime.timedelta(0)


def test_missing_elevation_defaults_to_zero(write_gpx):
    path = write_gpx(make_gpx([[trkpt(1.0, 2.0, time='2023-01-01T00:00:00Z')]]))

    assert parse_gpx(path)[0]['elevation'] == 0.0


def test_only_first_segment_is_used(write_gpx):
    path = write_gpx(make_gpx([
        [trkpt(1.0, 1.0, 0, '2023-01-01T00:00:00Z')],
        [trkpt(2.0, 2.0, 0, '2023-01-01T00:00:01Z'), trkpt(3.0, 3.0, 0, '2023-01-01T00:00:02Z')],
    ]))

    points = parse_gpx(path)

    assert [p['latitude'] for p in points] == [1.0]


def test_no_segment_is_an_empty_track(write_gpx):
    path = write_gpx(make_gpx([]))

    with pytest.raises(EmptyTrackError):
        parse_gpx(path)


def test_no_track_is_an_empty_track(write_gpx):
    path = write_gpx(GPX_HEADER + '</gpx>\n')

    with pytest.raises(EmptyTrackError):
        parse_gpx(path)


def test_segment_without_points_is_an_empty_track(write_gpx):
    path = write_gpx(make_gpx([[]]))

    with pytest.raises(EmptyTrackError):
        parse_gpx(path)


def test_missing_time_is_fatal(write_gpx):
    path = write_gpx(make_gpx([[
        trkpt(1.0, 1.0, 0, '2023-01-01T00:00:00Z'),
        trkpt(2.0, 2.0, 0),
    ]]))

    with pytest.raises(TimestampError, match='point 1'):
        parse_gpx(path)


def test_garbage_time_is_fatal(write_gpx):
    path = write_gpx(make_gpx([[trkpt(1.0, 1.0, 0, 'yesterday-ish')]]))

    with pytest.raises(TrackError):
        parse_gpx(path)


def test_malformed_document(write_gpx):
    path = write_gpx('<gpx><trk><trkseg><trkpt lat="1"')

    with pytest.raises(TrackError):
        parse_gpx(path)


def test_undecodable_bytes_are_a_track_error(tmp_path):
    path = tmp_path / 'latin1.gpx'
    path.write_bytes(b'\xff\xfe\x00garbage')

    with pytest.raises(TrackError):
        parse_gpx(str(path))
