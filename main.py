"""
GPX to Per-Second CSV

Reads the first track segment of a GPX file, resamples it to one row per
second and writes the rows to a CSV file.

Usage:
    python main.py <gpx_input_file> [csv_output_file] [--legacy] [-v]
"""

import argparse
import concurrent.futures
import logging
import sys

from constants import DEFAULT_OUTPUT_FILE, DEFAULT_QUEUE_SIZE
from export_csv import csv_sink
from parse_gpx import TrackError, parse_gpx
from pipeline import PipelineCancelled, run_pipeline
from resample import count_samples, resample_segment

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description='Resample a GPX track to one CSV row per second.')
    parser.add_argument('gpx_file', help='Path to the GPX track')
    parser.add_argument('csv_file', nargs='?', default=DEFAULT_OUTPUT_FILE,
                        help=f'Path to the output CSV (default: {DEFAULT_OUTPUT_FILE})')
    parser.add_argument('--legacy', action='store_true',
                        help='Reproduce the original ebike-connect export (un-normalized steps, legacy speed unit)')
    parser.add_argument('--queue-size', type=int, default=DEFAULT_QUEUE_SIZE,
                        help='Capacity of the resampler to writer queue, 0 for unbounded')
    parser.add_argument('--flush-timeout', type=float, default=None,
                        help='Seconds to wait for the run to finish; a CSV write already in progress '
                             'still completes after the timeout is reported')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log every point pair')
    return parser


def convert(gpx_file, csv_file, legacy=False, queue_size=DEFAULT_QUEUE_SIZE, flush_timeout=None):
    """
    Converts a GPX track into a per-second CSV file.

    Returns:
        int: The number of rows written.
    """
    points = parse_gpx(gpx_file)
    logger.info(f"Resampling {len(points)} points into {count_samples(points)} samples")
    return run_pipeline(resample_segment(points, legacy=legacy), csv_sink(csv_file),
                        maxsize=queue_size, flush_timeout=flush_timeout)


def main(argv=None):
    """
    The main function to run the GPX resampling script.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    try:
        convert(args.gpx_file, args.csv_file, legacy=args.legacy,
                queue_size=args.queue_size, flush_timeout=args.flush_timeout)
    except (TrackError, OSError, PipelineCancelled, concurrent.futures.TimeoutError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
