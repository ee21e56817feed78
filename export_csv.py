"""
CSV Export

Writes resampled samples to a CSV file with a header row. The file is written
to a temporary path next to the destination and moved into place only after
every row has been written, so a failed export never leaves a partial file.
"""

import csv
import logging
import os
import tempfile

from constants import CSV_COLUMNS

logger = logging.getLogger(__name__)


def save_to_csv(samples, csv_file):
    """
    Saves the samples to a CSV file.

    Args:
        samples (list): Sample dictionaries keyed by CSV_COLUMNS.
        csv_file (str): The path to the output CSV file.
    """
    directory = os.path.dirname(os.path.abspath(csv_file))
    fd, tmp_path = tempfile.mkstemp(prefix='.resample-', suffix='.csv', dir=directory)
    try:
        with os.fdopen(fd, 'w', newline='') as file:
            writer = csv.DictWriter(file, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for sample in samples:
                writer.writerow(sample)
        os.replace(tmp_path, csv_file)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    logger.info(f"Wrote {len(samples)} rows to {csv_file}")


def csv_sink(csv_file):
    """
    Returns a sink for run_pipeline() that saves everything it receives to csv_file.
    """
    def sink(samples):
        save_to_csv(samples, csv_file)
    return sink
