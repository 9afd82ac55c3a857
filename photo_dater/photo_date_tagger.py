"""
Given a folder, will iterate over all the photos in that folder and its sub-folders recursively,
infer the capture date from each filename and write it into the EXIF DateTimeOriginal field of
photos that do not have one yet.

Filenames must contain a date like "1999-08-24 Gaschurn.jpg" or "1996-05 Martin.jpg". A missing
day becomes the 1st of the month and the time is always midnight.

Usage:
python -m photo_dater <folder_path> [-n] [--backend piexif|exiftool] [--strict]

Arguments:
  <folder_path>   The path to the folder containing photos
  -n, --dry-run   Report what would be written without touching any file
  --backend       piexif (default) writes the tag in-process, exiftool runs the exiftool utility
  --strict        Fail files whose filename date does not exist on the calendar (e.g. 1999-13-01)

Example:
python -m photo_dater /path/to/photos --dry-run
"""

import os
import sys
import logging
import argparse
from collections import Counter, namedtuple
from enum import Enum

from .errors import PhotoDaterError, InvalidRoot, InvalidFilenameEncoding
from .filename_date import infer_date, format_timestamp
from .exif_metadata import has_capture_date, get_writer, WRITERS
from .file_walker import walk_photos

logger = logging.getLogger(__name__)


class Outcome(Enum):
    SKIPPED_ALREADY_TAGGED = 'skipped, already tagged'
    WRITTEN = 'written'
    SKIPPED_DRY_RUN = 'skipped, dry run'
    FAILED = 'failed'


FileOutcome = namedtuple('FileOutcome', ['path', 'status', 'timestamp', 'reason'], defaults=[None, None])


class RunSummary:
    """Tally of file outcomes for one run."""

    def __init__(self):
        self.counts = Counter()

    def add(self, outcome):
        self.counts[outcome.status] += 1

    @property
    def total(self):
        return sum(self.counts.values())

    def __getitem__(self, status):
        return self.counts[status]

    def __str__(self):
        return (f"{self.total} files: {self[Outcome.WRITTEN]} written, "
                f"{self[Outcome.SKIPPED_ALREADY_TAGGED]} already tagged, "
                f"{self[Outcome.SKIPPED_DRY_RUN]} skipped (dry run), "
                f"{self[Outcome.FAILED]} failed")


def _check_filename_encoding(file_path):
    # os.walk smuggles undecodable bytes through as lone surrogates
    try:
        os.path.basename(file_path).encode('utf-8')
    except UnicodeEncodeError as e:
        raise InvalidFilenameEncoding(file_path) from e


def tag_file(file_path, dry_run=False, writer=None, strict=False):
    """Date a single file and return its FileOutcome. Per-file errors never propagate."""
    timestamp = None
    try:
        _check_filename_encoding(file_path)
        partial = infer_date(os.path.basename(file_path))
        timestamp = format_timestamp(partial, strict=strict)

        if has_capture_date(file_path):
            return FileOutcome(file_path, Outcome.SKIPPED_ALREADY_TAGGED, timestamp)

        if dry_run:
            return FileOutcome(file_path, Outcome.SKIPPED_DRY_RUN, timestamp)

        (writer or get_writer('piexif')).write(file_path, timestamp)
        return FileOutcome(file_path, Outcome.WRITTEN, timestamp)
    except PhotoDaterError as e:
        return FileOutcome(file_path, Outcome.FAILED, timestamp, str(e))


def report(outcome):
    """Log the one progress line for a file."""
    path = outcome.path.encode('utf-8', 'backslashreplace').decode('utf-8')
    if outcome.status is Outcome.FAILED:
        logger.warning(f"{path}: {outcome.status.value}, {outcome.reason}")
    elif outcome.status is Outcome.SKIPPED_DRY_RUN:
        logger.info(f"{path}: {outcome.status.value}, would set DateTimeOriginal to {outcome.timestamp}")
    elif outcome.status is Outcome.WRITTEN:
        logger.info(f"{path}: {outcome.status.value}, DateTimeOriginal set to {outcome.timestamp}")
    else:
        logger.info(f"{path}: {outcome.status.value}")


def tag_directory(directory, dry_run=False, writer=None, strict=False):
    """Date every photo under directory, one file at a time in traversal order.

    Raises InvalidRoot if the directory cannot be traversed; any other error only fails
    the file it belongs to.
    """
    writer = writer or get_writer('piexif')
    summary = RunSummary()

    for file_path in walk_photos(directory):
        outcome = tag_file(file_path, dry_run=dry_run, writer=writer, strict=strict)
        report(outcome)
        summary.add(outcome)

    logger.info(f"Done{' (dry run)' if dry_run else ''}. {summary}")
    return summary


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Set the EXIF capture date of photos from the date in their filename.')
    parser.add_argument('directory', type=str, help='Directory containing the photos, searched recursively')
    parser.add_argument('-n', '--dry-run', action='store_true', help="Don't write any changes to files")
    parser.add_argument('--backend', choices=sorted(WRITERS), default='piexif', help='How the capture date is written (default: piexif)')
    parser.add_argument('--strict', action='store_true', help='Reject filename dates that do not exist on the calendar')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Configure logging
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        tag_directory(args.directory, dry_run=args.dry_run, writer=get_writer(args.backend), strict=args.strict)
    except InvalidRoot as e:
        logger.error(f"Invalid directory path provided: {e}")
        sys.exit(1)
    return 0
