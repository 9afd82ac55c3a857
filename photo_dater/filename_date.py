"""
Infer a partial capture date from a photo filename and render it as an EXIF timestamp.

Filenames are expected to carry a date of the form YYYY-MM, YYYY-MM-DD or YYYY-MMDD
somewhere in the name, e.g.

    1999-08-24 Gaschurn.jpg        -> 1999:08:24 00:00:00
    1996-05 Martin.jpg             -> 1996:05:01 00:00:00
    2002-08-16Maighelshütte.jpg    -> 2002:08:16 00:00:00
    2003-07-12..13 Malbun.jpg      -> 2003:07:12 00:00:00

Only the first match is used. For day ranges like 12..13 the first day wins.
"""

import re
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .errors import NoDateFound, InvalidDate

logger = logging.getLogger(__name__)

EXIF_DATE_FORMAT = '%Y:%m:%d %H:%M:%S'
DEFAULT_DAY = '01'
DEFAULT_TIME = '00:00:00'

# ASCII digits only, EXIF dates are ASCII
FILENAME_DATE_PATTERN = re.compile(r'(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-?(?P<day>[0-9]{2})?')


@dataclass(frozen=True)
class PartialDate:
    """A calendar date whose year and month are known but whose day may not be."""
    year: str
    month: str
    day: Optional[str] = None

    def __post_init__(self):
        if not self.year or not self.month:
            raise ValueError(f"PartialDate needs both year and month, got year={self.year!r} month={self.month!r}")


def infer_date(text):
    """Find the first YYYY-MM[-][DD] pattern in text and return it as a PartialDate."""
    match = FILENAME_DATE_PATTERN.search(text)
    if not match:
        raise NoDateFound(text)

    partial = PartialDate(match.group('year'), match.group('month'), match.group('day'))
    logger.debug(f"Inferred {partial} from '{text}'")
    return partial


def format_timestamp(partial, strict=False):
    """Render a PartialDate as 'YYYY:MM:DD 00:00:00', using the 1st when the day is unknown.

    The default is purely syntactic, so a month of 13 is rendered as-is. With strict=True
    the date must exist on the calendar or InvalidDate is raised.
    """
    day = partial.day or DEFAULT_DAY
    timestamp = f"{partial.year}:{partial.month}:{day} {DEFAULT_TIME}"

    if strict:
        try:
            datetime.strptime(timestamp, EXIF_DATE_FORMAT)
        except ValueError as e:
            raise InvalidDate(timestamp, e) from e

    return timestamp
