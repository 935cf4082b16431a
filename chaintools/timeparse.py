"""
Turn a user supplied date expression into seconds since the unix epoch.

Accepted forms:
    1704067199                 unix seconds
    1704067199000              unix milliseconds (magnitude above 1e10)
    2024-12-31T23:59:59Z       ISO 8601, or anything dateutil can parse
Expressions without a UTC offset are read as UTC, and missing date parts
are taken from 1970-01-01 so the result never depends on the clock.
"""
import re
from datetime import datetime, timezone

from dateutil import parser as dateparser

from chaintools.blocks import EPOCH
from chaintools.errors import InvalidInput

NUMERIC = re.compile(r"^[+-]?\d+$")
MILLISECONDS_THRESHOLD = 10 ** 10
DEFAULT_MOMENT = datetime(1970, 1, 1)


def parse_target(value):
    """Return the epoch-seconds target for `value`, or raise InvalidInput."""
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise InvalidInput("Empty date expression.")

    if NUMERIC.match(text):
        n = int(text)
        # 1e10 seconds is the year 2286, so anything larger must be millis
        return n // 1000 if abs(n) > MILLISECONDS_THRESHOLD else n

    moment = _parse_date(text)
    delta = moment - EPOCH
    # timedelta keeps seconds and microseconds non-negative, so this floors
    return delta.days * 86400 + delta.seconds


def _parse_date(text):
    """Parse `text` into an aware datetime; missing date parts come from the epoch."""
    try:
        moment = dateparser.isoparse(text)
    except (ValueError, OverflowError):
        try:
            moment = dateparser.parse(text, default=DEFAULT_MOMENT)
        except (ValueError, OverflowError) as err:
            raise InvalidInput("Unrecognized date format: %s (%s)" % (text, err))

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    # dateutil lets offsets of a day or more through
    try:
        moment.utcoffset()
    except ValueError as err:
        raise InvalidInput("Bad UTC offset in %s (%s)" % (text, err))
    return moment
