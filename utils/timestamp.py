"""Nanosecond timestamp utilities.

datetime and timedelta stop at microseconds, so instants and spans that must
survive a round trip through an identifier are kept as integer nanoseconds.
"""

import re
import time
from datetime import datetime, timedelta, timezone
from functools import total_ordering

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MICRO = 1_000
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_ISO_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})?$",
    re.ASCII,
)


def now_nanos():
    """Current time in nanoseconds since Unix epoch."""
    return time.time_ns()


def format_timestamp(epoch_ns=None):
    """Format timestamp as ISO 8601 with nanoseconds."""
    if epoch_ns is None:
        epoch_ns = now_nanos()
    return Timestamp(epoch_ns).isoformat()


def as_nanos(value):
    """Nanoseconds since epoch for a Timestamp, datetime or int."""
    if isinstance(value, Timestamp):
        return value.nanos
    if isinstance(value, datetime):
        return Timestamp.from_datetime(value).nanos
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"cannot interpret {type(value).__name__} as a timestamp")


@total_ordering
class Timestamp:
    """UTC instant with nanosecond resolution."""

    __slots__ = ("nanos",)

    def __init__(self, nanos):
        self.nanos = nanos

    @classmethod
    def now(cls):
        return cls(now_nanos())

    @classmethod
    def from_datetime(cls, dt):
        """Naive datetimes are taken to be UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls((dt - EPOCH) // timedelta(microseconds=1) * NANOS_PER_MICRO)

    @classmethod
    def parse(cls, text):
        """Parse ISO 8601 text with up to nine fractional digits."""
        match = _ISO_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"invalid ISO 8601 timestamp: {text!r}")
        offset = match["offset"] or "+00:00"
        if offset == "Z":
            offset = "+00:00"
        base = datetime.fromisoformat(match["base"].replace(" ", "T") + offset)
        fraction = (match["fraction"] or "").ljust(9, "0")
        return cls(cls.from_datetime(base).nanos + int(fraction))

    def to_datetime(self):
        """Aware UTC datetime, truncated to microseconds."""
        return EPOCH + timedelta(microseconds=self.nanos // NANOS_PER_MICRO)

    def isoformat(self):
        seconds = self.to_datetime().strftime("%Y-%m-%dT%H:%M:%S")
        return f"{seconds}.{self.nanos % NANOS_PER_SECOND:09d}Z"

    def __sub__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return Duration(self.nanos - other.nanos)

    def __eq__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.nanos == other.nanos

    def __lt__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.nanos < other.nanos

    def __hash__(self):
        return hash(("Timestamp", self.nanos))

    def __str__(self):
        return self.isoformat()

    def __repr__(self):
        return f"Timestamp({self.isoformat()!r})"


@total_ordering
class Duration:
    """Signed span of nanoseconds."""

    __slots__ = ("nanos",)

    def __init__(self, nanos):
        self.nanos = nanos

    def total_seconds(self):
        return self.nanos / NANOS_PER_SECOND

    def __eq__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanos == other.nanos

    def __lt__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanos < other.nanos

    def __hash__(self):
        return hash(("Duration", self.nanos))

    def __str__(self):
        sign = "-" if self.nanos < 0 else ""
        seconds, fraction = divmod(abs(self.nanos), NANOS_PER_SECOND)
        minutes, seconds = divmod(seconds, 60)
        hours, minutes = divmod(minutes, 60)
        return f"{sign}{hours}:{minutes:02d}:{seconds:02d}.{fraction:09d}"

    def __repr__(self):
        return f"Duration(nanos={self.nanos})"
