"""
TUID - Time-based Unique Identifier.

A TUID (e.g. 91Mq07yx9IxHCi5Y) is a base-62 big integer whose high bits are a
nanosecond timestamp (e.g. 2021-03-08T05:54:09.208207000Z) and whose low 32
bits are random. Identifiers minted between 2000 and 2100 are 16 digits long
and sort chronologically as plain strings. The zero value is an empty string.
"""

import secrets

from core.errors import DecodingError
from core.packing import ENTROPY_BITS, pack, unpack_entropy, unpack_timestamp
from utils import base62
from utils.timestamp import Timestamp, as_nanos, now_nanos


class TUIDInfo:
    __slots__ = ("id", "timestamp", "entropy")

    def __init__(self, id, timestamp, entropy):
        self.id = id
        self.timestamp = timestamp
        self.entropy = entropy

    def __eq__(self, other):
        if not isinstance(other, TUIDInfo):
            return NotImplemented
        return (self.id, self.timestamp, self.entropy) == (other.id, other.timestamp, other.entropy)

    def __repr__(self):
        return f"TUIDInfo(id={self.id!r}, timestamp={self.timestamp!r}, entropy={self.entropy})"

    def to_dict(self):
        return {"id": str(self.id),
                "timestamp": self.timestamp.isoformat(),
                "entropy": self.entropy}


class TUID(str):
    """Identifier string with accessors for its embedded fields.

    Every accessor decodes the string and raises DecodingError when it is not
    a base-62 number.
    """

    __slots__ = ()

    def to_int(self):
        return base62.decode(str(self))

    def to_timestamp(self):
        return Timestamp(unpack_timestamp(self.to_int()))

    def to_entropy(self):
        return unpack_entropy(self.to_int())

    def to_info(self):
        value = self.to_int()
        return TUIDInfo(self, Timestamp(unpack_timestamp(value)), unpack_entropy(value))

    def __repr__(self):
        return f"TUID({str(self)!r})"


def _random_entropy():
    return secrets.randbits(ENTROPY_BITS)


def _encode(timestamp_ns, entropy):
    return TUID(base62.encode(pack(timestamp_ns, entropy)))


def generate():
    """Generate a TUID for the current time."""
    return _encode(now_nanos(), _random_entropy())


def generate_at(at):
    """Generate a TUID for the given Timestamp, datetime or nanoseconds."""
    return _encode(as_nanos(at), _random_entropy())


def generate_at_with_entropy(at, entropy):
    """Rebuild a TUID from a timestamp and entropy, e.g. those from to_info()."""
    return _encode(as_nanos(at), entropy)


def first_at(at):
    """The TUID with zero entropy, sorting at or before any other at the same instant.

    Useful as an inclusive lower bound when paging through TUID-ordered records.
    """
    return _encode(as_nanos(at), 0)


# First ID at 2000-01-01T00:00:00Z
MIN_ID = TUID("5Hr02eJHAfTt1tTM")

# First ID at 2100-01-01T00:00:00Z
MAX_ID = TUID("MuklDY5bgW1s9Ev2")

_MIN_INT = base62.decode(MIN_ID)
_MAX_INT = base62.decode(MAX_ID)


def is_valid(value):
    """True when value decodes to an identifier between MIN_ID and MAX_ID.

    Only the numeric range is checked; leading zero digits are tolerated.
    """
    try:
        n = base62.decode(value)
    except DecodingError:
        return False
    return _MIN_INT <= n <= _MAX_INT


def compare(a, b):
    """Chronological order of two same-era TUIDs, as -1, 0 or +1."""
    if a == b:
        return 0
    if a < b:
        return -1
    return 1


def duration_between(start, stop):
    """Duration from the timestamp of start to that of stop."""
    start_time = Timestamp(unpack_timestamp(base62.decode(start)))
    stop_time = Timestamp(unpack_timestamp(base62.decode(stop)))
    return stop_time - start_time
