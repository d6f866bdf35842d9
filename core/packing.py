"""Bit layout of an identifier: nanosecond timestamp above 32 bits of entropy."""

from core.errors import EncodingError

ENTROPY_BITS = 32
ENTROPY_MASK = (1 << ENTROPY_BITS) - 1

_INT64_SPAN = 1 << 64
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def pack(timestamp_ns, entropy):
    """Combine nanoseconds since epoch with a 32-bit random value."""
    if not _INT64_MIN <= timestamp_ns <= _INT64_MAX:
        raise EncodingError("timestamp must fit in signed 64 bits", value=timestamp_ns)
    if not 0 <= entropy <= ENTROPY_MASK:
        raise EncodingError("entropy must fit in 32 bits", value=entropy)
    return (timestamp_ns << ENTROPY_BITS) | entropy


def unpack_timestamp(value):
    """Nanoseconds since epoch, wrapped to a signed 64-bit integer."""
    return ((value >> ENTROPY_BITS) - _INT64_MIN) % _INT64_SPAN + _INT64_MIN


def unpack_entropy(value):
    return value & ENTROPY_MASK
