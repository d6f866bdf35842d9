"""
Base-62 codec for arbitrary-precision non-negative integers.

Digits are 0-9, A-Z, a-z in that order, most significant digit first.
Zero encodes as "0"; no other value has a leading zero digit.
"""

from core.errors import DecodingError, EncodingError

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)

_DIGIT_VALUES = {char: value for value, char in enumerate(ALPHABET)}


def encode(value):
    """Encode a non-negative integer as a base-62 string."""
    if value < 0:
        raise EncodingError("positive value required", value=value)
    if value == 0:
        return ALPHABET[0]

    chars = []
    while value > 0:
        value, remainder = divmod(value, BASE)
        chars.append(ALPHABET[remainder])

    return "".join(reversed(chars))


def decode(text):
    """Decode a base-62 string into an integer.

    Digits are examined right to left, so the reported invalid digit is the
    rightmost one in the input.
    """
    if not isinstance(text, str):
        raise DecodingError(f"expected a string, received {type(text).__name__}")
    if not text:
        raise DecodingError("no digits", text=text)

    result = 0
    place = 1
    for char in reversed(text):
        digit = _DIGIT_VALUES.get(char)
        if digit is None:
            raise DecodingError(f"invalid digit `{char}` in {text}", text=text, digit=char)
        result += digit * place
        place *= BASE

    return result
