"""
byte level recognizers for the four bencode productions

every scanner takes the input as a memoryview of unsigned bytes plus the
offset where the production starts, and returns what it recognized together
with the offset just past it. nothing here builds Value nodes.
"""
from enum import Enum
from typing import Optional, Tuple

from .errors import (InvalidIntegerEncoding, InvalidStringLength, TruncatedByteString, UnexpectedByte,
                     UnexpectedEndOfInput)

BYTE_I = ord(b"i")
BYTE_L = ord(b"l")
BYTE_D = ord(b"d")
BYTE_E = ord(b"e")
BYTE_0 = ord(b"0")
BYTE_9 = ord(b"9")
BYTE_COL = ord(b":")
BYTE_MINUS = ord(b"-")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
INT64_MAX_DIGITS = len(str(INT64_MAX))


class Token(Enum):
    INTEGER = "i"
    BYTES = "0-9"
    LIST = "l"
    DICTIONARY = "d"
    END = "e"


_MARKERS = {
    BYTE_I: Token.INTEGER,
    BYTE_L: Token.LIST,
    BYTE_D: Token.DICTIONARY,
    BYTE_E: Token.END,
}


def _describe(byte: int) -> str:
    return repr(bytes([byte]))


def classify(byte: int) -> Optional[Token]:
    """returns the production a byte opens, or None if it opens none"""
    if BYTE_0 <= byte <= BYTE_9:
        return Token.BYTES
    return _MARKERS.get(byte)


def peek_token(data: memoryview, pos: int) -> Token:
    """
    looks at the byte at pos without consuming it

    Raises:
        UnexpectedEndOfInput: pos is at the end of the buffer
        UnexpectedByte: the byte starts no production
    """
    if pos >= len(data):
        raise UnexpectedEndOfInput(pos, "expected a value")
    token = classify(data[pos])
    if token is None:
        raise UnexpectedByte(pos, f"unexpected byte {_describe(data[pos])}")
    return token


def expect(data: memoryview, pos: int, marker: int) -> int:
    """consumes a single marker byte and returns the next offset"""
    if pos >= len(data):
        raise UnexpectedEndOfInput(pos, f"expected {_describe(marker)}")
    if data[pos] != marker:
        raise UnexpectedByte(pos, f"expected {_describe(marker)}, found {_describe(data[pos])}")
    return pos + 1


def _skip_digits(data: memoryview, pos: int) -> int:
    end = len(data)
    while pos < end and BYTE_0 <= data[pos] <= BYTE_9:
        pos += 1
    return pos


def scan_integer(data: memoryview, pos: int) -> Tuple[int, int]:
    """
    recognizes i<digits>e starting at pos

    Returns:
        tuple of (integer, offset past the closing e)

    Raises:
        UnexpectedEndOfInput: the buffer ends before the closing e
        InvalidIntegerEncoding: empty digit run, leading zero, -0, a stray
            byte inside the digits, or a value outside the signed 64-bit range
    """
    start = pos
    pos = expect(data, pos, BYTE_I)

    negative = pos < len(data) and data[pos] == BYTE_MINUS
    if negative:
        pos += 1

    digits_start = pos
    pos = _skip_digits(data, pos)
    if pos >= len(data):
        raise UnexpectedEndOfInput(pos, "unterminated integer")
    if data[pos] != BYTE_E:
        raise InvalidIntegerEncoding(pos, f"unexpected byte {_describe(data[pos])} in integer")

    digit_count = pos - digits_start
    if digit_count == 0:
        raise InvalidIntegerEncoding(pos, "integer has no digits")
    if data[digits_start] == BYTE_0:
        if digit_count > 1:
            raise InvalidIntegerEncoding(digits_start, "leading zero in integer")
        if negative:
            raise InvalidIntegerEncoding(digits_start - 1, "negative zero")

    # also keeps int() clear of its max-digits limit
    if digit_count > INT64_MAX_DIGITS:
        raise InvalidIntegerEncoding(start, "integer out of 64-bit range")
    number = int(data[digits_start:pos].tobytes())
    if negative:
        number = -number
    if not INT64_MIN <= number <= INT64_MAX:
        raise InvalidIntegerEncoding(start, "integer out of 64-bit range")

    return number, pos + 1


def scan_length(data: memoryview, pos: int) -> Tuple[int, int]:
    """
    recognizes the <length>: prefix of a byte string

    Returns:
        tuple of (declared length, offset of the first payload byte)

    Raises:
        UnexpectedEndOfInput: the buffer ends inside the prefix
        UnexpectedByte: pos does not hold a digit
        InvalidStringLength: leading zero, a stray byte before the colon, or a
            length longer than the rest of the buffer
    """
    digits_start = pos
    pos = _skip_digits(data, pos)
    if pos == digits_start:
        if pos >= len(data):
            raise UnexpectedEndOfInput(pos, "expected a byte string")
        raise UnexpectedByte(pos, f"expected a byte string length, found {_describe(data[pos])}")
    if pos >= len(data):
        raise UnexpectedEndOfInput(pos, "unterminated byte string length")
    if data[pos] != BYTE_COL:
        raise InvalidStringLength(pos, f"unexpected byte {_describe(data[pos])} in byte string length")

    digit_count = pos - digits_start
    if data[digits_start] == BYTE_0 and digit_count > 1:
        raise InvalidStringLength(digits_start, "leading zero in byte string length")

    body = pos + 1
    remaining = len(data) - body
    # more digits than the remaining size has means it can never fit
    if digit_count > len(str(remaining)):
        raise TruncatedByteString(len(data), f"byte string length exceeds the {remaining} bytes remaining")
    return int(data[digits_start:pos].tobytes()), body


def scan_bytes(data: memoryview, pos: int) -> Tuple[int, int]:
    """
    recognizes <length>:<payload> starting at pos

    Returns:
        tuple of (payload start, payload end); the payload end is also the
        offset past the whole production
    """
    length, body = scan_length(data, pos)
    end = body + length
    if end > len(data):
        raise TruncatedByteString(len(data), f"byte string declares {length} bytes but only "
                                             f"{len(data) - body} remain")
    return body, end
