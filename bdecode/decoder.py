import logging
from contextlib import contextmanager
from typing import List as TList, Optional, Union

from .errors import (DecodeError, DictionaryKeyOrderViolation, NestingTooDeep, TrailingData, UnexpectedByte,
                     UnexpectedEndOfInput)
from .tokenizer import BYTE_E, Token, classify, peek_token, scan_bytes, scan_integer
from .value import Bytes, Dictionary, Integer, List, Value

DEFAULT_MAX_DEPTH = 256

Buffer = Union[bytes, bytearray, memoryview]

logger = logging.getLogger(__name__)


class Decoder:
    """
    turns one bencoded buffer into Value trees

    a Decoder is single use: it walks the buffer once with a cursor, building
    values as productions are recognized. validation happens inline, so the
    first malformed byte stops the whole decode and nothing partial escapes.

    Attributes:
        data: read-only unsigned byte view of the input
        max_depth: deepest allowed list / dictionary nesting
        position: offset of the next unread byte
    """

    def __init__(self, data: Buffer, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        initializes a Decoder

        Args:
            data: the complete input; bytes, bytearray or memoryview
            max_depth: deepest allowed list / dictionary nesting

        Raises:
            TypeError: if data is a str or not a buffer
            ValueError: if max_depth is smaller than 1
        """
        if isinstance(data, str):
            raise TypeError("bencode is decoded from bytes, not str")
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")

        view = memoryview(data)
        if view.ndim != 1 or view.format != "B":
            view = view.cast("B")

        # a bytearray caller must not mutate the buffer while the tree lives
        self.data: memoryview = view.toreadonly()
        self.max_depth: int = max_depth
        self.position: int = 0

    def decode_all(self) -> TList[Value]:
        """
        decodes every top-level value in the buffer, in order

        Returns:
            list of Values, empty for an empty buffer

        Raises:
            DecodeError: on the first malformed byte
        """
        logger.debug("[decode] %d bytes, max depth %d", len(self.data), self.max_depth)
        values: TList[Value] = []
        with self._guard():
            while self.position < len(self.data):
                if values:
                    self._check_trailing()
                start = self.position
                try:
                    values.append(self._decode_value(0))
                except DecodeError as e:
                    if values:
                        e.add_context(f"in top-level value {len(values) + 1} starting at offset {start}, "
                                      f"after a complete value ending at offset {values[-1].end}")
                    raise
        logger.debug("[decode] %d top-level values", len(values))
        return values

    def decode_one(self) -> Value:
        """
        decodes a buffer holding exactly one top-level value

        Raises:
            UnexpectedEndOfInput: if the buffer is empty
            TrailingData: if anything follows the first value
        """
        with self._guard():
            if not self.data:
                raise UnexpectedEndOfInput(0, "empty input")
            value = self._decode_value(0)
            if self.position < len(self.data):
                raise TrailingData(self.position, "extra data after top-level value")
        return value

    @contextmanager
    def _guard(self):
        try:
            yield
        except RecursionError:
            raise NestingTooDeep(self.position, "nesting exhausted the interpreter stack") from None
        except DecodeError as e:
            logger.debug("[decode] failed: %s", e)
            raise

    def _check_trailing(self) -> None:
        token = classify(self.data[self.position])
        if token is None or token is Token.END:
            raise TrailingData(self.position, "trailing data after last complete value")

    def _decode_value(self, depth: int) -> Value:
        token = peek_token(self.data, self.position)
        if token is Token.INTEGER:
            return self._decode_integer()
        if token is Token.BYTES:
            return self._decode_bytes()
        if token is Token.LIST:
            return self._decode_list(depth + 1)
        if token is Token.DICTIONARY:
            return self._decode_dictionary(depth + 1)
        raise UnexpectedByte(self.position, "end marker where a value was expected")

    def _decode_integer(self) -> Integer:
        start = self.position
        number, self.position = scan_integer(self.data, start)
        return Integer(number, self.data, start, self.position)

    def _decode_bytes(self) -> Bytes:
        start = self.position
        body, self.position = scan_bytes(self.data, start)
        return Bytes(self.data, body, self.position - body, start=start)

    def _enter(self, depth: int) -> int:
        if depth > self.max_depth:
            raise NestingTooDeep(self.position, f"nesting deeper than {self.max_depth} levels")
        start = self.position
        self.position += 1
        return start

    def _at_end(self, start: int, what: str) -> bool:
        if self.position >= len(self.data):
            raise UnexpectedEndOfInput(self.position, f"unterminated {what} starting at offset {start}")
        return self.data[self.position] == BYTE_E

    def _decode_list(self, depth: int) -> List:
        start = self._enter(depth)
        items = []
        while not self._at_end(start, "list"):
            items.append(self._decode_value(depth))
        self.position += 1
        return List(items, self.data, start, self.position)

    def _decode_dictionary(self, depth: int) -> Dictionary:
        start = self._enter(depth)
        entries = []
        previous: Optional[bytes] = None
        while not self._at_end(start, "dictionary"):
            key_start = self.position
            if classify(self.data[key_start]) is not Token.BYTES:
                raise UnexpectedByte(key_start, "dictionary key must be a byte string")
            key = self._decode_bytes()

            key_bytes = key.tobytes()
            if previous is not None and key_bytes <= previous:
                raise DictionaryKeyOrderViolation(key_start, key_bytes, previous)

            if self._at_end(start, "dictionary"):
                raise UnexpectedByte(self.position, f"dictionary key {key_bytes!r} has no value")
            entries.append((key, self._decode_value(depth)))
            previous = key_bytes
        self.position += 1
        return Dictionary(entries, self.data, start, self.position)


def decode_all(data: Buffer, max_depth: int = DEFAULT_MAX_DEPTH) -> TList[Value]:
    """
    decodes every concatenated top-level value in data

    Args:
        data: the complete bencoded input
        max_depth: deepest allowed list / dictionary nesting

    Returns:
        list of Value trees in input order; empty input gives an empty list

    Raises:
        DecodeError: subclass describing the first problem found
    """
    return Decoder(data, max_depth).decode_all()


def decode(data: Buffer, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """decodes data that must hold exactly one top-level value"""
    return Decoder(data, max_depth).decode_one()


def decode_file(path, max_depth: int = DEFAULT_MAX_DEPTH) -> TList[Value]:
    """
    reads a whole file and decodes every top-level value in it

    Raises:
        OSError: if the file cannot be read
        DecodeError: if its contents are malformed
    """
    with open(path, 'rb') as f:
        data = f.read()
    return decode_all(data, max_depth)
