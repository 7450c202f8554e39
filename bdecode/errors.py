class DecodeError(ValueError):
    """
    base class for every bencode decoding failure

    Attributes:
        offset: byte offset in the input where the problem was detected
        reason: human readable description of the problem
    """

    def __init__(self, offset: int, reason: str):
        super().__init__(f"{reason} at offset {offset}")
        self.offset: int = offset
        self.reason: str = reason

    def add_context(self, context: str) -> None:
        """appends where the failure happened to the reason, keeping the offset"""
        self.reason = f"{self.reason} ({context})"
        self.args = (f"{self.reason} at offset {self.offset}",)


class UnexpectedEndOfInput(DecodeError):
    """buffer exhausted in the middle of a production"""


class InvalidIntegerEncoding(DecodeError):
    """leading zero, -0, empty digit run, stray byte or 64-bit overflow"""


class InvalidStringLength(DecodeError):
    """byte string length prefix is not canonical or cannot be satisfied"""


class TruncatedByteString(UnexpectedEndOfInput, InvalidStringLength):
    """declared byte string length runs past the end of the buffer"""


class UnexpectedByte(DecodeError):
    """byte does not start any production valid at this position"""


class DictionaryKeyOrderViolation(DecodeError):
    """
    dictionary key is not strictly greater than the key before it

    Attributes:
        key: the offending key
        previous_key: the key it was compared against
    """

    def __init__(self, offset: int, key: bytes, previous_key: bytes):
        if key == previous_key:
            reason = f"duplicate dictionary key {key!r}"
        else:
            reason = f"dictionary key {key!r} sorts before {previous_key!r}"
        super().__init__(offset, reason)
        self.key: bytes = key
        self.previous_key: bytes = previous_key


class NestingTooDeep(DecodeError):
    """lists / dictionaries nested deeper than the allowed maximum"""


class TrailingData(DecodeError):
    """bytes left over after the last complete top-level value"""
