from .decoder import DEFAULT_MAX_DEPTH, Decoder, decode, decode_all, decode_file
from .errors import (DecodeError, DictionaryKeyOrderViolation, InvalidIntegerEncoding, InvalidStringLength,
                     NestingTooDeep, TrailingData, TruncatedByteString, UnexpectedByte, UnexpectedEndOfInput)
from .value import Bytes, Dictionary, Integer, List, Value, ValueKind

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Decoder",
    "decode",
    "decode_all",
    "decode_file",
    "DecodeError",
    "DictionaryKeyOrderViolation",
    "InvalidIntegerEncoding",
    "InvalidStringLength",
    "NestingTooDeep",
    "TrailingData",
    "TruncatedByteString",
    "UnexpectedByte",
    "UnexpectedEndOfInput",
    "Bytes",
    "Dictionary",
    "Integer",
    "List",
    "Value",
    "ValueKind",
]
