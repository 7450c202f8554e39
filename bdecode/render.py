from typing import Any, Dict

from .errors import DecodeError
from .value import Bytes, Dictionary, Integer, List, Value

HEX_PREVIEW_BYTES = 64


def render_bytes(value: Bytes, max_hex: int = HEX_PREVIEW_BYTES) -> Dict[str, Any]:
    """describes a byte string as text when it is utf-8, and always as (possibly cut) hex"""
    try:
        text = value.text()
    except UnicodeDecodeError:
        text = None

    rendered = {
        "type": "bytes",
        "length": len(value),
        "text": text,
        "hex": value.view[:max_hex].hex(),
    }
    if len(value) > max_hex:
        rendered["truncated"] = True
    return rendered


def render(value: Value, max_hex: int = HEX_PREVIEW_BYTES) -> Dict[str, Any]:
    """
    converts a Value tree into json-compatible dictionaries

    Args:
        value: root of the tree
        max_hex: byte strings longer than this only show their first bytes as hex

    Returns:
        nested dict with a "type" and "span" on every node
    """
    if isinstance(value, Integer):
        rendered = {"type": "integer", "value": value.value}
    elif isinstance(value, Bytes):
        rendered = render_bytes(value, max_hex)
    elif isinstance(value, List):
        rendered = {"type": "list", "items": [render(item, max_hex) for item in value]}
    elif isinstance(value, Dictionary):
        rendered = {
            "type": "dictionary",
            "entries": [
                {"key": render(key, max_hex), "value": render(item, max_hex)}
                for key, item in value.items()
            ],
        }
    else:
        raise TypeError(f"cannot render {type(value).__name__}")

    rendered["span"] = [value.start, value.end]
    return rendered


def render_error(error: DecodeError) -> Dict[str, Any]:
    return {
        "error": type(error).__name__,
        "offset": error.offset,
        "reason": error.reason,
    }
