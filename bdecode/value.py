from enum import Enum
from typing import Any, Iterable, Iterator, List as TList, Optional, Tuple, Union


class ValueKind(Enum):
    INTEGER = "integer"
    BYTES = "bytes"
    LIST = "list"
    DICTIONARY = "dictionary"


class Value:
    """
    one node of a decoded bencode tree

    Attributes:
        start: offset of the first byte of this value's encoding
        end: offset one past the last byte of this value's encoding
    """
    __slots__ = ("_source", "start", "end")

    kind: ValueKind

    def __init__(self, source: Optional[memoryview] = None, start: int = 0, end: int = 0):
        self._source = source
        self.start: int = start
        self.end: int = end

    @property
    def is_integer(self) -> bool:
        return self.kind is ValueKind.INTEGER

    @property
    def is_bytes(self) -> bool:
        return self.kind is ValueKind.BYTES

    @property
    def is_list(self) -> bool:
        return self.kind is ValueKind.LIST

    @property
    def is_dictionary(self) -> bool:
        return self.kind is ValueKind.DICTIONARY

    def raw(self) -> memoryview:
        """
        returns the exact encoded bytes of this value, without copying

        Raises:
            ValueError: if the value was built by hand rather than decoded
        """
        if self._source is None:
            raise ValueError(f"{type(self).__name__} was not decoded from a buffer")
        return self._source[self.start:self.end]

    def to_python(self) -> Any:
        """converts the tree into plain int / bytes / list / dict objects"""
        raise NotImplementedError


class Integer(Value):
    """
    bencoded signed integer

    Attributes:
        value: the integer, always within the signed 64-bit range
    """
    __slots__ = ("value",)

    kind = ValueKind.INTEGER

    def __init__(self, value: int, source: Optional[memoryview] = None, start: int = 0, end: int = 0):
        super().__init__(source, start, end)
        self.value: int = value

    def to_python(self) -> int:
        return self.value

    def __int__(self):
        return self.value

    def __eq__(self, other):
        if not isinstance(other, Integer):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((ValueKind.INTEGER, self.value))

    def __repr__(self):
        return f"Integer({self.value})"


class Bytes(Value):
    """
    bencoded byte string, stored as a window onto the input buffer

    the payload is not copied: the node keeps a reference to the whole input
    buffer plus an (offset, length) pair, so the buffer stays alive as long as
    any Bytes node does. call tobytes() for an owned copy.

    Attributes:
        offset: offset of the first payload byte in the buffer
        length: payload length in bytes
    """
    __slots__ = ("_buffer", "offset", "length")

    kind = ValueKind.BYTES

    def __init__(self, buffer, offset: int = 0, length: Optional[int] = None, start: Optional[int] = None):
        """
        initializes a Bytes view

        Args:
            buffer: bytes-like object holding the payload
            offset: offset of the payload inside buffer
            length: payload length, defaults to the rest of the buffer
            start: offset of the length prefix; when given, the view is tied
                to buffer as its source and raw() returns the encoding
        """
        view = buffer if isinstance(buffer, memoryview) else memoryview(buffer)
        if not view.readonly:
            view = view.toreadonly()
        if length is None:
            length = len(view) - offset
        if start is None:
            super().__init__()
        else:
            super().__init__(view, start, offset + length)
        self._buffer: memoryview = view
        self.offset: int = offset
        self.length: int = length

    @property
    def view(self) -> memoryview:
        """read-only memoryview of the payload"""
        return self._buffer[self.offset:self.offset + self.length]

    def tobytes(self) -> bytes:
        return self.view.tobytes()

    def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return str(self.view, encoding, errors)

    def to_python(self) -> bytes:
        return self.tobytes()

    def __bytes__(self):
        return self.tobytes()

    def __len__(self):
        return self.length

    def __eq__(self, other):
        if isinstance(other, Bytes):
            return self.view == other.view
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.view == other
        return NotImplemented

    def __hash__(self):
        return hash(self.tobytes())

    def __repr__(self):
        return f"Bytes({self.tobytes()!r})"


class List(Value):
    """bencoded list, order preserved exactly as encoded"""
    __slots__ = ("_items",)

    kind = ValueKind.LIST

    def __init__(self, items: Iterable[Value], source: Optional[memoryview] = None, start: int = 0, end: int = 0):
        super().__init__(source, start, end)
        self._items: Tuple[Value, ...] = tuple(items)

    def to_python(self) -> list:
        return [item.to_python() for item in self._items]

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def __eq__(self, other):
        if not isinstance(other, List):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self):
        return f"List({list(self._items)!r})"


KeyLike = Union[bytes, bytearray, memoryview, Bytes]


def _key_bytes(key: KeyLike) -> bytes:
    if isinstance(key, bytes):
        return key
    if isinstance(key, Bytes):
        return key.tobytes()
    if isinstance(key, (bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"dictionary keys are byte strings, not {type(key).__name__}")


class Dictionary(Value):
    """
    bencoded dictionary

    entries keep their encoded order; lookups go through a bytes-keyed index
    built once at construction, so get() is O(1) and never touches the tree.
    """
    __slots__ = ("_entries", "_index")

    kind = ValueKind.DICTIONARY

    def __init__(self, entries: Iterable[Tuple[KeyLike, Value]], source: Optional[memoryview] = None,
                 start: int = 0, end: int = 0):
        super().__init__(source, start, end)
        pairs = []
        for key, value in entries:
            if not isinstance(key, Bytes):
                key = Bytes(_key_bytes(key))
            pairs.append((key, value))
        self._entries: Tuple[Tuple[Bytes, Value], ...] = tuple(pairs)
        self._index = {key.tobytes(): value for key, value in self._entries}

    def get(self, key: KeyLike, default: Optional[Value] = None) -> Optional[Value]:
        """
        looks up a value by its raw byte string key

        Args:
            key: the key as bytes, bytearray, memoryview or Bytes
            default: returned when the key is absent

        Returns:
            the stored Value, or default

        Raises:
            TypeError: if key is not bytes-like (e.g. a str)
        """
        return self._index.get(_key_bytes(key), default)

    def keys(self) -> TList[Bytes]:
        return [key for key, _ in self._entries]

    def values(self) -> TList[Value]:
        return [value for _, value in self._entries]

    def items(self) -> TList[Tuple[Bytes, Value]]:
        return list(self._entries)

    def to_python(self) -> dict:
        return {key.tobytes(): value.to_python() for key, value in self._entries}

    def __getitem__(self, key: KeyLike) -> Value:
        try:
            return self._index[_key_bytes(key)]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key) -> bool:
        return _key_bytes(key) in self._index

    def __iter__(self) -> Iterator[Bytes]:
        return iter(self.keys())

    def __len__(self):
        return len(self._entries)

    def __eq__(self, other):
        if not isinstance(other, Dictionary):
            return NotImplemented
        return self._index == other._index

    __hash__ = None

    def __repr__(self):
        body = ", ".join(f"{key.tobytes()!r}: {value!r}" for key, value in self._entries)
        return f"Dictionary({{{body}}})"
