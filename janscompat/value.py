"""JSON value model: objects, arrays, strings, numbers and the three constants."""

from __future__ import annotations

import enum
from collections.abc import Iterator

from janscompat import utf
from janscompat.hashtable import HashTable

_INT_BITS = 32


class JsonType(enum.Enum):
    """Kind of a JSON value."""

    OBJECT = 0
    ARRAY = 1
    STRING = 2
    INTEGER = 3
    REAL = 4
    TRUE = 5
    FALSE = 6
    NULL = 7


class JsonError(ValueError):
    """Raised when a JSON value cannot be built or changed as asked."""


def _raw_bytes(text: str) -> bytes:
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


def _to_text(value: object, check: bool) -> str:
    """Turn ``value`` into text, validating its UTF-8 form when ``check`` is set."""
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
        if check and not utf.check_string(raw):
            raise JsonError("string is not valid UTF-8")
        return raw.decode("utf-8", "surrogateescape")
    if isinstance(value, str):
        if check and not utf.check_string(value.encode("utf-8", "surrogatepass")):
            raise JsonError("string is not valid UTF-8")
        return value
    raise JsonError(f"expected a string, got {type(value).__name__}")


def hash_key(key: str | bytes) -> int:
    """Return the 32-bit djb2 hash of an object key.

    Bytes at or above 0x80 are taken as signed characters, and hashing
    stops at the first zero byte.
    """
    data = bytes(key) if isinstance(key, (bytes, bytearray)) else _raw_bytes(key)
    result = 5381
    for byte in data:
        if byte == 0:
            break
        char = byte if byte < 0x80 else byte | 0xFFFFFF00
        result = (result * 33 + char) & 0xFFFFFFFF
    return result


class _ObjectKey:
    __slots__ = ("key", "serial")

    def __init__(self, key: str, serial: int) -> None:
        self.key = key
        self.serial = serial


def _key_hash(key: _ObjectKey) -> int:
    return hash_key(key.key)


def _key_equal(first: _ObjectKey, second: _ObjectKey) -> bool:
    return first.key == second.key


class JsonValue:
    """Base of every JSON value."""

    type: JsonType

    def copy(self) -> JsonValue:
        """Return a shallow copy; containers share their members."""
        return self

    def deep_copy(self) -> JsonValue:
        """Return a copy that shares no mutable value with the original."""
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        return equal(self, other)

    __hash__ = None  # type: ignore[assignment]


def _check_member(container: JsonValue, value: object) -> JsonValue:
    if not isinstance(value, JsonValue):
        raise JsonError("member must be a JSON value")
    if value is container:
        raise JsonError("a container cannot hold itself directly")
    return value


class JsonObject(JsonValue):
    """JSON object mapping text keys to values."""

    type = JsonType.OBJECT

    def __init__(self) -> None:
        self._table = HashTable(_key_hash, _key_equal)
        self._serial = 0

    def __len__(self) -> int:
        return len(self._table)

    def get(self, key: str | bytes) -> JsonValue | None:
        """Return the value stored under ``key``, or None."""
        return self._table.get(_ObjectKey(_to_text(key, False), 0))

    def set(self, key: str | bytes, value: JsonValue) -> None:
        """Store ``value`` under ``key`` after checking the key is valid UTF-8."""
        if key is None:
            raise JsonError("key must not be None")
        self.set_nocheck(_to_text(key, True), value)

    def set_nocheck(self, key: str | bytes, value: JsonValue) -> None:
        """Store ``value`` under ``key`` without validating the key."""
        if key is None or value is None:
            raise JsonError("key and value must not be None")
        _check_member(self, value)
        text = _to_text(key, False)
        serial = self._serial
        self._serial += 1
        self._table.set(_ObjectKey(text, serial), value)

    def delete(self, key: str | bytes) -> None:
        """Remove ``key``; raise KeyError if it is absent."""
        text = _to_text(key, False)
        try:
            self._table.remove(_ObjectKey(text, 0))
        except KeyError:
            raise KeyError(text) from None

    def clear(self) -> None:
        """Remove every member."""
        self._table.clear()

    def update(self, other: JsonObject) -> None:
        """Copy every member of ``other`` into this object."""
        if not isinstance(other, JsonObject):
            raise JsonError("can only update from another object")
        for key, value in other.items():
            self.set_nocheck(key, value)

    def items(self) -> list[tuple[str, JsonValue]]:
        """Return ``(key, value)`` pairs in table order."""
        return [(k.key, v) for k, v in self._table.items()]

    def iter_from(self, key: str | bytes) -> Iterator[tuple[str, JsonValue]]:
        """Iterate pairs in table order starting at ``key``; KeyError if absent."""
        text = _to_text(key, False)
        try:
            pairs = self._table.iter_from(_ObjectKey(text, 0))
        except KeyError:
            raise KeyError(text) from None
        return ((k.key, v) for k, v in pairs)

    def _serial_items(self) -> list[tuple[int, str, JsonValue]]:
        return [(k.serial, k.key, v) for k, v in self._table.items()]

    def copy(self) -> JsonObject:
        result = JsonObject()
        for key, value in self.items():
            result.set_nocheck(key, value)
        return result

    def deep_copy(self) -> JsonObject:
        result = JsonObject()
        for key, value in self.items():
            result.set_nocheck(key, value.deep_copy())
        return result


class JsonArray(JsonValue):
    """JSON array of values."""

    type = JsonType.ARRAY

    def __init__(self) -> None:
        self._items: list[JsonValue] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self._items)

    def _check_index(self, index: int, limit: int) -> int:
        index = int(index)
        if index < 0 or index >= limit:
            raise IndexError(f"array index out of range: {index}")
        return index

    def __getitem__(self, index: int) -> JsonValue:
        return self._items[self._check_index(index, len(self._items))]

    def set(self, index: int, value: JsonValue) -> None:
        """Replace the member at ``index``."""
        _check_member(self, value)
        self._items[self._check_index(index, len(self._items))] = value

    def append(self, value: JsonValue) -> None:
        """Add ``value`` at the end."""
        self._items.append(_check_member(self, value))

    def insert(self, index: int, value: JsonValue) -> None:
        """Insert ``value`` before ``index``; ``index`` may equal the length."""
        _check_member(self, value)
        self._items.insert(self._check_index(index, len(self._items) + 1), value)

    def remove(self, index: int) -> JsonValue:
        """Remove the member at ``index`` and return it."""
        position = self._check_index(index, len(self._items))
        return self._items.pop(position)

    def clear(self) -> None:
        """Remove every member."""
        self._items.clear()

    def extend(self, other: JsonArray) -> None:
        """Append every member of ``other``."""
        if not isinstance(other, JsonArray):
            raise JsonError("can only extend from another array")
        self._items.extend(list(other._items))

    def copy(self) -> JsonArray:
        result = JsonArray()
        result._items = list(self._items)
        return result

    def deep_copy(self) -> JsonArray:
        result = JsonArray()
        result._items = [item.deep_copy() for item in self._items]
        return result


class JsonString(JsonValue):
    """JSON string holding valid UTF-8 text."""

    type = JsonType.STRING

    def __init__(self, value: str | bytes) -> None:
        if value is None:
            raise JsonError("string value must not be None")
        self.value = _to_text(value, True)

    def set(self, value: str | bytes) -> None:
        """Replace the text after checking it is valid UTF-8."""
        if value is None:
            raise JsonError("string value must not be None")
        self.value = _to_text(value, True)

    def copy(self) -> JsonString:
        return string_nocheck(self.value)

    def deep_copy(self) -> JsonString:
        return self.copy()


def string_nocheck(value: str | bytes) -> JsonString:
    """Build a JsonString without validating its UTF-8 form."""
    if value is None:
        raise JsonError("string value must not be None")
    result = JsonString.__new__(JsonString)
    result.value = _to_text(value, False)
    return result


def _wrap_int(value: int) -> int:
    half = 1 << (_INT_BITS - 1)
    return ((int(value) + half) % (1 << _INT_BITS)) - half


class JsonInteger(JsonValue):
    """JSON integer, kept as a signed 32-bit value."""

    type = JsonType.INTEGER

    def __init__(self, value: int) -> None:
        self.value = value

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self._value = _wrap_int(value)

    def copy(self) -> JsonInteger:
        return JsonInteger(self._value)

    def deep_copy(self) -> JsonInteger:
        return self.copy()


class JsonReal(JsonValue):
    """JSON real number."""

    type = JsonType.REAL

    def __init__(self, value: float) -> None:
        self.value = float(value)

    def copy(self) -> JsonReal:
        return JsonReal(self.value)

    def deep_copy(self) -> JsonReal:
        return self.copy()


class _Constant(JsonValue):
    __slots__ = ("type",)

    def __init__(self, kind: JsonType) -> None:
        self.type = kind

    def __repr__(self) -> str:
        return f"<json {self.type.name.lower()}>"


_TRUE = _Constant(JsonType.TRUE)
_FALSE = _Constant(JsonType.FALSE)
_NULL = _Constant(JsonType.NULL)


def json_true() -> JsonValue:
    """Return the shared ``true`` value."""
    return _TRUE


def json_false() -> JsonValue:
    """Return the shared ``false`` value."""
    return _FALSE


def json_null() -> JsonValue:
    """Return the shared ``null`` value."""
    return _NULL


def equal(first: JsonValue | None, second: JsonValue | None) -> bool:
    """Return True if two JSON values are structurally equal."""
    if first is None or second is None:
        return False
    if first.type != second.type:
        return False
    if first is second:
        return True
    if isinstance(first, JsonObject) and isinstance(second, JsonObject):
        if len(first) != len(second):
            return False
        return all(equal(value, second.get(key)) for key, value in first.items())
    if isinstance(first, JsonArray) and isinstance(second, JsonArray):
        if len(first) != len(second):
            return False
        return all(equal(a, b) for a, b in zip(first, second))
    if isinstance(first, (JsonString, JsonInteger, JsonReal)):
        return first.value == second.value  # type: ignore[attr-defined]
    return False


def number_value(value: JsonValue | None) -> float:
    """Return the numeric value of an integer or real, or 0.0 otherwise."""
    if isinstance(value, JsonInteger):
        return float(value.value)
    if isinstance(value, JsonReal):
        return value.value
    return 0.0