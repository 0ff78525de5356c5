"""Serialise JSON values to text, a stream or a file."""

from __future__ import annotations

import enum
import os
from collections.abc import Iterator
from typing import TextIO

from janscompat import utf
from janscompat.value import (
    JsonArray,
    JsonError,
    JsonInteger,
    JsonObject,
    JsonReal,
    JsonString,
    JsonType,
    JsonValue,
)

_INDENT_MASK = 0xFF

_SIMPLE_ESCAPES = {
    0x5C: b"\\\\",
    0x22: b'\\"',
    0x08: b"\\b",
    0x0C: b"\\f",
    0x0A: b"\\n",
    0x0D: b"\\r",
    0x09: b"\\t",
}


class DumpFlags(enum.IntFlag):
    """Flags that control the output; combine with :func:`indent`."""

    COMPACT = 0x100
    ENSURE_ASCII = 0x200
    SORT_KEYS = 0x400
    PRESERVE_ORDER = 0x800


def indent(width: int) -> int:
    """Return the flag bits asking for ``width`` spaces of indentation (0-255)."""
    return int(width) & _INDENT_MASK


def _raw_bytes(text: str | bytes) -> bytes:
    if isinstance(text, (bytes, bytearray)):
        return bytes(text)
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


def _escape(codepoint: int) -> bytes:
    simple = _SIMPLE_ESCAPES.get(codepoint)
    if simple is not None:
        return simple
    if codepoint < 0x10000:
        return b"\\u%04x" % codepoint
    offset = codepoint - 0x10000
    first = 0xD800 | ((offset & 0xFFC00) >> 10)
    last = 0xDC00 | (offset & 0x003FF)
    return b"\\u%04x\\u%04x" % (first, last)


def _encode(text: str | bytes, ensure_ascii: bool) -> tuple[bytes, str | None]:
    """Quote ``text``; return the output and an error message, if any.

    On error the output holds what was produced before the fault and no
    closing quote. A zero byte ends the text.
    """
    raw = _raw_bytes(text)
    out = bytearray(b'"')
    start = pos = 0
    while True:
        try:
            codepoint, following = utf.iterate(raw, pos)
        except ValueError as exc:
            return bytes(out), str(exc)
        if codepoint is None:
            break
        if (
            codepoint in (0x5C, 0x22)
            or codepoint < 0x20
            or (ensure_ascii and codepoint > 0x7F)
        ):
            out += raw[start:pos]
            out += _escape(codepoint)
            start = following
        pos = following
    out += raw[start:pos]
    out += b'"'
    return bytes(out), None


def encode_string(text: str | bytes, ensure_ascii: bool = False) -> str:
    """Return ``text`` as a quoted JSON string literal.

    Raises JsonError if the text is not valid UTF-8.
    """
    data, error = _encode(text, ensure_ascii)
    if error is not None:
        raise JsonError(f"cannot encode string: {error}")
    return data.decode("utf-8")


def _key_literal(key: str, ensure_ascii: bool) -> str:
    # Faults in a key are not reported; whatever was encoded is kept.
    data, _ = _encode(key, ensure_ascii)
    return data.decode("utf-8", "replace")


def _indent_chunk(flags: int, depth: int, space: bool) -> str:
    width = flags & _INDENT_MASK
    if width > 0:
        return "\n" + " " * (width * depth)
    if space and not flags & DumpFlags.COMPACT:
        return " "
    return ""


def _format_real(number: float) -> str:
    text = format(number, ".17g")
    if "." not in text and "e" not in text:
        text += ".0"
    return text


def _dump(value: JsonValue, flags: int, depth: int, active: set[int]) -> Iterator[str]:
    ascii_only = bool(flags & DumpFlags.ENSURE_ASCII)
    kind = getattr(value, "type", None)

    if kind is JsonType.NULL:
        yield "null"
    elif kind is JsonType.TRUE:
        yield "true"
    elif kind is JsonType.FALSE:
        yield "false"
    elif isinstance(value, JsonInteger):
        yield str(value.value)
    elif isinstance(value, JsonReal):
        yield _format_real(value.value)
    elif isinstance(value, JsonString):
        yield encode_string(value.value, ascii_only)
    elif isinstance(value, JsonArray):
        yield from _dump_array(value, flags, depth, active)
    elif isinstance(value, JsonObject):
        yield from _dump_object(value, flags, depth, active)
    else:
        raise JsonError(f"not a JSON value: {value!r}")


def _enter(value: JsonValue, active: set[int]) -> None:
    if id(value) in active:
        raise JsonError("circular reference")
    active.add(id(value))


def _dump_array(
    array: JsonArray, flags: int, depth: int, active: set[int]
) -> Iterator[str]:
    _enter(array, active)
    try:
        yield "["
        members = list(array)
        if members:
            yield _indent_chunk(flags, depth + 1, False)
            last = len(members) - 1
            for position, member in enumerate(members):
                yield from _dump(member, flags, depth + 1, active)
                if position < last:
                    yield "," + _indent_chunk(flags, depth + 1, True)
                else:
                    yield _indent_chunk(flags, depth, False)
        yield "]"
    finally:
        active.discard(id(array))


def _ordered_members(obj: JsonObject, flags: int) -> list[tuple[str, JsonValue]]:
    if flags & DumpFlags.SORT_KEYS:
        return sorted(obj.items(), key=lambda item: _raw_bytes(item[0]))
    if flags & DumpFlags.PRESERVE_ORDER:
        return [(key, value) for _, key, value in sorted(
            obj._serial_items(), key=lambda item: item[0]
        )]
    return obj.items()


def _dump_object(
    obj: JsonObject, flags: int, depth: int, active: set[int]
) -> Iterator[str]:
    separator = ":" if flags & DumpFlags.COMPACT else ": "
    ascii_only = bool(flags & DumpFlags.ENSURE_ASCII)
    _enter(obj, active)
    try:
        yield "{"
        members = _ordered_members(obj, flags)
        if members:
            yield _indent_chunk(flags, depth + 1, False)
            last = len(members) - 1
            for position, (key, member) in enumerate(members):
                yield _key_literal(key, ascii_only)
                yield separator
                yield from _dump(member, flags, depth + 1, active)
                if position < last:
                    yield "," + _indent_chunk(flags, depth + 1, True)
                else:
                    yield _indent_chunk(flags, depth, False)
        yield "}"
    finally:
        active.discard(id(obj))


def _dump_root(value: JsonValue, flags: int) -> Iterator[str]:
    if not isinstance(value, (JsonArray, JsonObject)):
        raise JsonError("only arrays and objects can be dumped")
    return _dump(value, int(flags), 0, set())


def dumps(value: JsonValue, flags: int = 0) -> str:
    """Return ``value`` (an array or object) as JSON text.

    Raises JsonError for other values, circular references and strings
    that are not valid UTF-8.
    """
    return "".join(_dump_root(value, flags))


def dumpf(value: JsonValue, stream: TextIO, flags: int = 0) -> None:
    """Write ``value`` as JSON text to ``stream``.

    Output is written piece by piece, so a JsonError may leave a partial
    document behind.
    """
    for chunk in _dump_root(value, flags):
        if chunk:
            stream.write(chunk)


def dump_file(value: JsonValue, path: str | os.PathLike[str], flags: int = 0) -> None:
    """Write ``value`` as JSON text to the file at ``path``, replacing it."""
    with open(path, "w", encoding="utf-8", newline="") as stream:
        dumpf(value, stream, flags)