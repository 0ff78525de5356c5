"""UTF-8 validation, decoding and encoding helpers."""

from __future__ import annotations

_MAX_CODEPOINT = 0x10FFFF


def encode(codepoint: int) -> bytes:
    """Encode one code point as UTF-8 bytes.

    Raises ValueError for negative code points and for code points
    beyond U+10FFFF.
    """
    if codepoint < 0:
        raise ValueError(f"negative code point: {codepoint}")
    if codepoint < 0x80:
        return bytes((codepoint,))
    if codepoint < 0x800:
        return bytes((
            0xC0 + ((codepoint & 0x7C0) >> 6),
            0x80 + (codepoint & 0x03F),
        ))
    if codepoint < 0x10000:
        return bytes((
            0xE0 + ((codepoint & 0xF000) >> 12),
            0x80 + ((codepoint & 0x0FC0) >> 6),
            0x80 + (codepoint & 0x003F),
        ))
    if codepoint <= _MAX_CODEPOINT:
        return bytes((
            0xF0 + ((codepoint & 0x1C0000) >> 18),
            0x80 + ((codepoint & 0x03F000) >> 12),
            0x80 + ((codepoint & 0x000FC0) >> 6),
            0x80 + (codepoint & 0x00003F),
        ))
    raise ValueError(f"code point out of range: {codepoint:#x}")


def check_first(byte: int) -> int:
    """Return the sequence length announced by a leading byte, or 0 if invalid."""
    if byte < 0x80:
        return 1
    if 0x80 <= byte <= 0xBF:
        # continuation byte
        return 0
    if byte in (0xC0, 0xC1):
        # overlong encoding of an ASCII byte
        return 0
    if 0xC2 <= byte <= 0xDF:
        return 2
    if 0xE0 <= byte <= 0xEF:
        return 3
    if 0xF0 <= byte <= 0xF4:
        return 4
    return 0


def check_full(buffer: bytes) -> int:
    """Decode a complete multi-byte sequence and return its code point.

    The whole of ``buffer`` is taken as one sequence of 2, 3 or 4 bytes.
    Raises ValueError if it is not a valid, shortest-form encoding of a
    non-surrogate code point.
    """
    size = len(buffer)
    first = buffer[0] if size else 0
    if size == 2:
        value = first & 0x1F
    elif size == 3:
        value = first & 0x0F
    elif size == 4:
        value = first & 0x07
    else:
        raise ValueError(f"invalid sequence length: {size}")

    for byte in buffer[1:]:
        if byte < 0x80 or byte > 0xBF:
            raise ValueError("expected a continuation byte")
        value = (value << 6) + (byte & 0x3F)

    if value > _MAX_CODEPOINT:
        raise ValueError("code point not in Unicode range")
    if 0xD800 <= value <= 0xDFFF:
        raise ValueError("UTF-16 surrogate half")
    if (size == 2 and value < 0x80) or (size == 3 and value < 0x800) or (
        size == 4 and value < 0x10000
    ):
        raise ValueError("overlong encoding")
    return value


def iterate(buffer: bytes, pos: int = 0) -> tuple[int | None, int]:
    """Decode the code point at ``pos``.

    Returns ``(codepoint, next_pos)``. At the end of the buffer, or at a
    zero byte that terminates the text, returns ``(None, pos)``. Raises
    ValueError on an invalid or truncated sequence.
    """
    if pos >= len(buffer) or buffer[pos] == 0:
        return None, pos
    count = check_first(buffer[pos])
    if count == 0:
        raise ValueError(f"invalid leading byte {buffer[pos]:#04x} at {pos}")
    if count == 1:
        return buffer[pos], pos + 1
    chunk = bytes(buffer[pos:pos + count])
    if len(chunk) < count:
        raise ValueError(f"truncated sequence at {pos}")
    return check_full(chunk), pos + count


def check_string(data: bytes) -> bool:
    """Return True if ``data`` is entirely valid UTF-8."""
    length = len(data)
    pos = 0
    while pos < length:
        count = check_first(data[pos])
        if count == 0:
            return False
        if count > 1:
            if pos + count > length:
                return False
            try:
                check_full(bytes(data[pos:pos + count]))
            except ValueError:
                return False
        pos += count
    return True