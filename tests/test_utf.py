import pytest

from janscompat import utf

SAMPLE_CODEPOINTS = [0x00, 0x41, 0x7F, 0x80, 0xE9, 0x7FF, 0x800, 0x20AC,
                     0xFFFF, 0x10000, 0x1F600, 0x10FFFF]


@pytest.mark.parametrize("codepoint", SAMPLE_CODEPOINTS)
def test_encode_matches_standard_utf8(codepoint):
    assert utf.encode(codepoint) == chr(codepoint).encode("utf-8")


@pytest.mark.parametrize("codepoint", [-1, 0x110000])
def test_encode_rejects_out_of_range(codepoint):
    with pytest.raises(ValueError):
        utf.encode(codepoint)


@pytest.mark.parametrize(
    "byte, expected",
    [(0x41, 1), (0x7F, 1), (0x80, 0), (0xBF, 0), (0xC0, 0), (0xC1, 0),
     (0xC2, 2), (0xDF, 2), (0xE0, 3), (0xEF, 3), (0xF0, 4), (0xF4, 4),
     (0xF5, 0), (0xFF, 0)],
)
def test_check_first(byte, expected):
    assert utf.check_first(byte) == expected


@pytest.mark.parametrize("codepoint", [c for c in SAMPLE_CODEPOINTS if c >= 0x80])
def test_check_full_round_trip(codepoint):
    assert utf.check_full(utf.encode(codepoint)) == codepoint


@pytest.mark.parametrize(
    "buffer",
    [
        b"\xe0\x80\x80",          # overlong
        b"\xf0\x80\x80\x80",      # overlong
        b"\xed\xa0\x80",          # surrogate
        b"\xf4\x90\x80\x80",      # beyond U+10FFFF
        b"\xc3\x41",              # bad continuation
        b"A",                     # length 1
        b"\xf0\x80\x80\x80\x80",  # length 5
    ],
)
def test_check_full_rejects_invalid(buffer):
    with pytest.raises(ValueError):
        utf.check_full(buffer)


def test_iterate_walks_text():
    text = "a\u00e9\u20ac\U0001f600z"
    data = text.encode("utf-8")
    pos = 0
    decoded = []
    while True:
        codepoint, pos = utf.iterate(data, pos)
        if codepoint is None:
            break
        decoded.append(codepoint)
    assert decoded == [ord(c) for c in text]
    assert pos == len(data)


def test_iterate_stops_at_zero_byte():
    data = b"ab\x00cd"
    assert utf.iterate(data, 2) == (None, 2)


def test_iterate_at_end():
    assert utf.iterate(b"xy", 2) == (None, 2)


@pytest.mark.parametrize("data", [b"\x80", b"\xc3", b"\xe2\x82", b"\xed\xa0\x80"])
def test_iterate_rejects_invalid(data):
    with pytest.raises(ValueError):
        utf.iterate(data, 0)


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"plain ascii",
        "caf\u00e9 \u20ac \U0001f600".encode("utf-8"),
        b"nul\x00inside",
        b"\xc3",
        b"\xe2\x82",
        b"\xc0\xaf",
        b"\xed\xa0\x80",
        b"\xf4\x90\x80\x80",
        b"\xff",
        b"ok\x80",
    ],
)
def test_check_string_agrees_with_strict_decoder(data):
    try:
        data.decode("utf-8")
        expected = True
    except UnicodeDecodeError:
        expected = False
    assert utf.check_string(data) is expected