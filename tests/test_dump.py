import io
import json

import pytest

from janscompat.dump import (
    DumpFlags,
    dump_file,
    dumpf,
    dumps,
    encode_string,
    indent,
)
from janscompat.value import (
    JsonArray,
    JsonError,
    JsonInteger,
    JsonObject,
    JsonReal,
    JsonString,
    json_false,
    json_null,
    json_true,
    string_nocheck,
)


def _array(*members):
    result = JsonArray()
    for member in members:
        result.append(member)
    return result


def _sample():
    inner = _array(JsonInteger(1), JsonReal(2.5), json_null())
    obj = JsonObject()
    obj.set("name", JsonString("caf\u00e9"))
    obj.set("flags", _array(json_true(), json_false()))
    obj.set("nested", inner)
    obj.set("count", JsonInteger(-7))
    return obj


_SAMPLE_PY = {
    "name": "caf\u00e9",
    "flags": [True, False],
    "nested": [1, 2.5, None],
    "count": -7,
}


def test_compact_array_matches_format():
    assert dumps(_array(JsonInteger(1), JsonInteger(2)), DumpFlags.COMPACT) == "[1,2]"


def test_default_array_round_trips():
    text = dumps(_array(JsonInteger(1), JsonInteger(2)))
    assert json.loads(text) == [1, 2]
    assert "," in text


@pytest.mark.parametrize(
    "flags",
    [
        0,
        DumpFlags.COMPACT,
        DumpFlags.ENSURE_ASCII,
        DumpFlags.SORT_KEYS,
        DumpFlags.PRESERVE_ORDER,
        indent(2) | DumpFlags.SORT_KEYS,
        indent(4) | DumpFlags.ENSURE_ASCII,
    ],
)
def test_round_trip_with_flags(flags):
    assert json.loads(dumps(_sample(), flags)) == _SAMPLE_PY


def test_empty_containers():
    assert json.loads(dumps(JsonArray())) == []
    assert json.loads(dumps(JsonObject(), indent(4))) == {}
    assert "\n" not in dumps(JsonObject(), indent(4))


def test_compact_object_has_no_spaces():
    text = dumps(_sample(), DumpFlags.COMPACT)
    assert " " not in text.replace("caf\u00e9", "")
    assert json.loads(text) == _SAMPLE_PY


def test_indent_layout():
    assert dumps(_array(JsonInteger(1)), indent(3)).splitlines() == ["[", "   1", "]"]


def test_indent_nesting_depth():
    text = dumps(_array(_array(JsonInteger(5))), indent(2))
    lines = text.splitlines()
    assert any(line == " " * 4 + "5" for line in lines)
    assert json.loads(text) == [[5]]


def test_sort_keys_orders_members():
    obj = JsonObject()
    for key in ["zeta", "alpha", "mid", "beta"]:
        obj.set(key, JsonInteger(len(key)))
    pairs = json.loads(dumps(obj, DumpFlags.SORT_KEYS), object_pairs_hook=list)
    assert [key for key, _ in pairs] == sorted(["zeta", "alpha", "mid", "beta"])


def test_preserve_order_keeps_insertion_order():
    keys = ["one", "two", "three", "four", "five", "six", "seven"]
    obj = JsonObject()
    for position, key in enumerate(keys):
        obj.set(key, JsonInteger(position))
    pairs = json.loads(dumps(obj, DumpFlags.PRESERVE_ORDER), object_pairs_hook=list)
    assert [key for key, _ in pairs] == keys
    assert [value for _, value in pairs] == list(range(len(keys)))


def test_unsorted_output_follows_table_order():
    obj = _sample()
    pairs = json.loads(dumps(obj), object_pairs_hook=list)
    assert [key for key, _ in pairs] == [key for key, _ in obj.items()]


def test_real_always_has_fraction_or_exponent():
    for number in (1.0, -3.0, 0.1, 1e300, 123456789.0):
        text = dumps(_array(JsonReal(number)))
        decoded = json.loads(text)[0]
        assert isinstance(decoded, float)
        assert decoded == number


def test_integer_round_trip():
    values = [0, -1, 2147483647, -2147483648]
    array = _array(*(JsonInteger(v) for v in values))
    assert json.loads(dumps(array)) == values


@pytest.mark.parametrize(
    "text",
    ["plain", 'quote " and \\ slash', "\b\f\n\r\t", "\x01\x1f", "caf\u00e9 \U0001F600", ""],
)
def test_encode_string_round_trip(text):
    assert json.loads(encode_string(text)) == text
    encoded = encode_string(text, ensure_ascii=True)
    assert encoded.isascii()
    assert json.loads(encoded) == text


def test_non_bmp_becomes_surrogate_pair():
    assert encode_string("\U0001F600", ensure_ascii=True) == '"\\ud83d\\ude00"'


def test_non_ascii_kept_raw_by_default():
    assert "\u00e9" in encode_string("\u00e9")
    assert "\u00e9" not in encode_string("\u00e9", ensure_ascii=True)


def test_encode_string_stops_at_zero_byte():
    assert encode_string("ab\x00cd") == encode_string("ab")


def test_encode_string_rejects_invalid_utf8():
    with pytest.raises(JsonError):
        encode_string(b"ok\xff")


def test_invalid_string_member_fails_dump():
    array = _array(string_nocheck(b"bad\xc3"))
    with pytest.raises(JsonError):
        dumps(array)


@pytest.mark.parametrize(
    "value", [JsonInteger(1), JsonString("x"), JsonReal(1.5), json_null(), json_true()]
)
def test_only_containers_at_top_level(value):
    with pytest.raises(JsonError):
        dumps(value)


def test_circular_reference_detected():
    first = JsonArray()
    second = JsonArray()
    first.append(second)
    second.append(first)
    with pytest.raises(JsonError):
        dumps(first)


def test_shared_member_is_not_circular():
    shared = _array(JsonInteger(3))
    outer = _array(shared, shared)
    assert json.loads(dumps(outer)) == [[3], [3]]


def test_dumpf_matches_dumps():
    stream = io.StringIO()
    dumpf(_sample(), stream, DumpFlags.SORT_KEYS)
    assert stream.getvalue() == dumps(_sample(), DumpFlags.SORT_KEYS)


def test_dumpf_rejects_scalar_without_writing():
    stream = io.StringIO()
    with pytest.raises(JsonError):
        dumpf(JsonInteger(4), stream)
    assert stream.getvalue() == ""


def test_dump_file_writes_document(tmp_path):
    path = tmp_path / "out.json"
    dump_file(_sample(), path, indent(2))
    assert json.loads(path.read_text(encoding="utf-8")) == _SAMPLE_PY
    assert path.read_text(encoding="utf-8") == dumps(_sample(), indent(2))


def test_dump_file_rejects_scalar(tmp_path):
    with pytest.raises(JsonError):
        dump_file(JsonString("x"), tmp_path / "scalar.json")