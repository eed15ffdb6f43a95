from datetime import datetime, timezone

import pytest

from boiltypes.textformat import encode, encode_bytea, parse_bytea
from boiltypes.timestamps import format_timestamp


def test_parse_bytea_hex_values():
    assert parse_bytea(b"\\xfeff") == b"\xfe\xff"
    assert parse_bytea(b"\\xdead") == b"\xde\xad"
    assert parse_bytea("\\xbeef") == b"\xbe\xef"


def test_parse_bytea_bad_octal():
    with pytest.raises(ValueError, match="could not parse bytea value"):
        parse_bytea(b"\\abc")


def test_parse_bytea_short_sequence():
    with pytest.raises(ValueError, match="invalid bytea sequence"):
        parse_bytea(b"ab\\1")


def test_parse_bytea_bad_hex():
    with pytest.raises(ValueError):
        parse_bytea(b"\\xabc")
    with pytest.raises(ValueError):
        parse_bytea(b"\\xzz")


def test_parse_bytea_plain_text_unchanged():
    assert parse_bytea(b"hello world") == b"hello world"


def test_encode_bytea_hex():
    assert encode_bytea(b"\xde\xad\xbe\xef", 90000) == b"\\xdeadbeef"
    assert encode_bytea(b"", 90000) == b"\\x"


def test_encode_bytea_escape():
    assert encode_bytea(b"abc", 0) == b"abc"
    assert encode_bytea(b"\\", 0) == b"\\\\"
    assert encode_bytea(b"\x00", 0) == b"\\000"


@pytest.mark.parametrize("version", [0, 80400, 90000, 120000])
def test_bytea_round_trip_all_bytes(version):
    data = bytes(range(256))
    assert parse_bytea(encode_bytea(data, version)) == data


def test_escape_output_is_printable_ascii():
    encoded = encode_bytea(bytes(range(256)), 0)
    assert all(0x20 <= b <= 0x7E for b in encoded)


def test_encode_ints_and_bools():
    assert encode(1) == b"1"
    assert encode(12) == b"12"
    assert encode(True) == b"true"
    assert encode(False) == b"false"


def test_encode_floats():
    assert encode(1.2) == b"1.2"
    assert encode(3.456) == b"3.456"


@pytest.mark.parametrize("x", [1e20, 1.5e-7, 3.0, -0.25, 123456.789])
def test_encode_float_round_trip_without_exponent(x):
    text = encode(x)
    assert b"e" not in text.lower()
    assert float(text) == x


def test_encode_strings_and_bytes():
    assert encode("abc") == b"abc"
    assert encode(b"abc") == b"abc"
    assert encode("abc", bytea=True, server_version=90000) == encode_bytea(b"abc", 90000)
    assert encode(b"\x01", bytea=True) == encode_bytea(b"\x01", 0)


def test_encode_datetime_uses_timestamp_format():
    t = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert encode(t) == format_timestamp(t).encode("ascii")


def test_encode_unknown_type():
    with pytest.raises(TypeError, match="unknown type"):
        encode(object())