import pytest

from boiltypes.byte import Byte


def test_byte_string():
    assert str(Byte(ord("b"))) == "b"


def test_byte_unmarshal():
    assert Byte.unmarshal_json(b'"b"') == Byte(ord("b"))
    assert Byte.unmarshal_json('"z"').code == ord("z")


def test_byte_unmarshal_too_long():
    with pytest.raises(ValueError, match="greater than one"):
        Byte.unmarshal_json(b'"ab"')


def test_byte_unmarshal_not_string():
    with pytest.raises(ValueError):
        Byte.unmarshal_json(b"5")


def test_byte_marshal():
    assert Byte(ord("b")).marshal_json() == b'"b"'


def test_byte_json_round_trip():
    original = Byte(ord("Q"))
    assert Byte.unmarshal_json(original.marshal_json()) == original


def test_byte_value():
    assert Byte(ord("b")).value() == b"b"


@pytest.mark.parametrize("src", ["b", b"b", "bcd", 98])
def test_byte_scan(src):
    assert Byte.scan(src) == Byte(ord("b"))


def test_byte_scan_incompatible():
    with pytest.raises(TypeError, match="incompatible type for byte"):
        Byte.scan(1.5)


def test_byte_out_of_range():
    with pytest.raises(ValueError):
        Byte(256)


@pytest.mark.parametrize("drawn, expected", [(10, 75), (125, 70), (-30, 35)])
def test_byte_randomize(drawn, expected):
    assert Byte.randomize(lambda: drawn, "", False) == Byte(expected)