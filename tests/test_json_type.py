import pytest

from boiltypes.json_type import JSON


def test_json_string():
    assert str(JSON("hello")) == "hello"


def test_json_unmarshal():
    result = JSON('{"Name":"hi","Age":15}').unmarshal()
    assert result["Name"] == "hi"
    assert result["Age"] == 15


def test_json_marshal():
    j = JSON.marshal({"Name": "hi", "Age": 15})
    assert str(j) == '{"Name":"hi","Age":15}'


def test_json_marshal_escapes_html():
    assert JSON.marshal("<a&b>") == b'"\\u003ca\\u0026b\\u003e"'


def test_json_marshal_rejects_nan():
    with pytest.raises(ValueError):
        JSON.marshal(float("nan"))


def test_json_unmarshal_json():
    j = JSON.unmarshal_json(b'"hi"')
    assert str(j) == '"hi"'


def test_json_marshal_json():
    assert JSON('"hi"').marshal_json() == b'"hi"'


def test_json_value():
    j = JSON('{"Name":"hi","Age":15}')
    assert j.value() == bytes(j)


def test_json_value_trims_whitespace():
    assert JSON(' [1, 2] \n').value() == b"[1, 2]"


@pytest.mark.parametrize("text", ["", "{", "NaN", "[1,]"])
def test_json_value_invalid(text):
    with pytest.raises(ValueError):
        JSON(text).value()


def test_json_scan():
    assert JSON.scan('"hello"') == b'"hello"'
    assert JSON.scan(b'"hello"') == b'"hello"'


def test_json_scan_incompatible():
    with pytest.raises(TypeError, match="incompatible type for json"):
        JSON.scan(12)


def test_json_marshal_round_trip():
    obj = {"a": [1, 2, {"b": None}], "c": "é"}
    assert JSON.marshal(obj).unmarshal() == obj