import pytest

from boiltypes.hstore import HStore, hstore_quote


def test_quote_null():
    assert hstore_quote(None) == "NULL"


def test_quote_escapes_and_round_trips():
    key = 'q"uote\\slash'
    quoted = hstore_quote(key)
    assert quoted.startswith('"') and quoted.endswith('"')
    assert HStore.scan(quoted + "=>" + hstore_quote("v")) == {key: "v"}


def test_quote_rejects_non_strings():
    with pytest.raises(TypeError):
        hstore_quote(5)


def test_scan_none():
    assert HStore.scan(None) is None


def test_scan_rejects_other_types():
    with pytest.raises(TypeError):
        HStore.scan(42)


def test_value_single_pair():
    assert HStore({"a": "1"}).value() == b'"a"=>"1"'


def test_value_null_entry():
    assert HStore({"a": None}).value() == b'"a"=>NULL'


def test_scan_pairs_with_null():
    result = HStore.scan(b'"a"=>"1", "b"=>NULL')
    assert result == {"a": "1", "b": None}


def test_scan_unquoted_null_is_case_insensitive():
    assert HStore.scan(b'"k"=>nUlL') == {"k": None}


def test_scan_quoted_null_stays_text():
    assert HStore.scan('"k"=>"NULL"') == {"k": "NULL"}


def test_scan_empty():
    assert HStore.scan(b"") == {}
    assert HStore().value() == b""


@pytest.mark.parametrize(
    "mapping",
    [
        {"x": "y"},
        {"a": "1", "b": None, "c": ""},
        {'with "quotes"': "back\\slash", "space key": "comma, value"},
        {"arrow=>key": "value>with>arrows", "null": "null"},
        {"unicode": "h\u00e9llo"},
    ],
)
def test_round_trip(mapping):
    encoded = HStore(mapping).value()
    decoded = HStore.scan(encoded)
    assert decoded == mapping
    assert isinstance(decoded, HStore)