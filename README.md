# boiltypes

This package provides value types that move data between Python and
PostgreSQL's text formats. Each type has two conversions:

- `value()` returns the text the database expects.
- `scan()` builds a value from what the database returns.

A value that cannot be converted raises an exception, usually
`ValueError` or `TypeError`.

The package has no dependencies outside the standard library.

## What is included

- `boiltypes.arrays` provides one-dimensional arrays: `BoolArray`,
  `BytesArray`, `Float64Array`, `Int64Array`, `StringArray` and
  `DecimalArray`. Each is a `list` subclass. Its `scan()` returns `None`
  for a database NULL.
- `boiltypes.generic_array` provides two things:
  - `GenericArray` handles arrays of any element type.
    - For writing, `value()` accepts nested lists and tuples of any
      depth. An element that has its own `value()` method is converted
      through that method. An element may also declare an
      `array_delimiter`.
    - For reading, `scan()` accepts a one-dimensional array only. It
      builds the elements with the `scan` classmethod of
      `element_type`. The number of elements can be fixed with `length`.
  - `array()` picks the best typed array for a list and wraps anything
    else in a `GenericArray`.
- `boiltypes.array_text` is the array text parser. It provides
  `parse_array`, `scan_linear_array` and `quote_array_bytes`, and raises
  `ArrayParseError` on bad input.
- `boiltypes.textformat` provides `encode` for scalar parameters, plus
  the `bytea` codecs `parse_bytea` and `encode_bytea`. These handle both
  the hex form and the escape form.
- `boiltypes.timestamps` provides `parse_timestamp`, `parse_ts`,
  `format_timestamp` and `format_ts` for PostgreSQL's timestamp text.
  - `enable_infinity_ts(negative, positive)` maps `-infinity` and
    `infinity` to the datetimes you choose.
  - `disable_infinity_ts()` turns that mapping off again.
- `boiltypes.decimal_types` provides two decimal types. Both refuse NaN
  and infinity in `value()`.
  - `Decimal` refuses NULL.
  - `NullDecimal` accepts NULL, held as `big is None`.
- `boiltypes.hstore` provides `HStore`, a `dict` whose values may be
  `None`, and `hstore_quote`.
- `boiltypes.json_type` provides `JSON`, raw JSON text held as `bytes`.
  Its `value()` raises `ValueError` for invalid JSON.
- `boiltypes.byte` provides `Byte`, a single byte that is stored as a
  one-character string.
- `boiltypes.pgeo.shapes` provides the geometric types `Point`, `Line`,
  `Lseg`, `Box`, `Path`, `Polygon` and `Circle`. It also provides
  `parse_point`, `parse_points`, `format_point` and `format_points`.

## Installing

```
pip install .
```

## Examples

```python
from boiltypes.arrays import Int64Array, StringArray

Int64Array([1, 2, 3]).value()          # '{1,2,3}'
StringArray.scan('{"a\\\\b","c d"}')   # ['a\\b', 'c d']
```

```python
from boiltypes.array_text import parse_array

parse_array(b"{{a,b},{c,d}}", b",")    # ([2, 2], [b'a', b'b', b'c', b'd'])
```

```python
from boiltypes.generic_array import GenericArray

GenericArray([[1, 2], [3, 4]]).value() # '{{1,2},{3,4}}'
```

```python
from boiltypes.hstore import HStore

HStore.scan('"a"=>"1","b"=>NULL')      # {'a': '1', 'b': None}
```

```python
from boiltypes.pgeo.shapes import Point, Circle

Point.scan("(1.5,-2)")                 # Point(x=1.5, y=-2.0)
Circle.scan("<(0,0),3>").value()       # '<(0,0),3>'
```

```python
from boiltypes.decimal_types import NullDecimal

NullDecimal.scan(None).is_zero()       # True
NullDecimal.scan("3.14").value()       # '3.14'
```

Most types also support test-data generation through
`randomize(next_int, field_type, should_be_null)`. It builds a value
from `next_int`, a function that returns integers.

## What it does not do

- The geometric types have no NULL-aware variants. When
  `Point.scan(None)` or one of its siblings is given a NULL, it returns
  a default shape: the origin, zero coefficients, or an empty path or
  polygon. It does not mark the value as missing.
- The package does not connect to a database. It only converts values
  to and from text.

## Running the tests

```
pip install .[test]
pytest
```