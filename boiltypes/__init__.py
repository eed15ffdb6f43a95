"""PostgreSQL-flavoured column value types: arrays, decimals, hstore, JSON, bytes, timestamps and geometric shapes."""

__version__ = "0.1.0"