"""Row parsing: value normalizers and the row materializer."""

from .models import ColumnMapping, ParsedRow, RawRow, RowField
from .normalize import parse_quantity, parse_price, parse_float, coerce_float, format_number
from .materializer import MaterializeResult, materialize_row, materialize_rows

__all__ = [
    "ColumnMapping",
    "ParsedRow",
    "RawRow",
    "RowField",
    "parse_quantity",
    "parse_price",
    "parse_float",
    "coerce_float",
    "format_number",
    "MaterializeResult",
    "materialize_row",
    "materialize_rows",
]
