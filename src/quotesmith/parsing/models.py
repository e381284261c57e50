"""Data models for quote line items and column mappings."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# A raw spreadsheet row: source column name -> untyped cell value
RawRow = dict[str, Any]


class ColumnMapping(BaseModel):
    """Assignment of semantic fields to source column names.

    A field is None when no source column matched it.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    part_number: Optional[str] = None
    quantity: Optional[str] = None
    description: Optional[str] = None
    unit_price: Optional[str] = None
    unit_of_measure: Optional[str] = None
    notes: Optional[str] = None
    terms: Optional[str] = None
    header_row: int = 1  # 1-indexed


class ParsedRow(BaseModel):
    """A normalized quote line item.

    Rows are never changed in place; edits produce a new row with the
    same row_number.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    row_number: int
    part_number: str = ""
    quantity: Optional[float] = None
    description: str = ""
    unit_price: Optional[float] = None
    unit_of_measure: str = ""
    notes: str = ""
    raw_data: dict[str, Any] = Field(default_factory=dict)


class RowField(str, Enum):
    """Editable fields of a ParsedRow, by their external names."""

    PART_NUMBER = "partNumber"
    QUANTITY = "quantity"
    DESCRIPTION = "description"
    UNIT_PRICE = "unitPrice"
    UNIT_OF_MEASURE = "unitOfMeasure"
    NOTES = "notes"

    @property
    def attribute(self) -> str:
        """Attribute name on ParsedRow."""
        return _ROW_FIELD_ATTRIBUTES[self]

    @property
    def is_numeric(self) -> bool:
        return self in (RowField.QUANTITY, RowField.UNIT_PRICE)

    @property
    def empty_value(self) -> Any:
        return None if self.is_numeric else ""


_ROW_FIELD_ATTRIBUTES = {
    RowField.PART_NUMBER: "part_number",
    RowField.QUANTITY: "quantity",
    RowField.DESCRIPTION: "description",
    RowField.UNIT_PRICE: "unit_price",
    RowField.UNIT_OF_MEASURE: "unit_of_measure",
    RowField.NOTES: "notes",
}
