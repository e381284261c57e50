"""Index-stable container for parsed rows."""

from typing import Iterable, Iterator, Optional

from ..parsing.models import ParsedRow


class RowNotFoundError(LookupError):
    """Raised when a row number is not present in a RowSet."""

    def __init__(self, row_number: int):
        self.row_number = row_number
        super().__init__(f"Row {row_number} not found in the data.")


class RowSet:
    """Ordered, read-only collection of rows keyed by row number.

    Every edit returns a new RowSet; rows that were not touched are
    shared with the previous set.
    """

    def __init__(self, rows: Iterable[ParsedRow] = ()):
        self._rows: dict[int, ParsedRow] = {row.row_number: row for row in rows}

    @classmethod
    def _wrap(cls, rows: dict[int, ParsedRow]) -> "RowSet":
        instance = cls()
        instance._rows = rows
        return instance

    def __iter__(self) -> Iterator[ParsedRow]:
        return iter(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, row_number: object) -> bool:
        return row_number in self._rows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RowSet):
            return NotImplemented
        return list(self._rows.items()) == list(other._rows.items())

    def get(self, row_number: int) -> ParsedRow:
        """Return the row with this number or raise RowNotFoundError."""
        try:
            return self._rows[row_number]
        except KeyError:
            raise RowNotFoundError(row_number) from None

    def find(self, row_number: int) -> Optional[ParsedRow]:
        return self._rows.get(row_number)

    def replace(self, row: ParsedRow) -> "RowSet":
        """Swap in a new version of an existing row, keeping its position."""
        if row.row_number not in self._rows:
            raise RowNotFoundError(row.row_number)
        rows = dict(self._rows)
        rows[row.row_number] = row
        return RowSet._wrap(rows)

    def replace_many(self, replacements: Iterable[ParsedRow]) -> "RowSet":
        rows = dict(self._rows)
        for row in replacements:
            if row.row_number not in rows:
                raise RowNotFoundError(row.row_number)
            rows[row.row_number] = row
        return RowSet._wrap(rows)

    def without(self, row_numbers: Iterable[int]) -> "RowSet":
        doomed = set(row_numbers)
        return RowSet._wrap(
            {number: row for number, row in self._rows.items() if number not in doomed}
        )

    def to_list(self) -> list[ParsedRow]:
        return list(self._rows.values())

    @property
    def row_numbers(self) -> list[int]:
        return list(self._rows)
