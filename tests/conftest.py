"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from quotesmith.config import Settings
from quotesmith.ops import DownloadStore, RemediationSession, RowSet
from quotesmith.parsing import ColumnMapping, ParsedRow


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with limits enforced and small test values."""
    return Settings(
        host="127.0.0.1",
        port=8000,
        debug=False,
        cors_allow_origins=["*"],
        admin_mode=False,
        max_rows=100,
        max_file_size_mb=2,
        download_ttl_seconds=600,
    )


@pytest.fixture
def column_mapping() -> ColumnMapping:
    return ColumnMapping(
        part_number="Part #",
        quantity="Qty",
        description="Description",
        unit_price="Price",
        unit_of_measure="UoM",
        notes="Notes",
    )


@pytest.fixture
def raw_rows() -> list[dict]:
    """Raw rows as decoded from a quote spreadsheet."""
    return [
        {"Part #": "ABC-100", "Qty": "1,000", "Description": "Bolt", "Price": "$1.50", "UoM": "EA"},
        {"Part #": "abc-100 ", "Qty": 5, "Description": "Bolt again", "Price": 1.5, "UoM": "ea"},
        {"Part #": "", "Qty": "", "Description": "Unknown item", "Price": "", "UoM": ""},
        {"Part #": "XYZ-9", "Qty": "20,000", "Description": "Wire", "Price": "(12.00)", "UoM": "Reel"},
    ]


@pytest.fixture
def parsed_rows() -> list[ParsedRow]:
    """Rows 2-5; row 3 has no quantity, row 4 has quantity 0."""
    return [
        ParsedRow(row_number=2, part_number="A-1", quantity=3, description="Bolt", unit_of_measure="EA"),
        ParsedRow(row_number=3, part_number="A-2", quantity=None, description="Nut", unit_price=0.25),
        ParsedRow(row_number=4, part_number="A-3", quantity=0, description="Washer", notes="check"),
        ParsedRow(row_number=5, part_number="A-4", quantity=10, description="Screw"),
    ]


@pytest.fixture
def row_set(parsed_rows) -> RowSet:
    return RowSet(parsed_rows)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def download_store(clock) -> DownloadStore:
    return DownloadStore(ttl_seconds=600, clock=clock)


@pytest.fixture
def session(parsed_rows, column_mapping, download_store) -> RemediationSession:
    return RemediationSession(
        rows=parsed_rows,
        column_mapping=column_mapping,
        store=download_store,
        file_name="quote.xlsx",
    )
