"""QuoteSmith - risk detection for procurement quote spreadsheets."""

__version__ = "0.1.0"
