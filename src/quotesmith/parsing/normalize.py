"""Cell value normalizers for quantities and prices.

Both normalizers are total: any value that cannot be read as a number
yields None instead of raising.
"""

import math
import re
from typing import Any, Optional

# Leading numeric prefix, so "12 pcs" reads as 12 and "abc" reads as nothing
NUMERIC_PREFIX_PATTERN = re.compile(
    r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)

QUANTITY_NOISE_PATTERN = re.compile(r"[,\s]")
PRICE_NOISE_PATTERN = re.compile(r"[$€£¥₩,\s]")
# Accounting negatives "(100)" are stripped, not negated
PARENS_PATTERN = re.compile(r"[()]")


def parse_float(text: str) -> Optional[float]:
    """Parse the leading floating-point number in text."""
    match = NUMERIC_PREFIX_PATTERN.match(text.lstrip())
    if not match:
        return None
    token = match.group(0)
    if token.lstrip("+-") == "Infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def parse_quantity(value: Any) -> Optional[float]:
    """Normalize a quantity cell, treating commas as thousands separators."""
    if _is_blank(value):
        return None
    return parse_float(QUANTITY_NOISE_PATTERN.sub("", str(value)))


def parse_price(value: Any) -> Optional[float]:
    """Normalize a price cell, stripping currency symbols and parentheses."""
    if _is_blank(value):
        return None
    text = PRICE_NOISE_PATTERN.sub("", str(value))
    text = PARENS_PATTERN.sub("", text)
    return parse_float(text)


def coerce_float(value: Any) -> float:
    """Coerce a user-supplied value to float; NaN when unreadable."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    parsed = parse_float(str(value))
    return math.nan if parsed is None else parsed


def format_number(value: Optional[float]) -> str:
    """Render a number the way it appears in a sheet: 20000, not 20000.0."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
