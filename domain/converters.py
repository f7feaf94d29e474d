"""
Type Conversion Utilities for Domain Model Factories

Null-aware conversions used by the from_row() factories in domain.models.
Unlike sentinel defaults, a null column stays None all the way into the
domain object, so a station literally named "null" or a price of 0 is never
confused with a missing value.

Usage:
    ```python
    from domain.converters import optional_float, optional_str, parse_flag

    price = optional_float(row.get('avg_buy_price'))  # None if null
    name = optional_str(row.get('station_name'))      # None if null
    mapped = parse_flag(row.get('was_mapped'))        # True/False/None
    ```
"""

import pandas as pd

from domain.exceptions import FieldParseError

_TRUE_STRINGS = frozenset({"true"})
_FALSE_STRINGS = frozenset({"false"})


def is_null(value) -> bool:
    """True for None, NaN, pd.NA and NaT."""
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict, set)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def optional_float(value, integer: bool = False) -> float | None:
    """
    Convert value to float, or None if null.

    Args:
        value: Value to convert (can be any type including pd.NA)
        integer: Truncate towards zero before returning

    Examples:
        >>> optional_float(3.5)
        3.5
        >>> optional_float(None) is None
        True
        >>> optional_float(150.9, integer=True)
        150.0
    """
    if is_null(value):
        return None
    result = float(value)
    if integer:
        result = float(int(result))
    return result


def optional_int(value) -> int | None:
    """Convert value to int, or None if null."""
    if is_null(value):
        return None
    return int(value)


def optional_str(value) -> str | None:
    """Convert value to str, or None if null."""
    if is_null(value):
        return None
    return str(value)


def parse_flag(value) -> bool | None:
    """
    Parse a discovery-state flag.

    Native booleans and 0/1 integers pass through; "true"/"false" text is
    parsed case-insensitively after trimming. Null stays None.

    Raises:
        FieldParseError: the value is present but is not a recognisable flag
    """
    if is_null(value):
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if value in (0, 1):
            return bool(value)
        raise FieldParseError(f"not a flag: {value!r}")
    if hasattr(value, "item"):
        # numpy scalar
        return parse_flag(value.item())
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise FieldParseError(f"not a flag: {value!r}")
