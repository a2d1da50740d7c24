"""
Utility functions

Boundary parsing for untyped values arriving from the interaction layer
or from input tables.
"""

from __future__ import annotations
import math
from typing import Any, Optional


def parse_grid_int(value: Any) -> Optional[int]:
    """
    Parse a grid coordinate or size into an integer

    Accepts ints, integral floats and strings with a leading integer
    ("3", " 4 ", "2cols"). Booleans, NaN and anything without a leading
    integer yield None.

    Args:
        value: Raw value from the interaction layer or an input table

    Returns:
        Parsed integer, or None if the value is not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)

    text = str(value).strip()
    digits = ''
    for i, ch in enumerate(text):
        if ch.isdigit() or (i == 0 and ch in '+-'):
            digits += ch
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return None


def parse_size(value: Any, default: int) -> int:
    """
    Parse an item size, falling back to the configured default

    Non-numeric, zero and negative sizes are replaced by the default.

    Args:
        value: Raw size value
        default: Configured default size for this axis

    Returns:
        A size >= 1
    """
    size = parse_grid_int(value)
    if size is None or size < 1:
        return default
    return size


def parse_position(value: Any) -> Optional[int]:
    """
    Parse a row or column; None when the item is unpositioned

    Negative positions are kept here and clamped by the engine.
    """
    return parse_grid_int(value)
