"""
Type definitions for GridPacker

Common types used throughout the package for type checking and documentation.
"""

from __future__ import annotations
from typing import TypedDict, Literal, List, Optional, Tuple, Union
from pathlib import Path

# Type aliases
PathLike = Union[str, Path]
"""File path as string or Path object"""

RoundingMode = Literal['round', 'ceil', 'floor']
"""How pixel lengths are converted into whole grid units"""

Axis = Literal['x', 'y']
"""Size axis: 'x' for columns, 'y' for rows"""

SizeOption = Union[int, float, Literal['auto']]
"""Pixel size or 'auto' (derived from the container)"""

RowHeightOption = Union[int, float, Literal['match']]
"""Pixel row height or 'match' (same as column width)"""

Margins = Tuple[int, int]
"""Margins as (top, left) in pixels"""

GridEventName = Literal['draggable-changed', 'resizable-changed', 'grid-resized']
"""Notifications emitted to grid observers"""


# Structured data types

class ItemSnapshot(TypedDict):
    """Persisted form of an item: position and size only"""
    row: Optional[int]
    col: Optional[int]
    sizeX: int
    sizeY: int


class LayoutSnapshot(TypedDict):
    """Full layout report written by the JSON writer"""
    gridHeight: int
    columns: int
    items: List[ItemSnapshot]
