"""
Grid model

Sparse position index for placed items. Only the top-left cell of each
item is indexed; footprint containment is left to the PlacementEngine.
"""
from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Tuple
import logging

import numpy as np

from .types import GridItem

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class GridModel:
    """
    Owned collection of items plus a (row, col) -> uid position index

    An empty cell is a missing key. Each item is indexed at exactly one
    cell at a time.
    """

    def __init__(self) -> None:
        self._items: Dict[str, GridItem] = {}
        self._positions: Dict[Cell, str] = {}
        self._cells: Dict[str, Cell] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, GridItem) and self._items.get(item.uid) is item

    def __iter__(self) -> Iterator[GridItem]:
        return iter(self.items())

    def get_cell(self, row: int, col: int) -> Optional[GridItem]:
        """Item whose top-left is at (row, col), or None"""
        uid = self._positions.get((row, col))
        if uid is None:
            return None
        return self._items[uid]

    def set_cell(self, row: int, col: int, item: GridItem) -> None:
        """
        Index item at (row, col)

        A previous occupant of the key is dropped from the grid, and the
        item's own previous key (if any) is released.
        """
        key = (row, col)
        previous_uid = self._positions.get(key)
        if previous_uid is not None and previous_uid != item.uid:
            logger.debug(f"Cell {key} reassigned from {previous_uid} to {item.uid}")
            self._items.pop(previous_uid, None)
            self._cells.pop(previous_uid, None)

        old_key = self._cells.get(item.uid)
        if old_key is not None and old_key != key:
            del self._positions[old_key]

        self._items[item.uid] = item
        self._positions[key] = item.uid
        self._cells[item.uid] = key

    def clear_cell(self, row: int, col: int) -> Optional[GridItem]:
        """Remove and return the item indexed at (row, col)"""
        uid = self._positions.pop((row, col), None)
        if uid is None:
            return None
        self._cells.pop(uid, None)
        return self._items.pop(uid)

    def locate(self, item: GridItem) -> Optional[Cell]:
        """Cell the item is indexed at, or None if it is not in the grid"""
        if item not in self:
            return None
        return self._cells[item.uid]

    def items(self) -> List[GridItem]:
        """Snapshot of placed items, top-to-bottom then left-to-right"""
        return [self._items[self._positions[key]] for key in sorted(self._positions)]

    def max_row(self) -> int:
        """Highest indexed row, -1 when empty"""
        if not self._positions:
            return -1
        return max(row for row, _ in self._positions)

    def occupancy(self, columns: int, rows: Optional[int] = None) -> np.ndarray:
        """
        Count of items covering each cell

        Args:
            columns: Grid column count
            rows: Number of rows to include (default: up to the lowest footprint)

        Returns:
            Integer matrix of shape (rows, columns); values above 1 mark overlap
        """
        if rows is None:
            rows = max((item.row + item.size_y for item in self._items.values()), default=0)
        matrix = np.zeros((rows, columns), dtype=int)
        for (row, col), uid in self._positions.items():
            item = self._items[uid]
            matrix[row:row + item.size_y, col:col + item.size_x] += 1
        return matrix
