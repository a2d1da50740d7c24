"""
Placement Engine for GridPacker
Collision detection and resolution, auto-placement, gravity and height

Algorithm summary:
- Items are indexed by their top-left cell only; the item covering a cell
  is found by scanning up and to the left for a stored item large enough
  to reach it.
- Placing an item pushes every item it overlaps down below it, column by
  column, preserving their vertical order. Pushed items may displace
  others in turn.
- A gravity sweep floats every item up as far as it can go, in a single
  top-to-bottom, left-to-right pass.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, Union
import logging

import pandas as pd

from ..config import GridConfig
from .grid import GridModel
from .types import GridItem

logger = logging.getLogger(__name__)

Exclusion = Union[GridItem, Iterable[GridItem], None]


class GridFullError(RuntimeError):
    """Raised when auto-placement finds no free slot within max_rows"""


def _excluded(item: GridItem, exclude: Sequence[GridItem]) -> bool:
    return any(item is other for other in exclude)


def _as_exclusion(exclude: Exclusion) -> Sequence[GridItem]:
    if exclude is None:
        return ()
    if isinstance(exclude, GridItem):
        return (exclude,)
    return tuple(exclude)


class PlacementEngine:
    """
    Places items on the grid and keeps them from overlapping

    All mutation of item position and size goes through this class.
    """

    def __init__(self, config: Optional[GridConfig] = None, grid: Optional[GridModel] = None) -> None:
        """
        Initialize placement engine

        Args:
            config: Grid configuration (uses defaults if None)
            grid: Grid model to operate on (a new empty one if None)
        """
        self.config: GridConfig = config or GridConfig()
        self.grid: GridModel = grid if grid is not None else GridModel()
        self.grid_height: int = self.config.min_rows

    # ============================================================
    # QUERIES
    # ============================================================

    def can_occupy(self, item: GridItem, row: int, col: int) -> bool:
        """Whether item fits at (row, col) within the grid bounds"""
        return row >= 0 and col >= 0 and col + item.size_x <= self.config.columns

    def get_item(self, row: int, col: int, exclude: Exclusion = None) -> Optional[GridItem]:
        """
        Find the item covering (row, col)

        Walks back from the queried cell over rows and columns; a stored item
        reaches the queried cell when its size covers the distance walked.

        Args:
            row: Row to look up
            col: Column to look up
            exclude: Item(s) to ignore

        Returns:
            Covering item, or None
        """
        excluded = _as_exclusion(exclude)
        size_y = 1
        for candidate_row in range(row, -1, -1):
            size_x = 1
            for candidate_col in range(col, -1, -1):
                item = self.grid.get_cell(candidate_row, candidate_col)
                if (item is not None and not _excluded(item, excluded)
                        and item.size_x >= size_x and item.size_y >= size_y):
                    return item
                size_x += 1
            size_y += 1
        return None

    def get_items(
        self,
        row: int,
        col: int,
        size_x: Optional[int] = None,
        size_y: Optional[int] = None,
        exclude: Exclusion = None
    ) -> List[GridItem]:
        """
        Distinct items intersecting a rectangle of cells

        A missing or zero size on either axis queries a single cell.

        Args:
            row: Top row of the queried rectangle
            col: Left column of the queried rectangle
            size_x: Rectangle width in columns
            size_y: Rectangle height in rows
            exclude: Item(s) to ignore

        Returns:
            Items in scan order, without duplicates
        """
        if not size_x or not size_y:
            size_x = size_y = 1
        excluded = _as_exclusion(exclude)

        found: List[GridItem] = []
        for h in range(size_y):
            for w in range(size_x):
                item = self.get_item(row + h, col + w, excluded)
                if item is not None and not _excluded(item, found):
                    found.append(item)
        return found

    # ============================================================
    # PLACEMENT
    # ============================================================

    def auto_set_item_position(self, item: GridItem) -> None:
        """
        Put item in the first free slot, scanning row-major

        Raises:
            GridFullError: if no slot exists within max_rows
        """
        for row in range(self.config.max_rows):
            for col in range(self.config.columns):
                if not self.get_items(row, col, item.size_x, item.size_y, item) and self.can_occupy(item, row, col):
                    logger.debug(f"Auto-placing {item.label} at ({row}, {col})")
                    self.put_item(item, row, col)
                    return
        raise GridFullError(
            f"Unable to place {item.label} ({item.size_x}x{item.size_y}): "
            f"no free slot within {self.config.max_rows} rows"
        )

    def put_items(self, items: Iterable[GridItem]) -> None:
        """Insert items one after another"""
        for item in items:
            self.put_item(item)

    def put_item(self, item: GridItem, row: Optional[int] = None, col: Optional[int] = None) -> None:
        """
        Insert or move a single item

        Without a row the item's own position is used; an unpositioned item
        is auto-placed. Out-of-bounds targets are clamped. Items overlapped
        at the target are pushed down below it.

        Args:
            item: Item to place
            row: Target row (optional)
            col: Target column (optional)
        """
        if row is None:
            row, col = item.row, item.col
            if row is None:
                self.auto_set_item_position(item)
                return
        if col is None:
            col = item.col if item.col is not None else 0

        columns = self.config.columns
        if item.size_x > columns:
            logger.warning(f"{item.label} is wider than the grid ({item.size_x} > {columns}); narrowing")
            item.size_x = columns

        if not self.can_occupy(item, row, col):
            col = min(columns - item.size_x, max(0, col))
            row = max(0, row)

        if item.old_row is not None:
            if item.old_row == row and item.old_col == col:
                item.row = row
                item.col = col
                return
            if self.grid.get_cell(item.old_row, item.old_col) is item:
                self.grid.clear_cell(item.old_row, item.old_col)

        item.old_row = item.row = row
        item.old_col = item.col = col

        self.move_overlapping_items(item)

        self.grid.set_cell(row, col, item)

    def move_overlapping_items(self, item: GridItem) -> None:
        """Push every item overlapping item down to just below it"""
        items = self.get_items(item.row, item.col, item.size_x, item.size_y, item)
        self.move_items_down(items, item.row + item.size_y)

    def move_items_down(self, items: Sequence[GridItem], row: int) -> None:
        """
        Move items down so the topmost one in each column starts at row

        Items in the same column keep their relative vertical order.
        """
        if not items:
            return

        top_rows: Dict[int, int] = {}
        for item in items:
            top_row = top_rows.get(item.col)
            if top_row is None or item.row < top_row:
                top_rows[item.col] = item.row

        for item in items:
            offset = row - top_rows[item.col]
            logger.debug(f"Pushing {item.label} down by {offset} row(s)")
            self.put_item(item, item.row + offset, item.col)

    def remove_item(self, item: GridItem) -> None:
        """Take item off the grid, then compact and update height"""
        cell = self.grid.locate(item)
        if cell is not None:
            self.grid.clear_cell(*cell)
        item.old_row = item.old_col = None

        self.float_items_up()
        self.update_height()

    def resize_item(self, item: GridItem, size_x: Optional[int] = None, size_y: Optional[int] = None) -> bool:
        """
        Commit a new size for item

        An unchanged size is not re-resolved. A changed size re-clamps the
        position, pushes overlapped items down, floats the grid and updates
        the height.

        Args:
            item: Item to resize
            size_x: New width in columns (unchanged if None)
            size_y: New height in rows (unchanged if None)

        Returns:
            True if the size changed and the grid was re-resolved
        """
        changed = False
        if size_x is not None:
            size_x = min(size_x, self.config.columns)
            changed |= not (item.size_x == size_x and item.old_size_x == size_x)
            item.old_size_x = item.size_x = size_x
        if size_y is not None:
            changed |= not (item.size_y == size_y and item.old_size_y == size_y)
            item.old_size_y = item.size_y = size_y

        if not changed or item not in self.grid:
            return changed

        if not self.can_occupy(item, item.row, item.col):
            self.put_item(item, item.row, item.col)
        self.move_overlapping_items(item)
        self.float_items_up()
        self.update_height(item.size_y if item.dragging else 0)
        return changed

    # ============================================================
    # GRAVITY
    # ============================================================

    def float_items_up(self) -> None:
        """
        Float every item up, in one top-to-bottom, left-to-right sweep

        Items floated earlier free space that later items can use within
        the same sweep. The sweep is not repeated.
        """
        for item in self.grid.items():
            if item in self.grid:
                self.float_item_up(item)

    def float_item_up(self, item: GridItem) -> None:
        """Move item to the topmost free row above it, if any"""
        best_row = None
        row = item.row - 1
        while row > -1:
            if self.get_items(row, item.col, item.size_x, item.size_y, item):
                break
            best_row = row
            row -= 1

        if best_row is not None:
            logger.debug(f"Floating {item.label} from row {item.row} to {best_row}")
            self.put_item(item, best_row, item.col)

    # ============================================================
    # HEIGHT
    # ============================================================

    def update_height(self, extra: int = 0) -> int:
        """
        Recompute the grid height in rows

        Args:
            extra: Additional rows to add below each item (e.g. while dragging)

        Returns:
            New grid height, clamped into [min_rows, max_rows]
        """
        max_height = self.config.min_rows
        for item in self.grid.items():
            max_height = max(max_height, item.row + extra + item.size_y)
        self.grid_height = min(self.config.max_rows, max_height)
        return self.grid_height

    # ============================================================
    # REPORTING
    # ============================================================

    def layout_frame(self) -> pd.DataFrame:
        """
        Placed items as a DataFrame

        Returns:
            DataFrame with columns uid, name, row, col, size_x, size_y,
            ordered top-to-bottom, left-to-right
        """
        records = [
            {
                'uid': item.uid,
                'name': item.label,
                'row': item.row,
                'col': item.col,
                'size_x': item.size_x,
                'size_y': item.size_y,
            }
            for item in self.grid.items()
        ]
        return pd.DataFrame(records, columns=['uid', 'name', 'row', 'col', 'size_x', 'size_y'])

    def has_overlaps(self) -> bool:
        """Whether any cell is covered by more than one item"""
        return bool((self.grid.occupancy(self.config.columns) > 1).any())
