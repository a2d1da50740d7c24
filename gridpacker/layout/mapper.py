"""
Coordinate mapper

Pure conversions between pixels and grid units for one ResolvedLayout,
including the screen box formulas used by renderers.
"""
from __future__ import annotations
import math
from typing import Optional, Tuple

from ..config import GridConfig
from ..types import RoundingMode
from .types import ElementBox, GridItem, ResizeLimits, ResolvedLayout


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


_ROUNDERS = {
    'round': _round_half_up,
    'ceil': math.ceil,
    'floor': math.floor,
}


class CoordinateMapper:
    """
    Converts pixel lengths to grid units and grid geometry to pixels

    Drag gestures convert positions with 'round'; resize gestures use
    'floor' for the position and 'ceil' for the size, so a growing item
    covers any partially touched cell.
    """

    def __init__(self, layout: ResolvedLayout) -> None:
        self.layout = layout

    @staticmethod
    def _convert(pixels: float, unit: float, mode: RoundingMode) -> int:
        try:
            rounder = _ROUNDERS[mode]
        except KeyError:
            raise ValueError(f"Unknown rounding mode: {mode!r} (expected round, ceil or floor)")
        return int(rounder(pixels / unit))

    def pixels_to_rows(self, pixels: float, mode: RoundingMode = 'round') -> int:
        """
        Number of rows that fit in a pixel length

        Args:
            pixels: Pixel length
            mode: 'round' (default), 'ceil' or 'floor'

        Returns:
            Whole number of rows
        """
        return self._convert(pixels, self.layout.cur_row_height, mode)

    def pixels_to_columns(self, pixels: float, mode: RoundingMode = 'round') -> int:
        """
        Number of columns that fit in a pixel length

        Args:
            pixels: Pixel length
            mode: 'round' (default), 'ceil' or 'floor'

        Returns:
            Whole number of columns
        """
        return self._convert(pixels, self.layout.cur_col_width, mode)

    # ------------------------------------------------------------
    # Rendering formulas
    # ------------------------------------------------------------

    def element_position(self, row: int, col: int) -> Tuple[Optional[float], Optional[float]]:
        """(top, left) in pixels; (None, None) in mobile mode"""
        if self.layout.is_mobile:
            return None, None
        top = row * self.layout.cur_row_height + self.layout.margin_top
        left = col * self.layout.cur_col_width + self.layout.margin_left
        return top, left

    def element_height(self, rows: int) -> Optional[float]:
        """Height in pixels of an element spanning rows; None in mobile mode"""
        if self.layout.is_mobile:
            return None
        return rows * self.layout.cur_row_height - self.layout.margin_top

    def element_width(self, columns: int) -> Optional[float]:
        """Width in pixels of an element spanning columns; None in mobile mode"""
        if self.layout.is_mobile:
            return None
        return columns * self.layout.cur_col_width - self.layout.margin_left

    def element_box(self, row: int, col: int, size_x: int, size_y: int) -> ElementBox:
        """Full screen box for a rectangle of cells"""
        top, left = self.element_position(row, col)
        margin = self.layout.margin_top if self.layout.is_mobile else 0.0
        return ElementBox(
            top=top,
            left=left,
            width=self.element_width(size_x),
            height=self.element_height(size_y),
            margin=margin,
        )

    def item_box(self, item: GridItem) -> ElementBox:
        """Screen box for a placed item"""
        return self.element_box(item.row, item.col, item.size_x, item.size_y)

    def container_height(self, grid_height: int) -> float:
        """Container height in pixels for a grid of grid_height rows"""
        return grid_height * self.layout.cur_row_height + self.layout.margin_top

    def resize_limits(self, config: GridConfig) -> ResizeLimits:
        """Pixel bounds a resize gesture is confined to"""
        row_height = self.layout.cur_row_height
        col_width = self.layout.cur_col_width
        return ResizeLimits(
            min_width=config.min_columns * col_width - self.layout.margin_left,
            max_width=config.columns * col_width - self.layout.margin_left,
            min_height=config.min_rows * row_height - self.layout.margin_top,
            max_height=config.max_rows * row_height - self.layout.margin_top,
        )
