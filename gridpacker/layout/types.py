"""
Layout types for GridPacker
Data structures shared by the grid model, placement engine and renderers

Result types are immutable (frozen). GridItem is the one mutable record:
its position and size are owned by the PlacementEngine.
"""
from dataclasses import dataclass, field
from itertools import count
from typing import List, Optional, Tuple

from ..types import ItemSnapshot

_uid_counter = count(1)


def _next_uid() -> str:
    return f"item-{next(_uid_counter)}"


@dataclass(eq=False)
class GridItem:
    """
    Rectangular item placed on the grid

    Equality is identity: two items with the same geometry are still
    two different items.

    Attributes:
        size_x: Width in columns (>= 1)
        size_y: Height in rows (>= 1)
        row: Current top row, None while unpositioned
        col: Current left column, None while unpositioned
        name: Optional display name
        uid: Stable identifier used by the grid's position index
        old_row: Row of the last committed position
        old_col: Column of the last committed position
        old_size_x: Last committed width
        old_size_y: Last committed height
        dragging: True while a drag or resize gesture is active
        resizing: True while a resize gesture is active
    """
    size_x: int = 1
    size_y: int = 1
    row: Optional[int] = None
    col: Optional[int] = None
    name: Optional[str] = None
    uid: str = field(default_factory=_next_uid)
    old_row: Optional[int] = field(default=None, repr=False)
    old_col: Optional[int] = field(default=None, repr=False)
    old_size_x: Optional[int] = field(default=None, repr=False)
    old_size_y: Optional[int] = field(default=None, repr=False)
    dragging: bool = field(default=False, repr=False)
    resizing: bool = field(default=False, repr=False)

    @property
    def is_positioned(self) -> bool:
        """Whether the item has a row to be placed at"""
        return self.row is not None

    @property
    def is_moving(self) -> bool:
        """Whether a gesture is in progress on this item"""
        return self.dragging or self.resizing

    @property
    def label(self) -> str:
        """Display label (name, falling back to uid)"""
        return self.name or self.uid

    def footprint(self) -> Tuple[int, int, int, int]:
        """Footprint as (top, left, bottom, right), bottom/right exclusive"""
        return (self.row, self.col, self.row + self.size_y, self.col + self.size_x)

    def overlaps(self, other: 'GridItem') -> bool:
        """Whether the footprints of two placed items intersect"""
        top, left, bottom, right = self.footprint()
        o_top, o_left, o_bottom, o_right = other.footprint()
        return top < o_bottom and o_top < bottom and left < o_right and o_left < right

    def to_json(self) -> ItemSnapshot:
        """Persistable snapshot: position and size only"""
        return {
            'row': self.row,
            'col': self.col,
            'sizeX': self.size_x,
            'sizeY': self.size_y,
        }


@dataclass(frozen=True)
class ResolvedLayout:
    """
    Concrete pixel constants for one container width

    Attributes:
        cur_width: Grid width (px)
        cur_col_width: Column width (px)
        cur_row_height: Row height (px)
        margin_top: Vertical margin between items (px)
        margin_left: Horizontal margin between items (px)
        is_mobile: Whether the grid collapses into mobile flow layout
    """
    cur_width: float
    cur_col_width: float
    cur_row_height: float
    margin_top: float
    margin_left: float
    is_mobile: bool = False

    @property
    def margins(self) -> Tuple[float, float]:
        """Margins as (top, left)"""
        return (self.margin_top, self.margin_left)


@dataclass(frozen=True)
class ElementBox:
    """
    Screen geometry of one element

    In mobile mode absolute positioning is abandoned: top, left, width and
    height are None (automatic flow sizing) and margin is the uniform margin.
    """
    top: Optional[float]
    left: Optional[float]
    width: Optional[float]
    height: Optional[float]
    margin: float = 0.0

    @property
    def is_flow(self) -> bool:
        """Whether the box is laid out by the flow (mobile) model"""
        return self.top is None


@dataclass(frozen=True)
class ResizeLimits:
    """Pixel bounds an element may be resized within"""
    min_width: float
    max_width: float
    min_height: float
    max_height: float


@dataclass
class PreviewRect:
    """
    Prospective position/size shown during a gesture

    Purely visual: nothing here is committed to the grid.
    """
    row: int = 0
    col: int = 0
    size_x: int = 1
    size_y: int = 1
    visible: bool = False

    def track(self, row: int, col: int, size_x: int, size_y: int) -> None:
        self.row, self.col, self.size_x, self.size_y = row, col, size_x, size_y


@dataclass
class CleanupStatus:
    """
    Outcome of a best-effort teardown

    Callers may ignore it; failures are recorded rather than raised.
    """
    ok: bool = True
    errors: List[str] = field(default_factory=list)

    def record(self, step: str, error: Exception) -> None:
        self.ok = False
        self.errors.append(f"{step}: {error}")
