"""
Grid controller

Ties configuration, placement engine, coordinate mapping and gesture
sessions together into one grid instance.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
import logging

from .config import GridConfig
from .layout.engine import PlacementEngine
from .layout.grid import GridModel
from .layout.mapper import CoordinateMapper
from .layout.resolver import GridObserver, LayoutConfigResolver
from .layout.session import DragSession, GestureSession, ResizeSession
from .layout.types import CleanupStatus, ElementBox, GridItem, PreviewRect, ResizeLimits, ResolvedLayout
from .types import Axis
from .utils import parse_position, parse_size

logger = logging.getLogger(__name__)


class GridController:
    """
    One grid instance

    Entry point for the interaction and rendering collaborators: items are
    added, moved and resized here, and screen boxes are read back.
    """

    def __init__(self, config: Optional[GridConfig] = None, container_width: Optional[float] = None) -> None:
        """
        Initialize GridController

        Args:
            config: Grid configuration (uses defaults if None)
            container_width: Measured container width (px); required before
                drawing when config.width is 'auto'

        Example:
            >>> controller = GridController(container_width=960)
            >>> controller.load([GridItem(size_x=2), GridItem(size_x=3)])
        """
        self.config: GridConfig = config or GridConfig()
        self.resolver = LayoutConfigResolver(self.config)
        self.engine = PlacementEngine(self.config)
        self.preview = PreviewRect()
        self.sessions: Dict[str, GestureSession] = {}
        self.mapper: Optional[CoordinateMapper] = None
        self.loaded = False

        if container_width is not None or self.config.width != 'auto':
            self.redraw(container_width)

    @property
    def grid(self) -> GridModel:
        return self.engine.grid

    @property
    def layout(self) -> Optional[ResolvedLayout]:
        return self.resolver.layout

    @property
    def items(self) -> List[GridItem]:
        return self.grid.items()

    @property
    def grid_height(self) -> int:
        return self.engine.grid_height

    @property
    def is_moving(self) -> bool:
        """Whether any item is mid-gesture"""
        return any(item.is_moving for item in self.grid)

    def subscribe(self, observer: GridObserver) -> Callable[[], None]:
        """Register for draggable/resizable change and grid resize events"""
        return self.resolver.subscribe(observer)

    # ============================================================
    # CONFIGURATION & DRAWING
    # ============================================================

    def set_options(self, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> Dict[str, ElementBox]:
        """
        Override options, then redraw

        The column count is fixed once items are on the grid; row limits
        take effect on the grid height immediately.

        Raises:
            ValueError: on an unknown option, or a column change on a
                non-empty grid
        """
        columns = self.resolver.normalize_options(options, **overrides).get('columns')
        if columns is not None and columns != self.config.columns and len(self.grid):
            raise ValueError(f"Cannot change columns from {self.config.columns} to {columns} "
                             f"with {len(self.grid)} item(s) placed")
        self.resolver.set_options(options, **overrides)
        self.engine.update_height()
        return self.redraw()

    def redraw(self, container_width: Optional[float] = None) -> Dict[str, ElementBox]:
        """
        Re-resolve pixel constants and recompute every item's box

        Args:
            container_width: New container width (px), or None to keep the last one

        Returns:
            Mapping of item uid to its screen box
        """
        layout = self.resolver.resolve(container_width)
        self.mapper = CoordinateMapper(layout)
        return self.boxes()

    def require_mapper(self) -> CoordinateMapper:
        """
        Mapper for the last drawn layout

        Raises:
            RuntimeError: if the grid has not been drawn yet
        """
        if self.mapper is None:
            raise RuntimeError("Grid has not been drawn yet; call redraw() with a container width")
        return self.mapper

    def boxes(self) -> Dict[str, ElementBox]:
        """Screen box of every placed item, keyed by uid"""
        mapper = self.require_mapper()
        return {item.uid: mapper.item_box(item) for item in self.grid}

    def preview_box(self) -> Optional[ElementBox]:
        """Screen box of the gesture preview, None while hidden"""
        if not self.preview.visible:
            return None
        p = self.preview
        return self.require_mapper().element_box(p.row, p.col, p.size_x, p.size_y)

    def container_height(self) -> float:
        """Container height in pixels"""
        return self.require_mapper().container_height(self.engine.grid_height)

    def resize_limits(self) -> ResizeLimits:
        """Pixel bounds for resize gestures"""
        return self.require_mapper().resize_limits(self.config)

    def on_container_resize(self, width: float) -> bool:
        """
        Handle a container resize notification

        Ignored when the width is unchanged or an item is mid-gesture.

        Returns:
            True if the grid was redrawn
        """
        if width == self.resolver.container_width or self.is_moving:
            return False

        logger.info(f"Container resized to {width}px")
        self.redraw(width)
        if self.config.resizable.enabled:
            self.resolver.notify('grid-resized', (width, self.container_height()))
        return True

    # ============================================================
    # ITEMS
    # ============================================================

    def new_item(
        self,
        name: Optional[str] = None,
        row: Any = None,
        col: Any = None,
        size_x: Any = None,
        size_y: Any = None
    ) -> GridItem:
        """
        Build an item from untyped values, applying default sizes

        Args:
            name: Display name
            row: Row (None means auto-place)
            col: Column
            size_x: Width; invalid values fall back to default_size_x
            size_y: Height; invalid values fall back to default_size_y
        """
        return GridItem(
            name=name,
            row=parse_position(row),
            col=parse_position(col),
            size_x=parse_size(size_x, self.config.default_size_x),
            size_y=parse_size(size_y, self.config.default_size_y),
        )

    def load(self, items: Iterable[GridItem]) -> None:
        """
        Place a batch of items, then compact the grid once

        Positioned items keep their requested cell (displacing earlier ones
        when they collide); unpositioned items are auto-placed.
        """
        count = 0
        for item in items:
            self.add_item(item)
            count += 1
        self.engine.float_items_up()
        self.engine.update_height()
        self.loaded = True
        logger.info(f"Loaded {count} items; grid height {self.engine.grid_height} rows")

    def add_item(self, item: GridItem) -> GridItem:
        """Commit the item's size, then place it"""
        self.engine.resize_item(item, item.size_x, item.size_y)
        self.set_item_position(item, item.row, item.col)
        return item

    def set_item_position(self, item: GridItem, row: Any, col: Any) -> None:
        """
        Move item to (row, col)

        Once the grid is loaded the move is followed by a gravity sweep.
        """
        self.engine.put_item(item, parse_position(row), parse_position(col))
        if self.loaded:
            self.engine.float_items_up()

        self.engine.update_height(item.size_y if item.dragging else 0)

        if item.dragging:
            self.preview.track(item.row, item.col, item.size_x, item.size_y)

    def set_item_size(self, item: GridItem, axis: Axis, value: Any) -> bool:
        """
        Set item width ('x') or height ('y') from an untyped value

        An empty string is ignored. Non-numeric, zero or negative values
        fall back to the configured default size.

        Returns:
            True if the size changed
        """
        if value == '':
            return False
        axis = axis.lower()  # type: ignore[assignment]
        if axis == 'x':
            size = parse_size(value, self.config.default_size_x)
            changed = self.engine.resize_item(item, size_x=size)
        elif axis == 'y':
            size = parse_size(value, self.config.default_size_y)
            changed = self.engine.resize_item(item, size_y=size)
        else:
            raise ValueError(f"Unknown size axis: {axis!r} (expected 'x' or 'y')")

        if item.resizing:
            self.preview.track(item.row, item.col, item.size_x, item.size_y)
        return changed

    def set_item_size_x(self, item: GridItem, columns: Any) -> bool:
        return self.set_item_size(item, 'x', columns)

    def set_item_size_y(self, item: GridItem, rows: Any) -> bool:
        return self.set_item_size(item, 'y', rows)

    def remove_item(self, item: GridItem) -> None:
        self.engine.remove_item(item)

    # ============================================================
    # GESTURES
    # ============================================================

    def _begin(self, session: GestureSession) -> GestureSession:
        if not session.interaction.enabled:
            raise RuntimeError(f"{session.kind} is disabled for this grid")
        if session.item not in self.grid:
            raise ValueError(f"{session.item.label} is not on this grid")
        self.require_mapper()
        previous = self.sessions.get(session.item.uid)
        if previous is not None:
            previous.cancel()
        self.sessions[session.item.uid] = session
        session.start()
        return session

    def begin_drag(self, item: GridItem) -> DragSession:
        """Start a drag gesture on item"""
        return self._begin(DragSession(self, item))  # type: ignore[return-value]

    def begin_resize(self, item: GridItem) -> ResizeSession:
        """Start a resize gesture on item"""
        return self._begin(ResizeSession(self, item))  # type: ignore[return-value]

    # ============================================================
    # TEARDOWN
    # ============================================================

    def detach_item(self, item: GridItem) -> CleanupStatus:
        """
        Best-effort teardown of one item

        Ending its gesture session and removing it from the grid are each
        attempted; a failure is recorded in the returned status and does not
        stop the remaining steps.
        """
        status = CleanupStatus()

        session = self.sessions.get(item.uid)
        if session is not None:
            try:
                session.cancel()
            except Exception as e:
                status.record('cancel gesture', e)

        try:
            self.engine.remove_item(item)
        except Exception as e:
            status.record('remove from grid', e)

        if not status.ok:
            logger.warning(f"Teardown of {item.label} incomplete: {'; '.join(status.errors)}")
        return status

    def destroy(self) -> CleanupStatus:
        """Detach every item and drop all observers"""
        status = CleanupStatus()
        for item in self.grid.items():
            item_status = self.detach_item(item)
            status.errors.extend(item_status.errors)
            status.ok = status.ok and item_status.ok
        self.resolver.clear_observers()
        self.loaded = False
        return status
