"""
GridPacker Configuration
Grid geometry, interaction switches and plot styling
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .types import Margins, RowHeightOption, SizeOption


@dataclass
class InteractionConfig:
    """
    Switch and hooks for one kind of gesture (drag or resize)

    Hooks are called as hook(item, session).
    """

    enabled: bool = True
    """Whether the gesture is available"""

    handle: Optional[str] = None
    """Selector of the element part that starts the gesture"""

    start: Optional[Callable[..., Any]] = None
    """Called when the gesture starts"""

    move: Optional[Callable[..., Any]] = None
    """Called on every pointer move during the gesture"""

    stop: Optional[Callable[..., Any]] = None
    """Called after the gesture has been committed"""


@dataclass
class GridConfig:
    """
    Grid geometry and placement limits

    Symbolic sizes ('auto', 'match') are resolved into pixels by
    LayoutConfigResolver.
    """

    # ============================================================
    # GRID SHAPE
    # ============================================================
    columns: int = 6
    """Number of columns in the grid"""

    min_columns: int = 1
    """Minimum columns an item can be resized down to"""

    min_rows: int = 1
    """Minimum rows to show if the grid is empty"""

    max_rows: int = 100
    """Maximum rows in the grid"""

    # ============================================================
    # PIXEL SIZING
    # ============================================================
    width: SizeOption = 'auto'
    """Grid width (px); 'auto' expands to the container width"""

    col_width: SizeOption = 'auto'
    """Column width (px); 'auto' divides the grid width evenly"""

    row_height: RowHeightOption = 'match'
    """Row height (px); 'match' uses the column width"""

    margins: Margins = (10, 10)
    """Margins between items as (top, left) (px)"""

    mobile_breakpoint: int = 600
    """Width threshold (px) at or below which mobile layout is used"""

    # ============================================================
    # ITEM DEFAULTS
    # ============================================================
    default_size_x: int = 2
    """Default item width in columns"""

    default_size_y: int = 1
    """Default item height in rows"""

    # ============================================================
    # INTERACTION
    # ============================================================
    draggable: InteractionConfig = field(default_factory=InteractionConfig)
    """Drag gesture configuration"""

    resizable: InteractionConfig = field(default_factory=InteractionConfig)
    """Resize gesture configuration"""

    # ============================================================
    # PRESET CONFIGURATIONS
    # ============================================================

    @classmethod
    def dashboard(cls) -> 'GridConfig':
        """
        Wide dashboard grid

        - 12 columns
        - Default items of 3x2 cells
        - Larger margins

        Example:
            >>> config = GridConfig.dashboard()
            >>> controller = GridController(config, container_width=1200)
        """
        config = cls()
        config.columns = 12
        config.default_size_x = 3
        config.default_size_y = 2
        config.margins = (16, 16)
        return config

    @classmethod
    def compact(cls) -> 'GridConfig':
        """
        Dense grid for many small items

        - 4 columns
        - 1x1 default items
        - Small margins

        Example:
            >>> config = GridConfig.compact()
        """
        config = cls()
        config.columns = 4
        config.default_size_x = 1
        config.default_size_y = 1
        config.margins = (4, 4)
        return config

    @classmethod
    def debug(cls) -> 'GridConfig':
        """
        Small, static grid for debugging placement issues

        - Few rows so overflow shows quickly
        - Gestures disabled

        Example:
            >>> config = GridConfig.debug()
        """
        config = cls()
        config.max_rows = 10
        config.draggable = InteractionConfig(enabled=False)
        config.resizable = InteractionConfig(enabled=False)
        return config


@dataclass
class PlotConfig:
    """
    Styling for GridPlotter figures
    """

    # ============================================================
    # FIGURE SETTINGS
    # ============================================================
    dpi: int = 100
    """DPI for saved figures"""

    pixels_per_inch: float = 100.0
    """Grid pixels per figure inch (figure size follows the container)"""

    title_fontsize: int = 12
    """Font size for the title"""

    # ============================================================
    # ITEMS
    # ============================================================
    item_facecolor: str = '#4a90d9'
    """Fill color for items"""

    item_edgecolor: str = '#1f4e79'
    """Border color for items"""

    item_alpha: float = 0.85
    """Item fill transparency"""

    label_fontsize: int = 8
    """Font size for item labels"""

    show_labels: bool = True
    """Draw item labels"""

    # ============================================================
    # GRID LINES
    # ============================================================
    show_grid_lines: bool = True
    """Draw row/column guide lines"""

    grid_line_color: str = '#cccccc'
    """Color of guide lines"""

    grid_line_width: float = 0.5
    """Guide line width (px)"""

    @classmethod
    def publication(cls) -> 'PlotConfig':
        """
        High-resolution figures without guide lines

        Example:
            >>> plotter = GridPlotter(PlotConfig.publication())
        """
        config = cls()
        config.dpi = 300
        config.show_grid_lines = False
        config.label_fontsize = 10
        return config

    @classmethod
    def debug(cls) -> 'PlotConfig':
        """
        Opaque items and strong guide lines for inspecting overlaps

        Example:
            >>> plotter = GridPlotter(PlotConfig.debug())
        """
        config = cls()
        config.item_alpha = 0.5
        config.grid_line_color = '#888888'
        config.grid_line_width = 1.0
        return config
