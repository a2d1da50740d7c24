"""
Grid visualizer

Draws a placed layout with matplotlib, using the same box formulas a
screen renderer would.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from pathlib import Path
import logging

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.figure import Figure

from .config import PlotConfig
from .layout.mapper import CoordinateMapper
from .layout.types import GridItem, ResolvedLayout

logger = logging.getLogger(__name__)


class GridPlotter:
    """
    Renders a grid layout to a figure

    Non-mobile layouts are drawn at their absolute positions. Mobile
    layouts are drawn as a single full-width column in row-major order.
    """

    def __init__(self, config: Optional[PlotConfig] = None) -> None:
        """
        Initialize GridPlotter

        Args:
            config: Plot styling (uses default settings if None)

        Example:
            >>> plotter = GridPlotter()
            >>> plotter = GridPlotter(PlotConfig.publication())
        """
        self.config: PlotConfig = config or PlotConfig()

    def _flow_boxes(
        self,
        items: Sequence[GridItem],
        layout: ResolvedLayout
    ) -> Tuple[List[Tuple[float, float, float, float]], float]:
        """Boxes (left, top, width, height) for mobile flow layout, plus total height"""
        margin = layout.margin_top
        width = layout.cur_width - 2 * margin
        boxes = []
        y = margin
        for item in items:
            height = item.size_y * layout.cur_row_height - margin
            boxes.append((margin, y, width, height))
            y += height + margin
        return boxes, y

    def plot(
        self,
        items: Sequence[GridItem],
        layout: ResolvedLayout,
        grid_height: int,
        columns: int,
        output_file: Optional[str] = None,
        title: Optional[str] = None,
        show: bool = False
    ) -> Figure:
        """
        Draw the layout

        Args:
            items: Placed items
            layout: Resolved pixel constants
            grid_height: Grid height in rows
            columns: Grid column count
            output_file: Path to save the figure (not saved if None)
            title: Figure title
            show: Whether to display the plot

        Returns:
            matplotlib Figure object
        """
        cfg = self.config
        mapper = CoordinateMapper(layout)
        ordered = sorted(items, key=lambda item: (item.row, item.col))

        if layout.is_mobile:
            boxes, container_height = self._flow_boxes(ordered, layout)
        else:
            container_height = mapper.container_height(grid_height)
            boxes = []
            for item in ordered:
                box = mapper.item_box(item)
                boxes.append((box.left, box.top, box.width, box.height))

        figsize = (layout.cur_width / cfg.pixels_per_inch, max(container_height, 1.0) / cfg.pixels_per_inch)
        fig, ax = plt.subplots(figsize=figsize)

        if cfg.show_grid_lines and not layout.is_mobile:
            for c in range(columns + 1):
                x = c * layout.cur_col_width + layout.margin_left / 2
                ax.axvline(x, color=cfg.grid_line_color, linewidth=cfg.grid_line_width, zorder=0)
            for r in range(grid_height + 1):
                y = r * layout.cur_row_height + layout.margin_top / 2
                ax.axhline(y, color=cfg.grid_line_color, linewidth=cfg.grid_line_width, zorder=0)

        for item, (left, top, width, height) in zip(ordered, boxes):
            rect = patches.Rectangle(
                (left, top), width, height,
                facecolor=cfg.item_facecolor,
                edgecolor=cfg.item_edgecolor,
                alpha=cfg.item_alpha,
                zorder=2,
            )
            ax.add_patch(rect)
            if cfg.show_labels:
                ax.text(left + width / 2, top + height / 2, item.label,
                        ha='center', va='center', fontsize=cfg.label_fontsize, zorder=3)

        ax.set_xlim(0, layout.cur_width)
        ax.set_ylim(container_height, 0)
        ax.set_aspect('equal')
        ax.axis('off')

        if title:
            ax.set_title(title, fontsize=cfg.title_fontsize)

        if output_file is not None:
            Path(output_file).parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_file, dpi=cfg.dpi, bbox_inches='tight',
                        facecolor='white', edgecolor='none')
            logger.info(f"Plot saved to {output_file}")

        if show:
            plt.show()

        return fig
