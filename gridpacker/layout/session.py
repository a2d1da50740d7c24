"""
Gesture sessions

Boundary to the interaction collaborator: raw pixel positions and sizes
reported during a drag or resize are converted into grid units and shown
on the preview. Nothing is committed to the grid until the gesture stops.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import logging

from ..config import InteractionConfig
from .types import GridItem

if TYPE_CHECKING:
    from ..controller import GridController

logger = logging.getLogger(__name__)


class GestureSession(ABC):
    """Common state of a drag or resize gesture on one item"""

    kind = 'gesture'

    def __init__(self, controller: 'GridController', item: GridItem) -> None:
        self.controller = controller
        self.item = item
        self.active = False
        self.row: int = item.row
        self.col: int = item.col
        self.size_x: int = item.size_x
        self.size_y: int = item.size_y

    @property
    @abstractmethod
    def interaction(self) -> InteractionConfig:
        """Interaction config (switch and hooks) for this kind of gesture"""

    @abstractmethod
    def start(self) -> None:
        """Mark the item as moving and show the preview"""

    def _hook(self, name: str) -> None:
        hook = getattr(self.interaction, name)
        if hook is not None:
            hook(self.item, self)

    def _show_preview(self) -> None:
        preview = self.controller.preview
        preview.track(self.row, self.col, self.size_x, self.size_y)
        preview.visible = True

    def _finish(self) -> None:
        self.active = False
        self.item.dragging = False
        self.item.resizing = False
        self.controller.preview.visible = False
        self.controller.sessions.pop(self.item.uid, None)

    def cancel(self) -> None:
        """Abandon the gesture without committing anything"""
        logger.debug(f"{self.kind} on {self.item.label} cancelled")
        self._finish()


class DragSession(GestureSession):
    """
    Drag gesture

    Pixel positions are rounded to the nearest cell.
    """

    kind = 'drag'

    @property
    def interaction(self) -> InteractionConfig:
        return self.controller.config.draggable

    def start(self) -> None:
        self.active = True
        self.item.dragging = True
        self._show_preview()
        self.controller.engine.update_height(self.item.size_y)
        self._hook('start')

    def _track(self, top: float, left: float) -> None:
        mapper = self.controller.require_mapper()
        self.row = mapper.pixels_to_rows(top)
        self.col = mapper.pixels_to_columns(left)
        self.controller.preview.track(self.row, self.col, self.size_x, self.size_y)

    def move(self, top: float, left: float) -> None:
        """Pointer moved; element is now at (top, left) pixels"""
        self._track(top, left)
        self._hook('move')

    def stop(self, top: float, left: float) -> None:
        """Pointer released at (top, left) pixels; commit the new position"""
        self._track(top, left)
        self._finish()
        logger.debug(f"Drag of {self.item.label} ends at ({self.row}, {self.col})")
        self.controller.set_item_position(self.item, self.row, self.col)
        self.controller.engine.update_height()
        self._hook('stop')


class ResizeSession(GestureSession):
    """
    Resize gesture

    The position is floored and the size ceiled, so a growing item covers
    any cell it partially touches.
    """

    kind = 'resize'

    @property
    def interaction(self) -> InteractionConfig:
        return self.controller.config.resizable

    def start(self) -> None:
        self.active = True
        self.item.resizing = True
        self.item.dragging = True
        self._show_preview()
        self._hook('start')

    def _track(self, top: float, left: float, width: float, height: float) -> None:
        mapper = self.controller.require_mapper()
        self.row = mapper.pixels_to_rows(top, 'floor')
        self.col = mapper.pixels_to_columns(left, 'floor')
        self.size_x = mapper.pixels_to_columns(width, 'ceil')
        self.size_y = mapper.pixels_to_rows(height, 'ceil')
        self.controller.preview.track(self.row, self.col, self.size_x, self.size_y)

    def move(self, top: float, left: float, width: float, height: float) -> None:
        """Element now spans (top, left, width, height) pixels"""
        self._track(top, left, width, height)
        self._hook('move')

    def stop(self, top: float, left: float, width: float, height: float) -> None:
        """Gesture released; commit position, then height, then width"""
        self._track(top, left, width, height)
        self._finish()
        logger.debug(f"Resize of {self.item.label} ends at ({self.row}, {self.col}) "
                     f"size {self.size_x}x{self.size_y}")
        self.controller.set_item_position(self.item, self.row, self.col)
        self.controller.set_item_size(self.item, 'y', self.size_y)
        self.controller.set_item_size(self.item, 'x', self.size_x)
        self._hook('stop')
