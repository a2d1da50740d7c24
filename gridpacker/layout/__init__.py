"""
Layout Module for GridPacker
Grid packing engine: placement, collision resolution and gravity

Public API:
    - PlacementEngine: Placement, collision resolution, gravity and height
    - GridModel: Top-left position index of placed items
    - CoordinateMapper: Pixel <-> grid unit conversions and box formulas
    - LayoutConfigResolver: Resolves symbolic sizes into pixel constants
    - GridItem: Rectangular item record
"""

from .engine import PlacementEngine, GridFullError
from .grid import GridModel
from .mapper import CoordinateMapper
from .resolver import LayoutConfigResolver, GridEvent
from .session import DragSession, ResizeSession
from .types import (
    GridItem,
    ResolvedLayout,
    ElementBox,
    ResizeLimits,
    PreviewRect,
    CleanupStatus,
)

__all__ = [
    'PlacementEngine',
    'GridFullError',
    'GridModel',
    'CoordinateMapper',
    'LayoutConfigResolver',
    'GridEvent',
    'DragSession',
    'ResizeSession',
    'GridItem',
    'ResolvedLayout',
    'ElementBox',
    'ResizeLimits',
    'PreviewRect',
    'CleanupStatus',
]
