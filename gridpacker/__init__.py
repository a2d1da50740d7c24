"""GridPacker: 2D grid packing and layout engine"""

from .config import GridConfig, InteractionConfig, PlotConfig
from .controller import GridController
from .layout import PlacementEngine, GridModel, CoordinateMapper, LayoutConfigResolver, GridItem, GridFullError
from . import utils
from .visualizer import GridPlotter

__version__ = "0.1.0"
__all__ = ["GridConfig", "InteractionConfig", "PlotConfig", "GridController", "PlacementEngine", "GridModel",
           "CoordinateMapper", "LayoutConfigResolver", "GridItem", "GridFullError", "utils", "GridPlotter"]
