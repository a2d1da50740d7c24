"""
Shared pytest fixtures for GridPacker tests

Grids built here use a 610px container: with the default 6 columns and
10px margins this gives 100px columns and rows.
"""
import matplotlib
matplotlib.use("Agg")

import pytest

from gridpacker.config import GridConfig
from gridpacker.controller import GridController
from gridpacker.layout import GridItem, PlacementEngine

CONTAINER_WIDTH = 610


@pytest.fixture
def config() -> GridConfig:
    """Default grid configuration (6 columns, rows 1-100)"""
    return GridConfig()


@pytest.fixture
def engine(config) -> PlacementEngine:
    """Placement engine on an empty grid"""
    return PlacementEngine(config)


@pytest.fixture
def controller(config) -> GridController:
    """Grid controller with 100px cells"""
    return GridController(config, container_width=CONTAINER_WIDTH)


@pytest.fixture
def place(engine):
    """
    Put a named item directly through the engine

    Usage: place('A', row, col, size_x=2, size_y=1)
    """
    def _place(name, row=None, col=None, size_x=2, size_y=1):
        item = GridItem(name=name, size_x=size_x, size_y=size_y)
        engine.put_item(item, row, col)
        return item
    return _place


@pytest.fixture
def assert_valid_layout():
    """Check bounds and no-overlap invariants for every placed item"""
    def _check(engine: PlacementEngine) -> None:
        columns = engine.config.columns
        items = engine.grid.items()
        for item in items:
            assert item.row >= 0 and item.col >= 0, f"{item.label} out of bounds at ({item.row}, {item.col})"
            assert item.col + item.size_x <= columns, f"{item.label} overflows {columns} columns"
        for i, a in enumerate(items):
            for b in items[i + 1:]:
                assert not a.overlaps(b), f"{a.label} overlaps {b.label}"
    return _check


# Pytest configuration
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests running the CLI end to end"
    )
