"""I/O utilities for GridPacker"""

from .readers import ItemSpecReader, LayoutSnapshotReader, read_items, read_layout
from .writers import LayoutWriter, write_layout

__all__ = [
    'ItemSpecReader', 'read_items',
    'LayoutSnapshotReader', 'read_layout',
    'LayoutWriter', 'write_layout']
