"""
I/O Writers

Writes placement reports as TSV tables or JSON snapshots.
"""

from __future__ import annotations
from typing import Iterable, List
from pathlib import Path
import json
import logging

import pandas as pd

from ..layout.types import GridItem
from ..types import LayoutSnapshot, PathLike

logger = logging.getLogger(__name__)


class LayoutWriter:
    """Writes placed items and the resulting grid height"""

    def __init__(self, columns: int, grid_height: int):
        """
        Initialize layout writer

        Args:
            columns: Grid column count
            grid_height: Grid height in rows
        """
        self.columns = columns
        self.grid_height = grid_height

    def to_frame(self, items: Iterable[GridItem]) -> pd.DataFrame:
        """Items as a report table"""
        return pd.DataFrame(
            [
                {
                    'name': item.label,
                    'row': item.row,
                    'col': item.col,
                    'size_x': item.size_x,
                    'size_y': item.size_y,
                }
                for item in items
            ],
            columns=['name', 'row', 'col', 'size_x', 'size_y'],
        )

    def to_snapshot(self, items: Iterable[GridItem]) -> LayoutSnapshot:
        """Items as a serializable snapshot"""
        return {
            'gridHeight': self.grid_height,
            'columns': self.columns,
            'items': [item.to_json() for item in items],
        }

    def write(self, items: Iterable[GridItem], output_file: PathLike) -> Path:
        """
        Write the layout; format follows the file suffix

        Args:
            items: Placed items
            output_file: Target path (.json for a snapshot, otherwise TSV)

        Returns:
            Path written
        """
        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        placed: List[GridItem] = list(items)

        if not placed:
            logger.warning("No items to save")

        if path.suffix.lower() == '.json':
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.to_snapshot(placed), f, indent=2)
        else:
            self.to_frame(placed).to_csv(path, sep='\t', index=False)

        logger.debug(f"Wrote {len(placed)} items to {path}")
        return path


def write_layout(items: Iterable[GridItem], output_file: PathLike, columns: int, grid_height: int) -> Path:
    """Convenience wrapper around LayoutWriter.write"""
    return LayoutWriter(columns, grid_height).write(items, output_file)
