"""
I/O Readers

Reads item specifications from TSV, CSV or JSON tables, and committed
layout snapshots written by the place command.
"""

from __future__ import annotations
from typing import List, Optional, Tuple
from pathlib import Path
import json
import logging

import pandas as pd

from ..config import GridConfig
from ..layout.types import GridItem
from ..types import PathLike
from ..utils import parse_grid_int, parse_position, parse_size

logger = logging.getLogger(__name__)

SPEC_COLUMNS = ['name', 'row', 'col', 'size_x', 'size_y']

_COLUMN_ALIASES = {
    'sizeX': 'size_x',
    'sizeY': 'size_y',
    'column': 'col',
}


class ItemSpecReader:
    """Reads item specifications into GridItems"""

    @staticmethod
    def load_frame(spec_file: PathLike) -> pd.DataFrame:
        """
        Load an item table with normalized columns

        Args:
            spec_file: Path to a .tsv, .txt, .csv or .json file

        Returns:
            DataFrame with columns name, row, col, size_x, size_y

        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the format is not supported
        """
        path = Path(spec_file)
        if not path.exists():
            raise FileNotFoundError(f"Item spec file not found: {path}")

        suffix = path.suffix.lower()
        if suffix in ('.tsv', '.txt'):
            frame = pd.read_csv(path, sep='\t')
        elif suffix == '.csv':
            frame = pd.read_csv(path)
        elif suffix == '.json':
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            records = data.get('items', []) if isinstance(data, dict) else data
            frame = pd.DataFrame.from_records(records)
        else:
            raise ValueError(f"Unsupported item spec format: {suffix} (expected .tsv, .csv or .json)")

        frame = frame.rename(columns=_COLUMN_ALIASES)
        for column in SPEC_COLUMNS:
            if column not in frame.columns:
                frame[column] = None
        return frame[SPEC_COLUMNS]

    @staticmethod
    def load_items(spec_file: PathLike, config: Optional[GridConfig] = None) -> List[GridItem]:
        """
        Load items from a spec file

        Rows without a row value are left unpositioned (auto-placed later).
        Invalid sizes fall back to the configured defaults.

        Args:
            spec_file: Path to the spec file
            config: Grid configuration providing default sizes

        Returns:
            Items in file order
        """
        config = config or GridConfig()
        frame = ItemSpecReader.load_frame(spec_file)

        items: List[GridItem] = []
        fallbacks = 0
        for record in frame.to_dict('records'):
            for key in ('size_x', 'size_y'):
                size = parse_grid_int(record[key])
                if size is None or size < 1:
                    fallbacks += 1

            name = record['name']
            items.append(GridItem(
                name=str(name) if pd.notna(name) else None,
                row=parse_position(record['row']),
                col=parse_position(record['col']),
                size_x=parse_size(record['size_x'], config.default_size_x),
                size_y=parse_size(record['size_y'], config.default_size_y),
            ))

        if fallbacks:
            logger.warning(f"{fallbacks} missing or invalid size value(s) replaced by defaults")
        logger.info(f"Read {len(items)} item specs from {spec_file}")
        return items


def read_items(spec_file: PathLike, config: Optional[GridConfig] = None) -> List[GridItem]:
    """Convenience wrapper around ItemSpecReader.load_items"""
    return ItemSpecReader.load_items(spec_file, config)


class LayoutSnapshotReader:
    """Reads committed layouts written by LayoutWriter"""

    @staticmethod
    def load(
        snapshot_file: PathLike,
        names_file: Optional[PathLike] = None
    ) -> Tuple[List[GridItem], int, int]:
        """
        Load a JSON layout snapshot as placed items

        Geometry is taken as committed; nothing is re-placed. Snapshots carry
        no names, so labels can be taken from the TSV report written by the
        same run (matched by row order).

        Args:
            snapshot_file: Path to a .json snapshot
            names_file: Optional TSV report providing item names

        Returns:
            (items, columns, grid_height)

        Raises:
            FileNotFoundError: if the snapshot does not exist
            ValueError: if the snapshot lacks columns or gridHeight
        """
        path = Path(snapshot_file)
        if not path.exists():
            raise FileNotFoundError(f"Layout snapshot not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            snapshot = json.load(f)

        missing = [key for key in ('columns', 'gridHeight', 'items') if key not in snapshot]
        if missing:
            raise ValueError(f"Layout snapshot {path} is missing: {', '.join(missing)}")

        items = [
            GridItem(
                row=int(record['row']),
                col=int(record['col']),
                size_x=int(record['sizeX']),
                size_y=int(record['sizeY']),
            )
            for record in snapshot['items']
        ]

        if names_file is not None and Path(names_file).exists():
            names = ItemSpecReader.load_frame(names_file)['name'].tolist()
            if len(names) == len(items):
                for item, name in zip(items, names):
                    item.name = str(name) if pd.notna(name) else None
            else:
                logger.warning(f"{names_file} lists {len(names)} items, snapshot has {len(items)}; "
                               f"labelling by uid")

        logger.info(f"Read {len(items)} placed items from {path}")
        return items, int(snapshot['columns']), int(snapshot['gridHeight'])


def read_layout(
    snapshot_file: PathLike,
    names_file: Optional[PathLike] = None
) -> Tuple[List[GridItem], int, int]:
    """Convenience wrapper around LayoutSnapshotReader.load"""
    return LayoutSnapshotReader.load(snapshot_file, names_file)
