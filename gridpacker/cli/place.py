"""Place subcommand - pack items onto the grid"""

from __future__ import annotations
from pathlib import Path
import logging
from argparse import ArgumentParser, Namespace, _SubParsersAction

from . import configure_logging
from ..config import GridConfig
from ..controller import GridController
from ..io import read_items, write_layout

logger = logging.getLogger(__name__)

PRESETS = {
    'default': GridConfig,
    'dashboard': GridConfig.dashboard,
    'compact': GridConfig.compact,
    'debug': GridConfig.debug,
}


def add_parser(subparsers: _SubParsersAction) -> ArgumentParser:
    """
    Add place subcommand parser

    Args:
        subparsers: Subparser action from main argument parser

    Returns:
        Configured ArgumentParser for place subcommand
    """
    parser = subparsers.add_parser(
        'place',
        help='Place items on the grid and compact the layout'
    )

    # Sample identification
    parser.add_argument('--prefix', required=True,
                        help='Prefix for output files')
    parser.add_argument('-i', '--items', required=True,
                        help='Item spec file (.tsv, .csv or .json)')
    parser.add_argument('--output-dir', default='.',
                        help='Output directory (default: current directory)')

    # Grid parameters
    parser.add_argument('--preset', choices=sorted(PRESETS), default='default',
                        help='Base configuration preset (default: default)')
    parser.add_argument('-c', '--columns', type=int,
                        help='Number of columns (default: from preset)')
    parser.add_argument('--min-rows', type=int,
                        help='Minimum grid height in rows (default: from preset)')
    parser.add_argument('--max-rows', type=int,
                        help='Maximum grid height in rows (default: from preset)')
    parser.add_argument('--default-size-x', type=int,
                        help='Width used for items without a valid size_x')
    parser.add_argument('--default-size-y', type=int,
                        help='Height used for items without a valid size_y')

    parser.add_argument('--debug', action='store_true', help='Enable debug logging for troubleshooting')

    return parser  # type: ignore[no-any-return]


def build_config(args: Namespace) -> GridConfig:
    """Preset configuration with CLI overrides applied"""
    config = PRESETS[args.preset]()
    if args.columns is not None:
        config.columns = args.columns
    if args.min_rows is not None:
        config.min_rows = args.min_rows
    if args.max_rows is not None:
        config.max_rows = args.max_rows
    if args.default_size_x is not None:
        config.default_size_x = args.default_size_x
    if args.default_size_y is not None:
        config.default_size_y = args.default_size_y
    return config


def run(args: Namespace) -> None:
    """
    Execute place subcommand

    Args:
        args: Parsed command-line arguments from argparse
    """
    configure_logging(getattr(args, 'debug', False))
    logger.info("=== GridPacker: Placement ===")

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    tsv_file = output_dir / f"{args.prefix}.gridpacker_layout.tsv"
    json_file = output_dir / f"{args.prefix}.gridpacker_layout.json"

    config = build_config(args)
    logger.info("Grid Parameters:")
    logger.info(f"  Columns: {config.columns}")
    logger.info(f"  Rows: {config.min_rows}-{config.max_rows}")
    logger.info(f"  Default item size: {config.default_size_x}x{config.default_size_y}")

    items = read_items(args.items, config)

    controller = GridController(config)
    controller.load(items)

    placed = controller.items
    write_layout(placed, tsv_file, config.columns, controller.grid_height)
    write_layout(placed, json_file, config.columns, controller.grid_height)

    logger.info(f"Placed {len(placed)} items in {controller.grid_height} rows")
    logger.info(f"Layout: {tsv_file}")
    logger.info(f"Snapshot: {json_file}")
