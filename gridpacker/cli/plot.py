"""Plot subcommand - visualization"""

from __future__ import annotations
from pathlib import Path
import logging
from argparse import ArgumentParser, Namespace, _SubParsersAction

import matplotlib.pyplot as plt

from . import configure_logging
from ..config import GridConfig, PlotConfig
from ..io import read_layout
from ..layout import CoordinateMapper, LayoutConfigResolver
from ..visualizer import GridPlotter

logger = logging.getLogger(__name__)


def add_parser(subparsers: _SubParsersAction) -> ArgumentParser:
    """
    Add plot subcommand parser

    Args:
        subparsers: Subparser action from main argument parser

    Returns:
        Configured ArgumentParser for plot subcommand
    """
    parser = subparsers.add_parser(
        'plot',
        help='Render a placed layout to an image'
    )

    parser.add_argument('--prefix', required=True,
                        help='Layout prefix (matches place output)')
    parser.add_argument('--input-dir', required=True,
                        help='Input directory containing .gridpacker_layout.json from place')
    parser.add_argument('--output-dir',
                        help='Output directory (default: same as input-dir)')

    parser.add_argument('-w', '--width', type=float, default=1200.0,
                        help='Container width in pixels (default: 1200)')
    parser.add_argument('--row-height', type=float,
                        help='Row height in pixels (default: match column width)')
    parser.add_argument('--style', choices=['default', 'publication', 'debug'], default='default',
                        help='Plot style preset (default: default)')
    parser.add_argument('--title', help='Figure title')

    parser.add_argument('--debug', action='store_true', help='Enable debug logging for troubleshooting')

    return parser  # type: ignore[no-any-return]


def run(args: Namespace) -> None:
    """
    Execute plot subcommand

    Draws the layout exactly as committed by place: positions, sizes, column
    count and grid height come from the JSON snapshot. Only the pixel
    constants are resolved here, from the requested width.

    Args:
        args: Parsed command-line arguments from argparse
    """
    configure_logging(getattr(args, 'debug', False))

    input_dir = Path(args.input_dir)
    output_dir = Path(args.output_dir) if args.output_dir else input_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    snapshot_file = input_dir / f"{args.prefix}.gridpacker_layout.json"
    names_file = input_dir / f"{args.prefix}.gridpacker_layout.tsv"
    plot_file = output_dir / f"{args.prefix}.gridpacker.png"

    logger.info(f"Layout prefix: {args.prefix}")
    logger.info(f"Input: {snapshot_file}")
    logger.info(f"Output: {plot_file}")

    if not snapshot_file.exists():
        raise FileNotFoundError(f"Input file not found: {snapshot_file}\n"
                                f"Did you run 'gridpacker place --prefix {args.prefix}' first?")

    items, columns, grid_height = read_layout(snapshot_file, names_file)

    config = GridConfig(columns=columns)
    if args.row_height is not None:
        config.row_height = args.row_height
    layout = LayoutConfigResolver(config).resolve(args.width)

    container_height = CoordinateMapper(layout).container_height(grid_height)
    logger.info(f"Grid: {columns} columns x {grid_height} rows")
    logger.info(f"Container: {layout.cur_width:.0f}x{container_height:.0f}px "
                f"(mobile={layout.is_mobile})")

    plot_config = {
        'default': PlotConfig,
        'publication': PlotConfig.publication,
        'debug': PlotConfig.debug,
    }[args.style]()

    plotter = GridPlotter(plot_config)
    fig = plotter.plot(
        items,
        layout,
        grid_height,
        columns,
        output_file=str(plot_file),
        title=args.title,
    )
    plt.close(fig)

    logger.info(f"✓ Plot saved: {plot_file}")
