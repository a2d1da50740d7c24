"""
GridPacker CLI

Command-line interface with subcommands for placement and plotting.
"""

import argparse
import sys
from .cli import place, plot


def main():
    parser = argparse.ArgumentParser(
        prog='gridpacker',
        description='GridPacker: 2D grid packing and layout engine'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Add subcommand parsers
    place.add_parser(subparsers)
    plot.add_parser(subparsers)

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute the appropriate subcommand
    if args.command == 'place':
        place.run(args)
    elif args.command == 'plot':
        plot.run(args)


if __name__ == "__main__":
    main()
