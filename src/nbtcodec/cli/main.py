"""Main CLI entry point for nbtcodec."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..cli.dump import dump_file
from ..exceptions import NbtError


def main() -> int:
    """Main entry point for the nbtcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="nbtcodec: NBT value decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nbtcodec --dump level.nbt              Print the decoded tree
  nbtcodec --dump level.nbt --borrow     Decode arrays zero-copy
  nbtcodec --version                     Show version

Input must be uncompressed; gunzip files written by the game first.
        """,
    )

    parser.add_argument(
        "--dump",
        metavar="FILE",
        type=str,
        help="Decode an NBT file and print its tree",
    )

    parser.add_argument(
        "--borrow",
        action="store_true",
        help="Decode arrays as zero-copy views into the file buffer",
    )

    parser.add_argument(
        "--no-array-tag",
        action="store_true",
        help="Array headers carry no element-tag byte (plain game layout)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"nbtcodec {__version__}",
    )

    args = parser.parse_args()

    # Handle --dump
    if args.dump:
        file_path = Path(args.dump)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            dump_file(file_path, borrow=args.borrow, array_element_tag=not args.no_array_tag)
            return 0
        except NbtError as e:
            print(f"Error decoding file ({e.kind}): {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
