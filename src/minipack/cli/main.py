"""Main CLI entry point for minipack."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_LENGTH, DecoderConfig
from ..exceptions import MinipackError
from .dump import dump_file

log = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the minipack CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="minipack: MessagePack Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  minipack --dump message.msgpack                 Decode and outline a file
  minipack --dump stream.bin --max-depth 8        Decode with a tighter depth limit
  minipack --version                              Show version
        """,
    )

    parser.add_argument(
        "--dump",
        metavar="FILE",
        type=str,
        help="Decode every MessagePack value in FILE and print an outline",
    )

    parser.add_argument(
        "--max-depth",
        metavar="N",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum array/map nesting (default {DEFAULT_MAX_DEPTH})",
    )

    parser.add_argument(
        "--max-length",
        metavar="N",
        type=int,
        default=DEFAULT_MAX_LENGTH,
        help=f"Maximum declared length or count (default {DEFAULT_MAX_LENGTH})",
    )

    parser.add_argument(
        "--lenient-keys",
        action="store_true",
        help="Stringify non-string map keys instead of failing",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"minipack {__version__}",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # Handle --dump
    if args.dump:
        file_path = Path(args.dump)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            config = DecoderConfig(
                max_depth=args.max_depth,
                max_length=args.max_length,
                lenient_keys=args.lenient_keys,
            )
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        try:
            dump_file(file_path, config)
            return 0
        except MinipackError as e:
            log.debug("dump of %s failed", file_path, exc_info=True)
            print(f"Error decoding file: {e}", file=sys.stderr)
            return 1
        except OSError as e:
            print(f"Error reading file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
