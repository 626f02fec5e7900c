"""
=============================================================================
CLI ENTRY POINT
=============================================================================

    python -m httplistener [options]
    httplistener [options]

Command-line arguments override environment variables, which override the
defaults in ListenerConfig.

=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import ListenerConfig, LOG_LEVELS
from .server import HTTPListener


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httplistener",
        description="Minimal HTTP/1.x listener built on raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httplistener                          # Run with defaults
  python -m httplistener --port 3000              # Custom port
  python -m httplistener --host 0.0.0.0           # Listen on all interfaces
  python -m httplistener --log-file listener.log  # Also log to a file
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8080)"
    )

    parser.add_argument(
        "--buffer-size",
        type=int,
        default=None,
        help="Bytes per socket read (default: 512)"
    )

    parser.add_argument(
        "--read-timeout",
        type=float,
        default=None,
        help="Seconds a socket read may block (default: no timeout)"
    )

    parser.add_argument(
        "--max-buffer-size",
        type=int,
        default=None,
        help="Largest partial request kept per connection in bytes, 0 = unlimited "
             "(default: 1048576)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        default=None,
        help="Append log lines to this file"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httplistener {__version__}"
    )

    return parser


def config_from_args(args: argparse.Namespace) -> ListenerConfig:
    """Environment configuration with any explicitly given CLI arguments applied."""
    config = ListenerConfig.from_env()

    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.buffer_size is not None:
        config.buffer_size = args.buffer_size
    if args.read_timeout is not None:
        config.read_timeout = args.read_timeout
    if args.max_buffer_size is not None:
        config.max_buffer_size = args.max_buffer_size or None
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_file is not None:
        config.log_file = args.log_file

    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    try:
        listener = HTTPListener(config)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        listener.run()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
