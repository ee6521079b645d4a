"""
Command line entry point for the WOPR terminal.

Without flags the conversation runs on the local console. With --server it
listens for TCP clients (telnet localhost 2000).
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console

from ..utils.logging import configure_debug_logging, setup_logger
from .config import ServerConfig
from .engine import SessionEngine
from .exceptions import WoprError
from .server import WoprServer
from .transport import ConsoleTransport


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="WOPR terminal")
    parser.add_argument("--server", action="store_true",
                        help="Enable server mode to actually listen to clients")
    parser.add_argument("--record", action="store_true",
                        help="Record a transcript of every network session (server mode only)")
    parser.add_argument("--sessions-dir", help="Directory for session transcripts (server mode only)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def run_console() -> int:
    """Run one conversation on the local terminal."""
    # Logs go to stderr so they don't interleave with the rendered screen
    setup_logger("src", level=logging.WARNING, stream=sys.stderr)
    SessionEngine(ConsoleTransport()).run()
    return 0


def run_server(config: ServerConfig) -> int:
    """Serve network clients until interrupted."""
    server = WoprServer(config)
    server.bind()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.shutdown()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the WOPR terminal."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.server and (args.record or args.sessions_dir):
        parser.error("--record and --sessions-dir require --server")
    console = Console(stderr=True)

    try:
        if not args.server:
            return run_console()

        setup_logger("src")
        if args.verbose:
            configure_debug_logging()

        config = ServerConfig.from_env(
            sessions_dir=args.sessions_dir,
            record_sessions=args.record,
        )
        return run_server(config)

    except WoprError as e:
        console.print(f"[red]WOPR failed to start: {e}[/red]")
        return 1
    except KeyboardInterrupt:
        print("\nConnection terminated by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
