"""CLI entry point and argument parsing"""

import argparse
import logging
import sys

from rich.console import Console

import settings
from errors import CredentialError
from api import GearServer
from oauth import load_credential_material
from utils.debug_console import create_debug_console
from cli.oneshot import run_oneshot


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="D&D Gear Generator")
    parser.add_argument("--cli", action="store_true",
                        help="Read one request JSON from stdin, print the result and exit")
    parser.add_argument("--describe", action="store_true",
                        help="With --cli, produce a prose description instead of a structured item")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--bind", "-b", default=None, help="Override bind address (default: from config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Override port (default: from config)")
    return parser


def main(argv=None):
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)

    missing = settings.missing_required_settings()
    if missing:
        Console(stderr=True).print(f"[red]Error:[/red] {' and '.join(missing)} must be set")
        sys.exit(1)

    try:
        load_credential_material()
    except CredentialError as e:
        Console(stderr=True).print(f"[red]Error:[/red] {e.message}")
        sys.exit(1)

    if args.cli:
        logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
        sys.exit(run_oneshot(describe=args.describe))

    try:
        server = GearServer(debug=args.debug, bind_address=args.bind, port=args.port)
        out = create_debug_console(args.debug, server.debug_console_logger)
        if not args.debug:
            logging.basicConfig(level=settings.LOG_LEVEL.upper(),
                                format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        out.print(f"[bold cyan]D&D Gear Generator[/bold cyan] on http://{server.bind_address}:{server.port}")
        if args.debug:
            out.print("[yellow]Debug mode enabled - verbose logging will be written to gear_debug.log[/yellow]")
        server.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
