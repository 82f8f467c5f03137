"""
spotideck CLI - Entry point

Runs the interactive controller by default; `auth` and `devices` are
one-shot utility commands.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from spotideck import __version__
from spotideck.core.config import Config, load_config
from spotideck.core.output import setup_from_config
from spotideck.domain.spotify.exceptions import SpotifyError


def run_auth(cfg: Config) -> int:
    """Run the browser login and store the token.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    from spotideck.domain.spotify import authenticate

    try:
        authenticate(cfg.spotify)
    except SpotifyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("✓ Authenticated with Spotify")
    return 0


def run_devices(cfg: Config) -> int:
    """List Spotify Connect devices, marking the active one.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    from spotideck.domain.spotify import SpotifyClient, TokenManager

    client = SpotifyClient(TokenManager(cfg.spotify))
    try:
        devices = client.list_devices()
    except SpotifyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not devices:
        print("No devices found. Open Spotify on a device first.")
        return 0

    for device in devices:
        marker = "*" if device.active else " "
        volume = f"{device.volume_percent}%" if device.volume_percent is not None else "-"
        note = "" if device.controllable else "  (not controllable)"
        print(f"{marker} {device.name} [{device.type}] volume {volume}{note}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spotideck",
        description="spotideck - Spotify playback controller for the terminal",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", type=Path, default=None, help="Path to config.toml"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log at DEBUG level"
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")
    subparsers.add_parser("auth", help="Log in to Spotify and store the token")
    subparsers.add_parser("devices", help="List Spotify Connect devices")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the spotideck command."""
    args = build_parser().parse_args(argv)

    cfg = load_config(args.config)
    log_file = setup_from_config(cfg.logging, args.debug)
    logger.info(f"spotideck {__version__} ({args.subcommand or 'interactive'}), log: {log_file}")

    if args.subcommand == "auth":
        return run_auth(cfg)
    if args.subcommand == "devices":
        return run_devices(cfg)

    from spotideck.main import interactive_mode

    try:
        interactive_mode(cfg)
    except SpotifyError as e:
        logger.error(f"Startup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
