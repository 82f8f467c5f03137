"""
spotideck - startup sequence and interactive entry point
"""

import time
from typing import Callable

from loguru import logger

from spotideck import __version__
from spotideck.core.config import Config
from spotideck.domain.playback.devices import choose_transfer_target
from spotideck.domain.playback.launcher import LauncherError, launch_player
from spotideck.domain.spotify import SpotifyClient, TokenManager, authenticate
from spotideck.domain.spotify.exceptions import SpotifyError

# Time the desktop client gets to register itself after launch
LAUNCH_WAIT_SECONDS = 3.0

NO_DEVICES_STATUS = "No devices found. Please open Spotify manually."


def autoselect_device(
    client: SpotifyClient,
    launcher: Callable[[], str] = launch_player,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """
    Make a playback device available before the controller starts.

    Launches the Spotify client once when no device exists, then transfers
    playback (without starting it) to the first controllable device unless
    one is already active.

    Args:
        client: Spotify client
        launcher: Starts the desktop client
        sleep: Wait function (replaced in tests)

    Returns:
        Status message for the controller ("" when there is nothing to say)
    """
    try:
        devices = client.list_devices()
        if not devices:
            print("No Spotify devices found. Launching Spotify...")
            try:
                launcher()
            except LauncherError as e:
                logger.warning(f"Could not launch Spotify: {e}")
            else:
                sleep(LAUNCH_WAIT_SECONDS)
            devices = client.list_devices()

        if not devices:
            logger.warning("No Spotify devices after launch attempt")
            return NO_DEVICES_STATUS

        target = choose_transfer_target(devices)
        if target is None:
            return ""

        client.transfer_playback(target.id, play=False)
        logger.info(f"Transferred playback to {target.name} ({target.type})")
        return f"Using device: {target.name}"
    except SpotifyError as e:
        logger.warning(f"Device selection failed: {e}")
        return f"Error: {e}"


def connect(cfg: Config) -> SpotifyClient:
    """
    Build an authenticated client, running the browser login if needed.

    Raises:
        AuthenticationError: If credentials are missing or login fails
    """
    tokens = TokenManager(cfg.spotify)
    if not tokens.has_tokens:
        print("Not authenticated with Spotify yet, opening browser...")
        tokens = TokenManager(cfg.spotify, authenticate(cfg.spotify))
    return SpotifyClient(tokens)


def interactive_mode(cfg: Config) -> None:
    """
    Run the full-screen controller.

    Args:
        cfg: Loaded configuration (logging already set up)

    Raises:
        AuthenticationError: If the user cannot be authenticated
    """
    print("Authenticating...")
    client = connect(cfg)

    print("Detecting devices...")
    status = autoselect_device(client)

    # Imported late so `spotideck auth` and `devices` never touch the terminal UI
    from spotideck.ui.blessed import run_interactive_ui

    run_interactive_ui(client, cfg.colors, __version__, status)
    logger.info("spotideck exited")
