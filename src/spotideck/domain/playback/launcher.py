"""
Spotify desktop client launcher.

Provides pure functions to detect how Spotify is installed on this platform
and start it in the background.
"""

import shutil
import subprocess
import sys
from typing import Optional

from loguru import logger

from spotideck.domain.spotify.exceptions import SpotifyError


class LauncherError(SpotifyError):
    """Raised when the Spotify client cannot be found or started."""

    pass


def _succeeds(args: list[str]) -> bool:
    try:
        result = subprocess.run(args, capture_output=True, timeout=10)
    except (subprocess.SubprocessError, FileNotFoundError):
        return False
    return result.returncode == 0


def detect_spotify(platform: Optional[str] = None) -> str:
    """
    Detect the Spotify installation kind for a platform.

    Args:
        platform: sys.platform value (defaults to the running platform)

    Returns:
        One of "macos", "windows", "flatpak", "binary", "snap"

    Raises:
        LauncherError: If no installation is found
    """
    platform = platform or sys.platform

    if platform == "darwin":
        if shutil.which("open"):
            return "macos"
    elif platform.startswith("win"):
        # Store installs register the spotify: URI handler without a binary on PATH
        return "windows"
    else:
        if shutil.which("flatpak") and _succeeds(["flatpak", "info", "com.spotify.Client"]):
            return "flatpak"
        if shutil.which("spotify"):
            return "binary"
        if shutil.which("snap") and _succeeds(["snap", "list", "spotify"]):
            return "snap"

    raise LauncherError("spotify not found")


LAUNCH_COMMANDS: dict[str, list[str]] = {
    "macos": ["open", "-a", "Spotify"],
    "windows": ["cmd", "/c", "start", "spotify:"],
    "flatpak": ["flatpak", "run", "com.spotify.Client"],
    "snap": ["snap", "run", "spotify"],
    "binary": ["spotify"],
}


def launch_player(platform: Optional[str] = None) -> str:
    """
    Start the Spotify client detached from this process.

    Returns:
        The installation kind that was launched

    Raises:
        LauncherError: If Spotify is not installed or fails to start
    """
    kind = detect_spotify(platform)
    command = LAUNCH_COMMANDS[kind]

    try:
        subprocess.Popen(
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        raise LauncherError(f"failed to start Spotify: {e}") from e

    logger.info(f"Launched Spotify ({kind}): {' '.join(command)}")
    return kind
