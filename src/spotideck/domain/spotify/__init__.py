"""Spotify Web API access: OAuth tokens and the playback client."""

from .api import SpotifyClient
from .auth import TokenManager, authenticate
from .exceptions import (
    AuthenticationError,
    NoDeviceError,
    SpotifyAPIError,
    SpotifyError,
)

__all__ = [
    "SpotifyClient",
    "TokenManager",
    "authenticate",
    "AuthenticationError",
    "NoDeviceError",
    "SpotifyAPIError",
    "SpotifyError",
]
