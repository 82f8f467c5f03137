"""Spotify-specific exceptions for error handling."""

from typing import Optional


class SpotifyError(Exception):
    """Base exception for Spotify operations."""

    pass


class AuthenticationError(SpotifyError):
    """Raised when no valid access token can be obtained."""

    pass


class SpotifyAPIError(SpotifyError):
    """Raised when a Web API request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class NoDeviceError(SpotifyError):
    """Raised when no controllable playback device is available."""

    pass
