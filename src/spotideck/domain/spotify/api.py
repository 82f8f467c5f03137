"""
Spotify Web API client for playback control.

Thin wrapper around the /me/player and /me/tracks endpoints. Every method
performs one blocking HTTP request (is_liked and get_state are separate so
callers decide whether the extra round trip is worth it) and raises
SpotifyAPIError on failure. Callers run these from worker threads.
"""

from typing import Any, Optional

import requests
from loguru import logger

from spotideck.domain.playback.models import (
    Device,
    PlaybackState,
    SearchTrack,
    device_from_api,
    playback_from_api,
    track_from_api,
)

from .auth import TokenManager
from .exceptions import SpotifyAPIError

# Spotify API base URL
API_BASE = "https://api.spotify.com/v1"

REQUEST_TIMEOUT = 10


def _error_message(response: requests.Response) -> str:
    """Extract the human-readable message from an error response."""
    try:
        error = response.json().get("error", {})
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return f"HTTP {response.status_code}"


class SpotifyClient:
    """Remote playback capability backed by the Spotify Web API."""

    def __init__(self, tokens: TokenManager, timeout: float = REQUEST_TIMEOUT):
        self.tokens = tokens
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Optional[Any]:
        """Perform an authenticated request.

        Returns:
            Decoded JSON body, or None for empty (204) responses

        Raises:
            SpotifyAPIError: On transport errors and non-2xx responses
        """
        headers = {"Authorization": f"Bearer {self.tokens.access_token()}"}
        try:
            response = requests.request(
                method,
                f"{API_BASE}{path}",
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SpotifyAPIError(f"Network error: {e}") from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After", "?")
            raise SpotifyAPIError(f"Rate limited, retry after {retry_after}s", 429)
        if not response.ok:
            raise SpotifyAPIError(_error_message(response), response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            # Some player endpoints answer 200 with a non-JSON body
            return None

    # ==================== STATE ====================

    def get_state(self) -> Optional[PlaybackState]:
        """Current playback, or None when there is no active session."""
        data = self._request("GET", "/me/player")
        return playback_from_api(data)

    def is_liked(self, track_id: str) -> bool:
        data = self._request("GET", "/me/tracks/contains", params={"ids": track_id})
        return bool(data) and bool(data[0])

    # ==================== TRANSPORT ====================

    def play(self) -> None:
        self._request("PUT", "/me/player/play")
        logger.debug("Resumed Spotify playback")

    def pause(self) -> None:
        self._request("PUT", "/me/player/pause")
        logger.debug("Paused Spotify playback")

    def next_track(self) -> None:
        self._request("POST", "/me/player/next")

    def previous_track(self) -> None:
        self._request("POST", "/me/player/previous")

    def set_volume(self, volume_percent: int) -> None:
        self._request(
            "PUT", "/me/player/volume", params={"volume_percent": volume_percent}
        )

    def seek(self, position_ms: int) -> None:
        self._request("PUT", "/me/player/seek", params={"position_ms": position_ms})
        logger.debug(f"Seeked to position: {position_ms}ms")

    def play_uri(self, uri: str) -> None:
        self._request("PUT", "/me/player/play", json={"uris": [uri]})
        logger.info(f"Playing Spotify track: {uri}")

    # ==================== LIBRARY ====================

    def add_to_library(self, track_id: str) -> None:
        self._request("PUT", "/me/tracks", params={"ids": track_id})
        logger.info(f"Liked track on Spotify: {track_id}")

    def remove_from_library(self, track_id: str) -> None:
        self._request("DELETE", "/me/tracks", params={"ids": track_id})
        logger.info(f"Unliked track on Spotify: {track_id}")

    def search_tracks(self, query: str, limit: int = 10) -> list[SearchTrack]:
        """Search tracks; results keep the API's relevance order."""
        data = self._request(
            "GET", "/search", params={"q": query, "type": "track", "limit": limit}
        )
        items = ((data or {}).get("tracks") or {}).get("items") or []
        tracks = [track_from_api(item) for item in items if item]
        logger.info(f"Search found {len(tracks)} results for: {query}")
        return tracks

    # ==================== DEVICES ====================

    def list_devices(self) -> list[Device]:
        data = self._request("GET", "/me/player/devices")
        devices = [device_from_api(d) for d in (data or {}).get("devices", [])]
        logger.debug(f"Found {len(devices)} Spotify devices")
        return devices

    def transfer_playback(self, device_id: str, play: bool = False) -> None:
        self._request("PUT", "/me/player", json={"device_ids": [device_id], "play": play})
        logger.info(f"Transferred playback to device {device_id}")
