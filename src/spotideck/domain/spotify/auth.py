"""
Spotify OAuth 2.0 authentication and token management.

Handles PKCE flow, token refresh, and token storage.
"""

import base64
import hashlib
import json
import secrets
import threading
import webbrowser
from datetime import datetime, timedelta
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import requests
from loguru import logger

from spotideck.core.config import SpotifyConfig, get_data_dir

from .exceptions import AuthenticationError

# Spotify OAuth URLs
AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"

# Playback control + liked songs
SPOTIFY_SCOPES = [
    "user-library-read",
    "user-library-modify",
    "user-read-playback-state",
    "user-modify-playback-state",
    "user-read-currently-playing",
]

CALLBACK_TIMEOUT_SECONDS = 120


def _generate_pkce() -> Dict[str, str]:
    """Generate PKCE code verifier and challenge."""
    code_verifier = (
        base64.urlsafe_b64encode(secrets.token_bytes(32)).decode("utf-8").rstrip("=")
    )
    challenge_bytes = hashlib.sha256(code_verifier.encode("utf-8")).digest()
    code_challenge = (
        base64.urlsafe_b64encode(challenge_bytes).decode("utf-8").rstrip("=")
    )

    return {"code_verifier": code_verifier, "code_challenge": code_challenge}


def get_tokens_file() -> Path:
    """Get the file used to store user tokens."""
    return get_data_dir() / "user_tokens.json"


def load_user_tokens(path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    """Load user OAuth tokens from file."""
    tokens_file = path or get_tokens_file()

    if not tokens_file.exists():
        return None

    try:
        with open(tokens_file, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load Spotify tokens from file: {e}")
        return None


def save_user_tokens(token_data: Dict[str, Any], path: Optional[Path] = None) -> None:
    """Save user OAuth tokens to file with secure permissions."""
    tokens_file = path or get_tokens_file()
    tokens_file.parent.mkdir(parents=True, exist_ok=True)

    with open(tokens_file, "w", encoding="utf-8") as f:
        json.dump(token_data, f, indent=2)

    # Owner read/write only
    tokens_file.chmod(0o600)
    logger.debug(f"Saved Spotify tokens to {tokens_file}")


def is_token_expired(token_data: Dict[str, Any]) -> bool:
    """Check if token is expired (with 5-minute buffer)."""
    if "expires_at" not in token_data:
        return True

    expires_at = datetime.fromisoformat(token_data["expires_at"])
    buffer = timedelta(minutes=5)

    return datetime.now() >= (expires_at - buffer)


def _stamp_expiry(token_data: Dict[str, Any]) -> Dict[str, Any]:
    expires_in = token_data.get("expires_in", 3600)  # Default 1 hour
    expires_at = datetime.now() + timedelta(seconds=expires_in)
    token_data["expires_at"] = expires_at.isoformat()
    return token_data


def _basic_auth_header(creds: SpotifyConfig) -> Dict[str, str]:
    auth_header = base64.b64encode(
        f"{creds.client_id}:{creds.client_secret}".encode("utf-8")
    ).decode("utf-8")
    return {"Authorization": f"Basic {auth_header}"}


def refresh_token(
    creds: SpotifyConfig, token_data: Dict[str, Any]
) -> Optional[Dict[str, Any]]:
    """Refresh an expired OAuth token.

    Args:
        creds: Client credentials
        token_data: Current token data with refresh_token

    Returns:
        New token data or None if refresh fails
    """
    refresh_token_value = token_data.get("refresh_token")

    if not creds.client_id or not creds.client_secret or not refresh_token_value:
        logger.warning("Missing credentials or refresh token for Spotify token refresh")
        return None

    try:
        response = requests.post(
            TOKEN_URL,
            data={
                "grant_type": "refresh_token",
                "refresh_token": refresh_token_value,
            },
            headers=_basic_auth_header(creds),
            timeout=30,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Failed to refresh Spotify token: {e}")
        return None

    new_token_data = _stamp_expiry(response.json())

    # Preserve refresh token if not included in response
    if "refresh_token" not in new_token_data:
        new_token_data["refresh_token"] = refresh_token_value

    logger.info(f"Spotify token refreshed, expires: {new_token_data['expires_at']}")
    return new_token_data


class TokenManager:
    """Hands out a valid access token, refreshing and persisting as needed.

    Worker threads call access_token() concurrently, so refresh is guarded
    by a lock.
    """

    def __init__(
        self,
        creds: SpotifyConfig,
        token_data: Optional[Dict[str, Any]] = None,
        tokens_file: Optional[Path] = None,
    ):
        self.creds = creds
        self.tokens_file = tokens_file
        self._token_data = token_data or load_user_tokens(tokens_file)
        self._lock = threading.Lock()

    @property
    def has_tokens(self) -> bool:
        return bool(self._token_data)

    def access_token(self) -> str:
        """Return a valid access token.

        Raises:
            AuthenticationError: If no token is stored or refresh fails
        """
        with self._lock:
            if not self._token_data:
                raise AuthenticationError("Not authenticated; run `spotideck auth`")

            if is_token_expired(self._token_data):
                logger.info("Spotify token expired, attempting refresh")
                new_token_data = refresh_token(self.creds, self._token_data)
                if not new_token_data:
                    raise AuthenticationError("Token refresh failed; run `spotideck auth`")
                save_user_tokens(new_token_data, self.tokens_file)
                self._token_data = new_token_data

            return self._token_data["access_token"]


def build_authorize_url(
    creds: SpotifyConfig, code_challenge: str, csrf_state: str
) -> str:
    """Build the authorization URL the user opens in a browser."""
    params = {
        "client_id": creds.client_id,
        "response_type": "code",
        "redirect_uri": creds.redirect_uri,
        "code_challenge_method": "S256",
        "code_challenge": code_challenge,
        "state": csrf_state,
        "scope": " ".join(SPOTIFY_SCOPES),
    }
    return AUTHORIZE_URL + "?" + urlencode(params)


def _wait_for_callback(redirect_uri: str, auth_url: str) -> Dict[str, Optional[str]]:
    """Run a one-shot local HTTP server and wait for the OAuth redirect."""
    auth_result: Dict[str, Optional[str]] = {"code": None, "state": None, "error": None}
    received = threading.Event()

    class CallbackHandler(BaseHTTPRequestHandler):
        def do_GET(self):
            params = parse_qs(urlparse(self.path).query)
            auth_result["code"] = params.get("code", [None])[0]
            auth_result["state"] = params.get("state", [None])[0]
            auth_result["error"] = params.get("error", [None])[0]
            received.set()

            self.send_response(200)
            self.send_header("Content-type", "text/html")
            self.end_headers()
            if auth_result["code"]:
                body = "<h1>Authentication successful</h1><p>You can close this window.</p>"
            else:
                body = f"<h1>Authentication failed</h1><p>{auth_result['error']}</p>"
            self.wfile.write(body.encode())

        def log_message(self, format, *args):
            pass  # Keep the terminal clean

    port = urlparse(redirect_uri).port or 8080
    server = HTTPServer(("localhost", port), CallbackHandler)
    server_thread = threading.Thread(target=server.handle_request, daemon=True)
    try:
        server_thread.start()
        print(f"Callback server listening on port {port}")

        if not webbrowser.open(auth_url):
            print("Could not open a browser automatically. Open this URL:")
            print(auth_url)

        print(f"Waiting for authorization ({CALLBACK_TIMEOUT_SECONDS} seconds timeout)...")
        server_thread.join(timeout=CALLBACK_TIMEOUT_SECONDS)
    finally:
        server.server_close()

    if not received.is_set():
        raise AuthenticationError("Authorization timeout - no response received")
    return auth_result


def authenticate(creds: SpotifyConfig, tokens_file: Optional[Path] = None) -> Dict[str, Any]:
    """Authenticate with Spotify using OAuth 2.0 + PKCE.

    Opens a browser for user authorization, then exchanges the code for a
    token and stores it.

    Args:
        creds: Client credentials from config
        tokens_file: Optional override for the token file location

    Returns:
        Stored token data

    Raises:
        AuthenticationError: On missing credentials, user denial, CSRF
            mismatch or a failed token exchange
    """
    if not creds.client_id or not creds.client_secret:
        raise AuthenticationError(
            "Spotify credentials not configured. Set client_id and client_secret "
            "in config.toml or SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET."
        )

    pkce = _generate_pkce()
    csrf_state = (
        base64.urlsafe_b64encode(secrets.token_bytes(32)).decode("utf-8").rstrip("=")
    )
    auth_url = build_authorize_url(creds, pkce["code_challenge"], csrf_state)
    logger.debug(f"Authorization URL: {auth_url}")

    try:
        result = _wait_for_callback(creds.redirect_uri, auth_url)
    except OSError as e:
        raise AuthenticationError(f"Could not start callback server: {e}") from e

    if result["error"]:
        raise AuthenticationError(f"Authorization error: {result['error']}")
    if not result["code"]:
        raise AuthenticationError("No authorization code received")
    if result["state"] != csrf_state:
        logger.error(f"CSRF state mismatch: expected {csrf_state}, got {result['state']}")
        raise AuthenticationError("CSRF state mismatch")

    try:
        response = requests.post(
            TOKEN_URL,
            data={
                "grant_type": "authorization_code",
                "code": result["code"],
                "redirect_uri": creds.redirect_uri,
                "code_verifier": pkce["code_verifier"],
            },
            headers=_basic_auth_header(creds),
            timeout=30,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.exception("Token exchange failed")
        raise AuthenticationError(f"Token exchange failed: {e}") from e

    token_data = _stamp_expiry(response.json())
    save_user_tokens(token_data, tokens_file)
    logger.info(f"Spotify authentication successful, token expires: {token_data['expires_at']}")
    return token_data
