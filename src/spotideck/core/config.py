"""
Configuration management for spotideck
"""

import os
import re
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from loguru import logger

HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass
class SpotifyConfig:
    """Spotify application credentials."""

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = "http://localhost:8080/callback"


@dataclass
class ColorsConfig:
    """Seven-color palette used by the renderer (hex #RRGGBB strings)."""

    header: str = "#00FFFF"  # cyan
    track_playing: str = "#00FF00"  # green
    track_paused: str = "#FFFF00"  # yellow
    artist: str = "#FFFFFF"  # white
    progress_bar: str = "#FFFFFF"  # white
    status: str = "#808080"  # grey
    error: str = "#FF0000"  # red


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/spotideck/spotideck.log)
    )
    rotation: str = "10 MB"
    retention: int = 5


@dataclass
class Config:
    """Main configuration object."""

    spotify: SpotifyConfig = field(default_factory=SpotifyConfig)
    colors: ColorsConfig = field(default_factory=ColorsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "spotideck"
    return Path.home() / ".config" / "spotideck"


def get_data_dir() -> Path:
    """Get the data directory path (tokens, log file)."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "spotideck"
    return Path.home() / ".local" / "share" / "spotideck"


def get_config_path(explicit: Optional[Path] = None) -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Explicit path given on the command line
    2. Current working directory
    3. XDG_CONFIG_HOME/spotideck (or ~/.config/spotideck)
    """
    if explicit is not None:
        return explicit

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def _apply_section(section: Any, values: dict[str, Any], name: str) -> None:
    """Copy known keys from a TOML table onto a config dataclass."""
    known = {f.name: f for f in fields(section)}
    for key, value in values.items():
        if key not in known:
            logger.warning(f"Unknown config key [{name}].{key} ignored")
            continue
        setattr(section, key, value)


def _validate_colors(colors: ColorsConfig) -> ColorsConfig:
    """Replace invalid color entries with their defaults."""
    defaults = ColorsConfig()
    for f in fields(colors):
        value = getattr(colors, f.name)
        if not isinstance(value, str) or not HEX_COLOR_RE.match(value):
            logger.warning(
                f"Invalid color {f.name}={value!r}, using {getattr(defaults, f.name)}"
            )
            setattr(colors, f.name, getattr(defaults, f.name))
    return colors


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from TOML, falling back to defaults.

    A missing file is created from the default template. Malformed TOML never
    aborts startup: the defaults are used and a warning is logged. A .env file
    in the config directory is loaded first, so it can supply
    SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET.

    Args:
        path: Optional explicit config file path

    Returns:
        Resolved Config
    """
    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config = Config()
    config_path = get_config_path(path)

    if not config_path.exists():
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(create_default_config())
            print(f"Created default configuration at: {config_path}")
        except OSError as e:
            logger.warning(f"Could not create default configuration at {config_path}: {e}")
    else:
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Error loading configuration from {config_path}: {e}")
            data = {}

        for name in ("spotify", "colors", "logging"):
            table = data.get(name)
            if isinstance(table, dict):
                _apply_section(getattr(config, name), table, name)

        logger.debug(f"Loaded configuration from {config_path}")

    config.colors = _validate_colors(config.colors)

    # Environment variables win over the config file
    spotify_client_id = os.environ.get("SPOTIFY_CLIENT_ID")
    spotify_client_secret = os.environ.get("SPOTIFY_CLIENT_SECRET")
    if spotify_client_id:
        config.spotify.client_id = spotify_client_id
    if spotify_client_secret:
        config.spotify.client_secret = spotify_client_secret

    return config


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """# spotideck configuration

[spotify]
# Create an app at https://developer.spotify.com/dashboard
# and add the redirect URI below to it.
client_id = ""
client_secret = ""
redirect_uri = "http://localhost:8080/callback"

[colors]
header = "#00FFFF"
track_playing = "#00FF00"
track_paused = "#FFFF00"
artist = "#FFFFFF"
progress_bar = "#FFFFFF"
status = "#808080"
error = "#FF0000"

[logging]
level = "INFO"
rotation = "10 MB"
retention = 5
"""
