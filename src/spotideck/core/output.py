"""
Logging setup using Loguru.

The full-screen UI owns the terminal, so log output goes to a file only.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir


def get_log_file_path() -> Path:
    """Get the default path to the log file."""
    return get_data_dir() / "spotideck.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: int = 5,
) -> Path:
    """
    Configure loguru for file-only logging (blessed UI handles console display).

    Args:
        log_file: Path to log file (default: data dir)
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        rotation: Size or interval at which the file is rotated
        retention: Number of rotated files to keep

    Returns:
        Path of the active log file
    """
    log_file = log_file or get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default stderr handler
    logger.remove()

    logger.add(
        log_file,
        rotation=rotation,
        retention=retention,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=True,  # Worker threads log too
    )

    logger.info(f"Loguru initialized: {log_file} (level={level})")
    return log_file


def setup_from_config(cfg: LoggingConfig, debug: bool = False) -> Path:
    """Configure logging from the [logging] config section."""
    level = "DEBUG" if debug else cfg.level
    log_file = Path(cfg.log_file).expanduser() if cfg.log_file else None
    return setup_loguru(log_file, level, cfg.rotation, cfg.retention)
