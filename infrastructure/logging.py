"""Application logging with loguru: a rotating per-user log file.

The Log menu opens the newest file or the directory through the platform's
default handler.
"""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
import sys

from loguru import logger

APP_DIR_NAME = "PhotoGallery"
LOG_DIR_ENV = "PHOTO_GALLERY_LOG_DIR"
LOG_FILE_PATTERN = "gallery_{time:YYYYMMDD}.log"
LOG_FILE_GLOB = "gallery_*.log"


def get_log_directory() -> str:
    """Per-user log directory; `PHOTO_GALLERY_LOG_DIR` takes precedence."""
    override = os.environ.get(LOG_DIR_ENV)
    if override:
        return override
    if os.name == "nt":
        base = Path(os.environ.get("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    else:
        base = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state")
    return str(base / APP_DIR_NAME / "logs")


def init_logging(log_dir: str | None = None, level: str = "INFO") -> Path:
    """Replace loguru's default stderr sink with a rotating file sink.

    Returns:
        The directory log files are written to.
    """
    log_path = Path(log_dir or get_log_directory())
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        str(log_path / LOG_FILE_PATTERN),
        level=level,
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
    )
    return log_path


def find_latest_log_file(log_dir: str | Path | None = None) -> Path | None:
    """Most recently modified log file, or None if there is none."""
    log_path = Path(log_dir or get_log_directory())
    try:
        candidates = [p for p in log_path.glob(LOG_FILE_GLOB) if p.is_file()]
        return max(candidates, key=lambda p: p.stat().st_mtime, default=None)
    except OSError as ex:
        logger.warning("Cannot scan log directory {}: {}", log_path, ex)
        return None


def _open_with_system(path: str | Path) -> bool:
    target = str(path)
    try:
        if os.name == "nt":
            os.startfile(target)  # pylint: disable=no-member
        else:
            opener = "open" if sys.platform == "darwin" else "xdg-open"
            subprocess.run([opener, target], check=True)
    except (OSError, subprocess.CalledProcessError) as ex:
        logger.warning("Failed to open {}: {}", target, ex)
        return False
    return True


def open_latest_log() -> bool:
    log_file = find_latest_log_file()
    if log_file is None:
        logger.info("No log file found in {}", get_log_directory())
        return False
    return _open_with_system(log_file)


def open_log_directory() -> bool:
    return _open_with_system(get_log_directory())
