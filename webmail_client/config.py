"""
Global settings and constants for the webmail client.

This module provides configuration constants and helpers for the client.
It is framework-agnostic and designed to be easily unit-testable: values
start at their defaults and are replaced from the environment (and an
optional .env file) by load_env().
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from webmail_client.utils.errors import ConfigError


# REST API root
DEFAULT_BASE_URL: str = "http://localhost:9009"

# Number of summaries fetched per "load more" batch
DEFAULT_PAGE_SIZE: int = 25

# Transport timeout in seconds (the sync core enforces none of its own)
DEFAULT_REQUEST_TIMEOUT: float = 30.0

BASE_URL: str = DEFAULT_BASE_URL
PAGE_SIZE: int = DEFAULT_PAGE_SIZE
REQUEST_TIMEOUT: float = DEFAULT_REQUEST_TIMEOUT
LOG_DIR: Path = Path.home() / ".webmail_client" / "logs"


@dataclass(frozen=True)
class ClientSettings:
    """Snapshot of the settings the client core consumes."""
    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ConfigError(f"page_size must be a positive integer, got {self.page_size}")
        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout must be positive, got {self.request_timeout}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def load_env(dotenv_path: Optional[Path] = None) -> None:
    """
    Load environment variables and apply sensible defaults.

    Reads a .env file if one exists, then the WEBMAIL_* variables. It
    should be called at application startup.

    Raises:
        ConfigError: If a variable is set to an invalid value.
    """
    global BASE_URL, PAGE_SIZE, REQUEST_TIMEOUT, LOG_DIR

    load_dotenv(dotenv_path)

    BASE_URL = os.environ.get("WEBMAIL_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

    page_size_env = os.environ.get("WEBMAIL_PAGE_SIZE")
    PAGE_SIZE = _parse_int("WEBMAIL_PAGE_SIZE", page_size_env) if page_size_env else DEFAULT_PAGE_SIZE
    if PAGE_SIZE < 1:
        raise ConfigError(f"WEBMAIL_PAGE_SIZE must be a positive integer, got {PAGE_SIZE}")

    timeout_env = os.environ.get("WEBMAIL_REQUEST_TIMEOUT")
    REQUEST_TIMEOUT = (
        _parse_float("WEBMAIL_REQUEST_TIMEOUT", timeout_env) if timeout_env else DEFAULT_REQUEST_TIMEOUT
    )

    log_dir_env = os.environ.get("WEBMAIL_LOG_DIR")
    if log_dir_env:
        LOG_DIR = Path(log_dir_env)


def get_settings() -> ClientSettings:
    """
    Get the current settings as an immutable snapshot.

    Example:
        >>> get_settings().page_size
        25
    """
    return ClientSettings(
        base_url=BASE_URL,
        page_size=PAGE_SIZE,
        request_timeout=REQUEST_TIMEOUT,
    )
