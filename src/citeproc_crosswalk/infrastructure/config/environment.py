"""Environment variable loading from .env files with precedence support."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CITEPROC_CONFIG"
DEFAULT_CONFIG_FILE = "citeproc.toml"


def load_environment_variables(dotenv_path: Path | str | None = None) -> None:
    """
    Load environment variables from a .env file.

    System environment variables take precedence over .env values (override=False).

    Args:
        dotenv_path: Optional path to .env file. If None, the current directory and
                     up to two parent directories are searched.
    """
    if dotenv_path is None:
        current = Path.cwd()
        for path in (current / ".env", current.parent / ".env", current.parent.parent / ".env"):
            if path.exists():
                dotenv_path = path
                break
        if dotenv_path is None:
            load_dotenv(override=False)
            return

    dotenv_path = Path(dotenv_path)
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)
        logger.debug(f"Loaded .env file from: {dotenv_path}")
    else:
        logger.debug(f".env file not found at: {dotenv_path}")


def get_env(key: str, default: str | None = None) -> str | None:
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """
    Get boolean environment variable.

    Accepts: 'true', '1', 'yes', 'on' (case-insensitive) -> True
            'false', '0', 'no', 'off' (case-insensitive) -> False
    Anything else, including unset, returns default.
    """
    value = os.getenv(key, "").lower().strip()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default


def get_config_path(explicit: Path | str | None = None) -> Path:
    """
    Resolve the configuration file path.

    Precedence: explicit argument > CITEPROC_CONFIG (system env > .env) > citeproc.toml.
    """
    if explicit:
        return Path(explicit)
    load_environment_variables()
    return Path(get_env(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE)
