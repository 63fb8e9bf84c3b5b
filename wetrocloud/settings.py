"""
Client Settings

Environment-driven configuration for the Wetrocloud client.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.wetrocloud.com"
DEFAULT_TIMEOUT = 30.0


def _get_env_str(key: str, default: str) -> str:
    """Get string from environment variable or return default."""
    return os.getenv(key, default)


def _get_env_float(key: str, default: float) -> float:
    """Get float from environment variable or return default."""
    value = os.getenv(key)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            pass
    return default


@dataclass
class ClientSettings:
    """Settings for the Wetrocloud API client."""

    # Wetrocloud API key (required)
    api_key: str = field(
        default_factory=lambda: _get_env_str("WETROCLOUD_API_KEY", "")
    )

    base_url: str = field(
        default_factory=lambda: _get_env_str("WETROCLOUD_BASE_URL", DEFAULT_BASE_URL)
    )

    # Request timeout in seconds
    timeout: float = field(
        default_factory=lambda: _get_env_float("WETROCLOUD_TIMEOUT", DEFAULT_TIMEOUT)
    )

    # Empty means the client falls back to its own identifier
    user_agent: str = field(
        default_factory=lambda: _get_env_str("WETROCLOUD_USER_AGENT", "")
    )


def load_settings(env_file: Optional[Union[str, Path]] = None) -> ClientSettings:
    """
    Build client settings from the environment.

    Args:
        env_file: Optional path to a .env file loaded before reading variables.
            Variables already present in the environment take precedence.

    Returns:
        ClientSettings populated from WETROCLOUD_* variables
    """
    if env_file is not None:
        load_dotenv(env_file)
    return ClientSettings()
