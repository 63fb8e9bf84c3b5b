"""
Wetrocloud API client.

Usage:
    from wetrocloud import WetrocloudClient

    client = WetrocloudClient(api_key="...")
    result = client.create_collection("docs")
    if result.get("success"):
        client.insert_resource("docs", "https://example.com", "web")
"""

__version__ = "0.1.0"

from wetrocloud.client import WetrocloudClient
from wetrocloud.exceptions import (
    ConfigurationError,
    EncodingError,
    InvalidRequestError,
    ResponseShapeError,
    TransportFailure,
    WetrocloudError,
)
from wetrocloud.settings import DEFAULT_BASE_URL, ClientSettings, load_settings

__all__ = [
    # Client
    "WetrocloudClient",
    "DEFAULT_BASE_URL",
    # Settings
    "ClientSettings",
    "load_settings",
    # Exceptions
    "WetrocloudError",
    "ConfigurationError",
    "TransportFailure",
    "ResponseShapeError",
    "EncodingError",
    "InvalidRequestError",
]
