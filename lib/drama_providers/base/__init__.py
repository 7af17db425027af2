# drama_providers/base/__init__.py
"""
Base module for drama providers

This module contains the core abstractions used by all providers:
token handling, HTTP transport, configuration and logging.
"""

from .auth import AuthToken, TokenTier, DeviceIdentity, TokenStore
from .exceptions import AuthFailure, UpstreamError, InvalidInput
from .network import HTTPManager, HTTPManagerFactory

__all__ = [
    "AuthToken",
    "TokenTier",
    "DeviceIdentity",
    "TokenStore",
    "AuthFailure",
    "UpstreamError",
    "InvalidInput",
    "HTTPManager",
    "HTTPManagerFactory",
]
