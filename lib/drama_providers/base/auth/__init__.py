# drama_providers/base/auth/__init__.py
from .base_auth import AuthToken, TokenTier, DeviceIdentity
from .token_store import TokenStore

# Only export what consumers should use
__all__ = [
    'AuthToken',
    'TokenTier',
    'DeviceIdentity',
    'TokenStore'
]
