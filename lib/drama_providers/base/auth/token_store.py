# drama_providers/base/auth/token_store.py
import time
from typing import Callable, Optional

from .base_auth import AuthToken
from ..utils.logger import logger


class TokenStore:
    """
    Single-slot, in-memory token cache.

    Holds zero or one token. There is no lock around check-then-mint: callers
    that miss the cache at the same time each mint and the last write wins.
    Any tier is usable on its own for its own expiry window, so the race only
    costs an extra mint.
    """

    def __init__(self, provider_name: str = "", clock: Callable[[], float] = time.time):
        self.provider_name = provider_name
        self._clock = clock
        self._token: Optional[AuthToken] = None

    def get(self) -> Optional[AuthToken]:
        """Return the cached token if it has not expired yet"""
        token = self._token
        if token is None:
            return None
        if not token.is_valid(self._clock()):
            logger.log_session_event(self.provider_name, "Cached token expired", token.tier.value)
            return None
        return token

    def set(self, token: AuthToken) -> None:
        """Replace the cached token unconditionally"""
        self._token = token
        logger.log_session_event(
            self.provider_name, "Token cached",
            f"tier={token.tier.value}, expires={token.expiry_time}"
        )

    def clear(self) -> None:
        """Drop the cached token so the next get() reports absent"""
        self._token = None
        logger.log_session_event(self.provider_name, "Token cache cleared")

    def peek(self) -> Optional[AuthToken]:
        """Return the slot content regardless of expiry"""
        return self._token

    def is_expired(self) -> bool:
        token = self._token
        return token is None or self._clock() >= token.expires_at
