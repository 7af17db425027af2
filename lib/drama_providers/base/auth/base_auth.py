# drama_providers/base/auth/base_auth.py
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional


class TokenTier(Enum):
    """Provenance of a minted token, ordered from most to least trusted"""

    LIVE = "live"  # Issued by the upstream auth endpoint
    FALLBACK = "fallback"  # Derived locally from the device identity
    EMERGENCY = "emergency"  # Random, single use

    @property
    def cacheable(self) -> bool:
        return self is not TokenTier.EMERGENCY


@dataclass(frozen=True)
class AuthToken:
    """A bearer token with its expiry instant (unix seconds) and tier"""

    value: str
    expires_at: float
    tier: TokenTier
    issued_at: float = 0.0

    def is_valid(self, now: Optional[float] = None) -> bool:
        """Check if token is still usable at *now*"""
        if not self.value:
            return False
        current_time = time.time() if now is None else now
        return current_time < self.expires_at

    @property
    def expiry_time(self) -> str:
        """Expiry as an ISO-8601 UTC string"""
        moment = datetime.fromtimestamp(self.expires_at, tz=timezone.utc)
        return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DeviceIdentity:
    """
    Opaque device identifier shared by every upstream request.

    Generated once from 16 secure random bytes (32 hex characters) and never changed.
    """

    def __init__(self, generator: Callable[[int], str] = secrets.token_hex):
        self._device_id = generator(16)

    def identity(self) -> str:
        return self._device_id
