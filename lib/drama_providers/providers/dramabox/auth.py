# drama_providers/providers/dramabox/auth.py
import base64
import hashlib
import json
import secrets
import string
import time
from typing import Any, Callable, Dict, Optional

import requests

from ...base.auth import AuthToken, DeviceIdentity, TokenStore, TokenTier
from ...base.exceptions import AuthFailure
from ...base.network import HTTPManager
from ...base.utils.logger import logger
from .constants import DramaBoxConfig, DramaBoxDefaults

NONCE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_nonce(length: int = DramaBoxDefaults.NONCE_LENGTH) -> str:
    """Random alphanumeric string"""
    return ''.join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


def generate_signature(params: Dict[str, Any], secret: str = DramaBoxDefaults.SIGNING_SECRET) -> str:
    """
    Sign auth parameters: sorted 'key=value' pairs joined by '&', secret appended, MD5 hex.

    The upstream has never been seen validating this; it is reproduced as-is.
    """
    sorted_params = '&'.join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.md5(f"{sorted_params}{secret}".encode('utf-8')).hexdigest()


def _b64url_json(data: Dict[str, Any]) -> str:
    raw = json.dumps(data, separators=(',', ':')).encode('utf-8')
    return base64.urlsafe_b64encode(raw).rstrip(b'=').decode('ascii')


def build_fallback_token(device_id: str, timestamp: int,
                         issuer: str = DramaBoxDefaults.TOKEN_ISSUER) -> str:
    """
    Derive a JWT-shaped token from the device id and a unix timestamp.

    The third segment is the first 43 hex chars of
    sha256("{device_id}:{timestamp}:dramabox"), not a real signature.
    """
    digest = hashlib.sha256(f"{device_id}:{timestamp}:dramabox".encode('utf-8')).hexdigest()

    header = _b64url_json({'alg': 'HS256', 'typ': 'JWT'})
    payload = _b64url_json({
        'device_id': device_id,
        'iat': timestamp,
        'exp': timestamp + 3600,
        'iss': issuer,
    })

    return f"{header}.{payload}.{digest[:43]}"


def build_emergency_token(timestamp: int) -> str:
    return f"emergency_{timestamp}_{secrets.token_hex(32)}"


class DramaBoxTokenMinter:
    """
    Produces a usable bearer token and never fails.

    Tiers are tried in ladder order. LIVE calls the upstream auth endpoint,
    FALLBACK derives a token locally, EMERGENCY is random and never cached.
    The minter does not retry; retries belong to the consumer call.
    """

    ladder = (TokenTier.LIVE, TokenTier.FALLBACK, TokenTier.EMERGENCY)

    def __init__(
        self,
        device: DeviceIdentity,
        token_store: TokenStore,
        http_manager: HTTPManager,
        config: Optional[DramaBoxConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.device = device
        self.token_store = token_store
        self.http_manager = http_manager
        self.config = config or DramaBoxConfig()
        self._clock = clock

        self._producers: Dict[TokenTier, Callable[[], AuthToken]] = {
            TokenTier.LIVE: self._mint_live,
            TokenTier.FALLBACK: self._mint_fallback,
            TokenTier.EMERGENCY: self._mint_emergency,
        }

    @property
    def provider_name(self) -> str:
        return "dramabox"

    @property
    def device_id(self) -> str:
        return self.device.identity()

    def mint(self) -> AuthToken:
        """Return the cached token, or walk the tier ladder to produce a new one"""
        cached = self.token_store.get()
        if cached is not None:
            return cached

        *degradable, last_resort = self.ladder
        for tier in degradable:
            try:
                token = self._producers[tier]()
            except AuthFailure as e:
                logger.warning(f"DramaBox {tier.value} token unavailable: {e}")
                continue
            except Exception as e:
                logger.error(f"DramaBox {tier.value} token generation error: {e}")
                continue
            return self._accept(token)

        return self._accept(self._producers[last_resort]())

    def refresh(self) -> AuthToken:
        """Drop the cached token and mint a new one"""
        logger.log_auth_event(self.provider_name, "Manual token refresh")
        self.token_store.clear()
        return self.mint()

    def info(self) -> Dict[str, Any]:
        """Read-only snapshot of the token slot"""
        token = self.token_store.peek()
        return {
            'hasToken': token is not None,
            'isExpired': self.token_store.is_expired(),
            'deviceId': self.device_id,
            'expiryTime': token.expiry_time if token else None,
            'tier': token.tier.value if token else None,
        }

    def _accept(self, token: AuthToken) -> AuthToken:
        if token.tier.cacheable:
            self.token_store.set(token)
        logger.log_auth_event(self.provider_name, "Token minted", f"tier={token.tier.value}")
        return token

    def _mint_live(self) -> AuthToken:
        """Request a token from the upstream auth endpoint"""
        now = self._clock()
        timestamp = int(now)
        nonce = generate_nonce()

        params = {
            'device_id': self.device_id,
            'timestamp': timestamp,
            'nonce': nonce,
            'version': DramaBoxDefaults.VERSION,
            'platform': DramaBoxDefaults.PLATFORM,
            'app_version': DramaBoxDefaults.VERSION_NAME,
        }

        payload = {
            'deviceId': self.device_id,
            'platform': DramaBoxDefaults.PLATFORM,
            'version': DramaBoxDefaults.VERSION_NAME,
            'timestamp': timestamp,
            'nonce': nonce,
            'signature': generate_signature(params, self.config.signing_secret),
        }

        try:
            response = self.http_manager.post(
                self.config.auth_endpoint,
                operation='auth',
                json_data=payload,
                headers=self.config.get_auth_headers(self.device_id),
                timeout=self.config.auth_timeout,
            )
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            raise AuthFailure(f"Auth endpoint failed: {e}") from e

        data = body.get('data') if isinstance(body, dict) else None
        token_value = data.get('token') if isinstance(data, dict) else None
        if not token_value:
            raise AuthFailure("Auth response missing 'data.token'")

        return AuthToken(
            value=str(token_value),
            expires_at=now + DramaBoxDefaults.LIVE_TOKEN_TTL,
            tier=TokenTier.LIVE,
            issued_at=now,
        )

    def _mint_fallback(self) -> AuthToken:
        now = self._clock()
        return AuthToken(
            value=build_fallback_token(self.device_id, int(now)),
            expires_at=now + DramaBoxDefaults.FALLBACK_TOKEN_TTL,
            tier=TokenTier.FALLBACK,
            issued_at=now,
        )

    def _mint_emergency(self) -> AuthToken:
        now = self._clock()
        return AuthToken(
            value=build_emergency_token(int(now)),
            expires_at=now,
            tier=TokenTier.EMERGENCY,
            issued_at=now,
        )
