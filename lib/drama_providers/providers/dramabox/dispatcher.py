# drama_providers/providers/dramabox/dispatcher.py
import time
from typing import Any, Callable, Optional

import requests

from ...base.exceptions import UpstreamError
from ...base.network import HTTPManager
from ...base.utils.logger import logger
from .auth import DramaBoxTokenMinter
from .constants import DramaBoxConfig


class RequestDispatcher:
    """
    POSTs JSON bodies to the DramaBox API with a bounded, fixed-delay retry.

    A call makes at most ``retry_count + 1`` attempts. Every failure is retried
    the same way: no backoff, no jitter, no status code is treated as final.
    The token is fetched again on every attempt so a refresh between attempts
    is picked up.
    """

    def __init__(
        self,
        minter: DramaBoxTokenMinter,
        http_manager: HTTPManager,
        config: Optional[DramaBoxConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.minter = minter
        self.http_manager = http_manager
        self.config = config or DramaBoxConfig()
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self.config.retry_count + 1

    def build_headers(self, cid: Optional[str] = None) -> dict:
        token = self.minter.mint()
        return self.config.get_api_headers(token.value, self.minter.device_id, cid)

    def call(self, endpoint: str, body: Any, cid: Optional[str] = None) -> Any:
        """
        Send *body* to *endpoint* and return the decoded JSON envelope

        Args:
            endpoint: API path relative to the base URL, e.g. '/search/suggest'
            body: JSON-serializable request body
            cid: Client id header value, catalog cid when omitted

        Returns:
            Parsed JSON response

        Raises:
            UpstreamError: Every attempt failed
        """
        url = self.config.get_url(endpoint)
        last_error: Optional[Exception] = None

        for attempt in range(self.max_attempts):
            try:
                headers = self.build_headers(cid)
                response = self.http_manager.post(
                    url,
                    operation='api',
                    json_data=body,
                    headers=headers,
                    timeout=self.config.api_timeout,
                )
                return response.json()
            except (requests.RequestException, ValueError) as e:
                last_error = e
                logger.error(f"API request failed (attempt {attempt + 1}): {e}")

            if attempt + 1 < self.max_attempts:
                logger.info(f"Retrying in {int(self.config.retry_delay * 1000)}ms...")
                self._sleep(self.config.retry_delay)

        raise UpstreamError(
            str(last_error), endpoint=endpoint, attempts=self.max_attempts
        ) from last_error
