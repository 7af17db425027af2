# drama_providers/base/network/http_manager.py
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from ..models.request_models import RequestConfig
from ..utils.logger import logger


class HTTPManager:
    """
    Centralized HTTP request manager

    Handles all HTTP requests for providers with:
    - Per-operation timeouts
    - Error handling
    - Request/response logging
    - Provider-specific configurations

    Retries are owned by the caller; the session itself never retries.
    """

    def __init__(self, config: Optional[RequestConfig] = None):
        """
        Initialize HTTP manager

        Args:
            config: Request configuration
        """
        self.config = config or RequestConfig()
        self._session = None
        self._setup_session()

    def _setup_session(self) -> None:
        """Setup requests session without transport-level retries"""
        self._session = requests.Session()

        adapter = HTTPAdapter(max_retries=0)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def get(self, url: str, operation: str = "api", **kwargs) -> requests.Response:
        """Perform GET request"""
        return self._make_request("GET", url, operation, **kwargs)

    def post(
        self,
        url: str,
        operation: str = "api",
        data: Any = None,
        json_data: Any = None,
        **kwargs,
    ) -> requests.Response:
        """
        Perform POST request

        Args:
            url: Request URL
            operation: Operation type (api, auth) used for logging
            data: Request data (form data or raw)
            json_data: JSON data to send
            **kwargs: Additional arguments for requests

        Returns:
            requests.Response object

        Raises:
            requests.exceptions.RequestException: On request failure
        """
        if json_data is not None:
            kwargs["json"] = json_data
        elif data is not None:
            kwargs["data"] = data

        return self._make_request("POST", url, operation, **kwargs)

    def _make_request(self, method: str, url: str, operation: str, **kwargs) -> requests.Response:
        """
        Make HTTP request with full configuration support
        """
        request_kwargs = self.config.get_request_kwargs()

        # Explicit headers are layered over the configured defaults
        headers = request_kwargs.pop("headers")
        headers.update(kwargs.pop("headers", None) or {})
        request_kwargs["headers"] = headers
        request_kwargs.update(kwargs)

        self._log_request(method, url, operation, request_kwargs)

        try:
            response = self._session.request(method, url, **request_kwargs)

            self._log_response(response)

            # Check for HTTP errors (will raise for 4xx/5xx)
            response.raise_for_status()

            return response

        except requests.exceptions.Timeout as e:
            logger.error(
                f"{self.config.provider}: Timeout ({request_kwargs.get('timeout', 'unknown')}s) "
                f"for {operation} request to {url}: {e}"
            )
            raise

        except requests.exceptions.ConnectionError as e:
            logger.error(
                f"{self.config.provider}: Connection error for {operation} request to {url}: {e}"
            )
            raise

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.error(
                f"{self.config.provider}: HTTP {status} error for {operation} request to {url}: {e}"
            )
            raise

        except requests.exceptions.RequestException as e:
            logger.error(
                f"{self.config.provider}: Request error for {operation} request to {url}: {e}"
            )
            raise

    def _log_request(self, method: str, url: str, operation: str, kwargs: Dict[str, Any]) -> None:
        """Log request details"""
        timeout = kwargs.get("timeout", self.config.timeout)

        # Truncate URL for readability if very long
        display_url = url if len(url) <= 100 else f"{url[:80]}...{url[-17:]}"

        logger.debug(
            f"{self.config.provider}: {method} {operation} -> {display_url} [timeout: {timeout}s]"
        )

    def _log_response(self, response: requests.Response) -> None:
        """Log response details with timing information"""
        elapsed = ""
        if hasattr(response, "elapsed"):
            elapsed_ms = int(response.elapsed.total_seconds() * 1000)
            elapsed = f" [{elapsed_ms}ms]"

        content_type = response.headers.get("Content-Type", "unknown")

        size = len(response.content)
        size_display = f"{size} bytes"
        if size > 1024 * 1024:
            size_display = f"{size / (1024 * 1024):.2f} MB"
        elif size > 1024:
            size_display = f"{size / 1024:.2f} KB"

        logger.debug(
            f"{self.config.provider}: Response {response.status_code} "
            f"({size_display}, {content_type}){elapsed}"
        )

    def close(self) -> None:
        """Close the session"""
        if self._session:
            self._session.close()


class HTTPManagerFactory:
    """
    Factory for creating HTTP managers with provider-specific configurations
    """

    @staticmethod
    def create_for_provider(provider_name: str, **config_kwargs) -> HTTPManager:
        """
        Create HTTP manager configured for specific provider

        Args:
            provider_name: Name of the provider
            **config_kwargs: Additional RequestConfig parameters

        Returns:
            Configured HTTPManager instance
        """
        provider_defaults = {
            "dramabox": {
                "user_agent": "okhttp/4.10.0",
                "timeout": 15,
            },
        }

        defaults = dict(provider_defaults.get(provider_name, {}))
        defaults.update(config_kwargs)
        defaults["provider"] = provider_name

        return HTTPManager(RequestConfig(**defaults))
