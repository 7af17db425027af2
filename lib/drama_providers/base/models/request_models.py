# drama_providers/base/models/request_models.py
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class RequestConfig:
    """
    Configuration for HTTP requests
    Used by HTTPManager for consistent request handling
    """

    # Request settings
    timeout: float = 15
    verify_ssl: bool = True

    # Headers
    default_headers: Dict[str, str] = field(default_factory=dict)
    user_agent: str = "okhttp/4.10.0"

    # Provider-specific settings
    provider: str = ""

    def get_request_kwargs(self) -> Dict[str, Any]:
        """
        Get kwargs for requests library call

        Returns:
            Dictionary of kwargs for requests
        """
        return {
            "timeout": self.timeout,
            "verify": self.verify_ssl,
            "headers": self._get_headers(),
        }

    def _get_headers(self) -> Dict[str, str]:
        """Build headers with user agent"""
        headers = self.default_headers.copy()
        if "User-Agent" not in headers:
            headers["User-Agent"] = self.user_agent
        return headers

