# drama_providers/base/exceptions.py
from typing import Optional


class AuthFailure(Exception):
    """The live auth call did not yield a token. Never leaves the token minter."""


class UpstreamError(Exception):
    """An upstream call failed on every attempt of its retry budget"""

    def __init__(self, message: str, endpoint: Optional[str] = None, attempts: int = 0):
        self.endpoint = endpoint
        self.attempts = attempts
        super().__init__(message)


class InvalidInput(ValueError):
    """Caller-supplied value that cannot be turned into an upstream request"""
