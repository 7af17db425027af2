# drama_providers/base/network/__init__.py
from .http_manager import HTTPManager, HTTPManagerFactory

# Only export what consumers should use
__all__ = ["HTTPManager", "HTTPManagerFactory"]
