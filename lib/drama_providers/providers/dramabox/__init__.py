# drama_providers/providers/dramabox/__init__.py
"""
DramaBox provider module
"""

from .provider import DramaBoxCatalogClient
from .auth import DramaBoxTokenMinter
from .dispatcher import RequestDispatcher

__all__ = ["DramaBoxCatalogClient", "DramaBoxTokenMinter", "RequestDispatcher"]
