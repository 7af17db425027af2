# lib/drama_providers/__init__.py
from typing import Optional

# Import the centralized logger
from .base.utils.logger import logger
from .base.utils.environment import get_environment_manager

_client: Optional['DramaBoxCatalogClient'] = None


def get_configured_client() -> 'DramaBoxCatalogClient':
    """
    Get the process-wide DramaBox client

    The first call builds it from the environment configuration ('dramabox_*'
    keys); later calls return the same instance, so the device identity and
    token slot are shared by every caller.

    Returns:
        Configured DramaBoxCatalogClient instance
    """
    global _client
    if _client is None:
        from .providers.dramabox import DramaBoxCatalogClient

        config = get_environment_manager().get_provider_config('dramabox')
        _client = DramaBoxCatalogClient(config=config)
        logger.info(f"Configured DramaBox client with overrides: {sorted(config)}")
    return _client


__all__ = ['get_configured_client']
