# drama_providers/base/utils/__init__.py

from .logger import logger, BaseLogger
from .environment import get_environment_manager, EnvironmentManager

__all__ = [
    'logger',
    'BaseLogger',
    'get_environment_manager',
    'EnvironmentManager'
]
