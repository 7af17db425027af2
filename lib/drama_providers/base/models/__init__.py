# drama_providers/base/models/__init__.py
from .request_models import RequestConfig

__all__ = ['RequestConfig']
