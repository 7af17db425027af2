# drama_providers/providers/__init__.py
