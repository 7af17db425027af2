# drama_providers/base/utils/environment.py
"""
Central configuration management.
Provides a single config dictionary for the service, the logger and the providers.
"""

import os
import sys
import json
from typing import Dict, Any, Optional, Union
from pathlib import Path

# Environment variable -> config key
ENV_OVERRIDES = {
    'SERVER_PORT': 'server_port',
    'SERVER_HOST': 'server_host',
    'LOG_LEVEL': 'log_level',
    'DRAMABOX_BASE_URL': 'dramabox_base_url',
}


class EnvironmentManager:
    """
    Central manager for service configuration.
    """

    _instance: Optional['EnvironmentManager'] = None

    def __new__(cls) -> 'EnvironmentManager':
        if cls._instance is None:
            cls._instance = super(EnvironmentManager, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self._initialized = True
        self._config: Dict[str, Any] = {}

        self._init_defaults()
        self._load_config()
        self._load_env()

    def _init_defaults(self) -> None:
        """Initialize built-in defaults and the profile directory"""
        self._config['app_name'] = 'DramaBox Backend'
        self._config['app_version'] = '1.0.0'
        self._config['server_host'] = '0.0.0.0'
        self._config['server_port'] = 3000
        self._config['log_level'] = 'DEBUG'

        config_home = os.environ.get('XDG_CONFIG_HOME') or os.path.join(str(Path.home()), '.config')
        self._config['profile_path'] = os.path.join(config_home, 'dramabox-backend')

        try:
            os.makedirs(self._config['profile_path'], exist_ok=True)
        except OSError as dir_error:
            print(f"Failed to create config directory: {dir_error}", file=sys.stderr)
            import tempfile
            self._config['profile_path'] = tempfile.mkdtemp(prefix='dramabox-backend-')

    def _load_config(self) -> None:
        """Load additional configuration from config.json in the profile directory"""
        config_file = os.path.join(self._config['profile_path'], 'config.json')
        if os.path.exists(config_file):
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    for key, value in file_config.items():
                        if isinstance(value, (str, int, float, bool, type(None))):
                            self._config[key] = value
            except json.JSONDecodeError as json_error:
                print(f"Invalid JSON in config file: {json_error}", file=sys.stderr)
            except OSError as io_error:
                print(f"Failed to read config file: {io_error}", file=sys.stderr)

    def _load_env(self) -> None:
        """Apply environment variable overrides"""
        for env_name, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None or not value.strip():
                continue
            self._config[key] = value.strip()

        try:
            self._config['server_port'] = int(self._config['server_port'])
        except (TypeError, ValueError) as port_error:
            print(f"Invalid server port, using default: {port_error}", file=sys.stderr)
            self._config['server_port'] = 3000

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        return self._config.get(key, default)

    def set_config(self, key: str, value: Union[str, int, float, bool, None]) -> None:
        """Set configuration value for the lifetime of the process"""
        self._config[key] = value

    def get_provider_config(self, provider: str) -> Dict[str, Any]:
        """
        Collect '<provider>_*' keys into an override dict with the prefix stripped

        Args:
            provider: Provider name, e.g. 'dramabox'

        Returns:
            Dictionary suitable for the provider's config class
        """
        prefix = f"{provider}_"
        return {
            key[len(prefix):]: value
            for key, value in self._config.items()
            if key.startswith(prefix)
        }

    def get_service_config(self) -> Dict[str, Any]:
        """Get configuration for running the service"""
        return {
            'host': self._config.get('server_host', '0.0.0.0'),
            'port': self._config.get('server_port', 3000),
            'debug': bool(self._config.get('debug_mode', False)),
            'profile_path': self._config.get('profile_path', ''),
        }


# Global singleton instance
_env_manager: Optional[EnvironmentManager] = None


def get_environment_manager() -> EnvironmentManager:
    """Get the global environment manager instance"""
    global _env_manager
    if _env_manager is None:
        _env_manager = EnvironmentManager()
    return _env_manager

