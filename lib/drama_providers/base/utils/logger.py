# drama_providers/base/utils/logger.py
"""
Centralized logging module for DramaBox Backend.
Wraps the standard logging module behind a small, provider-aware interface.
"""

import os
import sys
import logging

from .environment import get_environment_manager

_env_manager_instance = get_environment_manager()


class BaseLogger:
    """Base logger interface that all logger implementations must follow"""

    def __init__(self, logger_name: str, logger_version: str):
        self.logger_name = logger_name
        self.logger_version = logger_version
        self.prefix = f"[{logger_name} v{logger_version}]"

    def debug(self, message: str) -> None:
        """Log debug message"""
        raise NotImplementedError

    def info(self, message: str) -> None:
        """Log info message"""
        raise NotImplementedError

    def warning(self, message: str) -> None:
        """Log warning message"""
        raise NotImplementedError

    def error(self, message: str, exc_info: bool = False) -> None:
        """Log error message"""
        raise NotImplementedError

    def critical(self, message: str) -> None:
        """Log critical message"""
        raise NotImplementedError

    # Specialized methods
    def log_auth_event(self, provider: str, event: str, details: str = "") -> None:
        """Log authentication event"""
        log_message = f"AUTH [{provider}] {event}"
        if details:
            log_message += f" - {details}"
        self.info(log_message)

    def log_session_event(self, provider: str, event: str, details: str = "") -> None:
        """Log session event"""
        log_message = f"SESSION [{provider}] {event}"
        if details:
            log_message += f" - {details}"
        self.debug(log_message)


class StandardLogger(BaseLogger):
    """Standard Python logging with console and optional file output."""

    def __init__(self, logger_name: str, logger_version: str, level: str = 'DEBUG'):
        super().__init__(logger_name, logger_version)

        self._logger = logging.getLogger(logger_name)

        # Only add handlers if none exist
        if not self._logger.handlers:
            formatter = logging.Formatter(
                f'%(asctime)s {self.prefix} %(levelname)s: %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

            log_dir = _env_manager_instance.get_config('profile_path')
            if log_dir:
                log_file = os.path.join(str(log_dir), 'dramabox-backend.log')
                try:
                    file_handler = logging.FileHandler(log_file, encoding='utf-8')
                    file_handler.setFormatter(formatter)
                    self._logger.addHandler(file_handler)
                except OSError as file_handler_error:
                    print(f"Failed to create file handler: {file_handler_error}", file=sys.stderr)

        self._logger.setLevel(getattr(logging, str(level).upper(), logging.DEBUG))

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str, exc_info: bool = False) -> None:
        if exc_info:
            self._logger.error(message, exc_info=True)
        else:
            self._logger.error(message)

    def critical(self, message: str) -> None:
        self._logger.critical(message)


def create_logger() -> BaseLogger:
    """Create the logger instance from the environment configuration"""
    app_name = _env_manager_instance.get_config('app_name', 'DramaBox Backend')
    app_version = _env_manager_instance.get_config('app_version', '1.0.0')
    level = _env_manager_instance.get_config('log_level', 'DEBUG')

    return StandardLogger(str(app_name), str(app_version), str(level))


# Create global logger instance - this is the actual logger object users will import
logger: BaseLogger = create_logger()

__all__ = ['BaseLogger', 'StandardLogger', 'logger']
