"""
Memory server utilities package.

This package contains utility modules for logging, configuration, and other
shared functionality used throughout the application.
"""

from memory_server.utils.logger import setup_logger, apply_log_level
from memory_server.utils.config import load_config, Config

__all__ = ["setup_logger", "apply_log_level", "load_config", "Config"]
