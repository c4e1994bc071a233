"""Settings management.

This package provides:
- UserSettings: User-configurable settings loaded from settings.yaml
- ConfigPaths: System and per-user configuration file locations
"""

from .paths import ConfigPaths, user_config_dir
from .user import UserSettings

__all__ = ["ConfigPaths", "UserSettings", "user_config_dir"]
