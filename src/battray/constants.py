"""Application-wide constants."""

from pathlib import Path
from typing import Final

APP_NAME: Final = "battray"

# Poll cadence of the tray loop; fixed, not user-configurable
POLL_INTERVAL_SECONDS: Final = 3

# Base directory a freshly declared theme resolves its icons against
SYSTEM_ICON_DIR: Final = Path("/usr/share/battray/icons")
SYSTEM_CONFIG_DIR: Final = Path("/etc/battray")

THEME_FILE_NAME: Final = "themes.conf"
SCRIPT_FILE_NAME: Final = "rc.py"
SETTINGS_FILE_NAME: Final = "settings.yaml"

DEFAULT_BATTERY_COMMAND: Final = ("acpi", "-b", "-i")
DEFAULT_WARNING_THRESHOLDS: Final = (10.0, 5.0, 3.0)

# Fresh warning state; also the value charging resets it to
FULL_LEVEL: Final = 100.0
