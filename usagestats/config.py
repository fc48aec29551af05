import os
import json
from typing import Any, Dict

DB_PATH: str = os.path.expanduser(os.environ.get("USAGESTATS_DB", "~/.local/share/usagestats.db"))
ACCESS_PATH: str = os.path.expanduser(os.environ.get("USAGESTATS_ACCESS", "~/.config/usagestats/access.json"))

# Operation name checked by the permission authority
OPSTR_GET_USAGE_STATS: str = "get_usage_stats"

# Method channel name, also the URL prefix of the web transport
CHANNEL: str = "channel"

# User configuration file path
USER_CONFIG_PATH: str = os.path.expanduser("~/.config/usagestats/settings.json")

# Debug mode - logs permission checks and provider queries
DEBUG_MODE: bool = os.environ.get("USAGESTATS_DEBUG", "0") == "1"
DEBUG_LOG_PATH: str = os.path.expanduser("~/.local/share/usagestats_debug.log")


# --- Dynamic Configuration Class ---

class Config:
    """
    Manages dynamic application settings loaded from the user's JSON file.

    This class holds settings that can be reloaded at runtime.
    """
    DEFAULT_PACKAGE_NAME: str = "usagestats"
    DEFAULT_WEB_PORT: int = 5050

    def __init__(self, config_path: str = USER_CONFIG_PATH):
        self.config_path = config_path
        self._user_config: Dict[str, Any] = {}

        # Updated by self.reload()
        self.package_name: str = self.DEFAULT_PACKAGE_NAME
        self.web_port: int = self.DEFAULT_WEB_PORT

        self.reload()

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user configuration from file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
            except (json.JSONDecodeError, IOError) as e:
                print(f"Ignoring broken config {self.config_path}: {e}")
        return {}

    def reload(self) -> None:
        """
        Reload configuration from disk, updating this object's attributes.
        """
        self._user_config = self._load_user_config()

        self.package_name = str(self._user_config.get(
            'package_name', self.DEFAULT_PACKAGE_NAME
        ))
        try:
            self.web_port = int(self._user_config.get(
                'web_port', self.DEFAULT_WEB_PORT
            ))
        except (TypeError, ValueError):
            self.web_port = self.DEFAULT_WEB_PORT


# --- Singleton Instance ---
settings = Config()
