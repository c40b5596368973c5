"""
Configuration Manager - Handle backend settings persistence
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # 1. Environment variable
            config_dir = os.environ.get("FLUTTER_FACTORY_CONFIG_DIR")

            # 2. Home directory ~/.flutter_factory
            if not config_dir:
                config_dir = os.path.expanduser("~/.flutter_factory")

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    print(f"[ConfigManager] Warning: Cannot write to {config_dir}: {e}")
                    self._config_file = None

            # 3. Temp directory when the above is not writable
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "flutter_factory"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                print(f"[ConfigManager] Using temporary config path: {self._config_file}")

        except OSError as e:
            print(f"[ConfigManager] Critical Error in init: {e}")
            self._config_file = Path(tempfile.gettempdir()) / "flutter_factory_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the singleton so the next get_instance() re-reads the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, filling missing sections with defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                config.update(json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            print(f"[ConfigManager] Error loading config: {e}")
            return self._default_config()
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "gemini": {
                "apiKey": "",  # Falls back to GEMINI_API_KEY / API_KEY env vars
                "model": "gemini-2.5-flash",
                "temperature": 0.7,
            },
            "locale": "pt-br",
            "personality": "tars",
            "server": {"host": "0.0.0.0", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        # Merge with existing config
        self._config.update(config)

        # Ensure config directory exists
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)
