"""
Configuration management for keyfold.

Handles loading and managing configuration from files and environment
variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .cli.session import SessionConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class KeyfoldConfig:
    """Main configuration for keyfold."""

    # Folding and display settings shared with interactive sessions
    session: SessionConfig = field(default_factory=SessionConfig)

    log_level: str = "WARNING"

    @property
    def keyword_attribute(self) -> str:
        return self.session.keyword_attribute

    @property
    def fold_marker(self) -> str:
        return self.session.fold_marker


class ConfigManager:
    """Manages keyfold configuration from multiple sources."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / ".keyfold"
        self.config_file = self.config_dir / "config.yaml"
        self._config: Optional[KeyfoldConfig] = None

    def load_config(self) -> KeyfoldConfig:
        """Load configuration from all sources."""
        if self._config:
            return self._config

        # Start with defaults
        config = KeyfoldConfig()

        if self.config_file.exists():
            config = self._merge_configs(config, self._load_from_file())

        # Environment wins over the file
        config = self._merge_configs(config, self._load_from_env())

        self._config = config
        return config

    def _load_from_file(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_file, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not load config file {self.config_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file}: expected a mapping")
            return {}
        return data

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        attribute = os.getenv("KEYFOLD_ATTRIBUTE")
        if attribute and attribute.strip():
            env_config.setdefault("session", {})["keyword_attribute"] = attribute.strip()

        marker = os.getenv("KEYFOLD_FOLD_MARKER")
        if marker:
            env_config.setdefault("session", {})["fold_marker"] = marker

        log_level = os.getenv("KEYFOLD_LOG_LEVEL")
        if log_level and log_level.upper() in LOG_LEVELS:
            env_config["log_level"] = log_level.upper()

        return env_config

    def _merge_configs(self, base: KeyfoldConfig, override: Dict[str, Any]) -> KeyfoldConfig:
        """Apply known keys of ``override`` on top of ``base``."""
        session_overrides = override.get("session")
        if isinstance(session_overrides, dict):
            for key in ("keyword_attribute", "fold_marker", "prompt"):
                value = session_overrides.get(key)
                if isinstance(value, str) and value:
                    setattr(base.session, key, value)
            for key in ("show_status", "render_after_refold"):
                if key in session_overrides:
                    setattr(base.session, key, bool(session_overrides[key]))

        log_level = override.get("log_level")
        if isinstance(log_level, str):
            if log_level.upper() in LOG_LEVELS:
                base.log_level = log_level.upper()
            else:
                logger.warning(f"Ignoring unknown log level {log_level!r}")

        return base

    def save_config(self, config: KeyfoldConfig) -> None:
        """Save configuration to file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        config_dict = {
            "session": {
                "keyword_attribute": config.session.keyword_attribute,
                "fold_marker": config.session.fold_marker,
                "prompt": config.session.prompt,
                "show_status": config.session.show_status,
                "render_after_refold": config.session.render_after_refold,
            },
            "log_level": config.log_level,
        }

        with open(self.config_file, "w") as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)
        self._config = config

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        self.save_config(KeyfoldConfig())

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about current configuration."""
        config = self.load_config()

        return {
            "config_file": str(self.config_file),
            "config_exists": self.config_file.exists(),
            "keyword_attribute": config.keyword_attribute,
            "fold_marker": config.fold_marker,
            "log_level": config.log_level,
        }


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config() -> KeyfoldConfig:
    """Load the current configuration."""
    return get_config_manager().load_config()
