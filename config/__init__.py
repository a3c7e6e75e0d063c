"""
Configuration Module for DTR Extraction System.

Settings live in config/settings.yaml. A site-specific YAML file can be
layered on top of it, either passed explicitly or named by the
DTR_EXTRACTION_CONFIG environment variable; only the keys it contains
replace the shipped defaults.

Usage:
    from config import get_config

    threshold = get_config("postprocessing.auto_submit_confidence", 0.7)
"""

import copy
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional


DEFAULT_CONFIG_PATH = Path(__file__).parent / "settings.yaml"
CONFIG_ENV_VAR = "DTR_EXTRACTION_CONFIG"

# Keys holding filesystem paths; relative values are anchored at the project root
PATH_KEYS = ("paths.output_dir", "paths.log_dir", "logging.file.path")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigurationManager:
    """
    Process-wide settings for the DTR extraction system.

    The first instantiation loads the configuration; later calls return
    the same instance and ignore their argument. Call reset() to load a
    different file.

    Attributes:
        config_path (Optional[Path]): Override file layered on the defaults.

    Example:
        >>> config = ConfigurationManager("site.yaml")
        >>> config.get("ocr.tesseract.lang")
        'eng'
        >>> config.get("templates.custom")
        []
    """

    _instance: Optional['ConfigurationManager'] = None

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Args:
            config_path: Optional YAML file overriding the defaults.
                         Falls back to $DTR_EXTRACTION_CONFIG.
        """
        if self._initialized:
            return

        config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
        self.config_path = Path(config_path) if config_path else None

        self._config: Dict[str, Any] = {}
        self._load_config()
        self._initialized = True

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: If the file doesn't exist.
            yaml.YAMLError: If the file is not valid YAML.
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def _load_config(self) -> None:
        config = self._read_yaml(DEFAULT_CONFIG_PATH)

        if self.config_path is not None:
            config = _deep_merge(config, self._read_yaml(self.config_path))

        self._config = config
        self._anchor_paths()

    def _anchor_paths(self) -> None:
        project_root = Path(__file__).parent.parent

        for key in PATH_KEYS:
            value = self.get(key)
            if value and not Path(value).is_absolute():
                self.set(key, str(project_root / value))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Example:
            >>> config.get("extraction.warn_on_new_format")
            True
            >>> config.get("nonexistent.key", "default_value")
            'default_value'
        """
        value = self._config

        try:
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a value in memory using dot notation.

        Intermediate sections are created as needed. Nothing is written
        back to disk.
        """
        *parents, leaf = key.split('.')
        section = self._config
        for k in parents:
            section = section.setdefault(k, {})
        section[leaf] = value

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def reload(self) -> None:
        """Re-read the configuration files, dropping in-memory changes."""
        self._load_config()

    @classmethod
    def reset(cls) -> None:
        """Forget the current instance so the next one reloads from disk."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Shortcut for ConfigurationManager().get(key, default).

    Example:
        >>> get_config("templates.matched_confidence", 0.8)
        0.8
    """
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config', 'CONFIG_ENV_VAR']
