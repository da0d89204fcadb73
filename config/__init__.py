"""
Configuration Module for the Invoice Contact Extractor.

Settings come from ``config/settings.yaml``. A user file (passed explicitly
or named by the ``BD_INVOICE_CONFIG`` environment variable) is layered on
top of it, so it only needs the keys it changes. Label sets, trailing-field
markers, address keywords and currency symbols are configuration data, not
hard-coded constants.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_SETTINGS = Path(__file__).parent / "settings.yaml"
CONFIG_ENV_VAR = "BD_INVOICE_CONFIG"


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must hold a mapping: {path}")
    return data


def merge_settings(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively layer ``override`` on top of ``base``.

    Mappings are merged key by key; any other value (lists included)
    replaces the base value. Neither argument is modified.

    Example:
        >>> merge_settings({"phone": {"canonical_form": "keep"}, "a": 1},
        ...                {"phone": {"canonical_form": "local"}})
        {'phone': {'canonical_form': 'local'}, 'a': 1}
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigurationManager:
    """
    Process-wide access to the extractor settings.

    Attributes:
        config_path (Optional[Path]): User file layered over the defaults.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("currency.default_symbol")
        '৳'
        >>> config.get("extraction.max_address_lines")
        3
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        # One instance per process; reset() starts over
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Args:
            config_path: Optional user settings file. Falls back to the
                ``BD_INVOICE_CONFIG`` environment variable, then to the
                bundled defaults alone.
        """
        if self._initialized:
            return

        config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
        self.config_path = Path(config_path) if config_path else None

        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """
        Load the defaults and the user file.

        Raises:
            FileNotFoundError: If a settings file doesn't exist.
            ValueError: If a settings file is not a YAML mapping.
            yaml.YAMLError: If a settings file is invalid YAML.
        """
        settings = _read_yaml(DEFAULT_SETTINGS)
        if self.config_path is not None:
            settings = merge_settings(settings, _read_yaml(self.config_path))

        self._config = settings
        self._resolve_paths()

    def _resolve_paths(self) -> None:
        """Make relative ``paths.*`` entries absolute against the working directory."""
        paths = self._config.get('paths') or {}
        for key, value in paths.items():
            if value and not Path(value).is_absolute():
                paths[key] = str(Path.cwd() / value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        A key that is missing or set to null yields ``default``.

        Example:
            >>> config.get("phone.canonical_form")
            'keep'
            >>> config.get("input.pdf.max_pages", 50)
            50
        """
        value = self._config
        try:
            for part in key.split('.'):
                value = value[part]
        except (KeyError, TypeError):
            return default

        return default if value is None else value

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def reload(self) -> None:
        """Re-read the settings files."""
        self._load_config()

    @classmethod
    def reset(cls) -> None:
        """Forget the current instance (tests, or switching settings files)."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ``ConfigurationManager().get(key, default)``."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config', 'merge_settings', 'CONFIG_ENV_VAR']
