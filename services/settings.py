"""Settings sinks that imported application settings are applied to."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict

import yaml

from logger import get_logger

logger = get_logger()


def merge_settings(current: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge incoming settings over current ones.

    Nested mappings are merged key by key; any other value replaces the
    current one.
    """
    merged = dict(current)
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


class SettingsStore(ABC):
    """Abstract base class for settings sinks."""

    @abstractmethod
    def import_settings(self, settings: Dict[str, Any]) -> None:
        """Apply imported settings.

        Args:
            settings: Application settings object.
        """
        pass

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        """Return the currently stored settings."""
        pass


class YamlSettingsStore(SettingsStore):
    """Keeps settings in a YAML file."""

    def __init__(self, path: Path):
        """Initialize the store.

        Args:
            path: YAML file holding the settings. Created on first import.
        """
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        with open(self.path, "r") as f:
            data = yaml.safe_load(f)

        return data or {}

    def import_settings(self, settings: Dict[str, Any]) -> None:
        merged = merge_settings(self.load(), settings)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            yaml.safe_dump(merged, f, sort_keys=False, allow_unicode=True)

        logger.info(f"Imported {len(settings)} setting(s) into {self.path}")
