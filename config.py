import logging
import os

import yaml

from settings_schema import SettingsSchema, validate_settings

logger = logging.getLogger(__name__)


class YamlConfig:
    """Load and save analytics settings to a YAML file."""

    ENV_PATH = "GYM_SETTINGS"

    def __init__(self, path: str | None = None) -> None:
        self.path = path or os.environ.get(self.ENV_PATH, "settings.yaml")

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping")
        return data

    def save(self, data: dict) -> None:
        out = validate_settings(data).model_dump()
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f)

    def load_settings(self) -> SettingsSchema:
        """Return validated settings, using defaults for missing keys."""
        data = self.load()
        if not data:
            logger.debug("no settings at %s, using defaults", self.path)
        return validate_settings(data)
