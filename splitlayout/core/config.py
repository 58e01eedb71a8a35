from typing import Any, Literal, Optional, Union
import json
import os
from pydantic import BaseModel, ConfigDict, Field, field_validator
from loguru import logger
from .events import ObserverEvent

# --- Settings Models ---
class GeneralSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug_mode: bool = False

class LayoutSettings(BaseModel):
    """Defaults applied by LayoutTree when a caller leaves an argument unset."""
    model_config = ConfigDict(validate_assignment=True)

    default_direction: Literal["row", "column"] = "row"
    default_split_percentage: Union[int, float] = 50
    max_path_depth: int = Field(default=10, ge=0)
    json_indent: Optional[int] = Field(default=None, ge=0)

    @field_validator("default_split_percentage")
    @classmethod
    def _check_percentage(cls, value: Union[int, float]) -> Union[int, float]:
        if not 0 <= value <= 100:
            raise ValueError(f"default_split_percentage must be between 0 and 100, got {value}")
        return value

class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)

# --- Manager ---
class ConfigManager:
    """
    Manages layout configuration with optional persistence and reactivity.

    Without a filepath the manager is purely in-memory; nothing touches the disk.
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = ObserverEvent("ConfigChanged")
        if self.filepath:
            self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if section not in AppConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        # validate_assignment rejects bad values and keeps the old one
        setattr(section_obj, key, value)
        self._save()
        self.on_changed.emit(section, key, getattr(section_obj, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def reset(self):
        """Restore defaults without touching subscribers."""
        self._data = AppConfig()
        self._save()

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
                logger.debug(f"Loaded layout config from {self.filepath}")
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
                self._save()
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if not self.filepath or self.filepath.endswith('.toml'):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")


# Global access
config_manager = ConfigManager()


def get_settings() -> LayoutSettings:
    """Return the layout section of the active configuration."""
    return config_manager.data.layout
