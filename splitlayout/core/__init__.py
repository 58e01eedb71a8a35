"""
Core infrastructure shared by the layout engine.

- ConfigManager: pydantic-validated settings with change notifications
- ObserverEvent: minimal pub/sub used for config changes
- setup_logging: opt-in loguru sinks
"""
from .config import (
    ConfigManager,
    AppConfig,
    GeneralSettings,
    LayoutSettings,
    config_manager,
    get_settings,
)
from .events import ObserverEvent
from .logging import setup_logging

__all__ = [
    # Configuration
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "LayoutSettings",
    "config_manager",
    "get_settings",

    # Events
    "ObserverEvent",

    # Logging
    "setup_logging",
]
