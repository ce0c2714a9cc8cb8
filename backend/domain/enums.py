"""
Domain — Enumerations.
Value kinds, storage tiers and message levels used by the preset engine.
"""

from enum import StrEnum


class SettingKind(StrEnum):
    """Expected format of a theme setting value."""

    COLOR = "color"
    SIZE = "size"
    TEXT = "text"


class SettingsSource(StrEnum):
    """Storage shape the effective settings were read from."""

    NAMESPACED = "namespaced"
    CONTAINER_MAP = "container_map"
    CONTAINER_FLAT = "container_flat"
    NONE = "none"


class MessageLevel(StrEnum):
    """Severity of a dispatcher message shown to the administrator."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
