"""
Domain — Preset engine error taxonomy.
Messages of these exceptions are safe to show to an administrator, except for
StorageError whose cause is only logged.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation violation."""

    key: str
    message: str

    def __str__(self) -> str:
        return self.message


class ThemePresetError(Exception):
    """Base class for all preset engine errors."""


class UnknownPresetError(ThemePresetError):
    """Preset name is not registered."""

    def __init__(self, preset_name: str) -> None:
        self.preset_name = preset_name
        super().__init__(f"Unknown preset: {preset_name}")


class SiteNotFoundError(ThemePresetError):
    """Site slug could not be resolved to a site."""

    def __init__(self, site_slug: str) -> None:
        self.site_slug = site_slug
        super().__init__(f"Site not found: {site_slug}")


class SettingsNotFoundError(ThemePresetError):
    """No theme settings are stored for the scope."""

    def __init__(self, site_slug: str | None, message: str | None = None) -> None:
        self.site_slug = site_slug
        super().__init__(
            message or f"No theme settings found for site: {site_slug or 'default'}"
        )


class StoredDefaultsNotFoundError(SettingsNotFoundError):
    """No defaults snapshot has been saved for the preset yet."""

    def __init__(self, preset_name: str) -> None:
        self.preset_name = preset_name
        super().__init__(None, f"No stored defaults found for preset: {preset_name}")


class ThemeKeyMismatchError(ThemePresetError):
    """Expected theme key does not address the site's active theme."""

    def __init__(self, theme_key: str, theme_slug: str) -> None:
        self.theme_key = theme_key
        self.theme_slug = theme_slug
        super().__init__(
            f"Invalid theme key: {theme_key} (active theme is {theme_slug})"
        )


class ValidationError(ThemePresetError):
    """One or more settings failed format validation."""

    def __init__(self, errors: list[FieldError], summary: str = "Validation failed") -> None:
        self.errors = list(errors)
        super().__init__(f"{summary}: " + ", ".join(str(e) for e in self.errors))


class StorageError(ThemePresetError):
    """Settings backend failed to read or write."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Settings storage failure during {operation}")
