"""
Application — Preset service.
Apply / save-as-defaults / load-stored-defaults / diff / inspect operations on
a scope's theme settings. Every mutation builds the merged map in memory,
validates it, and then performs a single write of one key.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from application.settings_resolver import SettingsResolver, theme_settings_key
from domain import constants
from domain.entities import GLOBAL_SCOPE, Scope
from domain.exceptions import (
    FieldError,
    SettingsNotFoundError,
    StoredDefaultsNotFoundError,
    UnknownPresetError,
    ValidationError,
)
from domain.presets import DEFAULT_REGISTRY, PresetRegistry
from domain.protocols import SettingsBackend
from domain.validation import validate_settings_map
from logging_config import get_logger

logger = get_logger(__name__)


def defaults_key(preset_name: str) -> str:
    """Global key holding the stored defaults snapshot of a preset."""
    return f"{constants.MODULE_PREFIX}{constants.DEFAULTS_KEY_INFIX}{preset_name}"


class PresetService:
    def __init__(
        self,
        store: SettingsBackend,
        registry: PresetRegistry = DEFAULT_REGISTRY,
        resolver: SettingsResolver | None = None,
    ) -> None:
        self.store = store
        self.registry = registry
        self.resolver = resolver or SettingsResolver(store)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def apply_preset(
        self, scope: Scope, theme_key: str, preset_name: str
    ) -> tuple[int, dict[str, Any]]:
        """
        Overlay a registered preset onto the scope's namespaced settings.

        Returns the number of keys written and the resulting map. Raises
        UnknownPresetError, ValidationError or ThemeKeyMismatchError before
        anything is written.
        """
        preset = self.registry.get(preset_name)
        count, merged = self._apply_values(
            scope, theme_key, preset.as_dict(), "Preset validation failed"
        )
        logger.info(
            "Applied preset to theme settings: preset=%s site=%s count=%d",
            preset_name,
            scope.site_slug or "default",
            count,
        )
        return count, merged

    def save_settings_as_preset_defaults(
        self, scope: Scope, theme_key: str, preset_name: str
    ) -> tuple[int, dict[str, Any]]:
        """Store the scope's effective settings as the defaults snapshot of a preset."""
        if not self.registry.has(preset_name):
            raise UnknownPresetError(preset_name)

        theme_slug = self.resolver.resolve_theme_slug(scope)
        self.resolver.validate_theme_key(theme_key, theme_slug)

        current = self.resolver.resolve_effective(scope, theme_slug)
        if not current:
            raise SettingsNotFoundError(scope.site_slug)

        errors = validate_settings_map(current)
        if errors:
            logger.warning(
                "Settings validation failed: site=%s errors=%d",
                scope.site_slug or "default",
                len(errors),
            )
            raise ValidationError(errors, "Settings validation failed")

        self.store.set(GLOBAL_SCOPE, defaults_key(preset_name), json.dumps(current))
        logger.info(
            "Saved settings as preset defaults: preset=%s site=%s count=%d",
            preset_name,
            scope.site_slug or "default",
            len(current),
        )
        return len(current), current

    def load_stored_defaults(
        self,
        scope: Scope,
        preset_name: str,
        theme_key: str | None = None,
    ) -> tuple[int, dict[str, Any]]:
        """Apply the stored defaults snapshot of a preset as if it were the preset."""
        snapshot = self.get_stored_defaults(preset_name)
        if snapshot is None:
            raise StoredDefaultsNotFoundError(preset_name)

        count, merged = self._apply_values(
            scope,
            theme_key or constants.DEFAULT_THEME_KEY,
            snapshot,
            "Stored defaults validation failed",
        )
        logger.info(
            "Loaded stored defaults into theme settings: preset=%s site=%s count=%d",
            preset_name,
            scope.site_slug or "default",
            count,
        )
        return count, merged

    def _apply_values(
        self,
        scope: Scope,
        theme_key: str,
        values: Mapping[str, Any],
        failure_summary: str,
    ) -> tuple[int, dict[str, Any]]:
        errors = validate_settings_map(values)
        if errors:
            raise ValidationError(errors, failure_summary)

        theme_slug = self.resolver.resolve_theme_slug(scope)
        self.resolver.validate_theme_key(theme_key, theme_slug)

        merged = self.resolver.read_namespaced(scope, theme_slug)
        merged.update(values)
        self.store.set(scope, theme_settings_key(theme_slug), merged)
        return len(values), merged

    # ------------------------------------------------------------------
    # Stored defaults
    # ------------------------------------------------------------------

    def get_stored_defaults(self, preset_name: str) -> dict[str, Any] | None:
        """
        Decoded defaults snapshot for a preset, or None when none was saved.

        Raises ValidationError when the stored blob is not a JSON object.
        """
        raw = self.store.get(GLOBAL_SCOPE, defaults_key(preset_name))
        if not raw:
            return None
        if isinstance(raw, dict):
            decoded: Any = raw
        else:
            try:
                decoded = json.loads(raw) if isinstance(raw, str) else None
            except json.JSONDecodeError:
                decoded = None
        if not isinstance(decoded, dict):
            raise ValidationError(
                [
                    FieldError(
                        preset_name,
                        f"Stored defaults for preset '{preset_name}' are not a settings map",
                    )
                ],
                "Invalid stored defaults format",
            )
        return decoded

    # ------------------------------------------------------------------
    # Read-only diagnostics
    # ------------------------------------------------------------------

    def inspect(self, scope: Scope, theme_key: str) -> dict[str, Any]:
        """Effective settings plus the theme slug, count and storage source."""
        theme_slug = self.resolver.resolve_theme_slug(scope)
        self.resolver.validate_theme_key(theme_key, theme_slug)
        resolved = self.resolver.resolve(scope, theme_slug)
        return {
            "site_slug": scope.site_slug,
            "slug": theme_slug,
            "count": len(resolved.values),
            "source": resolved.source.value,
            "settings": resolved.values,
            **self.resolver.describe_tiers(scope, theme_slug),
        }

    def inspect_key(self, scope: Scope, theme_key: str, key: str) -> Any:
        """Value of a single setting from the first tier holding it, or None."""
        theme_slug = self.resolver.resolve_theme_slug(scope)
        self.resolver.validate_theme_key(theme_key, theme_slug)
        return self.resolver.lookup_key(scope, theme_slug, key)

    def count_settings(self, scope: Scope, theme_key: str) -> int:
        return self.inspect(scope, theme_key)["count"]

    def diff_vs_preset(self, scope: Scope, theme_key: str, preset_name: str) -> dict[str, Any]:
        """Compare every key of a preset with the effective settings."""
        preset = self.registry.get(preset_name)
        current = self.inspect(scope, theme_key)["settings"]

        matches: dict[str, Any] = {}
        differences: dict[str, dict[str, Any]] = {}
        for key, target in preset.values.items():
            value = current.get(key)
            if value == target:
                matches[key] = value
            else:
                differences[key] = {"current": value, "target": target}

        return {
            "preset": preset_name,
            "total_preset_keys": len(preset.values),
            "matches": matches,
            "differences": differences,
        }

    def verify_defaults_vs_settings(
        self, scope: Scope, theme_key: str, preset_name: str
    ) -> dict[str, Any]:
        """Compare a preset's stored defaults snapshot with the effective settings."""
        current = self.inspect(scope, theme_key)["settings"]
        stored = self.get_stored_defaults(preset_name) or {}

        missing_in_defaults = [key for key in current if key not in stored]
        missing_in_settings = [key for key in stored if key not in current]
        differences = {
            key: {"current": current[key], "stored": value}
            for key, value in stored.items()
            if key in current and current[key] != value
        }
        return {
            "preset": preset_name,
            "has_stored_defaults": bool(stored),
            "settings_count": len(current),
            "defaults_count": len(stored),
            "missing_in_defaults": missing_in_defaults,
            "missing_in_settings": missing_in_settings,
            "differences": differences,
        }
