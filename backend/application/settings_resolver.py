"""
Application — Settings resolver.
Computes a site's effective theme settings from the storage shapes that have
existed over time. Reads try, in order:

1. the namespaced key ``theme_settings_{slug}``
2. the ``theme_settings`` container entry keyed by the theme slug
3. the ``theme_settings`` container itself, as a flat map

Writes always target the namespaced key; the container is never rewritten.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from domain import constants
from domain.entities import Scope
from domain.enums import SettingsSource
from domain.exceptions import ThemeKeyMismatchError
from domain.protocols import SettingsBackend
from logging_config import get_logger

logger = get_logger(__name__)


def theme_settings_key(theme_slug: str) -> str:
    return f"{constants.THEME_SETTINGS_PREFIX}{theme_slug}"


def normalize_theme_key(theme_key: str) -> str:
    """Lowercase, trimmed, spaces turned into hyphens."""
    return theme_key.strip().lower().replace(" ", "-")


@dataclass(frozen=True)
class ResolvedSettings:
    """Effective settings plus the storage tier they came from."""

    values: dict[str, Any] = field(default_factory=dict)
    source: SettingsSource = SettingsSource.NONE


class SettingsResolver:
    def __init__(
        self,
        store: SettingsBackend,
        legacy_aliases: Mapping[str, frozenset[str]] | None = None,
    ) -> None:
        self._store = store
        self._legacy_aliases = (
            constants.LEGACY_THEME_KEY_ALIASES if legacy_aliases is None else legacy_aliases
        )

    def resolve_theme_slug(self, scope: Scope) -> str:
        """The site's configured theme, else the fallback slug."""
        if scope.theme:
            return scope.theme
        return constants.FALLBACK_THEME_SLUG

    def validate_theme_key(self, expected_key: str, theme_slug: str) -> None:
        """
        Raise ThemeKeyMismatchError unless *expected_key* addresses *theme_slug*.

        Accepted: the slug itself, the slug without hyphens, or a legacy alias
        registered for the slug (all compared after normalization).
        """
        normalized = normalize_theme_key(expected_key or "")
        if normalized and (
            normalized == theme_slug
            or normalized == theme_slug.replace("-", "")
            or normalized in self._legacy_aliases.get(theme_slug, frozenset())
        ):
            return
        logger.warning(
            "Theme key mismatch: expected=%s normalized=%s slug=%s",
            expected_key,
            normalized,
            theme_slug,
        )
        raise ThemeKeyMismatchError(expected_key, theme_slug)

    def read_namespaced(self, scope: Scope, theme_slug: str) -> dict[str, Any]:
        """Canonical namespaced map only; non-dict values read as empty."""
        stored = self._store.get(scope, theme_settings_key(theme_slug), {})
        return dict(stored) if isinstance(stored, dict) else {}

    def resolve(self, scope: Scope, theme_slug: str) -> ResolvedSettings:
        namespaced = self.read_namespaced(scope, theme_slug)
        if namespaced:
            return ResolvedSettings(namespaced, SettingsSource.NAMESPACED)

        container = self._store.get(scope, constants.THEME_SETTINGS_CONTAINER_KEY, {})
        if not isinstance(container, dict) or not container:
            return ResolvedSettings()

        entry = container.get(theme_slug)
        if isinstance(entry, dict):
            if entry:
                return ResolvedSettings(dict(entry), SettingsSource.CONTAINER_MAP)
            return ResolvedSettings()
        return ResolvedSettings(dict(container), SettingsSource.CONTAINER_FLAT)

    def resolve_effective(self, scope: Scope, theme_slug: str) -> dict[str, Any]:
        """Effective settings map; empty (never an error) when nothing is stored."""
        return self.resolve(scope, theme_slug).values

    def lookup_key(self, scope: Scope, theme_slug: str, key: str) -> Any:
        """
        Value of one setting, falling through the tiers per key.

        Unlike resolve(), a key missing from a non-empty namespaced map is still
        looked up in the legacy container.
        """
        namespaced = self.read_namespaced(scope, theme_slug)
        if key in namespaced:
            return namespaced[key]

        container = self._store.get(scope, constants.THEME_SETTINGS_CONTAINER_KEY, {})
        if not isinstance(container, dict):
            return None
        entry = container.get(theme_slug)
        if isinstance(entry, dict) and key in entry:
            return entry[key]
        return container.get(key)

    def describe_tiers(self, scope: Scope, theme_slug: str) -> dict[str, Any]:
        """Key counts of the namespaced map and the legacy container, side by side."""
        container = self._store.get(scope, constants.THEME_SETTINGS_CONTAINER_KEY, {})
        if not isinstance(container, dict):
            shape, container_count = "N/A", 0
        elif isinstance(container.get(theme_slug), dict):
            shape, container_count = f"map[{theme_slug}]", len(container[theme_slug])
        else:
            shape, container_count = "flat", len(container)
        return {
            "namespaced_key": theme_settings_key(theme_slug),
            "namespaced_count": len(self.read_namespaced(scope, theme_slug)),
            "container_shape": shape,
            "container_count": container_count,
        }
