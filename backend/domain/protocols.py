from typing import Any, Protocol, runtime_checkable

from domain.entities import Scope, Site


@runtime_checkable
class SiteLookup(Protocol):
    """Resolves a site slug to a site (host platform collaborator)."""

    def __call__(self, slug: str) -> Site | None:
        """Return the site for *slug*, or None when it does not exist."""
        ...


@runtime_checkable
class SettingsBackend(Protocol):
    """Interface of the scoped key/value settings store."""

    def get(self, scope: Scope, key: str, default: Any = None) -> Any:
        """Decoded value stored under *key*, or *default*."""
        ...

    def set(self, scope: Scope, key: str, value: Any) -> None:
        """Persist *value* under *key* (last write wins)."""
        ...

    def resolve_scope(self, site_slug: str | None) -> Scope:
        """Global scope for an empty slug, otherwise the site's scope."""
        ...

