"""
Infrastructure — Scoped settings store.
Key/value persistence over the global `setting` table and the per-site
`sitesetting` table. Values are stored as JSON text, like the host platform.
No caching and no locking: every call hits the database, the last write wins.
"""

import json
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from domain.entities import GLOBAL_SCOPE, Scope, Site
from domain.exceptions import SiteNotFoundError, StorageError
from domain.protocols import SiteLookup
from infrastructure import repositories as repo
from logging_config import get_logger

logger = get_logger(__name__)


class SettingsStore:
    """Settings persistence bound to one DB session."""

    def __init__(self, session: Session, site_lookup: SiteLookup | None = None) -> None:
        self._session = session
        self._site_lookup = site_lookup or self._find_site

    def _find_site(self, slug: str) -> Site | None:
        return repo.find_site_by_slug(self._session, slug)

    def resolve_scope(self, site_slug: str | None) -> Scope:
        """Global scope for an empty slug; otherwise the scope of the matching site."""
        if not site_slug:
            return GLOBAL_SCOPE
        try:
            site = self._site_lookup(site_slug)
        except SQLAlchemyError as e:
            self._rollback()
            raise StorageError("site lookup") from e
        if site is None:
            logger.warning("Site lookup failed: slug=%s", site_slug)
            raise SiteNotFoundError(site_slug)
        return Scope.for_site(site)

    def get(self, scope: Scope, key: str, default: Any = None) -> Any:
        """Return the decoded value under *key*, or *default* when nothing is stored."""
        try:
            if scope.is_global:
                row = repo.find_setting(self._session, key)
            else:
                row = repo.find_site_setting(self._session, scope.site_id, key)
        except SQLAlchemyError as e:
            self._rollback()
            raise StorageError("read") from e

        if row is None:
            return default
        try:
            value = json.loads(row.value)
        except (TypeError, json.JSONDecodeError) as e:
            logger.error("Undecodable setting value: scope=%s key=%s", scope, key)
            raise StorageError("decode") from e
        return default if value is None else value

    def set(self, scope: Scope, key: str, value: Any) -> None:
        """Persist *value* under *key* as a single write."""
        raw_value = json.dumps(value, ensure_ascii=False)
        try:
            if scope.is_global:
                repo.upsert_setting(self._session, key, raw_value)
            else:
                repo.upsert_site_setting(self._session, scope.site_id, key, raw_value)
        except SQLAlchemyError as e:
            self._rollback()
            raise StorageError("write") from e
        logger.debug("Setting written: scope=%s key=%s", scope, key)

    def _rollback(self) -> None:
        try:
            self._session.rollback()
        except SQLAlchemyError:
            logger.exception("Session rollback failed")
