"""
Tests for SettingsStore — scoped JSON key/value persistence on in-memory SQLite.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from domain.entities import GLOBAL_SCOPE, Scope, Setting, Site, SiteSetting
from domain.exceptions import SiteNotFoundError, StorageError
from infrastructure import repositories as repo
from infrastructure.settings_store import SettingsStore


def _db_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


# ---------------------------------------------------------------------------
# resolve_scope
# ---------------------------------------------------------------------------


class TestResolveScope:
    def test_empty_slug_is_global(self, store: SettingsStore) -> None:
        assert store.resolve_scope(None) is GLOBAL_SCOPE
        assert store.resolve_scope("") is GLOBAL_SCOPE

    def test_known_slug_maps_to_site_scope(
        self, store: SettingsStore, library_site: Site
    ) -> None:
        scope = store.resolve_scope("library")
        assert scope == Scope(library_site.id, "library", "library-theme")
        assert not scope.is_global

    def test_site_without_theme_has_no_theme(
        self, store: SettingsStore, db_session: Session
    ) -> None:
        db_session.add(Site(slug="bare", title="Bare"))
        db_session.commit()
        assert store.resolve_scope("bare").theme is None

    def test_unknown_slug_raises(self, store: SettingsStore) -> None:
        with pytest.raises(SiteNotFoundError, match="Site not found: archive"):
            store.resolve_scope("archive")

    def test_injected_lookup_is_used(self, db_session: Session) -> None:
        site = Site(id=7, slug="remote", theme="library-theme")
        lookup = MagicMock(return_value=site)
        store = SettingsStore(db_session, site_lookup=lookup)

        scope = store.resolve_scope("remote")

        lookup.assert_called_once_with("remote")
        assert scope.site_id == 7

    def test_lookup_failure_becomes_storage_error(self, db_session: Session) -> None:
        store = SettingsStore(db_session, site_lookup=MagicMock(side_effect=_db_error()))
        with pytest.raises(StorageError, match="site lookup"):
            store.resolve_scope("library")


# ---------------------------------------------------------------------------
# get / set
# ---------------------------------------------------------------------------


class TestGetSet:
    def test_missing_key_returns_default(self, store: SettingsStore) -> None:
        assert store.get(GLOBAL_SCOPE, "nope") is None
        assert store.get(GLOBAL_SCOPE, "nope", {}) == {}

    def test_global_round_trip_stores_json_text(
        self, store: SettingsStore, db_session: Session
    ) -> None:
        store.set(GLOBAL_SCOPE, "theme_settings_library-theme", {"h1_font_color": "#000000"})

        assert store.get(GLOBAL_SCOPE, "theme_settings_library-theme") == {
            "h1_font_color": "#000000"
        }
        row = db_session.get(Setting, "theme_settings_library-theme")
        assert row.value == '{"h1_font_color": "#000000"}'

    def test_site_scope_is_isolated_from_global(
        self, store: SettingsStore, library_site: Site, db_session: Session
    ) -> None:
        scope = Scope.for_site(library_site)
        store.set(scope, "theme_settings", {"a": "1"})

        assert store.get(scope, "theme_settings") == {"a": "1"}
        assert store.get(GLOBAL_SCOPE, "theme_settings") is None
        assert db_session.get(SiteSetting, {"id": "theme_settings", "site_id": library_site.id})

    def test_set_overwrites(self, store: SettingsStore) -> None:
        store.set(GLOBAL_SCOPE, "k", "first")
        store.set(GLOBAL_SCOPE, "k", "second")
        assert store.get(GLOBAL_SCOPE, "k") == "second"

    def test_json_null_reads_as_default(self, store: SettingsStore) -> None:
        store.set(GLOBAL_SCOPE, "k", None)
        assert store.get(GLOBAL_SCOPE, "k", "fallback") == "fallback"

    def test_string_value_keeps_json_encoding(self, store: SettingsStore) -> None:
        store.set(GLOBAL_SCOPE, "snapshot", '{"a": "1"}')
        assert store.get(GLOBAL_SCOPE, "snapshot") == '{"a": "1"}'

    def test_undecodable_row_raises_storage_error(
        self, store: SettingsStore, db_session: Session
    ) -> None:
        repo.upsert_setting(db_session, "broken", "{not json")
        with pytest.raises(StorageError, match="decode"):
            store.get(GLOBAL_SCOPE, "broken")

    def test_read_failure_becomes_storage_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = _db_error()
        store = SettingsStore(session)

        with pytest.raises(StorageError, match="read") as exc_info:
            store.get(GLOBAL_SCOPE, "k")

        session.rollback.assert_called_once()
        assert "database is locked" not in str(exc_info.value)

    def test_write_failure_becomes_storage_error(self) -> None:
        session = MagicMock()
        session.commit.side_effect = _db_error()
        store = SettingsStore(session)

        with pytest.raises(StorageError, match="write"):
            store.set(GLOBAL_SCOPE, "k", {"a": "1"})
        session.rollback.assert_called_once()
