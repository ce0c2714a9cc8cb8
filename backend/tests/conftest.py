"""
Shared test fixtures — TestClient, in-memory SQLite, seeded sites.
"""

import os
import tempfile

# Set environment variables BEFORE any app imports to avoid /app filesystem access
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "theme_presets_test_logs"))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from api.rate_limit import limiter  # noqa: E402
from application.preset_service import PresetService  # noqa: E402
from domain.entities import Site  # noqa: E402
from infrastructure.database import get_session  # noqa: E402
from infrastructure.settings_store import SettingsStore  # noqa: E402
from main import app  # noqa: E402

# ---------------------------------------------------------------------------
# In-memory SQLite engine with StaticPool (shared single connection)
# ---------------------------------------------------------------------------

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def _override_get_session() -> Generator[Session, None, None]:
    with Session(test_engine) as session:
        yield session


@pytest.fixture(scope="session", autouse=True)
def _create_tables():
    """Create all tables once for the test session."""
    import domain.entities  # noqa: F401  register models with SQLModel

    SQLModel.metadata.create_all(test_engine)
    yield
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(autouse=True)
def _clean_tables():
    """Truncate all tables between tests for isolation."""
    yield
    with Session(test_engine) as session:
        for table in reversed(SQLModel.metadata.sorted_tables):
            session.exec(table.delete())  # type: ignore[arg-type]
        session.commit()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """TestClient with overridden DB session and a fresh rate-limit window."""
    app.dependency_overrides[get_session] = _override_get_session
    limiter.reset()

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    """Standalone DB session fixture for service layer unit tests."""
    with Session(test_engine) as session:
        yield session
        session.rollback()


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def library_site(db_session: Session) -> Site:
    """Site 'library' running the library-theme."""
    site = Site(slug="library", title="Library", theme="library-theme")
    db_session.add(site)
    db_session.commit()
    db_session.refresh(site)
    return site


@pytest.fixture()
def store(db_session: Session) -> SettingsStore:
    return SettingsStore(db_session)


@pytest.fixture()
def service(store: SettingsStore) -> PresetService:
    return PresetService(store)
