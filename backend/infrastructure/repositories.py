"""
Infrastructure — Repository pattern.
All ORM queries live here so services never touch SQLModel syntax directly.
"""

from sqlmodel import Session, select

from domain.entities import Setting, Site, SiteSetting

# ===========================================================================
# Site Repository
# ===========================================================================


def find_site_by_slug(session: Session, slug: str) -> Site | None:
    """Look up a site by its slug."""
    statement = select(Site).where(Site.slug == slug)
    return session.exec(statement).first()


# ===========================================================================
# Global Setting Repository
# ===========================================================================


def find_setting(session: Session, key: str) -> Setting | None:
    return session.get(Setting, key)


def upsert_setting(session: Session, key: str, raw_value: str) -> None:
    """Write the JSON text of a global setting."""
    row = session.get(Setting, key)
    if row is None:
        row = Setting(id=key, value=raw_value)
    else:
        row.value = raw_value
    session.add(row)
    session.commit()


# ===========================================================================
# Site Setting Repository
# ===========================================================================


def find_site_setting(session: Session, site_id: int, key: str) -> SiteSetting | None:
    return session.get(SiteSetting, {"id": key, "site_id": site_id})


def upsert_site_setting(session: Session, site_id: int, key: str, raw_value: str) -> None:
    """Write the JSON text of a per-site setting."""
    row = session.get(SiteSetting, {"id": key, "site_id": site_id})
    if row is None:
        row = SiteSetting(id=key, site_id=site_id, value=raw_value)
    else:
        row.value = raw_value
    session.add(row)
    session.commit()
