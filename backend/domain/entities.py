"""
Domain — Database entities (SQLModel tables).
Mirrors the host platform's site and settings tables; values are JSON text.
"""

from dataclasses import dataclass

from sqlmodel import Column, Field, SQLModel, Text


class Site(SQLModel, table=True):
    """A host-platform site with its configured theme."""

    id: int | None = Field(default=None, primary_key=True)
    slug: str = Field(index=True, unique=True, description="URL slug")
    title: str = Field(default="", description="Display title")
    theme: str = Field(default="", description="Configured theme slug")


class Setting(SQLModel, table=True):
    """Global setting (JSON-encoded value)."""

    id: str = Field(primary_key=True, description="Setting key")
    value: str = Field(
        default="null", sa_column=Column(Text, nullable=False, default="null")
    )


class SiteSetting(SQLModel, table=True):
    """Per-site setting (JSON-encoded value)."""

    id: str = Field(primary_key=True, description="Setting key")
    site_id: int = Field(foreign_key="site.id", primary_key=True)
    value: str = Field(
        default="null", sa_column=Column(Text, nullable=False, default="null")
    )


@dataclass(frozen=True)
class Scope:
    """Storage namespace: one site, or the global settings when site_id is None."""

    site_id: int | None = None
    site_slug: str | None = None
    theme: str | None = None

    @classmethod
    def for_site(cls, site: Site) -> "Scope":
        return cls(site_id=site.id, site_slug=site.slug, theme=site.theme or None)

    @property
    def is_global(self) -> bool:
        return self.site_id is None


GLOBAL_SCOPE = Scope()
