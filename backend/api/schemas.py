"""
API — Pydantic Request / Response Schemas.
Only used for HTTP-layer validation and serialization; no business logic.
"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from domain.enums import MessageLevel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class CommandRequest(BaseModel):
    """POST /admin/theme-presets/commands request body."""

    action: Optional[str] = None
    target_preset: Optional[str] = None
    site: Optional[str] = None
    debug: bool = False
    inspect_key: Optional[str] = None

    @field_validator("action", "target_preset", "site", "inspect_key")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    def payload(self) -> dict[str, Any]:
        """Dispatcher payload (everything except the action name)."""
        return self.model_dump(exclude={"action"}, exclude_none=True)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class MessageOut(BaseModel):
    level: MessageLevel
    text: str
    data: Optional[Any] = None


class CommandResponse(BaseModel):
    """POST /admin/theme-presets/commands response."""

    action: Optional[str] = None
    success: bool
    messages: list[MessageOut]


class PresetListResponse(BaseModel):
    """GET /admin/theme-presets response."""

    presets: list[str]
    default_preset: str
    actions: dict[str, str]


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str
    service: str
