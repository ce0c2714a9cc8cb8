"""
API — Theme preset admin routes.
Thin adapter: request body → ConfigCommandDispatcher → list of messages.
"""

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from api.rate_limit import COMMAND_RATE_LIMIT, limiter
from api.schemas import CommandRequest, CommandResponse, MessageOut, PresetListResponse
from application.command_dispatcher import ConfigCommandDispatcher, build_dispatcher
from domain import constants
from domain.enums import MessageLevel
from domain.presets import DEFAULT_REGISTRY
from infrastructure.database import get_session
from logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/theme-presets", tags=["theme-presets"])


def get_dispatcher(session: Session = Depends(get_session)) -> ConfigCommandDispatcher:
    """One dispatcher per request, bound to the request's DB session."""
    return build_dispatcher(session, DEFAULT_REGISTRY)


@router.get(
    "",
    response_model=PresetListResponse,
    summary="List registered presets and supported actions",
)
def list_presets(
    dispatcher: ConfigCommandDispatcher = Depends(get_dispatcher),
) -> PresetListResponse:
    return PresetListResponse(
        presets=DEFAULT_REGISTRY.get_all_names(),
        default_preset=constants.DEFAULT_PRESET,
        actions=dispatcher.describe_actions(),
    )


@router.post(
    "/commands",
    response_model=CommandResponse,
    summary="Run a theme preset config command",
)
@limiter.limit(COMMAND_RATE_LIMIT)
def run_command(
    request: Request,
    payload: CommandRequest,
    dispatcher: ConfigCommandDispatcher = Depends(get_dispatcher),
) -> CommandResponse:
    """
    Execute one config command.

    Always answers 200: failures are reported as error-level messages that
    carry a correlation id, never as raw exceptions.
    Rate limited: 10/minute.
    """
    messages = dispatcher.dispatch(payload.action, payload.payload())
    logger.info(
        "Config command handled: action=%s site=%s messages=%d",
        payload.action or "-",
        payload.site or "default",
        len(messages),
    )
    return CommandResponse(
        action=payload.action,
        success=all(m.level != MessageLevel.ERROR for m in messages),
        messages=[MessageOut(level=m.level, text=m.text, data=m.data) for m in messages],
    )
