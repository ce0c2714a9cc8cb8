"""
Application — Error reporter.
Runs an operation and converts any exception into a correlation-tagged,
user-safe result. The full exception (message, location, traceback) is only
written to the server log.
"""

from __future__ import annotations

import logging
import traceback
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from domain.constants import (
    DEFAULT_LANGUAGE,
    ERROR_ID_HEX_LENGTH,
    ERROR_ID_PREFIX,
    GENERIC_ERROR_MESSAGE,
    OPERATION_FAILED_MESSAGE,
)
from domain.exceptions import StorageError, ThemePresetError
from i18n import t
from logging_config import get_logger

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a wrapped operation: data on success, a safe error otherwise."""

    success: bool
    data: T | None = None
    error: str | None = None
    error_id: str | None = None


def new_error_id() -> str:
    return f"{ERROR_ID_PREFIX}{uuid.uuid4().hex[:ERROR_ID_HEX_LENGTH]}"


class ErrorReporter:
    def __init__(self, logger: logging.Logger | None = None, lang: str = DEFAULT_LANGUAGE) -> None:
        self._logger = logger or get_logger(__name__)
        self._lang = lang

    def wrap(self, operation: Callable[[], T], context: str = "") -> OperationResult[T]:
        """Run *operation*; never raises for an Exception raised inside it."""
        try:
            result = operation()
        except Exception as exc:
            error_id, message = self.handle_exception(exc, context)
            return OperationResult(success=False, error=message, error_id=error_id)

        if context:
            self.log_success(context, result_type=type(result).__name__)
        return OperationResult(success=True, data=result)

    def handle_exception(self, exc: BaseException, context: str = "") -> tuple[str, str]:
        """Log *exc* in full and return (error_id, user-facing message)."""
        error_id = new_error_id()
        filename, lineno = _origin(exc)
        self._logger.error(
            "Theme preset error [%s]: %s (context: %s, at %s:%s)",
            error_id,
            exc,
            context or "-",
            filename,
            lineno,
            exc_info=exc,
            extra={"error_id": error_id},
        )
        return error_id, self.user_message(exc, error_id)

    def user_message(self, exc: BaseException, error_id: str) -> str:
        """Domain errors carry a safe message; anything else gets the generic text."""
        if isinstance(exc, ThemePresetError) and not isinstance(exc, StorageError):
            return t(OPERATION_FAILED_MESSAGE, lang=self._lang, reason=str(exc), error_id=error_id)
        return t(GENERIC_ERROR_MESSAGE, lang=self._lang, error_id=error_id)

    def log_success(self, operation: str, **context: Any) -> None:
        """Informational audit entry for a completed operation."""
        details = ", ".join(f"{k}={v}" for k, v in context.items())
        self._logger.info("Theme preset operation succeeded: %s %s", operation, details)


def _origin(exc: BaseException) -> tuple[str, int | str]:
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return "-", "-"
    last = frames[-1]
    return last.filename, last.lineno or "-"
