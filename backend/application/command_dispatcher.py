"""
Application — Config command dispatcher.
Maps an administrator action name + payload to a PresetService call. Each
handler validates its inputs first, runs the service call through the
ErrorReporter, and turns the outcome into messages; nothing raises to the
caller.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlmodel import Session

from application.error_reporter import ErrorReporter, OperationResult
from application.preset_service import PresetService
from domain import constants
from domain.constants import (
    CONFIG_ACTION_REGISTRY,
    DEBUG_SNAPSHOT_SAMPLE_CHARS,
    DEFAULT_LANGUAGE,
    DIFF_SAMPLE_KEYS,
    INSPECT_SAMPLE_KEYS,
    VERIFY_SAMPLE_KEYS,
)
from domain.entities import Scope
from domain.enums import MessageLevel
from domain.presets import DEFAULT_REGISTRY, PresetRegistry
from domain.validation import validate_preset_name, validate_site_slug
from i18n import t
from infrastructure.settings_store import SettingsStore
from logging_config import get_logger

logger = get_logger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Message:
    """One user-facing outcome line."""

    level: MessageLevel
    text: str
    data: Any = None


@dataclass(frozen=True)
class ConfigCommand:
    """Normalized command payload."""

    action: str
    site_slug: str | None = None
    target_preset: str = field(default_factory=lambda: constants.DEFAULT_PRESET)
    debug: bool = False
    inspect_key: str = ""

    @classmethod
    def from_payload(cls, action: str, payload: Mapping[str, Any]) -> ConfigCommand:
        site = payload.get("site")
        site_slug = str(site).strip() if site is not None else ""
        preset = payload.get("target_preset")
        preset_name = str(preset).strip() if preset is not None else ""
        return cls(
            action=action,
            site_slug=site_slug or None,
            target_preset=preset_name or constants.DEFAULT_PRESET,
            debug=_parse_flag(payload.get("debug")),
            inspect_key=str(payload.get("inspect_key") or "").strip(),
        )


def _parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class ConfigCommandDispatcher:
    def __init__(
        self,
        service: PresetService,
        reporter: ErrorReporter | None = None,
        theme_key: str | None = None,
        lang: str = DEFAULT_LANGUAGE,
    ) -> None:
        self._service = service
        self._reporter = reporter or ErrorReporter()
        self._theme_key = theme_key
        self._lang = lang
        self._handlers: dict[str, Callable[[ConfigCommand], list[Message]]] = {
            "inspect_theme_settings": self._inspect_theme_settings,
            "verify_defaults_vs_settings": self._verify_defaults_vs_settings,
            "load_stored_defaults": self._load_stored_defaults,
            "inspect_key": self._inspect_key,
            "diff_vs_preset": self._diff_vs_preset,
            "load_defaults_into_settings": self._load_defaults_into_settings,
            "save_settings_as_defaults": self._save_settings_as_defaults,
        }

    @property
    def actions(self) -> list[str]:
        return list(self._handlers)

    def describe_actions(self) -> dict[str, str]:
        """Action name to its human-readable description."""
        return {
            name: CONFIG_ACTION_REGISTRY.get(name, {}).get("description", "")
            for name in self._handlers
        }

    @property
    def theme_key(self) -> str:
        return self._theme_key or constants.DEFAULT_THEME_KEY

    def dispatch(
        self, action: str | None, payload: Mapping[str, Any] | None = None
    ) -> list[Message]:
        """Run one administrator command and return its messages."""
        action_name = (action or "").strip().lower()
        if not action_name:
            return [Message(MessageLevel.WARNING, t("dispatch.no_action", lang=self._lang))]

        handler = self._handlers.get(action_name)
        if handler is None:
            logger.warning("Unknown config action: %s", action_name)
            return [
                Message(
                    MessageLevel.WARNING,
                    t(
                        "dispatch.unknown_action",
                        lang=self._lang,
                        action=action_name,
                        supported=", ".join(self._handlers),
                    ),
                )
            ]

        command = ConfigCommand.from_payload(action_name, payload or {})
        input_error = self._validate(command)
        if input_error:
            logger.warning("Rejected config action %s: %s", action_name, input_error)
            return [Message(MessageLevel.ERROR, input_error)]

        if CONFIG_ACTION_REGISTRY.get(action_name, {}).get("mutates"):
            logger.info(
                "Mutating config action: %s site=%s preset=%s",
                action_name,
                command.site_slug,
                command.target_preset,
            )

        try:
            return handler(command)
        except Exception as exc:
            _, text = self._reporter.handle_exception(exc, f"config_command:{action_name}")
            return [Message(MessageLevel.ERROR, text)]

    # ------------------------------------------------------------------
    # Input validation
    # ------------------------------------------------------------------

    def _validate(self, command: ConfigCommand) -> str | None:
        rules = CONFIG_ACTION_REGISTRY.get(command.action, {})
        site_error = validate_site_slug(
            command.site_slug, required=rules.get("requires_site", False)
        )
        if site_error:
            return site_error
        if rules.get("requires_preset"):
            preset_error = validate_preset_name(command.target_preset, self._service.registry)
            if preset_error:
                return preset_error
        if rules.get("requires_inspect_key") and not command.inspect_key:
            return t("dispatch.missing_inspect_key", lang=self._lang)
        return None

    def _scope(self, command: ConfigCommand) -> Scope:
        return self._service.store.resolve_scope(command.site_slug)

    def _run(self, command: ConfigCommand, operation: Callable[[Scope], Any]) -> OperationResult:
        return self._reporter.wrap(lambda: operation(self._scope(command)), command.action)

    def _error(self, result: OperationResult) -> list[Message]:
        return [Message(MessageLevel.ERROR, result.error or "", {"error_id": result.error_id})]

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _inspect_theme_settings(self, command: ConfigCommand) -> list[Message]:
        result = self._run(command, lambda scope: self._service.inspect(scope, self.theme_key))
        if not result.success:
            return self._error(result)

        data = result.data
        text = t(
            "dispatch.inspect_summary",
            lang=self._lang,
            site=data["site_slug"] or "default",
            theme=data["slug"],
            count=data["count"],
            source=data["source"],
            namespaced_key=data["namespaced_key"],
            namespaced_count=data["namespaced_count"],
            container_shape=data["container_shape"],
            container_count=data["container_count"],
            sample=", ".join(list(data["settings"])[:INSPECT_SAMPLE_KEYS]) or "-",
        )
        return [Message(MessageLevel.SUCCESS, text, data)]

    def _verify_defaults_vs_settings(self, command: ConfigCommand) -> list[Message]:
        result = self._run(
            command,
            lambda scope: self._service.verify_defaults_vs_settings(
                scope, self.theme_key, command.target_preset
            ),
        )
        if not result.success:
            return self._error(result)

        data = result.data
        sample_differences = [
            f"{key}:{json.dumps(diff['current'])} != {json.dumps(diff['stored'])}"
            for key, diff in list(data["differences"].items())[:VERIFY_SAMPLE_KEYS]
        ]
        text = t(
            "dispatch.verify_report",
            lang=self._lang,
            settings_count=data["settings_count"],
            defaults_count=data["defaults_count"],
            missing_in_defaults=len(data["missing_in_defaults"]),
            missing_in_settings=len(data["missing_in_settings"]),
            differences=len(data["differences"]),
            sample_missing_in_defaults=", ".join(data["missing_in_defaults"][:VERIFY_SAMPLE_KEYS]),
            sample_missing_in_settings=", ".join(data["missing_in_settings"][:VERIFY_SAMPLE_KEYS]),
            sample_differences=", ".join(sample_differences),
        )
        return [Message(MessageLevel.SUCCESS, text, data)]

    def _load_stored_defaults(self, command: ConfigCommand) -> list[Message]:
        result = self._run_with_counts(
            command,
            lambda scope: self._service.load_stored_defaults(
                scope, command.target_preset, self.theme_key
            ),
        )
        if not result.success:
            return self._error(result)

        data = result.data
        messages = [
            Message(
                MessageLevel.SUCCESS,
                t(
                    "dispatch.stored_defaults_loaded",
                    lang=self._lang,
                    count=data["count"],
                    preset=command.target_preset,
                    site=command.site_slug,
                ),
                data,
            )
        ]
        return messages + self._debug_counts(command, data)

    def _inspect_key(self, command: ConfigCommand) -> list[Message]:
        result = self._run(
            command,
            lambda scope: self._service.inspect_key(scope, self.theme_key, command.inspect_key),
        )
        if not result.success:
            return self._error(result)

        text = t(
            "dispatch.inspect_key",
            lang=self._lang,
            setting=command.inspect_key,
            value=json.dumps(result.data),
        )
        return [
            Message(
                MessageLevel.SUCCESS,
                text,
                {"key": command.inspect_key, "value": result.data},
            )
        ]

    def _diff_vs_preset(self, command: ConfigCommand) -> list[Message]:
        result = self._run(
            command,
            lambda scope: self._service.diff_vs_preset(
                scope, self.theme_key, command.target_preset
            ),
        )
        if not result.success:
            return self._error(result)

        data = result.data
        differences = data["differences"]
        if not differences:
            text = t(
                "dispatch.diff_clean",
                lang=self._lang,
                preset=command.target_preset,
                matches=len(data["matches"]),
            )
            return [Message(MessageLevel.SUCCESS, text, data)]

        sample = [
            f"{key}:{json.dumps(diff['current'])} -> {json.dumps(diff['target'])}"
            for key, diff in list(differences.items())[:DIFF_SAMPLE_KEYS]
        ]
        text = t(
            "dispatch.diff_report",
            lang=self._lang,
            preset=command.target_preset,
            differences=len(differences),
            matches=len(data["matches"]),
            limit=DIFF_SAMPLE_KEYS,
            sample=", ".join(sample),
        )
        return [Message(MessageLevel.SUCCESS, text, data)]

    def _load_defaults_into_settings(self, command: ConfigCommand) -> list[Message]:
        result = self._run_with_counts(
            command,
            lambda scope: self._service.apply_preset(
                scope, self.theme_key, command.target_preset
            ),
        )
        if not result.success:
            return self._error(result)

        data = result.data
        messages = [
            Message(
                MessageLevel.SUCCESS,
                t(
                    "dispatch.preset_applied",
                    lang=self._lang,
                    count=data["count"],
                    preset=command.target_preset,
                    site=command.site_slug,
                ),
                data,
            )
        ]
        return messages + self._debug_counts(command, data)

    def _save_settings_as_defaults(self, command: ConfigCommand) -> list[Message]:
        result = self._run(
            command,
            lambda scope: self._service.save_settings_as_preset_defaults(
                scope, self.theme_key, command.target_preset
            ),
        )
        if not result.success:
            return self._error(result)

        count, snapshot = result.data
        messages = [
            Message(
                MessageLevel.SUCCESS,
                t(
                    "dispatch.settings_saved",
                    lang=self._lang,
                    preset=command.target_preset,
                    count=count,
                ),
                {"count": count, "settings": snapshot},
            )
        ]
        if command.debug:
            sample = json.dumps(snapshot)[:DEBUG_SNAPSHOT_SAMPLE_CHARS] + "..."
            messages.append(
                Message(MessageLevel.SUCCESS, t("dispatch.debug_sample", lang=self._lang, sample=sample))
            )
        return messages

    # ------------------------------------------------------------------
    # Debug helpers
    # ------------------------------------------------------------------

    def _run_with_counts(
        self,
        command: ConfigCommand,
        mutation: Callable[[Scope], tuple[int, dict[str, Any]]],
    ) -> OperationResult:
        """Run a mutation, capturing effective-settings counts around it in debug mode."""

        def operation(scope: Scope) -> dict[str, Any]:
            before = self._service.count_settings(scope, self.theme_key) if command.debug else None
            count, settings = mutation(scope)
            after = self._service.count_settings(scope, self.theme_key) if command.debug else None
            return {"count": count, "settings": settings, "before": before, "after": after}

        return self._run(command, operation)

    def _debug_counts(self, command: ConfigCommand, data: dict[str, Any]) -> list[Message]:
        if not command.debug or data["before"] is None or data["after"] is None:
            return []
        text = t(
            "dispatch.debug_counts",
            lang=self._lang,
            before=data["before"],
            after=data["after"],
        )
        return [Message(MessageLevel.SUCCESS, text)]


def build_dispatcher(
    session: Session, registry: PresetRegistry = DEFAULT_REGISTRY
) -> ConfigCommandDispatcher:
    """Dispatcher wired to the database-backed settings store of *session*."""
    return ConfigCommandDispatcher(PresetService(SettingsStore(session), registry))
