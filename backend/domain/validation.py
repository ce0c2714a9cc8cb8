"""
Domain — Theme settings validation.
Pure functions, no I/O. The expected format of each value comes from
SETTING_SCHEMA; keys the schema does not list are classified by the legacy
key-name markers so previously accepted settings stay accepted.
"""

import re
from collections.abc import Mapping
from typing import Any

from domain import constants
from domain.enums import SettingKind
from domain.exceptions import FieldError
from domain.presets import PresetRegistry

_COLOR_RE = re.compile(constants.COLOR_PATTERN)
_SIZE_RE = re.compile(constants.SIZE_PATTERN)
_SITE_SLUG_RE = re.compile(constants.SITE_SLUG_PATTERN)

# ---------------------------------------------------------------------------
# Setting Schema
# ---------------------------------------------------------------------------

_COLOR_KEYS = (
    "h1_font_color",
    "h2_font_color",
    "h3_font_color",
    "body_font_color",
    "tagline_font_color",
    "tagline_hover_text_color",
    "tagline_hover_background_color",
    "primary_color",
    "accent_color",
    "page_title_font_color",
    "toc_text_color",
    "toc_hover_text_color",
    "toc_hover_background_color",
    "toc_background_color",
    "toc_border_color",
    "breadcrumbs_text_color",
    "breadcrumbs_hover_text_color",
    "breadcrumbs_hover_background_color",
    "breadcrumbs_background_color",
    "breadcrumbs_border_color",
    "pagination_font_color",
    "pagination_background_color",
    "pagination_hover_background_color",
    "pagination_hover_text_color",
    "pagination_hover_color",
    "menu_background_color",
    "menu_text_color",
    "footer_background_color",
    "footer_text_color",
)

_SIZE_KEYS = (
    "h1_font_size",
    "h2_font_size",
    "h3_font_size",
    "body_font_size",
    "tagline_font_size",
    "page_title_font_size",
    "toc_font_size",
    "toc_font_size_rem",
    "breadcrumbs_font_size_rem",
    "pagination_font_size",
)

_TEXT_KEYS = (
    "h1_font_family",
    "h1_font_weight",
    "h2_font_family",
    "h2_font_weight",
    "h3_font_family",
    "h3_font_weight",
    "body_font_family",
    "body_font_weight",
    "tagline_font_family",
    "tagline_font_weight",
    "tagline_font_style",
    "page_title_font_family",
    "page_title_font_weight",
    "page_title_pill_style",
    "page_title_border_width",
    # Palette entries without the color marker; never format-checked so far
    "sacred_gold",
    "warm_earth",
    "soft_sage",
    "warm_cream",
    "gentle_lavender",
    "sunset_orange",
    "deep_burgundy",
    "charcoal",
    "light_gray",
    "medium_gray",
    "toc_font_family",
    "toc_font_weight",
    "toc_border_width",
    "toc_border_radius",
    "toc_pill_style",
    "breadcrumbs_font_family",
    "breadcrumbs_font_style",
    "breadcrumbs_font_weight",
    "breadcrumbs_border_width",
    "breadcrumbs_pill_style",
    "breadcrumbs_include_current",
    "pagination_border_width",
    "menu_font_family",
    "header_height",
    "logo_height",
    "footer_copyright_text",
    "footer_powered_by_text",
)

SETTING_SCHEMA: Mapping[str, SettingKind] = {
    **{key: SettingKind.COLOR for key in _COLOR_KEYS},
    **{key: SettingKind.SIZE for key in _SIZE_KEYS},
    **{key: SettingKind.TEXT for key in _TEXT_KEYS},
}


def classify_by_key_name(key: str) -> SettingKind:
    """Legacy classifier: infer the kind from marker substrings in the key."""
    if constants.COLOR_KEY_MARKER in key:
        return SettingKind.COLOR
    if constants.SIZE_KEY_MARKER in key:
        return SettingKind.SIZE
    return SettingKind.TEXT


def kind_of(key: str, schema: Mapping[str, SettingKind] = SETTING_SCHEMA) -> SettingKind:
    """Return the expected value kind for *key*."""
    kind = schema.get(key)
    if kind is None:
        return classify_by_key_name(key)
    return kind


# ---------------------------------------------------------------------------
# Value Checks
# ---------------------------------------------------------------------------


def is_valid_color(value: str) -> bool:
    return _COLOR_RE.match(value) is not None


def is_valid_size(value: str) -> bool:
    """CSS length (number + rem/px/em/%), a named size, or empty for unset."""
    if value == "" or value in constants.NAMED_SIZES:
        return True
    return _SIZE_RE.match(value) is not None


def validate_settings_map(
    settings: Mapping[str, Any],
    schema: Mapping[str, SettingKind] = SETTING_SCHEMA,
) -> list[FieldError]:
    """
    Check every value of a settings map and return all violations found.

    Values must be strings; color-kind values must be #RRGGBB and size-kind
    values must pass is_valid_size. An empty list means the map is valid.
    """
    errors: list[FieldError] = []
    for key, value in settings.items():
        if not isinstance(value, str):
            errors.append(
                FieldError(
                    str(key),
                    f"Setting '{key}' must be a string, got {type(value).__name__}",
                )
            )
            continue

        kind = kind_of(str(key), schema)
        if kind is SettingKind.COLOR and not is_valid_color(value):
            errors.append(
                FieldError(str(key), f"Setting '{key}' has invalid color format: {value}")
            )
        elif kind is SettingKind.SIZE and not is_valid_size(value):
            errors.append(
                FieldError(
                    str(key), f"Setting '{key}' has invalid font size format: {value}"
                )
            )
    return errors


# ---------------------------------------------------------------------------
# Input Checks
# ---------------------------------------------------------------------------


def validate_preset_name(name: str | None, registry: PresetRegistry) -> str | None:
    """Return a descriptive error when *name* is missing or not registered."""
    if not name or not name.strip():
        return "A preset name is required for this operation"
    if not registry.has(name):
        available = ", ".join(registry.get_all_names())
        return f"Unknown preset: {name} (available: {available})"
    return None


def validate_site_slug(slug: str | None, required: bool = True) -> str | None:
    """Return a descriptive error when a required slug is missing or malformed."""
    if not slug:
        if required:
            return "Site slug is required for this operation"
        return None
    if not _SITE_SLUG_RE.match(slug):
        return f"Invalid site slug: {slug}"
    return None
