"""
Domain — Centralized constants.
Storage keys, validation patterns and default values live here instead of as
magic strings scattered across modules.
"""

# ---------------------------------------------------------------------------
# Theme Identity
# ---------------------------------------------------------------------------
DEFAULT_THEME_KEY = "LibraryTheme"
FALLBACK_THEME_SLUG = "library-theme"

# Normalized theme keys accepted for a slug even though they do not spell it.
# Empty by default; deployments with renamed themes inject their own table.
LEGACY_THEME_KEY_ALIASES: dict[str, frozenset[str]] = {}

# ---------------------------------------------------------------------------
# Settings Storage Keys
# ---------------------------------------------------------------------------
MODULE_PREFIX = "LibraryThemeStyles"
THEME_SETTINGS_PREFIX = "theme_settings_"
THEME_SETTINGS_CONTAINER_KEY = "theme_settings"
DEFAULTS_KEY_INFIX = "_defaults_"

# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------
DEFAULT_PRESET = "modern"

# ---------------------------------------------------------------------------
# Validation Patterns
# ---------------------------------------------------------------------------
COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
SIZE_PATTERN = r"^\d+(\.\d+)?(rem|px|em|%)$"
NAMED_SIZES = frozenset({"normal", "large"})
SITE_SLUG_PATTERN = r"^[A-Za-z0-9_-]+$"

# Legacy key-name markers, used only for keys missing from SETTING_SCHEMA
COLOR_KEY_MARKER = "_color"
SIZE_KEY_MARKER = "_font_size"

# ---------------------------------------------------------------------------
# Error Reporting
# ---------------------------------------------------------------------------
ERROR_ID_PREFIX = "lts_error_"
ERROR_ID_HEX_LENGTH = 13

# ---------------------------------------------------------------------------
# Dispatcher Output Limits
# ---------------------------------------------------------------------------
INSPECT_SAMPLE_KEYS = 15
VERIFY_SAMPLE_KEYS = 10
DIFF_SAMPLE_KEYS = 15
DEBUG_SNAPSHOT_SAMPLE_CHARS = 300

# ---------------------------------------------------------------------------
# Config Command Registry: admin actions and their input requirements
# ---------------------------------------------------------------------------
CONFIG_ACTION_REGISTRY: dict[str, dict] = {
    "inspect_theme_settings": {
        "description": "Show the effective theme settings for a site",
        "requires_site": False,
        "requires_preset": False,
        "mutates": False,
    },
    "verify_defaults_vs_settings": {
        "description": "Compare stored preset defaults with the effective settings",
        "requires_site": False,
        "requires_preset": True,
        "mutates": False,
    },
    "load_stored_defaults": {
        "description": "Apply the stored defaults snapshot of a preset",
        "requires_site": True,
        "requires_preset": True,
        "mutates": True,
    },
    "inspect_key": {
        "description": "Show the effective value of a single setting",
        "requires_site": False,
        "requires_preset": False,
        "requires_inspect_key": True,
        "mutates": False,
    },
    "diff_vs_preset": {
        "description": "List settings that differ from a registered preset",
        "requires_site": False,
        "requires_preset": True,
        "mutates": False,
    },
    "load_defaults_into_settings": {
        "description": "Apply a registered preset to the site's theme settings",
        "requires_site": True,
        "requires_preset": True,
        "mutates": True,
    },
    "save_settings_as_defaults": {
        "description": "Store the effective settings as a preset's defaults",
        "requires_site": True,
        "requires_preset": True,
        "mutates": True,
    },
}

# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------
DEFAULT_LANGUAGE = "en"

# ---------------------------------------------------------------------------
# Generic Error Messages (i18n keys, resolve with t() at call sites)
# ---------------------------------------------------------------------------
GENERIC_ERROR_MESSAGE = "errors.generic"
OPERATION_FAILED_MESSAGE = "errors.operation_failed"
