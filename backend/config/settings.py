"""
Config — Override domain constants from environment variables.
Call init_settings() once at application startup.
"""

import os

from domain import constants

_ENV_OVERRIDES: dict[str, str] = {
    "THEME_DEFAULT_PRESET": "DEFAULT_PRESET",
    "THEME_DEFAULT_KEY": "DEFAULT_THEME_KEY",
    "THEME_FALLBACK_SLUG": "FALLBACK_THEME_SLUG",
    "THEME_MODULE_PREFIX": "MODULE_PREFIX",
}


def init_settings() -> None:
    """Override domain constants from environment. Call once at startup."""
    for env_name, attr in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            setattr(constants, attr, value.strip())
