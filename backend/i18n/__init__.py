"""
i18n — User-facing message catalog.
Provides a translation function with a fallback chain and string interpolation.
"""

import json
from pathlib import Path
from typing import Any

from logging_config import get_logger

logger = get_logger(__name__)

# Load all locale files at module import time
_LOCALES_DIR = Path(__file__).parent / "locales"
_TRANSLATIONS: dict[str, dict] = {}
_FALLBACK_LANGUAGE = "en"

for locale_file in _LOCALES_DIR.glob("*.json"):
    lang_code = locale_file.stem
    try:
        with open(locale_file, encoding="utf-8") as f:
            _TRANSLATIONS[lang_code] = json.load(f)
        logger.info("Loaded locale: %s", lang_code)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to load locale %s: %s", lang_code, e)


def t(key: str, lang: str = _FALLBACK_LANGUAGE, **kwargs: Any) -> str:
    """
    Translate a key to the specified language with optional formatting.

    Fallback chain: requested lang -> en -> raw key string

    Args:
        key: Dot-notation key (e.g., "dispatch.no_action")
        lang: Language code
        **kwargs: Optional format arguments for string interpolation

    Returns:
        Translated string with interpolated values

    Examples:
        >>> t("dispatch.preset_applied", count=61, preset="traditional", site="library")
        'Loaded 61 traditional preset defaults into theme settings for site "library".'
    """
    if lang in _TRANSLATIONS:
        value = _get_nested_value(_TRANSLATIONS[lang], key)
        if value:
            return _safe_format(value, **kwargs)

    if lang != _FALLBACK_LANGUAGE and _FALLBACK_LANGUAGE in _TRANSLATIONS:
        value = _get_nested_value(_TRANSLATIONS[_FALLBACK_LANGUAGE], key)
        if value:
            logger.warning(
                "Translation key '%s' missing for '%s', using %s",
                key,
                lang,
                _FALLBACK_LANGUAGE,
            )
            return _safe_format(value, **kwargs)

    # Last resort: return the key itself
    logger.warning("Translation key '%s' not found (lang: %s)", key, lang)
    return key


def _get_nested_value(data: dict, dot_key: str) -> str | None:
    """Retrieve a nested dict value using dot notation."""
    current: Any = data
    for k in dot_key.split("."):
        if not isinstance(current, dict) or k not in current:
            return None
        current = current[k]
    return current if isinstance(current, str) else None


def _safe_format(template: str, **kwargs: Any) -> str:
    """
    Safely format a template string with given kwargs.

    Falls back to raw template if formatting fails.
    """
    try:
        return template.format(**kwargs)
    except (KeyError, ValueError) as e:
        logger.warning("String formatting failed: %s (template: %s)", e, template)
        return template
