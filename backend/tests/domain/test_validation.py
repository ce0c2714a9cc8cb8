"""
Tests for domain.validation — pure functions, no DB.
"""

import pytest

from domain.enums import SettingKind
from domain.presets import DEFAULT_REGISTRY
from domain.validation import (
    SETTING_SCHEMA,
    classify_by_key_name,
    is_valid_color,
    is_valid_size,
    kind_of,
    validate_preset_name,
    validate_settings_map,
    validate_site_slug,
)

# ---------------------------------------------------------------------------
# Color / size formats
# ---------------------------------------------------------------------------


class TestIsValidColor:
    @pytest.mark.parametrize("value", ["#B37C05", "#b37c05", "#000000", "#FfFfFf"])
    def test_accepts_six_digit_hex(self, value: str) -> None:
        assert is_valid_color(value) is True

    @pytest.mark.parametrize(
        "value", ["b37c05", "#fff", "#b37c0", "#b37c055", "#GGGGGG", "red", ""]
    )
    def test_rejects_everything_else(self, value: str) -> None:
        assert is_valid_color(value) is False


class TestIsValidSize:
    @pytest.mark.parametrize("value", ["2.5rem", "16px", "1em", "100%", "1.125rem"])
    def test_accepts_css_lengths(self, value: str) -> None:
        assert is_valid_size(value) is True

    def test_accepts_named_and_empty_sizes(self) -> None:
        assert is_valid_size("normal") is True
        assert is_valid_size("large") is True
        assert is_valid_size("") is True

    @pytest.mark.parametrize("value", ["big", "2.5", "rem", "2.5 rem", "-1px", "1.px"])
    def test_rejects_malformed_sizes(self, value: str) -> None:
        assert is_valid_size(value) is False


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestSchema:
    def test_schema_agrees_with_key_name_heuristic_for_marked_keys(self) -> None:
        # every key carrying a marker is classified the same way by both
        for key, kind in SETTING_SCHEMA.items():
            if "_color" in key or "_font_size" in key:
                assert classify_by_key_name(key) is kind, key

    def test_every_preset_key_has_a_schema_entry(self) -> None:
        for preset in DEFAULT_REGISTRY:
            missing = set(preset.values) - set(SETTING_SCHEMA)
            assert missing == set(), f"{preset.name}: {sorted(missing)}"

    def test_unknown_keys_fall_back_to_heuristic(self) -> None:
        assert kind_of("sidebar_link_color") is SettingKind.COLOR
        assert kind_of("sidebar_font_size") is SettingKind.SIZE
        assert kind_of("sidebar_layout") is SettingKind.TEXT

    def test_palette_entries_are_not_format_checked(self) -> None:
        assert kind_of("sacred_gold") is SettingKind.TEXT

    def test_custom_schema_overrides_heuristic(self) -> None:
        schema = {"accent": SettingKind.COLOR}
        assert kind_of("accent", schema) is SettingKind.COLOR


# ---------------------------------------------------------------------------
# validate_settings_map
# ---------------------------------------------------------------------------


class TestValidateSettingsMap:
    def test_registered_presets_are_valid(self) -> None:
        for preset in DEFAULT_REGISTRY:
            assert validate_settings_map(preset.values) == [], preset.name

    def test_empty_map_is_valid(self) -> None:
        assert validate_settings_map({}) == []

    def test_reports_invalid_color(self) -> None:
        errors = validate_settings_map({"h1_font_color": "blue"})
        assert len(errors) == 1
        assert errors[0].key == "h1_font_color"
        assert "invalid color format" in errors[0].message
        assert "blue" in errors[0].message

    def test_reports_invalid_size(self) -> None:
        errors = validate_settings_map({"h1_font_size": "huge"})
        assert [e.key for e in errors] == ["h1_font_size"]
        assert "invalid font size format" in errors[0].message

    def test_reports_every_violation(self) -> None:
        errors = validate_settings_map(
            {
                "h1_font_color": "blue",
                "h2_font_color": "#123456",
                "body_font_size": "12",
                "menu_text_color": "#12",
            }
        )
        assert sorted(e.key for e in errors) == [
            "body_font_size",
            "h1_font_color",
            "menu_text_color",
        ]

    def test_non_string_value_is_rejected(self) -> None:
        errors = validate_settings_map({"h1_font_family": 12})
        assert len(errors) == 1
        assert "must be a string, got int" in errors[0].message

    def test_text_values_are_free_form(self) -> None:
        assert validate_settings_map({"footer_copyright_text": "© 2026 Library"}) == []


# ---------------------------------------------------------------------------
# Input checks
# ---------------------------------------------------------------------------


class TestValidatePresetName:
    def test_registered_name_is_accepted(self) -> None:
        assert validate_preset_name("modern", DEFAULT_REGISTRY) is None

    def test_missing_name_is_rejected(self) -> None:
        assert "required" in validate_preset_name("", DEFAULT_REGISTRY)
        assert "required" in validate_preset_name(None, DEFAULT_REGISTRY)

    def test_unknown_name_lists_available_presets(self) -> None:
        error = validate_preset_name("brutalist", DEFAULT_REGISTRY)
        assert "Unknown preset: brutalist" in error
        assert "modern" in error
        assert "traditional" in error


class TestValidateSiteSlug:
    def test_valid_slug(self) -> None:
        assert validate_site_slug("main-library_2") is None

    def test_missing_slug_when_required(self) -> None:
        assert validate_site_slug(None) == "Site slug is required for this operation"
        assert validate_site_slug("") is not None

    def test_missing_slug_when_optional(self) -> None:
        assert validate_site_slug(None, required=False) is None

    @pytest.mark.parametrize("slug", ["main library", "../etc", "a/b", "lib;drop"])
    def test_malformed_slug(self, slug: str) -> None:
        assert validate_site_slug(slug, required=False) == f"Invalid site slug: {slug}"
