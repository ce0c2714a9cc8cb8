"""
Domain — Preset registry.
Named, immutable bundles of theme settings. The registry is a plain value that
callers receive by injection; DEFAULT_REGISTRY holds the built-in families.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from domain.exceptions import UnknownPresetError


@dataclass(frozen=True)
class Preset:
    """A named bundle of string settings."""

    name: str
    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # detach from the caller's dict
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def as_dict(self) -> dict[str, str]:
        return dict(self.values)


class PresetRegistry:
    """Immutable lookup of presets by name, in registration order."""

    def __init__(self, presets: Iterable[Preset]) -> None:
        by_name: dict[str, Preset] = {}
        for preset in presets:
            if preset.name in by_name:
                raise ValueError(f"Duplicate preset name: {preset.name}")
            by_name[preset.name] = preset
        self._presets = MappingProxyType(by_name)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, str]]) -> "PresetRegistry":
        return cls(Preset(name, values) for name, values in data.items())

    def get_all_names(self) -> list[str]:
        return list(self._presets)

    def get(self, name: str) -> Preset:
        """Return the preset registered under *name*; raise UnknownPresetError otherwise."""
        try:
            return self._presets[name]
        except KeyError:
            raise UnknownPresetError(name) from None

    def has(self, name: str) -> bool:
        return name in self._presets

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def __iter__(self) -> Iterator[Preset]:
        return iter(self._presets.values())

    def __len__(self) -> int:
        return len(self._presets)


# ---------------------------------------------------------------------------
# Built-in preset families
# ---------------------------------------------------------------------------

MODERN_VALUES: dict[str, str] = {
    # Typography - headings
    "h1_font_family": "cormorant",
    "h1_font_size": "2.5rem",
    "h1_font_color": "#b37c05",
    "h1_font_weight": "600",
    "h2_font_family": "cormorant",
    "h2_font_size": "2rem",
    "h2_font_color": "#b37c05",
    "h2_font_weight": "600",
    "h3_font_family": "georgia",
    "h3_font_size": "1.5rem",
    "h3_font_color": "#b37c05",
    "h3_font_weight": "500",
    # Typography - body
    "body_font_family": "helvetica",
    "body_font_size": "1.125rem",
    "body_font_color": "#b37c05",
    "body_font_weight": "400",
    # Typography - tagline
    "tagline_font_family": "georgia",
    "tagline_font_weight": "600",
    "tagline_font_style": "italic",
    "tagline_font_color": "#b37c05",
    "tagline_hover_text_color": "#ffffff",
    "tagline_hover_background_color": "#f3d491",
    # Palette
    "primary_color": "#b37c05",
    "sacred_gold": "#D4AF37",
    # Table of contents
    "toc_font_family": "georgia",
    "toc_font_size": "normal",
    "toc_font_weight": "700",
    "toc_text_color": "#b37c05",
    "toc_hover_text_color": "#ffffff",
    "toc_hover_background_color": "#f3d491",
    "toc_background_color": "#ffffff",
    "toc_border_color": "#D4AF37",
    "toc_border_width": "2px",
    "toc_border_radius": "8px",
    "toc_pill_style": "1",
    "toc_font_size_rem": "",
    # Breadcrumbs
    "breadcrumbs_font_family": "helvetica",
    "breadcrumbs_font_style": "normal",
    "breadcrumbs_font_weight": "400",
    "breadcrumbs_font_size_rem": "1.125rem",
    "breadcrumbs_text_color": "#b37c05",
    "breadcrumbs_hover_text_color": "#ffffff",
    "breadcrumbs_hover_background_color": "#f3d491",
    "breadcrumbs_background_color": "#ffffff",
    "breadcrumbs_border_color": "#D4AF37",
    "breadcrumbs_border_width": "1px",
    "breadcrumbs_pill_style": "1",
    "breadcrumbs_include_current": "1",
    # Page title
    "page_title_pill_style": "1",
    "page_title_border_width": "1px",
    # Pagination
    "pagination_font_color": "#b37c05",
    "pagination_background_color": "#f3d491",
    "pagination_border_width": "1px",
    "pagination_hover_background_color": "#1a365d",
    "pagination_hover_text_color": "#ffffff",
    # Menu
    "menu_background_color": "#ffffff",
    "menu_text_color": "#b37c05",
    "menu_font_family": "helvetica",
    # Footer
    "footer_background_color": "#ffffff",
    "footer_text_color": "#000000",
    # Layout
    "header_height": "100",
    "logo_height": "100",
}

TRADITIONAL_VALUES: dict[str, str] = {
    # Typography - headings
    "h1_font_family": "georgia",
    "h1_font_size": "2rem",
    "h1_font_color": "#1F3A5F",
    "h1_font_weight": "600",
    "h2_font_family": "georgia",
    "h2_font_size": "1.5rem",
    "h2_font_color": "#1F3A5F",
    "h2_font_weight": "600",
    "h3_font_family": "georgia",
    "h3_font_size": "1.25rem",
    "h3_font_color": "#1F3A5F",
    "h3_font_weight": "500",
    # Typography - body
    "body_font_family": "helvetica",
    "body_font_size": "1rem",
    "body_font_color": "#2F3542",
    "body_font_weight": "400",
    # Typography - tagline
    "tagline_font_family": "georgia",
    "tagline_font_weight": "400",
    "tagline_font_style": "italic",
    "tagline_font_color": "#5A6470",
    "tagline_hover_text_color": "#ffffff",
    "tagline_hover_background_color": "#7A1E3A",
    # Palette
    "primary_color": "#1F3A5F",
    "sacred_gold": "#7A1E3A",
    # Table of contents
    "toc_font_family": "helvetica",
    "toc_font_size": "normal",
    "toc_font_weight": "400",
    "toc_text_color": "#1F3A5F",
    "toc_hover_text_color": "#ffffff",
    "toc_hover_background_color": "#7A1E3A",
    "toc_background_color": "#ffffff",
    "toc_border_color": "#7A1E3A",
    "toc_border_width": "2px",
    "toc_border_radius": "8px",
    "toc_pill_style": "1",
    # Breadcrumbs
    "breadcrumbs_font_family": "helvetica",
    "breadcrumbs_font_style": "normal",
    "breadcrumbs_font_weight": "400",
    "breadcrumbs_font_size_rem": "1rem",
    "breadcrumbs_text_color": "#2F3542",
    "breadcrumbs_hover_text_color": "#ffffff",
    "breadcrumbs_hover_background_color": "#7A1E3A",
    "breadcrumbs_background_color": "#ffffff",
    "breadcrumbs_border_color": "#7A1E3A",
    "breadcrumbs_border_width": "1px",
    "breadcrumbs_pill_style": "1",
    "breadcrumbs_include_current": "1",
    # Page title
    "page_title_pill_style": "1",
    "page_title_border_width": "1px",
    # Pagination
    "pagination_font_color": "#ffffff",
    "pagination_background_color": "#1F3A5F",
    "pagination_border_width": "1px",
    "pagination_hover_background_color": "#7A1E3A",
    "pagination_hover_text_color": "#ffffff",
    # Menu
    "menu_background_color": "#1F3A5F",
    "menu_text_color": "#ffffff",
    "menu_font_family": "helvetica",
    # Footer
    "footer_background_color": "#f7f8fa",
    "footer_text_color": "#111111",
    # Layout
    "header_height": "100",
    "logo_height": "100",
}

DEFAULT_REGISTRY = PresetRegistry(
    [
        Preset("modern", MODERN_VALUES),
        Preset("traditional", TRADITIONAL_VALUES),
    ]
)
