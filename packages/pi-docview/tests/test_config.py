"""Tests for documentation window settings."""

from __future__ import annotations

import pytest

from pi.docview.config import (
    DEFAULT_DOCUMENTATION_SETTINGS,
    DEFAULT_ZINDEX,
    StyleConfig,
    deep_merge_settings,
    format_highlight,
    parse_highlight,
    resolve_style_config,
)


class TestResolveStyleConfig:
    def test_no_settings_gives_defaults(self) -> None:
        style = resolve_style_config(None)
        assert style == StyleConfig()

    def test_disabled_with_false(self) -> None:
        assert resolve_style_config({"window": {"documentation": False}}) is None

    def test_disabled_with_enabled_flag(self) -> None:
        settings = {"window": {"documentation": {"enabled": False}}}
        assert resolve_style_config(settings) is None

    def test_true_gives_defaults(self) -> None:
        assert resolve_style_config({"window": {"documentation": True}}) == StyleConfig()

    def test_camel_case_keys(self) -> None:
        settings = {"window": {"documentation": {"maxWidth": 60, "maxHeight": 12}}}
        style = resolve_style_config(settings)
        assert style is not None
        assert (style.max_width, style.max_height) == (60, 12)

    def test_snake_case_keys(self) -> None:
        settings = {"window": {"documentation": {"max_width": 40}}}
        style = resolve_style_config(settings)
        assert style is not None
        assert style.max_width == 40

    def test_highlight_merges_with_defaults(self) -> None:
        settings = {"window": {"documentation": {"highlight": {"Normal": "Pmenu"}}}}
        style = resolve_style_config(settings)
        assert style is not None
        assert style.highlight == {"FloatBorder": "NormalFloat", "Normal": "Pmenu"}

    def test_defaults_not_mutated(self) -> None:
        before = {k: v for k, v in DEFAULT_DOCUMENTATION_SETTINGS.items()}
        resolve_style_config({"window": {"documentation": {"highlight": {"A": "B"}}}})
        assert DEFAULT_DOCUMENTATION_SETTINGS == before

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(TypeError):
            resolve_style_config({"window": {"documentation": "yes"}})


class TestStyleConfigFromDict:
    def test_negative_sizes_become_unconstrained(self) -> None:
        style = StyleConfig.from_dict({"maxWidth": -5, "maxHeight": -1})
        assert (style.max_width, style.max_height) == (0, 0)

    def test_winblend_clamped(self) -> None:
        assert StyleConfig.from_dict({"winblend": 250}).winblend == 100

    def test_border_none_value(self) -> None:
        assert StyleConfig.from_dict({"border": None}).border == "none"

    def test_unknown_border_raises(self) -> None:
        with pytest.raises(ValueError):
            StyleConfig.from_dict({"border": "wavy"})

    def test_highlight_string(self) -> None:
        style = StyleConfig.from_dict({"highlight": "Normal:Pmenu,FloatBorder:Pmenu"})
        assert style.highlight == {"Normal": "Pmenu", "FloatBorder": "Pmenu"}

    def test_bad_size_type(self) -> None:
        with pytest.raises(TypeError, match="max_width"):
            StyleConfig.from_dict({"maxWidth": "wide"})

    def test_zindex_default(self) -> None:
        style = StyleConfig.from_dict({})
        assert style.zindex is None
        assert style.effective_zindex == DEFAULT_ZINDEX

    def test_zindex_explicit(self) -> None:
        assert StyleConfig.from_dict({"zindex": 1001}).effective_zindex == 1001

    def test_window_options(self) -> None:
        style = StyleConfig(winblend=15, highlight={"Normal": "Pmenu"})
        assert style.to_window_options() == {
            "winblend": 15,
            "winhighlight": "Normal:Pmenu",
        }


class TestHighlightFormat:
    def test_format(self) -> None:
        assert format_highlight({"A": "B", "C": "D"}) == "A:B,C:D"

    def test_format_empty(self) -> None:
        assert format_highlight({}) == ""

    def test_parse_ignores_blank_pairs(self) -> None:
        assert parse_highlight("A:B, ,C:D") == {"A": "B", "C": "D"}

    def test_parse_rejects_malformed(self) -> None:
        with pytest.raises(ValueError, match="Invalid highlight pair"):
            parse_highlight("A")


class TestDeepMerge:
    def test_nested_dicts_merge(self) -> None:
        base = {"window": {"documentation": {"maxWidth": 10, "border": "single"}}}
        merged = deep_merge_settings(base, {"window": {"documentation": {"maxWidth": 20}}})
        assert merged == {"window": {"documentation": {"maxWidth": 20, "border": "single"}}}

    def test_none_ignored(self) -> None:
        assert deep_merge_settings({"a": 1}, {"a": None}) == {"a": 1}

    def test_lists_replaced(self) -> None:
        assert deep_merge_settings({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}
