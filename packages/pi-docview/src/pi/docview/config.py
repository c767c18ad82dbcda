"""Documentation window style settings.

Settings use the camelCase JSON shape of the other ``pi`` settings files::

    {
      "window": {
        "documentation": {
          "maxWidth": 60,
          "maxHeight": 12,
          "border": "rounded",
          "winblend": 10,
          "highlight": {"FloatBorder": "NormalFloat"},
          "zindex": 50
        }
      }
    }

Setting ``"documentation": false`` turns the documentation window off.
"""

from __future__ import annotations

import re
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Mapping

from pi.docview.geometry import BorderStyle, normalize_border

DEFAULT_ZINDEX = 50


def _documentation_defaults() -> dict[str, Any]:
    """Default documentation window settings."""
    return {
        "maxWidth": 0,
        "maxHeight": 0,
        "border": ["", "", "", " ", "", "", "", " "],
        "winblend": 0,
        "highlight": {"FloatBorder": "NormalFloat"},
        "zindex": None,
    }


DEFAULT_DOCUMENTATION_SETTINGS: dict[str, Any] = _documentation_defaults()


# --- Style schema ---


@dataclass
class StyleConfig:
    """Resolved style of the documentation window."""

    max_width: int = 0
    max_height: int = 0
    border: BorderStyle = field(
        default_factory=lambda: ["", "", "", " ", "", "", "", " "]
    )
    winblend: int = 0
    highlight: dict[str, str] = field(
        default_factory=lambda: {"FloatBorder": "NormalFloat"}
    )
    zindex: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StyleConfig:
        """Build a style from a settings mapping (camelCase or snake_case)."""
        values = {_snake_case(key): value for key, value in data.items()}
        defaults = cls()

        max_width = _as_int(values.get("max_width"), defaults.max_width, "max_width")
        max_height = _as_int(values.get("max_height"), defaults.max_height, "max_height")
        winblend = _as_int(values.get("winblend"), defaults.winblend, "winblend")

        border = values.get("border", defaults.border)
        if border is None:
            border = "none"
        # Raises ValueError for unknown names or bad lengths
        normalize_border(border)

        highlight = values.get("highlight")
        if highlight is None:
            highlight = defaults.highlight
        elif isinstance(highlight, str):
            highlight = parse_highlight(highlight)
        elif not isinstance(highlight, Mapping):
            raise TypeError(
                f"highlight must be a mapping or string, got {type(highlight).__name__}"
            )

        zindex = values.get("zindex")
        if zindex is not None:
            zindex = _as_int(zindex, DEFAULT_ZINDEX, "zindex")

        return cls(
            max_width=max(0, max_width),
            max_height=max(0, max_height),
            border=border,
            winblend=min(100, max(0, winblend)),
            highlight=dict(highlight),
            zindex=zindex,
        )

    @property
    def effective_zindex(self) -> int:
        return self.zindex if self.zindex is not None else DEFAULT_ZINDEX

    def to_window_options(self) -> dict[str, Any]:
        """Per-window display options this style sets on the surface."""
        return {
            "winblend": self.winblend,
            "winhighlight": format_highlight(self.highlight),
        }


# --- Helpers ---

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _as_int(value: Any, default: int, name: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    return int(value)


def format_highlight(highlight: Mapping[str, str]) -> str:
    """Format a highlight mapping as ``"From:To,From:To"``."""
    return ",".join(f"{src}:{dst}" for src, dst in highlight.items())


def parse_highlight(spec: str) -> dict[str, str]:
    """Inverse of :func:`format_highlight`; malformed pairs raise ``ValueError``."""
    result: dict[str, str] = {}
    for pair in filter(None, (part.strip() for part in spec.split(","))):
        src, sep, dst = pair.partition(":")
        if not sep or not src or not dst:
            raise ValueError(f"Invalid highlight pair: {pair!r}")
        result[src] = dst
    return result


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely. ``None`` overrides are ignored.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, Mapping):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- Resolution ---


def resolve_style_config(settings: Mapping[str, Any] | None) -> StyleConfig | None:
    """Resolve the documentation window style from full settings.

    Returns ``None`` when the documentation window is disabled, either by
    ``"documentation": false`` or ``"documentation": {"enabled": false}``.
    """
    window = (settings or {}).get("window") or {}
    documentation = window.get("documentation", {})
    if documentation is False:
        return None
    if documentation is None or documentation is True:
        documentation = {}
    if not isinstance(documentation, Mapping):
        raise TypeError(
            "window.documentation must be a mapping or a boolean, "
            f"got {type(documentation).__name__}"
        )
    if documentation.get("enabled", True) is False:
        return None

    merged = deep_merge_settings(deepcopy(DEFAULT_DOCUMENTATION_SETTINGS), documentation)
    merged.pop("enabled", None)
    return StyleConfig.from_dict(merged)
