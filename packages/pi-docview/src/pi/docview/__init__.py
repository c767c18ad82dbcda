"""pi-docview: documentation popup for completion menus."""

# Configuration
from pi.docview.config import (
    DEFAULT_DOCUMENTATION_SETTINGS,
    DEFAULT_ZINDEX,
    StyleConfig,
    deep_merge_settings,
    format_highlight,
    parse_highlight,
    resolve_style_config,
)

# Controller
from pi.docview.docs_view import DocEntry, DocsView, Entry

# Placement
from pi.docview.geometry import (
    BORDER_STYLES,
    AnchorView,
    BorderInfo,
    BorderStyle,
    Placement,
    get_border_info,
    normalize_border,
    plan,
)

# Markdown to plain text
from pi.docview.sanitize import SANITIZE_STEPS, sanitize, sanitize_fragment

# Floating surface
from pi.docview.surface import FloatingWindow, Surface, ViewportInfo, WindowStyle

# Utilities
from pi.docview.utils import make_popup_size, truncate_to_width, visible_width, wrap_to_width

__all__ = [
    # Configuration
    "DEFAULT_DOCUMENTATION_SETTINGS",
    "DEFAULT_ZINDEX",
    "StyleConfig",
    "deep_merge_settings",
    "format_highlight",
    "parse_highlight",
    "resolve_style_config",
    # Controller
    "DocEntry",
    "DocsView",
    "Entry",
    # Placement
    "BORDER_STYLES",
    "AnchorView",
    "BorderInfo",
    "BorderStyle",
    "Placement",
    "get_border_info",
    "normalize_border",
    "plan",
    # Sanitizer
    "SANITIZE_STEPS",
    "sanitize",
    "sanitize_fragment",
    # Surface
    "FloatingWindow",
    "Surface",
    "ViewportInfo",
    "WindowStyle",
    # Utilities
    "make_popup_size",
    "truncate_to_width",
    "visible_width",
    "wrap_to_width",
]
