"""Display-width measurement, soft wrapping and popup sizing.

Widths are measured in terminal cells over grapheme clusters, so combining
marks, emoji sequences and wide East Asian characters count the way a
terminal draws them.
"""

from __future__ import annotations

import unicodedata
from typing import Sequence

import grapheme
import wcwidth as _wcwidth

# Tabs are drawn as three cells.
TAB_WIDTH = 3

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the cell width of a single grapheme cluster.

    Control characters and lone marks are zero width. Clusters carrying an
    emoji presentation selector, a ZWJ, a skin-tone modifier or regional
    indicators are two cells. Everything else asks ``wcwidth`` about the
    base codepoint.
    """
    if not g:
        return 0
    if g == "\t":
        return TAB_WIDTH

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    base = g[0]
    if ord(base) >= 0x1F000 or 0x2600 <= ord(base) <= 0x27BF:
        return 2
    if unicodedata.category(base) in ("Mn", "Me", "Mc", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(base), 0)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Return the number of terminal cells *text* occupies."""
    if not text:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E or ch == "\t" for ch in text):
        return len(text) + text.count("\t") * (TAB_WIDTH - 1)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = sum(grapheme_width(g) for g in grapheme.graphemes(text))
    return _cache_width(text, total)


# ---------------------------------------------------------------------------
# Soft wrap
# ---------------------------------------------------------------------------


def wrap_to_width(text: str, width: int) -> list[str]:
    """Soft-wrap *text* into rows of at most *width* cells.

    Rows break between grapheme clusters; a cluster wider than *width* gets
    a row of its own. An empty string still occupies one row.
    """
    if width <= 0 or visible_width(text) <= width:
        return [text]

    rows: list[str] = []
    current: list[str] = []
    current_width = 0
    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if current_width + w > width and current:
            rows.append("".join(current))
            current = []
            current_width = 0
        current.append(g)
        current_width += w
    rows.append("".join(current))
    return rows


def display_rows(text: str, width: int) -> int:
    """Number of screen rows *text* takes when soft-wrapped at *width*.

    Counts the rows :func:`wrap_to_width` produces, so a wide character
    that does not fit at the end of a row pushes onto the next one.
    """
    return len(wrap_to_width(text, width))


def truncate_to_width(text: str, width: int) -> str:
    """Cut *text* to at most *width* cells without splitting a grapheme."""
    if width <= 0:
        return ""
    if visible_width(text) <= width:
        return text

    kept: list[str] = []
    used = 0
    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if used + w > width:
            break
        kept.append(g)
        used += w
    return "".join(kept)


# ---------------------------------------------------------------------------
# Popup sizing
# ---------------------------------------------------------------------------


def make_popup_size(
    lines: Sequence[str],
    max_width: int | None = None,
    max_height: int | None = None,
) -> tuple[int, int]:
    """Compute the smallest ``(width, height)`` box that shows *lines*.

    The width is the widest line, limited to *max_width*. When the limit
    bites, long lines wrap and the height counts wrapped rows. The height
    is finally limited to *max_height*. Either value may come back
    non-positive when the limits leave no room; callers treat that as
    "does not fit".
    """
    width = max((visible_width(line) for line in lines), default=0)
    height = len(lines)

    if max_width is not None:
        width = min(width, max_width)
        if width > 0:
            height = sum(display_rows(line, width) for line in lines)

    if max_height is not None:
        height = min(height, max_height)

    return width, height
