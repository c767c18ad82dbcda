"""Floating surface abstraction used by the documentation popup.

Provides a ``Surface`` protocol (what ``DocsView`` needs from a floating
window: a text buffer, display options, placement and viewport state) and
``FloatingWindow``, an in-memory implementation that a host composites onto
its screen via :meth:`FloatingWindow.render`.
"""

from __future__ import annotations

import math
from typing import Any, Literal, Protocol, Sequence, TypedDict

from pi.docview.geometry import BorderStyle, get_border_info, normalize_border
from pi.docview.utils import truncate_to_width, visible_width, wrap_to_width

__all__ = [
    "FloatingWindow",
    "Surface",
    "ViewportInfo",
    "WindowStyle",
]

_SCROLLBAR_THUMB = "█"
_SCROLLBAR_TRACK = " "

# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


class WindowStyle(TypedDict, total=False):
    relative: Literal["editor", "cursor", "win"]
    style: Literal["minimal"]
    width: int
    height: int
    row: int
    col: int
    border: BorderStyle
    zindex: int


class ViewportInfo(TypedDict):
    topline: int
    height: int


# ---------------------------------------------------------------------------
# Surface protocol
# ---------------------------------------------------------------------------


class Surface(Protocol):
    """Interface for a floating window with its own text buffer."""

    @property
    def columns(self) -> int:
        """Width of the screen the surface floats on."""
        ...

    def set_option(self, name: str, value: Any) -> None: ...

    def get_option(self, name: str) -> Any: ...

    def set_buffer_option(self, name: str, value: Any) -> None: ...

    def get_buffer_option(self, name: str) -> Any: ...

    def open(self, style: WindowStyle) -> None:
        """Show the surface, or move/resize it when already shown."""
        ...

    def close(self) -> None: ...

    def visible(self) -> bool: ...

    def viewport(self) -> ViewportInfo: ...

    def set_lines(self, lines: Sequence[str]) -> None: ...

    def get_lines(self) -> list[str]: ...

    def set_modified(self, modified: bool) -> None: ...

    def content_height(self) -> int:
        """Screen rows the buffer needs at the current width."""
        ...

    def scrollbar_offset(self) -> int:
        """Extra columns a visible scrollbar takes outside the border."""
        ...

    def scroll_to(self, topline: int) -> None: ...

    def update(self) -> None:
        """Refresh cached dimensions after the viewport changed."""
        ...


# ---------------------------------------------------------------------------
# FloatingWindow
# ---------------------------------------------------------------------------


class FloatingWindow:
    """In-memory floating window implementing the ``Surface`` protocol.

    Parameters
    ----------
    columns:
        Width of the host screen.
    """

    def __init__(self, columns: int = 80) -> None:
        self._columns = columns
        self._lines: list[str] = []
        self._modified = False
        self._options: dict[str, Any] = {}
        self._buffer_options: dict[str, Any] = {}
        self._style: WindowStyle | None = None
        self._topline = 1
        self._content_height: int | None = None

    # -- Screen ---------------------------------------------------------------

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        self._columns = value

    # -- Options --------------------------------------------------------------

    def set_option(self, name: str, value: Any) -> None:
        self._options[name] = value
        if name == "wrap":
            self._content_height = None

    def get_option(self, name: str) -> Any:
        return self._options.get(name)

    def set_buffer_option(self, name: str, value: Any) -> None:
        self._buffer_options[name] = value

    def get_buffer_option(self, name: str) -> Any:
        return self._buffer_options.get(name)

    # -- Buffer ---------------------------------------------------------------

    def set_lines(self, lines: Sequence[str]) -> None:
        self._lines = list(lines)
        self._modified = True
        self._topline = 1
        self._content_height = None

    def get_lines(self) -> list[str]:
        return list(self._lines)

    def set_modified(self, modified: bool) -> None:
        self._modified = modified

    @property
    def modified(self) -> bool:
        return self._modified

    # -- Window ---------------------------------------------------------------

    def open(self, style: WindowStyle) -> None:
        self._style = WindowStyle(**style)
        self._content_height = None
        self._topline = min(self._topline, self._max_topline())

    def close(self) -> None:
        self._style = None
        self._topline = 1
        self._content_height = None

    def visible(self) -> bool:
        return self._style is not None

    @property
    def style(self) -> WindowStyle | None:
        """Placement descriptor of the last ``open`` call, or ``None``."""
        return WindowStyle(**self._style) if self._style is not None else None

    def viewport(self) -> ViewportInfo:
        height = self._style.get("height", 0) if self._style is not None else 0
        return {"topline": self._topline, "height": height}

    # -- Scrolling ------------------------------------------------------------

    def _wraps(self) -> bool:
        return self._options.get("wrap", True) is not False

    def content_height(self) -> int:
        if self._content_height is None:
            width = self._style.get("width", 0) if self._style is not None else 0
            if width > 0 and self._wraps():
                self._content_height = len(self._display_rows(width))
            else:
                self._content_height = len(self._lines)
        return self._content_height

    def has_scrollbar(self) -> bool:
        if self._style is None:
            return False
        return self.content_height() > self._style.get("height", 0)

    def scrollbar_offset(self) -> int:
        if self._style is None:
            return 0
        info = get_border_info(self._style.get("border"), self.has_scrollbar())
        return info.scrollbar_offset

    def _max_topline(self) -> int:
        height = self.viewport()["height"]
        return max(1, self.content_height() - height + 1)

    def scroll_to(self, topline: int) -> None:
        self._topline = max(1, min(topline, self._max_topline()))

    def update(self) -> None:
        self._content_height = None
        self._topline = min(self._topline, self._max_topline())

    # -- Rendering ------------------------------------------------------------

    def _display_rows(self, width: int) -> list[str]:
        rows: list[str] = []
        for line in self._lines:
            if self._wraps():
                rows.extend(wrap_to_width(line, width))
            elif width > 0:
                rows.append(truncate_to_width(line, width))
            else:
                rows.append(line)
        return rows

    def render(self) -> list[str]:
        """Render the visible window, border and scrollbar included.

        Returns an empty list while the window is closed. Rows are padded
        to the window's full width so a host can paste them at
        ``(row, col)``.
        """
        if self._style is None:
            return []

        width = self._style.get("width", 0)
        height = self._style.get("height", 0)
        tl, top, tr, right, br, bottom, bl, left = normalize_border(
            self._style.get("border")
        )

        all_rows = self._display_rows(width)
        visible_rows = all_rows[self._topline - 1 : self._topline - 1 + height]
        visible_rows += [""] * (height - len(visible_rows))

        scrollbar = self._scrollbar_column(len(all_rows), height)

        out: list[str] = []
        if top:
            out.append(tl + top * width + tr + (" " if scrollbar and not right else ""))
        for idx, row in enumerate(visible_rows):
            pad = " " * max(0, width - visible_width(row))
            line = left + row + pad
            if scrollbar is not None:
                line += scrollbar[idx]
            else:
                line += right
            out.append(line)
        if bottom:
            out.append(bl + bottom * width + br + (" " if scrollbar and not right else ""))
        return out

    def _scrollbar_column(self, total: int, height: int) -> list[str] | None:
        if height <= 0 or total <= height:
            return None
        thumb_size = max(1, math.floor(height * height / total))
        thumb_top = min(
            height - thumb_size,
            math.floor((self._topline - 1) * height / total),
        )
        return [
            _SCROLLBAR_THUMB if thumb_top <= i < thumb_top + thumb_size else _SCROLLBAR_TRACK
            for i in range(height)
        ]
