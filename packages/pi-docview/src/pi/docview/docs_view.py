"""Documentation popup shown next to a completion menu.

``DocsView`` keeps one floating surface that shows the documentation of the
highlighted completion entry. Content is rebuilt only when the entry
changes; placement is recomputed on every :meth:`DocsView.open` because the
menu may have moved.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Protocol, Sequence, Union

from pi.docview.config import StyleConfig
from pi.docview.geometry import AnchorView, get_border_info, plan
from pi.docview.sanitize import sanitize
from pi.docview.surface import Surface, WindowStyle

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_BUFFER_OPTIONS",
    "DEFAULT_WINDOW_OPTIONS",
    "DocEntry",
    "DocsView",
    "Entry",
    "StyleSource",
]

DEFAULT_WINDOW_OPTIONS: dict[str, Any] = {
    "conceallevel": 2,
    "concealcursor": "n",
    "foldenable": False,
    "linebreak": True,
    "scrolloff": 0,
    "showbreak": "NONE",
    "wrap": True,
}

DEFAULT_BUFFER_OPTIONS: dict[str, Any] = {
    "filetype": "pi_docs",
    "buftype": "nofile",
}

# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------


class Entry(Protocol):
    """A completion entry that can describe itself."""

    id: Hashable

    def documentation(self) -> Sequence[str]:
        """Return the entry's documentation as Markdown fragments."""
        ...


@dataclass
class DocEntry:
    """Plain-data ``Entry``."""

    id: Hashable
    fragments: list[str] = field(default_factory=list)

    def documentation(self) -> Sequence[str]:
        return list(self.fragments)


# A fixed style, a callable resolving one per open, or None (disabled).
StyleSource = Union[StyleConfig, Callable[[], Union[StyleConfig, None]], None]

_NO_ENTRY = object()

# ---------------------------------------------------------------------------
# DocsView
# ---------------------------------------------------------------------------


class DocsView:
    """Controller for the documentation popup.

    Owns *surface* exclusively: nothing else may write to its buffer or move
    it while the view is in use.
    """

    def __init__(self, surface: Surface, style: StyleSource = None) -> None:
        self._surface = surface
        self._style_source = style
        self._entry_id: Any = _NO_ENTRY
        self._scroll_handle: asyncio.Handle | None = None

        for name, value in DEFAULT_WINDOW_OPTIONS.items():
            surface.set_option(name, value)
        for name, value in DEFAULT_BUFFER_OPTIONS.items():
            surface.set_buffer_option(name, value)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def entry_id(self) -> Hashable | None:
        """Identifier of the entry whose documentation is loaded."""
        return None if self._entry_id is _NO_ENTRY else self._entry_id

    def set_style(self, style: StyleSource) -> None:
        self._style_source = style

    def _resolve_style(self) -> StyleConfig | None:
        source = self._style_source
        if source is None or isinstance(source, StyleConfig):
            return source
        return source()

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------

    def open(self, entry: Entry | None, anchor: AnchorView | None) -> None:
        """Show the documentation of *entry* beside *anchor*.

        Closes the popup instead when there is nothing to show or no room
        to show it.
        """
        style = self._resolve_style()
        if style is None:
            return

        if entry is None or anchor is None:
            self.close()
            return

        if self._entry_id is _NO_ENTRY or entry.id != self._entry_id:
            documents = entry.documentation()
            if not documents:
                logger.debug("No documentation for entry %r", entry.id)
                self.close()
                return

            # One buffer line per physical line; fences and lists span several
            lines = [
                line
                for text in sanitize(documents)
                for line in text.splitlines()
                if line != ""
            ]
            self._surface.set_lines(lines)
            self._entry_id = entry.id
            logger.debug(
                "Loaded %d documentation lines for entry %r", len(lines), entry.id
            )

        # Leave the buffer removable without a write prompt
        self._surface.set_modified(False)

        border = get_border_info(style.border)
        placement = plan(
            anchor,
            self._surface.columns,
            border,
            style,
            self._surface.get_lines(),
        )
        if placement is None:
            logger.debug("No room for documentation beside %r", anchor)
            self.close()
            return

        for name, value in style.to_window_options().items():
            self._surface.set_option(name, value)

        window_style: WindowStyle = {
            "relative": "editor",
            "style": "minimal",
            "width": placement.width,
            "height": placement.height,
            "row": placement.row,
            "col": placement.col,
            "border": style.border,
            "zindex": style.effective_zindex,
        }
        self._surface.open(window_style)

        # The first open decides whether a scrollbar shows; only then is
        # its width known.
        if placement.left:
            window_style["col"] = placement.col - self._surface.scrollbar_offset()
            self._surface.open(window_style)

    def close(self) -> None:
        """Hide the popup and forget the loaded entry."""
        self._cancel_scroll()
        self._surface.close()
        self._entry_id = _NO_ENTRY

    def visible(self) -> bool:
        return self._surface.visible()

    # ------------------------------------------------------------------
    # Scrolling
    # ------------------------------------------------------------------

    def _clamp_topline(self, top: int) -> int:
        height = self._surface.viewport()["height"]
        top = min(top, self._surface.content_height() - height + 1)
        return max(top, 1)

    def scroll(self, delta: int) -> None:
        """Scroll the documentation by *delta* lines on the next loop tick.

        A newer scroll replaces one that has not run yet.
        """
        if not self.visible():
            return

        info = self._surface.viewport()
        top = self._clamp_topline(info.get("topline", 1) + delta)

        self._cancel_scroll()
        try:
            loop = asyncio.get_running_loop()
            self._scroll_handle = loop.call_soon(self._run_scroll, top)
        except RuntimeError:
            # No running event loop -- scroll synchronously
            self._run_scroll(top)

    def _run_scroll(self, top: int) -> None:
        self._scroll_handle = None
        if not self.visible():
            return
        self._surface.scroll_to(self._clamp_topline(top))
        self._surface.update()

    def _cancel_scroll(self) -> None:
        if self._scroll_handle is not None:
            self._scroll_handle.cancel()
            self._scroll_handle = None

    @property
    def scroll_pending(self) -> bool:
        return self._scroll_handle is not None
