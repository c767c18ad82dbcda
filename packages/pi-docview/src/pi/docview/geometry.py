"""Placement of the documentation popup beside its anchor.

The documentation popup sits to the left or right of the primary popup
(the anchor) on the anchor's first row. :func:`plan` measures the content
against the room available on each side and picks a side, or returns
``None`` when nothing fits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Tuple, Union

from pi.docview.utils import make_popup_size

if TYPE_CHECKING:
    from pi.docview.config import StyleConfig

__all__ = [
    "BORDER_STYLES",
    "AnchorView",
    "BorderInfo",
    "BorderStyle",
    "MeasureFn",
    "Placement",
    "get_border_info",
    "normalize_border",
    "plan",
]

# ---------------------------------------------------------------------------
# Border descriptors
# ---------------------------------------------------------------------------

# A border slot is a character or a (character, highlight group) pair.
BorderChar = Union[str, Tuple[str, str], Sequence[str]]

# Named style, or 1/2/4/8 slots clockwise from the top-left corner.
BorderStyle = Union[str, Sequence[BorderChar]]

BORDER_STYLES: dict[str, tuple[str, ...]] = {
    "none": ("", "", "", "", "", "", "", ""),
    "single": ("┌", "─", "┐", "│", "┘", "─", "└", "│"),
    "double": ("╔", "═", "╗", "║", "╝", "═", "╚", "║"),
    "rounded": ("╭", "─", "╮", "│", "╯", "─", "╰", "│"),
    "solid": (" ", " ", " ", " ", " ", " ", " ", " "),
    "shadow": ("", "", " ", " ", " ", " ", " ", ""),
}


def _slot_char(slot: BorderChar) -> str:
    if isinstance(slot, str):
        return slot
    return slot[0] if len(slot) > 0 else ""


def normalize_border(border: BorderStyle | None) -> tuple[str, ...]:
    """Expand a border descriptor into its eight characters.

    Order is top-left, top, top-right, right, bottom-right, bottom,
    bottom-left, left. Shorter sequences repeat to fill the eight slots.
    """
    if border is None:
        return BORDER_STYLES["none"]

    if isinstance(border, str):
        try:
            return BORDER_STYLES[border]
        except KeyError:
            raise ValueError(f"Unknown border style: {border!r}") from None

    chars = [_slot_char(slot) for slot in border]
    if len(chars) not in (1, 2, 4, 8):
        raise ValueError(
            f"Border sequence must have 1, 2, 4 or 8 items, got {len(chars)}"
        )
    return tuple(chars * (8 // len(chars)))


@dataclass(frozen=True)
class BorderInfo:
    """Space consumed by a border around the popup content."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0
    scrollbar_offset: int = 0

    @property
    def horiz(self) -> int:
        return self.left + self.right

    @property
    def vert(self) -> int:
        return self.top + self.bottom

    @property
    def visible(self) -> bool:
        return self.horiz + self.vert > 0


def get_border_info(
    border: BorderStyle | None, scrollbar: bool = False
) -> BorderInfo:
    """Derive side thicknesses from *border*.

    A scrollbar is drawn over the right border when there is one; without a
    right border it needs a column of its own, reported as
    ``scrollbar_offset``.
    """
    chars = normalize_border(border)
    right = 1 if chars[3] else 0
    return BorderInfo(
        top=1 if chars[1] else 0,
        right=right,
        bottom=1 if chars[5] else 0,
        left=1 if chars[7] else 0,
        scrollbar_offset=1 if scrollbar and not right else 0,
    )


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnchorView:
    """Screen rectangle of the primary popup (first row only)."""

    row: int
    col: int
    width: int


@dataclass(frozen=True)
class Placement:
    """Where the documentation popup goes and how big its content area is."""

    width: int
    height: int
    row: int
    col: int
    left: bool = False


# (lines, max_width, max_height) -> (width, height)
MeasureFn = Callable[
    [Sequence[str], Optional[int], Optional[int]], Tuple[int, int]
]


def plan(
    anchor: AnchorView,
    screen_width: int,
    border: BorderInfo,
    style: StyleConfig,
    content_lines: Sequence[str],
    measure: MeasureFn = make_popup_size,
) -> Placement | None:
    """Choose size and position for the documentation popup.

    When the content fits on both sides it goes left only if there is less
    room on the right than on the left; otherwise it goes right. Returns
    ``None`` when the measured content is empty or fits on neither side.
    """
    right_space = screen_width - (anchor.col + anchor.width) - 1
    left_space = anchor.col - 1

    max_width = max(left_space, right_space)
    if style.max_width > 0:
        max_width = min(style.max_width, max_width)

    max_height = None
    if style.max_height > 0:
        max_height = style.max_height - border.vert

    width, height = measure(content_lines, max_width - border.horiz, max_height)
    if width <= 0 or height <= 0:
        return None

    right_col = anchor.col + anchor.width
    left_col = anchor.col - width - border.horiz

    fits_right = right_space >= width
    fits_left = left_space >= width
    if fits_right and fits_left:
        left = right_space < left_space
    elif fits_right:
        left = False
    elif fits_left:
        left = True
    else:
        return None

    return Placement(
        width=width,
        height=height,
        row=anchor.row,
        col=left_col if left else right_col,
        left=left,
    )
