from __future__ import annotations

from typing import Any, Sequence

import pytest

from pi.docview.config import StyleConfig
from pi.docview.surface import FloatingWindow, WindowStyle


class RecordingWindow(FloatingWindow):
    """FloatingWindow that records every placement and buffer write."""

    def __init__(self, columns: int = 100) -> None:
        super().__init__(columns=columns)
        self.open_calls: list[WindowStyle] = []
        self.set_lines_calls: list[list[str]] = []
        self.close_calls = 0
        self.forced_scrollbar_offset: int | None = None

    def open(self, style: WindowStyle) -> None:
        self.open_calls.append(WindowStyle(**style))
        super().open(style)

    def close(self) -> None:
        self.close_calls += 1
        super().close()

    def set_lines(self, lines: Sequence[str]) -> None:
        self.set_lines_calls.append(list(lines))
        super().set_lines(lines)

    def scrollbar_offset(self) -> int:
        if self.forced_scrollbar_offset is not None:
            return self.forced_scrollbar_offset
        return super().scrollbar_offset()


class CountingEntry:
    """Entry that counts how often its documentation is fetched."""

    def __init__(self, id: Any, fragments: list[str]) -> None:
        self.id = id
        self._fragments = fragments
        self.fetches = 0

    def documentation(self) -> list[str]:
        self.fetches += 1
        return list(self._fragments)


@pytest.fixture
def window() -> RecordingWindow:
    return RecordingWindow(columns=100)


@pytest.fixture
def plain_style() -> StyleConfig:
    """Borderless, unconstrained style."""
    return StyleConfig(border="none", highlight={})


@pytest.fixture
def make_entry():
    def _make(id: Any, *fragments: str) -> CountingEntry:
        return CountingEntry(id, list(fragments))

    return _make


@pytest.fixture
def make_window():
    def _make(columns: int = 100) -> RecordingWindow:
        return RecordingWindow(columns=columns)

    return _make
