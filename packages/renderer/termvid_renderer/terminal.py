"""In-place ANSI terminal redraw of glyph frames."""

from __future__ import annotations

import sys
from typing import TextIO

from .glyphs import frame_to_rows
from .models import GlyphRamp
from .ramps import get_ramp

CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


class TerminalRenderer:
    """Redraws a full character grid from the top-left corner each frame.

    The screen is cleared once in :meth:`begin`. Frames only move the cursor
    home and overwrite, so there is no blank interval between frames.
    """

    def __init__(
        self,
        width: int,
        height: int,
        ramp: GlyphRamp | None = None,
        stream: TextIO | None = None,
        newline_rows: bool = True,
        hide_cursor: bool = True,
    ) -> None:
        self.width = width
        self.height = height
        self.ramp = ramp or get_ramp(None)
        self.stream = stream if stream is not None else sys.stdout
        self.newline_rows = newline_rows
        self.hide_cursor = hide_cursor
        self.frames_rendered = 0

    def _ensure_utf8(self) -> None:
        # Non-ASCII ramps such as "blocks" need a UTF-8 stream.
        encoding = (getattr(self.stream, "encoding", None) or "").lower().replace("-", "")
        reconfigure = getattr(self.stream, "reconfigure", None)
        if encoding and encoding != "utf8" and reconfigure is not None:
            reconfigure(encoding="utf-8")

    def begin(self) -> None:
        self._ensure_utf8()
        prefix = HIDE_CURSOR if self.hide_cursor else ""
        self.stream.write(prefix + CLEAR_SCREEN + CURSOR_HOME)
        self.stream.flush()

    def compose(self, pixel_bytes: bytes | memoryview) -> str:
        rows = frame_to_rows(pixel_bytes, self.width, self.height, self.ramp)
        return ("\n" if self.newline_rows else "").join(rows)

    def render(self, pixel_bytes: bytes | memoryview) -> None:
        frame = self.compose(pixel_bytes)
        self.stream.write(CURSOR_HOME + frame)
        self.stream.flush()
        self.frames_rendered += 1

    def end(self) -> None:
        suffix = SHOW_CURSOR if self.hide_cursor else ""
        self.stream.write("\n" + suffix)
        self.stream.flush()
