"""Derive playback dimensions from the terminal grid."""

from __future__ import annotations

import shutil

from termvid_decoder.models import Dimensions


def query_dimensions(fallback_columns: int = 209, fallback_rows: int = 52, reserve_rows: int = 1) -> Dimensions:
    # The reserved bottom row keeps the last glyph row from scrolling the screen.
    size = shutil.get_terminal_size((fallback_columns, fallback_rows))
    columns = size.columns if size.columns > 0 else fallback_columns
    rows = size.lines if size.lines > 0 else fallback_rows
    return Dimensions(width=max(1, columns), height=max(1, rows - reserve_rows))
