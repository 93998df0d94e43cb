"""Renderer package for glyph conversion and terminal output."""

from .glyphs import brightness, classify, frame_to_rows, glyph_index, pixel_to_glyph
from .models import GlyphRamp
from .patterns import PATTERNS, build_test_pattern, encode_ppm, pattern_stream
from .ramps import DEFAULT_RAMP_NAME, get_ramp, list_ramps
from .terminal import TerminalRenderer

__all__ = [
    "DEFAULT_RAMP_NAME",
    "GlyphRamp",
    "PATTERNS",
    "TerminalRenderer",
    "brightness",
    "build_test_pattern",
    "classify",
    "encode_ppm",
    "frame_to_rows",
    "get_ramp",
    "glyph_index",
    "list_ramps",
    "pattern_stream",
    "pixel_to_glyph",
]
