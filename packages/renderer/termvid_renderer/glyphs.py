"""Pixel brightness and glyph quantisation."""

from __future__ import annotations

import numpy as np

from .models import GlyphRamp
from .ramps import get_ramp

# BT.709 luma weights for R, G, B.
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

# Full white sums to a hair under 255 in floating point.
_EPSILON = 1e-6


def brightness(r: int, g: int, b: int) -> float:
    return LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b


def glyph_index(value: float, ramp_length: int) -> int:
    index = int((ramp_length - 1) * value / 255.0 + _EPSILON)
    return max(0, min(ramp_length - 1, index))


def classify(value: float, ramp: GlyphRamp | None = None) -> str:
    ramp = ramp or get_ramp(None)
    return ramp.glyphs[glyph_index(value, len(ramp))]


def pixel_to_glyph(r: int, g: int, b: int, ramp: GlyphRamp | None = None) -> str:
    return classify(brightness(r, g, b), ramp)


def frame_to_rows(pixels: bytes | memoryview, width: int, height: int, ramp: GlyphRamp) -> list[str]:
    """Convert ``width*height`` interleaved RGB samples into one string per row."""
    expected = width * height * 3
    if len(pixels) < expected:
        raise ValueError(f"Frame needs {expected} pixel bytes, got {len(pixels)}")

    arr = np.frombuffer(pixels, dtype=np.uint8, count=expected).reshape((height, width, 3))
    luma = arr.astype(np.float64) @ np.asarray(LUMA_WEIGHTS, dtype=np.float64)
    steps = len(ramp) - 1
    index = np.floor(steps * luma / 255.0 + _EPSILON).astype(np.intp)
    np.clip(index, 0, steps, out=index)

    lut = np.array(list(ramp.glyphs))
    return ["".join(row) for row in lut[index].tolist()]
