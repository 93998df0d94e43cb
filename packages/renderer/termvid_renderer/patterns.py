"""Deterministic test patterns encoded as a decoder-compatible PPM stream."""

from __future__ import annotations

from io import BytesIO

import numpy as np
from PIL import Image

PATTERNS = ("black", "white", "quadrants", "h-gradient", "v-gradient", "checkerboard", "pulse")


def build_test_pattern(name: str, width: int, height: int, phase: int = 0) -> Image.Image:
    """Render pattern ``name``; ``phase`` scrolls or pulses it for animation."""
    ys, xs = np.mgrid[0:height, 0:width]

    if name == "black":
        gray = np.zeros((height, width))
    elif name == "white":
        gray = np.full((height, width), 255.0)
    elif name == "quadrants":
        levels = np.array([[0.0, 85.0], [170.0, 255.0]])
        qx = ((xs + phase) % width) >= width // 2
        qy = ys >= height // 2
        gray = levels[qy.astype(int), qx.astype(int)]
    elif name == "h-gradient":
        gray = 255.0 * ((xs + phase) % width) / max(width - 1, 1)
    elif name == "v-gradient":
        gray = 255.0 * ((ys + phase) % height) / max(height - 1, 1)
    elif name == "checkerboard":
        cell = max(1, min(width, height) // 6)
        gray = np.where(((xs + phase) // cell + ys // cell) % 2 == 0, 255.0, 0.0)
    elif name == "pulse":
        cx, cy = (width - 1) / 2, (height - 1) / 2
        dist = np.hypot((xs - cx) / max(cx, 1), (ys - cy) / max(cy, 1))
        gray = 127.5 + 127.5 * np.cos(dist * 6.0 - phase * 0.4)
    else:
        raise ValueError(f"Unknown pattern: {name}")

    plane = np.clip(gray, 0, 255).astype(np.uint8)
    return Image.fromarray(np.dstack([plane, plane, plane]))


def encode_ppm(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.convert("RGB").save(buf, format="PPM")
    return buf.getvalue()


def pattern_stream(name: str, width: int, height: int, frames: int) -> bytes:
    """Concatenate ``frames`` animated PPM frames, as ffmpeg's image2pipe would."""
    return b"".join(encode_ppm(build_test_pattern(name, width, height, phase=i)) for i in range(frames))
