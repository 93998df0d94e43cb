"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GlyphRamp:
    name: str
    glyphs: str

    def __post_init__(self) -> None:
        if len(self.glyphs) < 2:
            raise ValueError(f"Glyph ramp {self.name!r} needs at least 2 glyphs")

    def __len__(self) -> int:
        return len(self.glyphs)

    @property
    def darkest(self) -> str:
        return self.glyphs[0]

    @property
    def brightest(self) -> str:
        return self.glyphs[-1]
