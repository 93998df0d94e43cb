"""Built-in glyph ramps, darkest first."""

from __future__ import annotations

from .models import GlyphRamp

DEFAULT_RAMP_NAME = "classic"

RAMPS: dict[str, GlyphRamp] = {
    "classic": GlyphRamp(name="classic", glyphs="  .:!+*e$@8"),
    "soft": GlyphRamp(name="soft", glyphs=" .,:;ox%#@&"),
    "blocks": GlyphRamp(name="blocks", glyphs="  ..░░▒▒▓▓█"),
}


def list_ramps() -> list[str]:
    return sorted(RAMPS.keys())


def get_ramp(name: str | None) -> GlyphRamp:
    if not name:
        return RAMPS[DEFAULT_RAMP_NAME]
    return RAMPS.get(name, RAMPS[DEFAULT_RAMP_NAME])
