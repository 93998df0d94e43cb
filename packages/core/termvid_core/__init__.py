"""Core player services for settings, playback control, and diagnostics."""

from .config import AppConfig, load_config, save_config
from .diagnostics import build_doctor_payload
from .performance import PlaybackMeter, PlaybackSample
from .playback import PlaybackLoop, PlaybackState, PlaybackStatus, build_renderer, dimensions_for
from .sizing import query_dimensions

__all__ = [
    "AppConfig",
    "PlaybackLoop",
    "PlaybackMeter",
    "PlaybackSample",
    "PlaybackState",
    "PlaybackStatus",
    "build_doctor_payload",
    "build_renderer",
    "dimensions_for",
    "load_config",
    "query_dimensions",
    "save_config",
]
