"""Persistent player settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from termvid_decoder.ffmpeg import LOGLEVELS


CONFIG_VERSION = 1


@dataclass
class DecoderConfig:
    binary: str = "ffmpeg"
    loglevel: str = "error"
    validate_headers: bool = True


@dataclass
class PlaybackConfig:
    frame_delay_ms: int = 20
    strict_eos: bool = True


@dataclass
class TerminalConfig:
    fallback_columns: int = 209
    fallback_rows: int = 52
    reserve_rows: int = 1
    ramp: str = "classic"
    newline_rows: bool = True
    hide_cursor: bool = True


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    terminal: TerminalConfig = field(default_factory=TerminalConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "termvid"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "termvid"
    return Path.home() / ".config" / "termvid"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_decoder(cfg: AppConfig) -> None:
    if not cfg.decoder.binary:
        cfg.decoder.binary = "ffmpeg"
    if cfg.decoder.loglevel not in LOGLEVELS:
        cfg.decoder.loglevel = "error"
    cfg.decoder.validate_headers = bool(cfg.decoder.validate_headers)


def _normalize_playback(cfg: AppConfig) -> None:
    cfg.playback.frame_delay_ms = max(0, min(1000, int(cfg.playback.frame_delay_ms)))
    cfg.playback.strict_eos = bool(cfg.playback.strict_eos)


def _normalize_terminal(cfg: AppConfig) -> None:
    cfg.terminal.fallback_columns = max(1, int(cfg.terminal.fallback_columns))
    cfg.terminal.fallback_rows = max(2, int(cfg.terminal.fallback_rows))
    cfg.terminal.reserve_rows = max(0, min(4, int(cfg.terminal.reserve_rows)))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(data, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        decoder=_merge(DecoderConfig, data.get("decoder", {})),
        playback=_merge(PlaybackConfig, data.get("playback", {})),
        terminal=_merge(TerminalConfig, data.get("terminal", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
    )

    _normalize_decoder(cfg)
    _normalize_playback(cfg)
    _normalize_terminal(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
