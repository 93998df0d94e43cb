"""Playback loop driving frame acquisition into the terminal renderer."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, TextIO

from termvid_decoder import Dimensions, FrameSource, TruncatedFrameError
from termvid_renderer import TerminalRenderer, get_ramp

from .config import AppConfig
from .performance import PlaybackMeter
from .sizing import query_dimensions


logger = logging.getLogger("termvid.playback")


class PlaybackState(str, Enum):
    STARTING = "Starting"
    PLAYING = "Playing"
    DRAINING = "Draining"
    STOPPED = "Stopped"


@dataclass
class PlaybackStatus:
    state: PlaybackState = PlaybackState.STARTING
    frames_rendered: int = 0
    fps: float = 0.0
    truncated_bytes: int = 0
    last_error: str | None = None


def dimensions_for(cfg: AppConfig) -> Dimensions:
    return query_dimensions(
        fallback_columns=cfg.terminal.fallback_columns,
        fallback_rows=cfg.terminal.fallback_rows,
        reserve_rows=cfg.terminal.reserve_rows,
    )


def build_renderer(cfg: AppConfig, dims: Dimensions, stream: TextIO | None = None) -> TerminalRenderer:
    return TerminalRenderer(
        width=dims.width,
        height=dims.height,
        ramp=get_ramp(cfg.terminal.ramp),
        stream=stream,
        newline_rows=cfg.terminal.newline_rows,
        hide_cursor=cfg.terminal.hide_cursor,
    )


class PlaybackLoop:
    """Single-use read -> render -> sleep loop.

    States advance Starting -> Playing -> Draining -> Stopped. Whatever
    happens, the loop ends Stopped with the terminal restored; errors are
    re-raised after cleanup.
    """

    def __init__(
        self,
        source: FrameSource,
        renderer: TerminalRenderer,
        frame_delay_s: float = 0.02,
        strict_eos: bool = True,
        sleep: Callable[[float], None] = time.sleep,
        meter: PlaybackMeter | None = None,
    ) -> None:
        self.source = source
        self.renderer = renderer
        self.frame_delay_s = max(0.0, frame_delay_s)
        self.strict_eos = strict_eos
        self._sleep = sleep
        self._meter = meter or PlaybackMeter()
        self._status = PlaybackStatus()
        self._events: list[dict[str, Any]] = []

    @classmethod
    def from_video(
        cls,
        video_path: str | Path,
        cfg: AppConfig,
        stream: TextIO | None = None,
        dims: Dimensions | None = None,
    ) -> "PlaybackLoop":
        dims = dims or dimensions_for(cfg)
        source = FrameSource.from_video(
            video_path,
            dims,
            binary=cfg.decoder.binary,
            loglevel=cfg.decoder.loglevel,
            validate_headers=cfg.decoder.validate_headers,
        )
        return cls(
            source,
            build_renderer(cfg, dims, stream),
            frame_delay_s=cfg.playback.frame_delay_ms / 1000.0,
            strict_eos=cfg.playback.strict_eos,
        )

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def state(self) -> PlaybackState:
        return self._status.state

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        return self._events[-limit:]

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "state": self._status.state.value,
        }
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]
        logger.info("%s %s", event, fields, extra={"event": event})

    def _transition(self, state: PlaybackState) -> None:
        self._status.state = state
        self._log_event("state", to=state.value)

    def run(self) -> PlaybackStatus:
        if self._status.state is not PlaybackState.STARTING:
            raise RuntimeError("PlaybackLoop has already run; build a new one to play again")

        try:
            self.renderer.begin()
            self._transition(PlaybackState.PLAYING)
            self._play()

            self._transition(PlaybackState.DRAINING)
            self.source.wait()
            self._status.truncated_bytes = self.source.truncated_bytes
            if self.source.truncated_bytes and self.strict_eos:
                raise TruncatedFrameError(self.source.truncated_bytes, self.source.frame_length)
        except BaseException as exc:
            self._status.last_error = str(exc) or type(exc).__name__
            self._log_event("playback_error", error=self._status.last_error)
            raise
        finally:
            self.source.close()
            self.renderer.end()
            sample = self._meter.sample()
            self._status.fps = sample.fps
            self._transition(PlaybackState.STOPPED)
            self._log_event(
                "playback_stopped",
                frames=self._status.frames_rendered,
                fps=sample.fps,
                render_ms_avg=sample.render_ms_avg,
                cpu_percent=sample.cpu_percent,
                rss_mb=sample.rss_mb,
            )
        return self._status

    def _play(self) -> None:
        while True:
            pixels = self.source.next_frame()
            if pixels is None:
                return
            start = time.perf_counter()
            self.renderer.render(pixels)
            self._meter.frame_rendered(time.perf_counter() - start)
            self._status.frames_rendered += 1
            if self.frame_delay_s:
                self._sleep(self.frame_delay_s)
