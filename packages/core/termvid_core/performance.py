"""Frame-rate and process resource measurement for playback sessions."""

from __future__ import annotations

import time
from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class PlaybackSample:
    frames: int
    elapsed_s: float
    fps: float
    render_ms_avg: float
    render_ms_max: float
    cpu_percent: float
    rss_mb: float


class PlaybackMeter:
    def __init__(self) -> None:
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)
        self._start = time.perf_counter()
        self._frames = 0
        self._render_total = 0.0
        self._render_max = 0.0

    def frame_rendered(self, duration_s: float) -> None:
        self._frames += 1
        self._render_total += duration_s
        self._render_max = max(self._render_max, duration_s)

    def sample(self) -> PlaybackSample:
        elapsed = max(time.perf_counter() - self._start, 1e-9)
        avg = self._render_total / self._frames if self._frames else 0.0
        return PlaybackSample(
            frames=self._frames,
            elapsed_s=elapsed,
            fps=self._frames / elapsed,
            render_ms_avg=avg * 1000.0,
            render_ms_max=self._render_max * 1000.0,
            cpu_percent=float(self._process.cpu_percent(interval=None)),
            rss_mb=float(self._process.memory_info().rss) / (1024 * 1024),
        )
