"""ffmpeg subprocess that decodes a video into a stream of PPM frames."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import IO

from .errors import ChildExitError, SpawnError
from .models import Dimensions
from .transport import StreamByteSource


LOGLEVELS = ("quiet", "panic", "fatal", "error", "warning", "info", "verbose", "debug")

logger = logging.getLogger("termvid.decoder")


def build_ffmpeg_command(
    video_path: str | Path,
    dims: Dimensions,
    binary: str = "ffmpeg",
    loglevel: str = "error",
) -> list[str]:
    if loglevel not in LOGLEVELS:
        raise ValueError(f"Unknown ffmpeg loglevel: {loglevel}")
    return [
        binary,
        "-nostdin",
        "-hide_banner",
        "-loglevel",
        loglevel,
        "-i",
        str(video_path),
        "-s",
        f"{dims.width}x{dims.height}",
        "-pix_fmt",
        "rgb24",
        "-vcodec",
        "ppm",
        "-f",
        "image2pipe",
        "-",
    ]


class DecoderProcess:
    """Owns one decoder child from spawn to reap.

    stdout is a pipe read by the frame source. stderr goes to an anonymous
    temporary file so a chatty decoder can never block on a full pipe, and the
    text is still there when the exit status needs explaining.
    """

    def __init__(self, command: list[str]) -> None:
        self.command = list(command)
        self._stderr: IO[bytes] = tempfile.TemporaryFile()
        try:
            self._proc = subprocess.Popen(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=self._stderr,
            )
        except OSError as exc:
            self._stderr.close()
            raise SpawnError(f"Cannot start decoder {self.command[0]!r}: {exc.strerror or exc}") from exc

        if self._proc.stdout is None:  # pragma: no cover
            self._proc.kill()
            raise SpawnError("Decoder stdout pipe was not created")
        self.byte_source = StreamByteSource(self._proc.stdout)
        logger.info("decoder started pid=%s", self._proc.pid, extra={"event": "decoder_started"})

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def returncode(self) -> int | None:
        return self._proc.poll()

    def stderr_text(self) -> str:
        if self._stderr.closed:
            return ""
        self._stderr.seek(0)
        return self._stderr.read().decode("utf-8", errors="replace")

    def wait(self) -> int:
        """Block until the decoder exits; raise :class:`ChildExitError` on failure."""
        returncode = self._proc.wait()
        self.byte_source.close()
        stderr = self.stderr_text()
        self._stderr.close()
        logger.info("decoder exited rc=%s", returncode, extra={"event": "decoder_exited"})
        if returncode != 0:
            raise ChildExitError(returncode, stderr)
        return returncode

    def terminate(self, timeout_s: float = 2.0) -> None:
        if self._proc.poll() is None:
            self._proc.terminate()
            try:
                self._proc.wait(timeout=timeout_s)
            except subprocess.TimeoutExpired:
                self._proc.kill()
                self._proc.wait()
            logger.info("decoder terminated", extra={"event": "decoder_terminated"})
        self.byte_source.close()
        self._stderr.close()
