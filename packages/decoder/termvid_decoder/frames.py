"""Fixed-size framing of the decoder's continuous PPM byte stream."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .ffmpeg import DecoderProcess, build_ffmpeg_command
from .models import Dimensions
from .ppm import frame_byte_length, header_length, parse_header
from .transport import FrameByteSource


logger = logging.getLogger("termvid.decoder")


class ReapableProcess(Protocol):
    def wait(self) -> int:
        ...

    def terminate(self) -> None:
        ...


class FrameSource:
    """Yields header-stripped pixel views from one reusable buffer.

    A returned view aliases the internal buffer and is only valid until the
    next call to :meth:`next_frame`.
    """

    def __init__(
        self,
        byte_source: FrameByteSource,
        dims: Dimensions,
        process: ReapableProcess | None = None,
        validate_headers: bool = True,
    ) -> None:
        self.dims = dims
        self.validate_headers = validate_headers
        self.header_length = header_length(dims.width, dims.height)
        self.frame_length = frame_byte_length(dims.width, dims.height)
        self.frames_read = 0
        self.truncated_bytes = 0

        self._source = byte_source
        self._process = process
        self._buffer = bytearray(self.frame_length)
        self._view = memoryview(self._buffer)
        self._exhausted = False

    @classmethod
    def from_video(
        cls,
        video_path: str | Path,
        dims: Dimensions,
        binary: str = "ffmpeg",
        loglevel: str = "error",
        validate_headers: bool = True,
    ) -> "FrameSource":
        process = DecoderProcess(build_ffmpeg_command(video_path, dims, binary=binary, loglevel=loglevel))
        return cls(process.byte_source, dims, process=process, validate_headers=validate_headers)

    def _fill(self, start: int, end: int) -> int:
        filled = start
        while filled < end:
            n = self._source.read_into(self._view[filled:end])
            if n == 0:
                break
            filled += n
        return filled

    def _end_of_stream(self, filled: int) -> None:
        self._exhausted = True
        # Never hand out a partially refilled buffer.
        self._view[:] = bytes(self.frame_length)
        if filled:
            self.truncated_bytes = filled
            logger.warning(
                "stream ended mid-frame after %d of %d bytes",
                filled,
                self.frame_length,
                extra={"event": "truncated_frame"},
            )

    def next_frame(self) -> memoryview | None:
        if self._exhausted:
            return None

        # The header is checked before the payload so a wrong-shaped frame
        # fails as a desync even when the stream stops right after it.
        filled = self._fill(0, self.header_length)
        if filled < self.header_length:
            self._end_of_stream(filled)
            return None
        if self.validate_headers:
            parse_header(self._view[: self.header_length], expected=self.dims)

        filled = self._fill(self.header_length, self.frame_length)
        if filled < self.frame_length:
            self._end_of_stream(filled)
            return None

        self.frames_read += 1
        return self._view[self.header_length :]

    def wait(self) -> None:
        if self._process is not None:
            self._process.wait()

    def close(self) -> None:
        if self._process is not None:
            self._process.terminate()
        else:
            self._source.close()
