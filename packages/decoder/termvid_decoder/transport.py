"""Byte-source abstraction between the decoder pipe and frame parsing."""

from __future__ import annotations

from typing import BinaryIO, Protocol


class FrameByteSource(Protocol):
    def read_into(self, view: memoryview) -> int:
        """Fill as much of ``view`` as is available; return 0 at end of stream."""
        ...

    def close(self) -> None:
        ...


class StreamByteSource:
    """Thin wrapper over a binary file object (a process pipe or ``io.BytesIO``)."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream: BinaryIO | None = stream

    @property
    def is_open(self) -> bool:
        return self._stream is not None and not self._stream.closed

    def read_into(self, view: memoryview) -> int:
        if not self.is_open:
            raise RuntimeError("Byte source is closed")
        readinto = getattr(self._stream, "readinto", None)
        if readinto is not None:
            return int(readinto(view) or 0)
        chunk = self._stream.read(len(view))
        view[: len(chunk)] = chunk
        return len(chunk)

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
