"""Error kinds raised while driving the decoder and framing its output."""

from __future__ import annotations


class DecoderError(RuntimeError):
    """Base class for every failure that ends a playback session."""


class SpawnError(DecoderError):
    pass


class ChildExitError(DecoderError):
    def __init__(self, returncode: int, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        if returncode < 0:
            reason = f"decoder killed by signal {-returncode}"
        else:
            reason = f"decoder exited with status {returncode}"
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else ""
        super().__init__(f"{reason}: {detail}" if detail else reason)


class DesyncError(DecoderError):
    pass


class TruncatedFrameError(DecoderError):
    def __init__(self, received: int, expected: int) -> None:
        self.received = received
        self.expected = expected
        super().__init__(f"stream ended mid-frame ({received} of {expected} bytes)")
