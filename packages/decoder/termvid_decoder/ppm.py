"""Binary PPM (P6) frame layout as written by ffmpeg's image2pipe muxer."""

from __future__ import annotations

from .errors import DesyncError
from .models import Dimensions, FrameHeader


PPM_MAGIC = b"P6"
PPM_MAXVAL = 255

# "P6\n" + "\n" after the dimensions + "255\n" + the space between them.
_FIXED_HEADER_BYTES = 9


def decimal_digits(value: int) -> int:
    return len(str(int(value)))


def header_length(width: int, height: int) -> int:
    return _FIXED_HEADER_BYTES + decimal_digits(width) + decimal_digits(height)


def frame_byte_length(width: int, height: int) -> int:
    return header_length(width, height) + width * height * 3


def build_header(width: int, height: int) -> bytes:
    return b"P6\n%d %d\n%d\n" % (width, height, PPM_MAXVAL)


def parse_header(data: bytes | memoryview, expected: Dimensions | None = None) -> FrameHeader:
    """Parse the textual header at the start of ``data``.

    The header is three newline-terminated lines: magic, ``width height`` and
    the maximum sample value. Anything that does not match what the decoder is
    asked to produce raises :class:`DesyncError`, since every later frame
    boundary would be misaligned.
    """
    raw = bytes(data)
    lines: list[bytes] = []
    pos = 0
    for _ in range(3):
        end = raw.find(b"\n", pos)
        if end < 0:
            raise DesyncError(f"Incomplete frame header: {raw[:32]!r}")
        lines.append(raw[pos:end])
        pos = end + 1

    magic, dims, maxval_raw = lines
    if magic != PPM_MAGIC:
        raise DesyncError(f"Unexpected frame magic {magic[:8]!r}, expected {PPM_MAGIC!r}")

    fields = dims.split()
    if len(fields) != 2:
        raise DesyncError(f"Malformed dimension line {dims[:32]!r}")
    try:
        width, height = int(fields[0]), int(fields[1])
        maxval = int(maxval_raw)
    except ValueError as exc:
        raise DesyncError(f"Non-numeric frame header field: {exc}") from exc

    if maxval != PPM_MAXVAL:
        raise DesyncError(f"Unsupported max sample value {maxval}, expected {PPM_MAXVAL}")

    header = FrameHeader(magic=magic, width=width, height=height, maxval=maxval, length=pos)
    if expected is not None:
        if (width, height) != (expected.width, expected.height):
            raise DesyncError(
                f"Decoder produced {width}x{height} frames, expected {expected.width}x{expected.height}"
            )
        predicted = header_length(expected.width, expected.height)
        if header.length != predicted:
            raise DesyncError(f"Frame header is {header.length} bytes, expected {predicted}")
    return header
