"""Decoder package: ffmpeg process control and PPM stream framing."""

from .errors import ChildExitError, DecoderError, DesyncError, SpawnError, TruncatedFrameError
from .ffmpeg import DecoderProcess, build_ffmpeg_command
from .frames import FrameSource
from .models import Dimensions, FrameHeader
from .ppm import build_header, frame_byte_length, header_length, parse_header
from .transport import FrameByteSource, StreamByteSource

__all__ = [
    "ChildExitError",
    "DecoderError",
    "DecoderProcess",
    "DesyncError",
    "Dimensions",
    "FrameByteSource",
    "FrameHeader",
    "FrameSource",
    "SpawnError",
    "StreamByteSource",
    "TruncatedFrameError",
    "build_ffmpeg_command",
    "build_header",
    "frame_byte_length",
    "header_length",
    "parse_header",
]
