import io
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "decoder"))

from termvid_decoder.errors import DesyncError
from termvid_decoder.frames import FrameSource
from termvid_decoder.models import Dimensions
from termvid_decoder.ppm import build_header
from termvid_decoder.transport import StreamByteSource


def make_frame(dims, fill):
    return build_header(dims.width, dims.height) + bytes([fill]) * dims.pixel_bytes


class TrickleSource:
    """Hands out at most ``step`` bytes per read, like a slow pipe."""

    def __init__(self, data, step):
        self.data = data
        self.pos = 0
        self.step = step
        self.closed = False

    def read_into(self, view):
        chunk = self.data[self.pos : self.pos + min(self.step, len(view))]
        view[: len(chunk)] = chunk
        self.pos += len(chunk)
        return len(chunk)

    def close(self):
        self.closed = True


class FakeProcess:
    def __init__(self):
        self.waited = 0
        self.terminated = 0

    def wait(self):
        self.waited += 1
        return 0

    def terminate(self):
        self.terminated += 1


class FrameSourceTests(unittest.TestCase):
    def setUp(self):
        self.dims = Dimensions(10, 5)

    def _source(self, data, **kwargs):
        return FrameSource(StreamByteSource(io.BytesIO(data)), self.dims, **kwargs)

    def test_empty_stream_ends_cleanly(self):
        src = self._source(b"")
        self.assertIsNone(src.next_frame())
        self.assertEqual(src.truncated_bytes, 0)

    def test_short_stream_is_not_exposed(self):
        src = self._source(make_frame(self.dims, 7)[:100])
        self.assertIsNone(src.next_frame())
        self.assertEqual(src.truncated_bytes, 100)
        self.assertIsNone(src.next_frame())

    def test_full_frame_returns_pixels_only(self):
        src = self._source(make_frame(self.dims, 9))
        pixels = src.next_frame()
        self.assertEqual(len(pixels), 150)
        self.assertEqual(bytes(pixels), bytes([9]) * 150)

    def test_three_frames_then_end(self):
        data = b"".join(make_frame(self.dims, fill) for fill in (1, 2, 3))
        src = self._source(data)
        for fill in (1, 2, 3):
            pixels = src.next_frame()
            self.assertIsNotNone(pixels)
            self.assertEqual(bytes(pixels), bytes([fill]) * 150)
        self.assertIsNone(src.next_frame())
        self.assertEqual(src.frames_read, 3)

    def test_short_reads_are_accumulated(self):
        data = make_frame(self.dims, 4) + make_frame(self.dims, 5)
        src = FrameSource(TrickleSource(data, step=7), self.dims)
        self.assertEqual(bytes(src.next_frame()), bytes([4]) * 150)
        self.assertEqual(bytes(src.next_frame()), bytes([5]) * 150)
        self.assertIsNone(src.next_frame())

    def test_buffer_reuse_leaves_no_stale_bytes(self):
        first = build_header(10, 5) + bytes(range(150))
        second = build_header(10, 5) + bytes([200]) * 150
        src = self._source(first + second)
        src.next_frame()
        self.assertEqual(bytes(src.next_frame()), bytes([200]) * 150)

    def test_header_mismatch_raises_desync(self):
        wrong = build_header(11, 5) + bytes(147)
        src = self._source(wrong)
        with self.assertRaises(DesyncError):
            src.next_frame()

    def test_wrong_header_is_desync_even_without_payload(self):
        src = self._source(build_header(11, 5))
        with self.assertRaises(DesyncError):
            src.next_frame()
        self.assertEqual(src.truncated_bytes, 0)

    def test_valid_header_then_short_payload_is_truncation(self):
        src = self._source(build_header(10, 5) + bytes(40))
        self.assertIsNone(src.next_frame())
        self.assertEqual(src.truncated_bytes, src.header_length + 40)

    def test_header_not_parsed_when_validation_disabled(self):
        data = b"XXXXXXXXXXXX" + bytes([3]) * 150
        src = self._source(data, validate_headers=False)
        self.assertEqual(bytes(src.next_frame()), bytes([3]) * 150)

    def test_wait_and_close_delegate_to_process(self):
        proc = FakeProcess()
        src = FrameSource(TrickleSource(b"", step=1), self.dims, process=proc)
        src.wait()
        src.close()
        self.assertEqual(proc.waited, 1)
        self.assertEqual(proc.terminated, 1)

    def test_close_without_process_closes_byte_source(self):
        byte_source = TrickleSource(b"", step=1)
        FrameSource(byte_source, self.dims).close()
        self.assertTrue(byte_source.closed)


if __name__ == "__main__":
    unittest.main()
