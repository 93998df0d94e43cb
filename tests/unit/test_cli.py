import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "decoder"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from termvid_app.cli import _apply_overrides, build_parser
from termvid_core.config import AppConfig


class CliTests(unittest.TestCase):
    def test_play_command(self):
        args = build_parser().parse_args(["play", "clip.mp4", "--delay-ms", "33", "--ramp", "soft"])
        self.assertEqual(args.command, "play")
        self.assertEqual(args.path, "clip.mp4")
        self.assertEqual(args.delay_ms, 33)
        self.assertEqual(args.ramp, "soft")

    def test_demo_command_defaults(self):
        args = build_parser().parse_args(["demo"])
        self.assertEqual(args.pattern, "pulse")
        self.assertEqual(args.frames, 150)

    def test_benchmark_without_path_uses_pattern(self):
        args = build_parser().parse_args(["benchmark", "--pattern", "quadrants"])
        self.assertIsNone(args.path)
        self.assertEqual(args.pattern, "quadrants")

    def test_overrides_apply_to_config(self):
        args = build_parser().parse_args(
            ["play", "clip.mp4", "--ffmpeg", "/opt/ffmpeg", "--no-strict", "--no-validate", "--delay-ms", "0"]
        )
        cfg = _apply_overrides(AppConfig(), args)
        self.assertEqual(cfg.decoder.binary, "/opt/ffmpeg")
        self.assertFalse(cfg.playback.strict_eos)
        self.assertFalse(cfg.decoder.validate_headers)
        self.assertEqual(cfg.playback.frame_delay_ms, 0)

    def test_doctor_and_ramps_commands(self):
        parser = build_parser()
        self.assertEqual(parser.parse_args(["doctor"]).command, "doctor")
        self.assertEqual(parser.parse_args(["ramps"]).command, "ramps")


if __name__ == "__main__":
    unittest.main()
