"""CLI entrypoints for playback, demo patterns, benchmarking, and diagnostics."""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import asdict
from io import BytesIO

from termvid_core import (
    AppConfig,
    PlaybackLoop,
    build_doctor_payload,
    build_renderer,
    dimensions_for,
    load_config,
)
from termvid_core.logging_setup import configure_logging, get_logger, install_crash_hooks, log_decoder_failure
from termvid_decoder import DecoderError, Dimensions, FrameSource, StreamByteSource
from termvid_renderer import PATTERNS, list_ramps, pattern_stream


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _apply_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    if getattr(args, "delay_ms", None) is not None:
        cfg.playback.frame_delay_ms = max(0, min(1000, args.delay_ms))
    if getattr(args, "ramp", None):
        cfg.terminal.ramp = args.ramp
    if getattr(args, "ffmpeg", None):
        cfg.decoder.binary = args.ffmpeg
    if getattr(args, "no_strict", False):
        cfg.playback.strict_eos = False
    if getattr(args, "no_validate", False):
        cfg.decoder.validate_headers = False
    return cfg


def _pattern_source(name: str, dims: Dimensions, frames: int, validate_headers: bool = True) -> FrameSource:
    data = pattern_stream(name, dims.width, dims.height, frames)
    return FrameSource(StreamByteSource(BytesIO(data)), dims, validate_headers=validate_headers)


def cmd_play(args: argparse.Namespace) -> int:
    cfg = _apply_overrides(load_config(), args)
    loop = PlaybackLoop.from_video(args.path, cfg)
    loop.run()
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    cfg = _apply_overrides(load_config(), args)
    dims = dimensions_for(cfg)
    source = _pattern_source(args.pattern, dims, args.frames)
    loop = PlaybackLoop(
        source,
        build_renderer(cfg, dims),
        frame_delay_s=cfg.playback.frame_delay_ms / 1000.0,
        strict_eos=cfg.playback.strict_eos,
    )
    loop.run()
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = _apply_overrides(load_config(), args)
    dims = Dimensions(width=args.width, height=args.height)

    if args.path:
        source = FrameSource.from_video(
            args.path,
            dims,
            binary=cfg.decoder.binary,
            loglevel=cfg.decoder.loglevel,
            validate_headers=cfg.decoder.validate_headers,
        )
    else:
        source = _pattern_source(args.pattern, dims, args.frames, cfg.decoder.validate_headers)

    with open(os.devnull, "w", encoding="utf-8") as sink:
        loop = PlaybackLoop(source, build_renderer(cfg, dims, stream=sink), frame_delay_s=0.0, strict_eos=True)
        status = loop.run()

    _print_json(
        {
            "source": args.path or f"pattern:{args.pattern}",
            "width": dims.width,
            "height": dims.height,
            "status": asdict(status),
            "events": loop.recent_events(limit=1),
        }
    )
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    payload = build_doctor_payload(load_config())
    _print_json(payload)
    return 0 if payload["decoder"]["found"] else 2


def cmd_ramps(_args: argparse.Namespace) -> int:
    for name in list_ramps():
        print(name)
    return 0


def _add_playback_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--delay-ms", type=int, default=None, help="Delay between frames in milliseconds")
    cmd.add_argument("--ramp", choices=list_ramps(), default=None, help="Glyph ramp name")
    cmd.add_argument("--no-strict", action="store_true", help="Treat a truncated final frame as a normal end")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termvid", description="Play videos as ASCII art in the terminal")
    sub = parser.add_subparsers(dest="command", required=True)

    play_cmd = sub.add_parser("play", help="Play a video file")
    play_cmd.add_argument("path", help="Path to a local video file")
    play_cmd.add_argument("--ffmpeg", default=None, help="Decoder binary to run instead of ffmpeg on PATH")
    play_cmd.add_argument("--no-validate", action="store_true", help="Skip frame header checks")
    _add_playback_options(play_cmd)
    play_cmd.set_defaults(func=cmd_play)

    demo_cmd = sub.add_parser("demo", help="Play a generated test pattern without a decoder")
    demo_cmd.add_argument("--pattern", default="pulse", choices=list(PATTERNS))
    demo_cmd.add_argument("--frames", type=int, default=150)
    _add_playback_options(demo_cmd)
    demo_cmd.set_defaults(func=cmd_demo)

    bench_cmd = sub.add_parser("benchmark", help="Measure frame throughput without pacing or terminal output")
    bench_cmd.add_argument("path", nargs="?", default=None, help="Optional video file; a test pattern otherwise")
    bench_cmd.add_argument("--pattern", default="checkerboard", choices=list(PATTERNS))
    bench_cmd.add_argument("--frames", type=int, default=200)
    bench_cmd.add_argument("--width", type=int, default=160)
    bench_cmd.add_argument("--height", type=int, default=48)
    bench_cmd.add_argument("--ffmpeg", default=None, help="Decoder binary to run instead of ffmpeg on PATH")
    bench_cmd.set_defaults(func=cmd_benchmark)

    doctor_cmd = sub.add_parser("doctor", help="Print decoder, terminal and config diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    ramps_cmd = sub.add_parser("ramps", help="List glyph ramps")
    ramps_cmd.set_defaults(func=cmd_ramps)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.diagnostics.keep_log_files, console=False)
    install_crash_hooks()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except DecoderError as exc:
        log_decoder_failure(exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        get_logger().error("invalid input: %s", exc, extra={"event": "invalid_input"})
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
