from __future__ import annotations

import runpy
from pathlib import Path

import termvid_app.__main__ as cli_main
import termvid_app.cli as cli
from termvid_decoder import ChildExitError


def test_main_defaults_to_demo(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(cli_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = cli_main.main([])
    assert rc == 0
    assert calls == [["demo"]]


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(cli_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = cli_main.main(["play", "clip.mp4"])
    assert rc == 0
    assert calls == [["play", "clip.mp4"]]


def test_main_module_runpath_without_package_context() -> None:
    main_path = Path(__file__).resolve().parents[1] / "apps" / "cli" / "termvid_app" / "__main__.py"
    result = runpy.run_path(str(main_path))
    assert "main" in result


def test_decoder_errors_print_and_exit_nonzero(monkeypatch, capsys, tmp_path) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **_kwargs: None)
    monkeypatch.setattr(cli, "install_crash_hooks", lambda: None)
    monkeypatch.setattr(cli, "load_config", lambda: cli.AppConfig())

    def _fail(_args):
        raise ChildExitError(1, "clip.mp4: No such file or directory\n")

    monkeypatch.setattr(cli, "cmd_play", _fail)
    rc = cli.main(["play", str(tmp_path / "clip.mp4")])

    assert rc == 1
    assert "No such file or directory" in capsys.readouterr().err


def test_benchmark_pattern_reports_json(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **_kwargs: None)
    monkeypatch.setattr(cli, "install_crash_hooks", lambda: None)
    monkeypatch.setattr(cli, "load_config", lambda: cli.AppConfig())

    rc = cli.main(["benchmark", "--pattern", "quadrants", "--frames", "4", "--width", "8", "--height", "3"])

    assert rc == 0
    out = capsys.readouterr().out
    assert '"frames_rendered": 4' in out
    assert '"state": "Stopped"' in out


def test_invalid_dimensions_print_and_exit_nonzero(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **_kwargs: None)
    monkeypatch.setattr(cli, "install_crash_hooks", lambda: None)
    monkeypatch.setattr(cli, "load_config", lambda: cli.AppConfig())

    rc = cli.main(["benchmark", "--width", "0"])

    assert rc == 1
    assert "error:" in capsys.readouterr().err


def test_interrupt_exits_130(monkeypatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **_kwargs: None)
    monkeypatch.setattr(cli, "install_crash_hooks", lambda: None)
    monkeypatch.setattr(cli, "load_config", lambda: cli.AppConfig())

    def _interrupt(_args):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "cmd_play", _interrupt)

    assert cli.main(["play", "clip.mp4"]) == 130
