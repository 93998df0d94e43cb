"""Environment report for the ``doctor`` command."""

from __future__ import annotations

import platform
import shutil
import subprocess
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from termvid_renderer import list_ramps

from .config import AppConfig, config_path
from .playback import dimensions_for


def decoder_version(binary_path: str | None) -> str | None:
    if not binary_path:
        return None
    try:
        result = subprocess.run(
            [binary_path, "-version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    first = result.stdout.strip().splitlines()
    return first[0] if first else None


def build_doctor_payload(cfg: AppConfig) -> dict[str, Any]:
    binary_path = shutil.which(cfg.decoder.binary)
    dims = dimensions_for(cfg)
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "config_path": str(config_path()),
        "config": asdict(cfg),
        "decoder": {
            "binary": cfg.decoder.binary,
            "path": binary_path,
            "found": binary_path is not None,
            "version": decoder_version(binary_path),
        },
        "terminal": {
            "width": dims.width,
            "height": dims.height,
            "reserve_rows": cfg.terminal.reserve_rows,
        },
        "ramps": list_ramps(),
    }
