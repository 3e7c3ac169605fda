from __future__ import annotations

import os
import sys
from pathlib import Path
from subprocess import run as subprocess_run  # noqa: S404

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


def test_cli_help() -> None:
    result = subprocess_run(  # noqa: S603
        [sys.executable, "-m", "b64viewer.cli", "--help"],
        capture_output=True,
        text=True,
        check=False,
        env={**os.environ, "PYTHONPATH": str(SRC_DIR)},
    )
    assert result.returncode == 0
    assert "usage" in result.stdout.lower()
    for command in ("detect", "decode", "encode", "view", "pdf-point"):
        assert command in result.stdout
