from __future__ import annotations

import base64
import os
import sys
from pathlib import Path
from subprocess import run as subprocess_run  # noqa: S404

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str | None = None):
    env = {
        **os.environ,
        "PYTHONPATH": os.pathsep.join(filter(None, [str(SRC_DIR), os.environ.get("PYTHONPATH")])),
        "LOG_JSON": "false",
        "OUTPUT_DIR": str(cwd / "results"),
        "STORAGE_PATH": str(cwd / "session.json"),
    }
    return subprocess_run(  # noqa: S603
        [sys.executable, "-m", "b64viewer.cli", *args],
        capture_output=True,
        text=True,
        check=False,
        cwd=cwd,
        env=env,
        input=stdin,
    )


def test_decode_from_stdin_writes_document(tmp_path: Path) -> None:
    text = base64.b64encode(b"hello from stdin\n").decode("ascii")

    result = _run_cli(["decode", "--show"], tmp_path, stdin=f"  {text}\n")

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines()[0] == "document.txt\ttext/plain\t17 B\ttext"
    assert (tmp_path / "results" / "document.txt").read_bytes() == b"hello from stdin\n"
    assert (tmp_path / "session.json").exists()


def test_encode_then_detect_round_trip(tmp_path: Path) -> None:
    image = tmp_path / "pixel.gif"
    image.write_bytes(b"GIF89a\x01\x00\x01\x00\x00\x00\x00;")

    encoded = _run_cli(["encode", "--input", str(image), "--mode", "data-uri"], tmp_path)
    detected = _run_cli(["detect"], tmp_path, stdin=encoded.stdout)

    assert encoded.returncode == 0, encoded.stderr
    assert encoded.stdout.startswith("data:image/gif;base64,R0lGODlh")
    assert detected.stdout == "image/gif\tgif\n"


def test_invalid_input_exits_with_code_2(tmp_path: Path) -> None:
    result = _run_cli(["decode"], tmp_path, stdin="%%% not base64 %%%")

    assert result.returncode == 2
    assert "Invalid base64 string" in result.stderr
