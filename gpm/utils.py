from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any


def run_cmd(cmd: list[str], working_dir: Path) -> None:
    """Run `cmd` in `working_dir` to completion, capturing its output.

    Arguments are passed to the child as-is, import paths and revisions
    are never split or interpreted by a shell.

    Raises:
        subprocess.CalledProcessError: the command exited with a non-zero status
        OSError: the command could not be started
    """
    subprocess.run(cmd, cwd=str(working_dir), check=True, capture_output=True)


def run_cmd_async(cmd: list[str]) -> subprocess.Popen[Any]:
    """Start `cmd` without waiting for it.

    The child inherits stdout and stderr, so many children can run at
    once without anyone draining their pipes.
    """
    return subprocess.Popen(cmd)


def last_line(text: str) -> str:
    lines = text.strip().splitlines()
    return lines[-1] if lines else ""
