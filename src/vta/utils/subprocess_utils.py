"""Subprocess runner for the external decoder binaries (ffmpeg, ffprobe)."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: float | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run an external command, logging it and its output tails.

    No timeout by default: a hung decoder hangs the caller.
    Raises FileNotFoundError if the binary does not exist and
    CalledProcessError on non-zero exit when ``check`` is set.
    """
    cmd_str = " ".join(str(c) for c in cmd)
    logger.info(f"Running: {cmd_str}")

    result = subprocess.run(
        [str(c) for c in cmd],
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )

    if result.stdout:
        logger.debug(f"stdout: {result.stdout[-500:]}")
    if result.stderr:
        logger.debug(f"stderr: {result.stderr[-500:]}")

    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(
            result.returncode, cmd_str, result.stdout, result.stderr
        )
    return result


def binary_available(name: str) -> bool:
    """True if ``name`` resolves to an executable on PATH (or is a path to one)."""
    return shutil.which(name) is not None
