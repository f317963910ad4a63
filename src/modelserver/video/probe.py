"""ffprobe wrapper for reading video stream dimensions."""
from __future__ import annotations

import json
import subprocess
from pathlib import Path

from ..errors import ProbeError
from ..logging import get_logger
from .dimensions import Dimensions

log = get_logger(__name__)


def _probe_command(ffprobe_bin: str, path: Path) -> list[str]:
    return [
        ffprobe_bin,
        "-v",
        "error",
        "-select_streams",
        "v:0",
        "-show_entries",
        "stream=width,height",
        "-of",
        "json",
        str(path),
    ]


def probe_dimensions(path: str | Path, ffprobe_bin: str = "ffprobe") -> Dimensions:
    """Return the width and height of the first video stream in ``path``."""

    command = _probe_command(ffprobe_bin, Path(path))
    log.debug("video.probe", command=" ".join(command))
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise ProbeError(f"Failed to run {ffprobe_bin}: {exc}") from exc

    if result.returncode != 0:
        raise ProbeError(f"ffprobe exited with status {result.returncode}: {result.stderr.strip()}")

    try:
        info = json.loads(result.stdout or "{}")
    except json.JSONDecodeError as exc:
        raise ProbeError(f"Unreadable ffprobe output: {exc}") from exc

    streams = info.get("streams") or []
    if not streams:
        raise ProbeError("No video stream found")

    stream = streams[0]
    width = stream.get("width")
    height = stream.get("height")
    if not width or not height:
        raise ProbeError("No video stream found")

    return Dimensions(width=int(width), height=int(height))


__all__ = ["probe_dimensions"]
