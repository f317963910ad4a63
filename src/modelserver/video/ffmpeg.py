"""ffmpeg invocation for the resize-video operation."""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List

from ..errors import TranscodeError
from ..logging import get_logger
from .dimensions import Dimensions

log = get_logger(__name__)


def build_transcode_command(
    source: Path,
    target: Path,
    dimensions: Dimensions,
    ffmpeg_bin: str = "ffmpeg",
) -> List[str]:
    # Baseline H.264 in a faststart MP4 so browsers can stream the result.
    return [
        ffmpeg_bin,
        "-y",
        "-hide_banner",
        "-loglevel",
        "error",
        "-i",
        str(source),
        "-vf",
        f"scale={dimensions.width}:{dimensions.height}",
        "-c:v",
        "libx264",
        "-profile:v",
        "baseline",
        "-level",
        "3.0",
        "-pix_fmt",
        "yuv420p",
        "-preset",
        "medium",
        "-crf",
        "23",
        "-c:a",
        "aac",
        "-b:a",
        "128k",
        "-movflags",
        "+faststart",
        str(target),
    ]


def transcode(
    source: str | Path,
    target: str | Path,
    dimensions: Dimensions,
    ffmpeg_bin: str = "ffmpeg",
) -> None:
    """Re-encode ``source`` into ``target`` at ``dimensions``."""

    command = build_transcode_command(Path(source), Path(target), dimensions, ffmpeg_bin)
    log.debug("video.transcode", command=" ".join(command))
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise TranscodeError(f"Failed to run {ffmpeg_bin}", stderr=str(exc)) from exc

    if result.returncode != 0:
        raise TranscodeError(f"ffmpeg exited with status {result.returncode}", stderr=result.stderr)


__all__ = ["build_transcode_command", "transcode"]
