"""Resize uploaded videos into a bounding box with ffprobe and ffmpeg."""
from __future__ import annotations

import uuid
from pathlib import Path
from typing import Iterable

from ..config import VideoConfig
from ..logging import get_logger
from .dimensions import Dimensions, compute_target_dimensions
from .ffmpeg import transcode
from .probe import probe_dimensions

log = get_logger(__name__)


class VideoResizer:
    """Probe, fit and re-encode a video payload using temporary files.

    Each call writes the upload and the encoder output to uniquely named files
    under ``tmp_dir``; both are removed before the call returns or raises.
    """

    def __init__(self, config: VideoConfig | None = None) -> None:
        self.config = config or VideoConfig()

    @property
    def tmp_dir(self) -> Path:
        return self.config.tmp_dir

    def _temp_paths(self) -> tuple[Path, Path]:
        request_id = uuid.uuid4().hex
        return (
            self.tmp_dir / f"{request_id}_input.mp4",
            self.tmp_dir / f"{request_id}_output.mp4",
        )

    def target_dimensions(self, source: Path, max_width: int, max_height: int) -> Dimensions:
        original = probe_dimensions(source, ffprobe_bin=self.config.ffprobe_bin)
        target = compute_target_dimensions(original.width, original.height, max_width, max_height)
        log.info(
            "video.dimensions",
            source_width=original.width,
            source_height=original.height,
            width=target.width,
            height=target.height,
        )
        return target

    def resize(self, data: bytes, max_width: int, max_height: int) -> bytes:
        """Return ``data`` re-encoded to fit within ``max_width`` x ``max_height``."""

        self.tmp_dir.mkdir(parents=True, exist_ok=True)
        input_path, output_path = self._temp_paths()
        try:
            input_path.write_bytes(data)
            target = self.target_dimensions(input_path, max_width, max_height)
            transcode(input_path, output_path, target, ffmpeg_bin=self.config.ffmpeg_bin)
            payload = output_path.read_bytes()
            log.info("video.resized", input_bytes=len(data), output_bytes=len(payload))
            return payload
        finally:
            _remove_quietly((input_path, output_path))


def _remove_quietly(paths: Iterable[Path]) -> None:
    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            log.warning("video.cleanup_failed", path=str(path), error=str(exc))


__all__ = ["VideoResizer"]
