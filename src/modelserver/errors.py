"""Exception hierarchy for the model server."""
from __future__ import annotations


class ModelServerError(Exception):
    """Base class for errors raised by the model server."""


class EngineLoadError(ModelServerError):
    """An inference engine could not be imported or is not usable."""


class InferenceError(ModelServerError):
    """The inference engine raised while handling a payload."""


class SerializationError(ModelServerError):
    """An inference result could not be rendered as JSON."""


class VideoProcessingError(ModelServerError):
    """Base class for failures of the resize-video operation."""


class ProbeError(VideoProcessingError):
    """ffprobe failed or the input has no video stream."""


class TranscodeError(VideoProcessingError):
    """ffmpeg exited with a non-zero status."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}: {self.stderr.strip()}"
        return base


__all__ = [
    "EngineLoadError",
    "InferenceError",
    "ModelServerError",
    "ProbeError",
    "SerializationError",
    "TranscodeError",
    "VideoProcessingError",
]
