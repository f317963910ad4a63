"""Video resizing built on ffprobe and ffmpeg."""
from .dimensions import Dimensions, compute_target_dimensions
from .ffmpeg import build_transcode_command, transcode
from .probe import probe_dimensions
from .resizer import VideoResizer

__all__ = [
    "Dimensions",
    "VideoResizer",
    "build_transcode_command",
    "compute_target_dimensions",
    "probe_dimensions",
    "transcode",
]
