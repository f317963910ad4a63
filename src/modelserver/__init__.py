"""HTTP front-end for motion/layout inference and video resizing."""
from .config import CONFIG
from .engines import EngineSet, InferenceKind, load_engines
from .video import VideoResizer, compute_target_dimensions

__all__ = ["CONFIG", "EngineSet", "InferenceKind", "VideoResizer", "compute_target_dimensions", "load_engines"]
