"""Configuration helpers for the model server."""
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

ROUTING_MODES = ("path", "implicit")


def _env_path(name: str, default: str) -> Path:
    value = os.getenv(name, default)
    return Path(value).expanduser().resolve()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_routing(name: str, default: str) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in ROUTING_MODES:
        raise ValueError(f"{name} must be one of {', '.join(ROUTING_MODES)}, got {value!r}")
    return value


@dataclass(slots=True)
class ApiConfig:
    """HTTP listener and CORS settings."""

    host: str = os.getenv("MODELSERVER_API_HOST", "0.0.0.0")
    port: int = int(os.getenv("MODELSERVER_API_PORT", "8000"))
    cors_allow_origin: str = os.getenv("MODELSERVER_CORS_ALLOW_ORIGIN", "https://madebycommon.com")
    cors_allow_methods: str = os.getenv("MODELSERVER_CORS_ALLOW_METHODS", "POST, OPTIONS")
    cors_allow_headers: str = os.getenv(
        "MODELSERVER_CORS_ALLOW_HEADERS",
        "Content-Type, X-Inference-Type, X-Max-Width, X-Max-Height",
    )
    routing: str = _env_routing("MODELSERVER_ROUTING", "path")


@dataclass(slots=True)
class ModelConfig:
    """Import targets for the two inference engines.

    An empty target selects the built-in stub engine.
    """

    motion_engine: str = os.getenv("MODELSERVER_MOTION_ENGINE", "")
    layout_engine: str = os.getenv("MODELSERVER_LAYOUT_ENGINE", "")
    stub_output_dim: int = int(os.getenv("MODELSERVER_STUB_OUTPUT_DIM", "16"))


@dataclass(slots=True)
class VideoConfig:
    """Settings for the resize-video endpoint."""

    enabled: bool = _env_bool("MODELSERVER_VIDEO_ENABLED", "true")
    ffmpeg_bin: str = os.getenv("MODELSERVER_FFMPEG", "ffmpeg")
    ffprobe_bin: str = os.getenv("MODELSERVER_FFPROBE", "ffprobe")
    tmp_dir: Path = _env_path("MODELSERVER_TMP_DIR", tempfile.gettempdir())
    default_max_width: int = int(os.getenv("MODELSERVER_DEFAULT_MAX_WIDTH", "1920"))
    default_max_height: int = int(os.getenv("MODELSERVER_DEFAULT_MAX_HEIGHT", "1080"))


@dataclass(slots=True)
class LoggingConfig:
    level: str = os.getenv("MODELSERVER_LOG_LEVEL", "INFO").upper()
    json: bool = _env_bool("MODELSERVER_LOG_JSON", "false")


@dataclass(slots=True)
class ModelServerConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    models: ModelConfig = field(default_factory=ModelConfig)
    video: VideoConfig = field(default_factory=VideoConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


CONFIG = ModelServerConfig()

__all__ = [
    "ApiConfig",
    "CONFIG",
    "LoggingConfig",
    "ModelConfig",
    "ModelServerConfig",
    "ROUTING_MODES",
    "VideoConfig",
]
