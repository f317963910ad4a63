"""Dependency helpers for the model server API."""
from __future__ import annotations

import threading

from fastapi import FastAPI, Request

from ..config import ModelServerConfig
from ..engines import EngineSet, load_engines
from ..video import VideoResizer

_LOCK = threading.Lock()


def get_config(request: Request) -> ModelServerConfig:
    return request.app.state.config


def load_app_engines(app: FastAPI) -> EngineSet:
    """Load the engines for ``app`` once and keep them on ``app.state``."""

    with _LOCK:
        engines = getattr(app.state, "engines", None)
        if engines is None:
            engines = load_engines(app.state.config.models)
            app.state.engines = engines
        return engines


def get_engines(request: Request) -> EngineSet:
    engines = getattr(request.app.state, "engines", None)
    if engines is not None:
        return engines
    return load_app_engines(request.app)


def get_video_resizer(request: Request) -> VideoResizer:
    with _LOCK:
        resizer = getattr(request.app.state, "video_resizer", None)
        if resizer is None:
            resizer = VideoResizer(request.app.state.config.video)
            request.app.state.video_resizer = resizer
        return resizer


def reset_dependencies(app: FastAPI) -> None:
    """Drop cached engines and resizer (primarily for tests)."""

    with _LOCK:
        for name in ("engines", "video_resizer"):
            if hasattr(app.state, name):
                delattr(app.state, name)


__all__ = [
    "get_config",
    "get_engines",
    "get_video_resizer",
    "load_app_engines",
    "reset_dependencies",
]
