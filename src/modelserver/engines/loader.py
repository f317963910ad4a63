"""Resolve inference engines from ``module:attribute`` import targets."""
from __future__ import annotations

import importlib
import inspect
from typing import Any

from ..config import ModelConfig
from ..errors import EngineLoadError
from ..logging import get_logger
from .base import EngineSet, InferenceEngine, InferenceKind
from .stub import StubEngine

log = get_logger(__name__)


def _import_target(target: str) -> Any:
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise EngineLoadError(f"Engine target must look like 'package.module:attribute', got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise EngineLoadError(f"Unable to import engine module {module_name!r}: {exc}") from exc

    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise EngineLoadError(f"{module_name!r} has no attribute {attribute!r}") from exc
    return obj


def load_engine(target: str, kind: InferenceKind, stub_output_dim: int = 16) -> InferenceEngine:
    """Load one engine.

    ``target`` names either an object with an ``infer`` method or a
    zero-argument factory returning one. An empty target gives a
    :class:`StubEngine`.
    """

    target = target.strip()
    if not target:
        log.warning("engine.stub", kind=kind.value)
        return StubEngine(kind=kind, output_dim=stub_output_dim)

    obj = _import_target(target)
    engine = obj
    if inspect.isclass(obj) or (not callable(getattr(obj, "infer", None)) and callable(obj)):
        engine = obj()

    if not callable(getattr(engine, "infer", None)):
        raise EngineLoadError(f"{target!r} did not provide an object with an infer() method")

    log.info("engine.loaded", kind=kind.value, target=target)
    return engine


def load_engines(config: ModelConfig | None = None) -> EngineSet:
    config = config or ModelConfig()
    return EngineSet(
        motion=load_engine(config.motion_engine, InferenceKind.MOTION, config.stub_output_dim),
        layout=load_engine(config.layout_engine, InferenceKind.LAYOUT, config.stub_output_dim),
    )


__all__ = ["load_engine", "load_engines"]
