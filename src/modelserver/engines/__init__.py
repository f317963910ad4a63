"""Inference engine handles."""
from .base import EngineSet, InferenceEngine, InferenceKind
from .loader import load_engine, load_engines
from .stub import StubEngine

__all__ = [
    "EngineSet",
    "InferenceEngine",
    "InferenceKind",
    "StubEngine",
    "load_engine",
    "load_engines",
]
