"""Interfaces for the inference backends held by the server."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable


class InferenceKind(str, Enum):
    MOTION = "motion"
    LAYOUT = "layout"

    @classmethod
    def from_header(cls, value: Optional[str]) -> "InferenceKind":
        """Only an exact ``layout`` selects layout; anything else is motion."""

        if value == cls.LAYOUT.value:
            return cls.LAYOUT
        return cls.MOTION


@runtime_checkable
class InferenceEngine(Protocol):
    """A pre-loaded model exposing one synchronous prediction call."""

    def infer(self, payload: str) -> Any:  # pragma: no cover - interface
        ...


@dataclass(slots=True)
class EngineSet:
    """The motion and layout engines, loaded once per process."""

    motion: InferenceEngine
    layout: InferenceEngine

    def select(self, kind: InferenceKind) -> InferenceEngine:
        if kind is InferenceKind.LAYOUT:
            return self.layout
        return self.motion


__all__ = ["EngineSet", "InferenceEngine", "InferenceKind"]
