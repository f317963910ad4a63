"""Deterministic placeholder engine used when no backend is configured."""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from .base import InferenceKind


@dataclass
class StubEngine:
    """Return a seeded pseudo-random prediction vector for each payload."""

    kind: InferenceKind = InferenceKind.MOTION
    output_dim: int = 16

    def __post_init__(self) -> None:
        if self.output_dim <= 0:
            raise ValueError("output_dim must be > 0")

    def infer(self, payload: str) -> Dict[str, Any]:
        hasher = hashlib.sha256()
        hasher.update(self.kind.value.encode("utf-8"))
        hasher.update(payload.encode("utf-8"))
        seed = int.from_bytes(hasher.digest()[:8], "big", signed=False)
        rng = np.random.default_rng(seed)
        predictions = rng.uniform(-1.0, 1.0, self.output_dim).astype(np.float32)
        return {"kind": self.kind.value, "predictions": predictions}


__all__ = ["StubEngine"]
