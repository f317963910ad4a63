"""JSON rendering for inference results."""
from __future__ import annotations

import json
from typing import Any

import numpy as np
from fastapi.encoders import jsonable_encoder

from .errors import SerializationError

_NUMPY_ENCODERS = {
    np.ndarray: lambda array: array.tolist(),
    np.generic: lambda scalar: scalar.item(),
}


def to_jsonable(value: Any) -> Any:
    """Convert an engine result into plain JSON types.

    numpy arrays and scalars, dataclasses and pydantic models are supported;
    anything else the FastAPI encoder cannot handle raises
    :class:`SerializationError`.
    """

    try:
        return jsonable_encoder(value, custom_encoder=_NUMPY_ENCODERS)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Inference result is not JSON serializable: {exc}") from exc


def render_json(value: Any) -> bytes:
    content = to_jsonable(value)
    try:
        text = json.dumps(content, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Inference result is not JSON serializable: {exc}") from exc
    return text.encode("utf-8")


__all__ = ["render_json", "to_jsonable"]
