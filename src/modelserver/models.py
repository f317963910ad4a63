"""API request/response models."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Short summary of the failure")
    details: str = Field("", description="Diagnostic output, e.g. ffmpeg stderr")


class ResizeBounds(BaseModel):
    """Bounding box for the resize-video endpoint."""

    max_width: int = Field(..., gt=0)
    max_height: int = Field(..., gt=0)

    @classmethod
    def from_headers(
        cls,
        max_width: Optional[str],
        max_height: Optional[str],
        default_width: int,
        default_height: int,
    ) -> "ResizeBounds":
        """Parse header values, falling back to defaults for unusable input."""

        return cls(
            max_width=_positive_int(max_width, default_width),
            max_height=_positive_int(max_height, default_height),
        )


def _positive_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


__all__ = ["ErrorResponse", "ResizeBounds"]
