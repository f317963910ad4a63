"""Output size computation for the resize-video operation."""
from __future__ import annotations

import math
from dataclasses import dataclass

# Allowed relative drift between source and output aspect ratios.
ASPECT_TOLERANCE = 0.01


@dataclass(frozen=True, slots=True)
class Dimensions:
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def floor_even(value: float) -> int:
    """Largest even integer at or below ``value``, never less than 2."""

    # The epsilon absorbs float error in products like 1001 * (500 / 1001).
    return max(2, int(math.floor(value + 1e-9)) // 2 * 2)


def _ratio_drift(width: int, height: int, source_ratio: float) -> float:
    return abs(width / height - source_ratio) / source_ratio


def compute_target_dimensions(
    source_width: int,
    source_height: int,
    max_width: int,
    max_height: int,
) -> Dimensions:
    """Fit ``source`` inside the bounding box, keeping aspect ratio and even sides.

    libx264 with yuv420p chroma subsampling needs both sides even, so every
    result is floored to an even number. Sources that already fit are only
    adjusted by that flooring.
    """

    for name, value in (
        ("source_width", source_width),
        ("source_height", source_height),
        ("max_width", max_width),
        ("max_height", max_height),
    ):
        if value <= 0:
            raise ValueError(f"{name} must be > 0, got {value}")

    scale = 1.0
    if source_width > max_width or source_height > max_height:
        scale = min(max_width / source_width, max_height / source_height)

    width = floor_even(source_width * scale)
    height = floor_even(source_height * scale)

    source_ratio = source_width / source_height
    if _ratio_drift(width, height, source_ratio) > ASPECT_TOLERANCE:
        corrected_height = floor_even(width / source_ratio)
        if (
            corrected_height <= max(max_height, height)
            and _ratio_drift(width, corrected_height, source_ratio) <= ASPECT_TOLERANCE
        ):
            height = corrected_height
        else:
            width = floor_even(height * source_ratio)

    return Dimensions(width=width, height=height)


__all__ = ["ASPECT_TOLERANCE", "Dimensions", "compute_target_dimensions", "floor_even"]
