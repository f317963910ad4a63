from __future__ import annotations

import pytest

from modelserver.video.dimensions import ASPECT_TOLERANCE, compute_target_dimensions, floor_even


def test_source_within_bounds_is_unchanged() -> None:
    dims = compute_target_dimensions(1280, 720, 1920, 1080)
    assert (dims.width, dims.height) == (1280, 720)


def test_source_equal_to_bounds_is_unchanged() -> None:
    dims = compute_target_dimensions(1920, 1080, 1920, 1080)
    assert (dims.width, dims.height) == (1920, 1080)


def test_wide_source_scales_by_width() -> None:
    dims = compute_target_dimensions(1000, 500, 800, 800)
    assert (dims.width, dims.height) == (800, 400)


def test_odd_ratio_source_is_floored_to_even() -> None:
    dims = compute_target_dimensions(1001, 667, 500, 500)
    assert (dims.width, dims.height) == (500, 332)


def test_tall_source_scales_by_height() -> None:
    dims = compute_target_dimensions(1080, 1920, 1920, 1080)
    assert (dims.width, dims.height) == (606, 1080)


def test_extreme_ratio_is_corrected_from_height() -> None:
    # 1920x126 drifts 1.5% from 5000/333 and a height fix cannot help.
    dims = compute_target_dimensions(5000, 333, 1920, 1080)
    assert (dims.width, dims.height) == (1890, 126)


@pytest.mark.parametrize(
    "source,bounds",
    [
        ((3840, 2160), (1920, 1080)),
        ((4000, 3000), (1280, 720)),
        ((1234, 777), (640, 640)),
        ((720, 1280), (1920, 1080)),
        ((2561, 1439), (1000, 1000)),
        ((5000, 333), (1920, 1080)),
    ],
)
def test_oversized_sources_keep_ratio_and_even_sides(source, bounds) -> None:
    source_width, source_height = source
    max_width, max_height = bounds

    dims = compute_target_dimensions(source_width, source_height, max_width, max_height)

    assert dims.width % 2 == 0
    assert dims.height % 2 == 0
    assert dims.width <= max_width
    assert dims.height <= max_height
    source_ratio = source_width / source_height
    assert abs(dims.aspect_ratio - source_ratio) / source_ratio <= ASPECT_TOLERANCE


def test_floor_even() -> None:
    assert floor_even(333.17) == 332
    assert floor_even(400.0) == 400
    assert floor_even(401.9) == 400
    assert floor_even(0.4) == 2


@pytest.mark.parametrize("args", [(0, 100, 10, 10), (100, -1, 10, 10), (100, 100, 0, 10), (100, 100, 10, 0)])
def test_rejects_non_positive_inputs(args) -> None:
    with pytest.raises(ValueError):
        compute_target_dimensions(*args)


def test_odd_source_within_bounds_is_floored_to_even() -> None:
    dims = compute_target_dimensions(641, 481, 1920, 1080)
    assert (dims.width, dims.height) == (640, 480)


@pytest.mark.parametrize("source,expected", [((1, 1), (2, 2)), ((3, 1), (6, 2))])
def test_tiny_sources_grow_to_minimum_side(source, expected) -> None:
    dims = compute_target_dimensions(*source, 1920, 1080)
    assert (dims.width, dims.height) == expected
