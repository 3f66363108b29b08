"""
Tests for the separable box blur.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from shadowstag import InvalidParamsError, Mask
from shadowstag.filters import BoxBlur, blur_extent, box_blur, box_sizes_for_gauss


def square_mask(size=100, lo=30, hi=70):
    values = np.zeros((size, size), dtype=np.uint8)
    values[lo:hi, lo:hi] = 255
    return Mask(values)


def half_plane_mask(width=200, height=60, edge=100):
    values = np.zeros((height, width), dtype=np.uint8)
    values[:, :edge] = 255
    return Mask(values)


def transition_width(mask: Mask, row: int) -> int:
    line = mask.values[row, 50:150]
    return int(np.count_nonzero((line > 0) & (line < 255)))


class TestBoxSizes:
    """Mapping of blur radius to box widths."""

    def test_known_values(self):
        assert box_sizes_for_gauss(1) == [1, 1, 3]
        assert box_sizes_for_gauss(3) == [5, 5, 7]
        assert box_sizes_for_gauss(5) == [9, 9, 11]

    @pytest.mark.parametrize("sigma", [1, 2, 4, 7, 12, 30])
    def test_odd_widths_matching_variance(self, sigma):
        sizes = box_sizes_for_gauss(sigma)
        assert len(sizes) == 3
        assert all(size % 2 == 1 for size in sizes)
        variance = sum((size * size - 1) / 12 for size in sizes)
        assert abs(variance - sigma * sigma) <= max(1.0, 0.15 * sigma * sigma)

    def test_extent(self):
        assert blur_extent(0) == 0
        assert blur_extent(3) == 7
        assert blur_extent(5) == 13


class TestBoxBlur:
    """Blurring of coverage masks."""

    def test_zero_radius_is_copy(self):
        mask = square_mask()
        assert box_blur(mask, 0) == mask

    def test_interior_stays_opaque(self):
        result = box_blur(square_mask(100, 10, 90), 3)
        assert result.value(50, 50) == 255
        assert result.value(20, 50) == 255

    def test_energy_preserved(self):
        mask = square_mask()
        result = box_blur(mask, 5)
        assert abs(result.total() - mask.total()) / mask.total() < 0.01

    def test_edge_clipping_loses_energy(self):
        mask = Mask(np.full((40, 40), 255, dtype=np.uint8))
        result = box_blur(mask, 4)
        assert result.value(20, 20) == 255
        assert result.value(0, 0) < 255
        assert result.total() < mask.total()

    def test_monotonic_falloff(self):
        result = box_blur(half_plane_mask(), 4)
        line = result.values[30, 50:150].astype(int)
        assert np.all(np.diff(line) <= 0)
        assert line[0] == 255
        assert line[-1] == 0

    def test_falloff_widens_with_radius(self):
        widths = [transition_width(box_blur(half_plane_mask(), r), 30) for r in (2, 4, 8)]
        assert widths[0] < widths[1] < widths[2]
        assert widths[2] <= 2 * blur_extent(8)

    def test_symmetric_result(self):
        mask = square_mask()
        values = box_blur(mask, 6).values
        assert np.array_equal(values, values[::-1, :])
        assert np.array_equal(values, values[:, ::-1])

    def test_negative_radius_rejected(self):
        with pytest.raises(InvalidParamsError):
            box_blur(square_mask(), -2)

    def test_stage(self):
        mask = square_mask()
        assert BoxBlur(radius=2).apply(mask) == box_blur(mask, 2)
        with pytest.raises(ValidationError):
            BoxBlur(radius=-1)
