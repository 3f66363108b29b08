"""
Tests for canvas expansion.
"""

import pytest

from shadowstag import ArithmeticOverflowError, PixelBuffer, ShadowParams
from shadowstag.filters import CanvasExpander, Expansion, compute_expansion, expand_canvas


class TestComputeExpansion:
    """Canvas growth needed by a shadow."""

    def test_offset_only(self):
        expansion = compute_expansion(ShadowParams(offset=(10, 10)))
        assert expansion == Expansion(left=0, top=0, right=10, bottom=10)

    def test_negative_offset_with_spread(self):
        expansion = compute_expansion(ShadowParams(offset=(-20, -20), spread=5))
        assert expansion == Expansion(left=25, top=25, right=0, bottom=0)

    def test_blur_grows_all_sides(self):
        expansion = compute_expansion(ShadowParams(offset=(2, -3), blur=3))
        assert expansion == Expansion(left=5, top=10, right=9, bottom=4)

    def test_no_shadow_no_expansion(self):
        assert compute_expansion(ShadowParams()).is_empty


class TestExpandCanvas:
    """Padding of images."""

    def test_places_source(self, red_square):
        result = expand_canvas(red_square, Expansion(left=3, top=4, right=5, bottom=6))
        assert result.size == (108, 110)
        assert result.pixel(3 + 50, 4 + 50) == red_square.pixel(50, 50)
        assert result.pixel(0, 0) == (0, 0, 0, 0)
        assert result.pixel(107, 109) == (0, 0, 0, 0)

    def test_empty_expansion_is_copy(self, red_square):
        assert expand_canvas(red_square, Expansion()) == red_square

    def test_overflow_rejected(self, white_square):
        with pytest.raises(ArithmeticOverflowError):
            expand_canvas(white_square, Expansion(right=1), max_pixels=100 * 100)

    def test_stage(self, white_square):
        stage = CanvasExpander(params=ShadowParams(offset=(0, 7)))
        assert stage.expansion == Expansion(bottom=7)
        assert stage.apply(white_square).size == (100, 107)
