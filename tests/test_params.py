"""
Tests for effect parameters and settings.
"""

import pytest
from pydantic import ValidationError

from shadowstag import CornerParams, InvalidParamsError, ShadowParams
from shadowstag.config import Settings
from shadowstag.params import hex_to_rgb, parse_offset, rgb_to_hex


class TestShadowParams:
    """Validation and normalization of shadow parameters."""

    def test_defaults(self):
        params = ShadowParams()
        assert params.offset == (0, 0)
        assert params.blur == 0
        assert params.spread == 0
        assert params.alpha == 255
        assert params.color == (0, 0, 0)

    def test_offset_string(self):
        assert ShadowParams(offset="-20, 15").offset == (-20, 15)

    def test_offset_pair(self):
        assert ShadowParams(offset=[3, 4]).offset == (3, 4)

    def test_js_style_aliases(self):
        assert ShadowParams(offsetX=5, offsetY=6).offset == (5, 6)

    @pytest.mark.parametrize("color,expected", [
        ("#FF8000", (255, 128, 0)),
        ("00ff00", (0, 255, 0)),
        ((1, 2, 3), (1, 2, 3)),
        ([4, 5, 6], (4, 5, 6)),
    ])
    def test_color_formats(self, color, expected):
        params = ShadowParams(color=color)
        assert params.color == expected
        assert params.color_hex == rgb_to_hex(expected)

    def test_frozen(self):
        params = ShadowParams()
        with pytest.raises(ValidationError):
            params.alpha = 3

    @pytest.mark.parametrize("values", [
        {"alpha": 300},
        {"blur": -1},
        {"spread": -5},
        {"color": (0, 0, 256)},
        {"color": "red"},
        {"offset": 5},
        {"offset": (1, 2, 3)},
        {"offset": "100000,0"},
        {"unknown": 1},
    ])
    def test_invalid_values(self, values):
        with pytest.raises(InvalidParamsError):
            ShadowParams.create(**values)


class TestCornerParams:
    """Validation of corner parameters."""

    def test_default_is_disabled(self):
        assert CornerParams().radius == 0

    def test_negative_rejected(self):
        with pytest.raises(InvalidParamsError):
            CornerParams.create(radius=-1)


class TestHelpers:
    """Parsing helpers."""

    def test_parse_offset(self):
        assert parse_offset("-20,-20") == (-20, -20)
        with pytest.raises(InvalidParamsError):
            parse_offset("1,2,3")

    def test_hex_roundtrip(self):
        assert hex_to_rgb(rgb_to_hex((18, 52, 86))) == (18, 52, 86)
        with pytest.raises(ValueError):
            hex_to_rgb("#GGGGGG")


class TestSettings:
    """Environment based configuration."""

    def test_defaults(self):
        settings = Settings()
        assert settings.CORNER_RADIUS == 8
        assert (settings.OFFSET_X, settings.OFFSET_Y) == (-20, -20)
        assert settings.SHADOW_ALPHA == 150
        assert settings.SPREAD == 26
        assert settings.EXPAND_CANVAS is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SHADOWSTAG_SPREAD", "4")
        monkeypatch.setenv("SHADOWSTAG_SHADOW_COLOR", "#FFFFFF")
        monkeypatch.setenv("SHADOWSTAG_EXPAND_CANVAS", "false")
        settings = Settings()
        assert settings.SPREAD == 4
        assert settings.SHADOW_COLOR == "#FFFFFF"
        assert settings.EXPAND_CANVAS is False
