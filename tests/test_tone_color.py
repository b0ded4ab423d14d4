"""
Unit tests for tone mapping and color mixing.

Tests contrast, clamping, quantization and knob sanitizing, plus HSV
conversion and screen blending.
"""

import math

import numpy as np
import pytest

from RL_Libs.RasterLib.color_mixer import hsv_to_rgb, screen_blend
from RL_Libs.RasterLib.tone_mapper import clamp_byte, contrast, sanitize, to_bytes


class TestContrast:
    """Tests for the contrast stretch."""

    @pytest.mark.parametrize("factor", [0, 0.5, 1, 1.8, 5, -3, float("inf"), float("nan")])
    def test_mid_gray_is_fixed_point(self, factor):
        """contrast(128, c) should be 128 for every factor."""
        assert contrast(128, factor) == 128.0

    def test_identity_factor(self):
        """Factor 1 only clamps."""
        assert contrast(200, 1) == 200.0
        assert contrast(300, 1) == 255.0
        assert contrast(-5, 1) == 0.0

    def test_stretch(self):
        """Values move away from mid-gray by the factor."""
        assert contrast(138, 2) == 148.0
        assert contrast(118, 2) == 108.0
        assert contrast(255, 1.8) == 255.0

    def test_zero_factor_flattens(self):
        """Factor 0 maps everything to mid-gray."""
        assert contrast(0, 0) == 128.0
        assert contrast(255, 0) == 128.0

    def test_array_input(self):
        """Arrays in, arrays out."""
        result = contrast(np.array([0.0, 128.0, 255.0]), float("inf"))
        assert isinstance(result, np.ndarray)
        assert list(result) == [0.0, 128.0, 255.0]

    def test_scalar_returns_float(self):
        """Scalars in, floats out."""
        assert isinstance(contrast(10, 1), float)


class TestClampAndQuantize:
    """Tests for clamp_byte and to_bytes."""

    def test_clamp(self):
        """Values outside 0-255 are clamped."""
        assert clamp_byte(-1) == 0.0
        assert clamp_byte(256) == 255.0
        assert clamp_byte(12.5) == 12.5

    def test_clamp_nan(self):
        """NaN clamps to 0."""
        assert clamp_byte(float("nan")) == 0.0

    def test_to_bytes_rounds_half_to_even(self):
        """Quantization rounds half to even."""
        result = to_bytes(np.array([0.5, 1.5, 2.5, 254.6, 300.0, -4.0]))
        assert result.dtype == np.uint8
        assert list(result) == [0, 2, 2, 255, 255, 0]


class TestSanitize:
    """Tests for knob sanitizing."""

    def test_in_range_value_kept(self):
        assert sanitize(1.5, 1.0, 0.0, 5.0) == 1.5

    def test_out_of_range_clamped(self):
        assert sanitize(9.0, 1.0, 0.0, 5.0) == 5.0
        assert sanitize(-9.0, 1.0, 0.0, 5.0) == 0.0

    def test_nan_falls_back_to_default(self):
        assert sanitize(float("nan"), 1.8, 0.0, 5.0) == 1.8

    def test_infinity_clamps_to_bound(self):
        assert sanitize(float("inf"), 1.0, 0.0, 5.0) == 5.0
        assert sanitize(float("-inf"), 1.0, 0.0, 5.0) == 0.0

    def test_unbounded_infinity_falls_back(self):
        assert sanitize(float("inf"), 190.0) == 190.0

    def test_non_numeric_falls_back(self):
        assert sanitize("garbage", 0.85, 0.0, 2.0) == 0.85
        assert sanitize(None, 0.85, 0.0, 2.0) == 0.85

    def test_numeric_string_accepted(self):
        assert sanitize("2.5", 1.0, 0.0, 5.0) == 2.5


class TestHsvToRgb:
    """Tests for HSV conversion."""

    @pytest.mark.parametrize("hue,expected", [
        (0, (255, 0, 0)),
        (60, (255, 255, 0)),
        (120, (0, 255, 0)),
        (180, (0, 255, 255)),
        (240, (0, 0, 255)),
        (300, (255, 0, 255)),
        (360, (255, 0, 0)),
        (-120, (0, 0, 255)),
    ])
    def test_primary_hues(self, hue, expected):
        """Full saturation and value give primaries and secondaries."""
        assert hsv_to_rgb(hue, 1, 1) == expected

    def test_zero_saturation_is_gray(self):
        """No saturation gives a gray of the value."""
        assert hsv_to_rgb(190, 0, 1) == (255, 255, 255)
        assert hsv_to_rgb(190, 0, 0.5) == (128, 128, 128)

    def test_zero_value_is_black(self):
        assert hsv_to_rgb(190, 1, 0) == (0, 0, 0)

    def test_out_of_range_inputs_clamped(self):
        """Saturation and value are clamped to 0-1."""
        assert hsv_to_rgb(0, 5, 5) == (255, 0, 0)
        assert hsv_to_rgb(0, -1, 1) == (255, 255, 255)

    def test_default_outline_color(self):
        """Hue 190 at full saturation is a cyan blue."""
        r, g, b = hsv_to_rgb(190, 1, 1)
        assert (r, b) == (0, 255)
        assert g == math.floor(255 * (1 - 10 / 60) + 0.5)


class TestScreenBlend:
    """Tests for screen compositing."""

    def test_zero_alpha_keeps_base(self):
        assert screen_blend(0.3, 1.0, 0.0) == pytest.approx(0.3)

    def test_full_alpha_white_blend(self):
        assert screen_blend(0.3, 1.0, 1.0) == pytest.approx(1.0)

    def test_black_blend_keeps_base(self):
        assert screen_blend(0.6, 0.0, 1.0) == pytest.approx(0.6)

    def test_formula(self):
        assert screen_blend(0.5, 0.5, 1.0) == pytest.approx(0.75)

    def test_alpha_clamped(self):
        """Alpha outside 0-1 (and NaN) is clamped before blending."""
        assert screen_blend(0.5, 0.5, 3.0) == pytest.approx(0.75)
        assert screen_blend(0.5, 0.5, -1.0) == pytest.approx(0.5)
        assert screen_blend(0.5, 0.5, float("nan")) == pytest.approx(0.5)

    def test_broadcast(self):
        """Arrays broadcast channel-wise."""
        base = np.zeros((2, 2, 3))
        alpha = np.ones((2, 2, 1))
        result = screen_blend(base, np.array([1.0, 0.5, 0.0]), alpha)
        assert result.shape == (2, 2, 3)
        assert np.allclose(result[0, 0], [1.0, 0.5, 0.0])
