"""
Tests for the five effects.

Tests cover:
- None effect identity
- Threshold output values and inversion
- Edges on flat and split images, dilation and recontrast
- Sharpen interior and border handling
- Outline opacity, color and dilation
- Knob sanitizing for out-of-range and non-finite values
"""

import unittest

import numpy as np

from RL_Libs.EffectsLib.edges_effect import apply_edges, edge_map
from RL_Libs.EffectsLib.effect_params import (
    EdgesParams,
    NoEffectParams,
    OutlineParams,
    SharpenParams,
    ThresholdParams,
)
from RL_Libs.EffectsLib.effect_registry import apply_identity
from RL_Libs.EffectsLib.outline_effect import apply_outline, outline_color, outline_mask
from RL_Libs.EffectsLib.sharpen_effect import apply_sharpen
from RL_Libs.EffectsLib.threshold_effect import apply_threshold
from RL_Libs.RasterLib.raster_models import RasterBuffer

from conftest import make_random_raster, make_split_raster, make_uniform_raster


class TestNoEffect(unittest.TestCase):
    """Test the identity effect."""

    def test_identity_copy(self):
        """Test the output equals the input but is a new buffer."""
        raster = make_random_raster(5, 4, seed=1)
        result = apply_identity(raster, NoEffectParams())
        self.assertEqual(result, raster)
        self.assertIsNot(result, raster)
        self.assertIsNot(result.pixels, raster.pixels)


class TestThresholdEffect(unittest.TestCase):
    """Test the threshold effect."""

    def setUp(self):
        """Create a random raster with random alpha."""
        self.raster = make_random_raster(10, 7, seed=3)

    def test_only_black_and_white(self):
        """Test every channel is 0 or 255 and alpha is opaque."""
        array = apply_threshold(self.raster, ThresholdParams()).to_array()
        self.assertTrue(set(np.unique(array[:, :, :3])).issubset({0, 255}))
        self.assertTrue(np.all(array[:, :, 3] == 255))
        self.assertTrue(np.all(array[:, :, 0] == array[:, :, 1]))
        self.assertTrue(np.all(array[:, :, 1] == array[:, :, 2]))

    def test_luma_weighting(self):
        """Test pure red is dark and pure green is bright."""
        red = make_uniform_raster(2, 2, (255, 0, 0, 0))
        green = make_uniform_raster(2, 2, (0, 255, 0, 0))
        self.assertEqual(apply_threshold(red, ThresholdParams()).get_pixel(0, 0), (0, 0, 0, 255))
        self.assertEqual(apply_threshold(green, ThresholdParams()).get_pixel(0, 0), (255, 255, 255, 255))

    def test_shift_moves_cutoff(self):
        """Test raising the shift turns mid-gray black."""
        raster = make_uniform_raster(2, 2, (150, 150, 150, 255))
        self.assertEqual(apply_threshold(raster, ThresholdParams(shift=1.0)).get_pixel(0, 0)[0], 255)
        self.assertEqual(apply_threshold(raster, ThresholdParams(shift=1.5)).get_pixel(0, 0)[0], 0)

    def test_invert(self):
        """Test inversion swaps black and white."""
        normal = apply_threshold(self.raster, ThresholdParams()).to_array()
        inverted = apply_threshold(self.raster, ThresholdParams(invert=True)).to_array()
        self.assertTrue(np.all(normal[:, :, :3] == 255 - inverted[:, :, :3]))
        self.assertTrue(np.all(inverted[:, :, 3] == 255))

    def test_string_invert_flag(self):
        """Test textual booleans are understood."""
        raster = make_uniform_raster(1, 1, (255, 255, 255, 255))
        result = apply_threshold(raster, ThresholdParams(invert="yes"))
        self.assertEqual(result.get_pixel(0, 0), (0, 0, 0, 255))


class TestEdgesEffect(unittest.TestCase):
    """Test the edge-detection effect."""

    def test_flat_image_is_white(self):
        """Test a 4x4 white image with defaults renders all white."""
        raster = make_uniform_raster(4, 4)
        result = apply_edges(raster, EdgesParams())
        self.assertEqual(result, make_uniform_raster(4, 4))

    def test_edge_pixels_are_dark(self):
        """Test the boundary column is darker than flat regions."""
        raster = make_split_raster(8, 6, 4)
        array = apply_edges(raster, EdgesParams(thickness=0)).to_array()
        self.assertEqual(array[2, 3, 0], 0)
        self.assertEqual(array[2, 4, 0], 0)
        self.assertEqual(array[2, 1, 0], 255)
        self.assertTrue(np.all(array[:, :, 3] == 255))
        self.assertTrue(np.all(array[:, :, 0] == array[:, :, 2]))

    def test_border_ring_is_white(self):
        """Test the unprocessed border ring has zero magnitude and renders white."""
        raster = make_split_raster(8, 6, 4)
        array = apply_edges(raster, EdgesParams(thickness=0)).to_array()
        self.assertTrue(np.all(array[0, :, 0] == 255))
        self.assertTrue(np.all(array[:, -1, 0] == 255))

    def test_dilation_runs_on_inverted_map(self):
        """Test thickness dilates the bright background over the dark lines."""
        raster = make_split_raster(12, 6, 6)
        thin = apply_edges(raster, EdgesParams(thickness=0)).to_array()
        thick = apply_edges(raster, EdgesParams(thickness=1)).to_array()
        self.assertTrue(np.all(thick[:, :, 0] >= thin[:, :, 0]))

    def test_recontrast_zero_is_mid_gray(self):
        """Test recontrast 0 flattens the result to mid-gray."""
        raster = make_random_raster(6, 6, seed=5)
        array = apply_edges(raster, EdgesParams(recontrast=0)).to_array()
        self.assertTrue(np.all(array[:, :, :3] == 128))

    def test_threshold_zero_strength_one(self):
        """Test threshold 0 zeroes the map before contrast."""
        raster = make_random_raster(6, 6, seed=5)
        field = edge_map(raster, EdgesParams(threshold=0, strength=1, thickness=0))
        self.assertEqual(field.max(), 0.0)

    def test_out_of_range_knobs(self):
        """Test non-finite and out-of-range knobs still render."""
        raster = make_random_raster(6, 6, seed=2)
        params = EdgesParams(strength=float("nan"), threshold=-4, thickness=float("inf"), recontrast=99)
        result = apply_edges(raster, params)
        self.assertEqual(result.size, (6, 6))
        self.assertEqual(result, apply_edges(raster, params.clamped()))


class TestSharpenEffect(unittest.TestCase):
    """Test the sharpen effect."""

    def test_border_ring_unchanged(self):
        """Test the one-pixel ring is copied from the source, alpha included."""
        raster = make_random_raster(6, 5, seed=7)
        source = raster.to_array()
        result = apply_sharpen(raster, SharpenParams(amount=2.0)).to_array()
        np.testing.assert_array_equal(result[0, :], source[0, :])
        np.testing.assert_array_equal(result[-1, :], source[-1, :])
        np.testing.assert_array_equal(result[:, 0], source[:, 0])
        np.testing.assert_array_equal(result[:, -1], source[:, -1])

    def test_interior_alpha_opaque(self):
        """Test interior pixels get alpha 255."""
        raster = make_uniform_raster(5, 5, (10, 20, 30, 40))
        result = apply_sharpen(raster, SharpenParams()).to_array()
        self.assertTrue(np.all(result[1:-1, 1:-1, 3] == 255))
        self.assertEqual(result[0, 0, 3], 40)

    def test_flat_region_unchanged_at_amount_one(self):
        """Test a flat color survives sharpening with amount 1."""
        raster = make_uniform_raster(5, 5, (10, 200, 90, 255))
        self.assertEqual(apply_sharpen(raster, SharpenParams(amount=1.0)), raster)

    def test_amount_zero_is_mid_gray(self):
        """Test amount 0 maps the interior to mid-gray."""
        raster = make_random_raster(5, 5, seed=8)
        result = apply_sharpen(raster, SharpenParams(amount=0)).to_array()
        self.assertTrue(np.all(result[1:-1, 1:-1, :3] == 128))

    def test_overshoot_clamped(self):
        """Test a bright center on black saturates at 255."""
        array = np.zeros((3, 3, 4), dtype=np.uint8)
        array[:, :, 3] = 255
        array[1, 1] = (200, 200, 200, 255)
        result = apply_sharpen(RasterBuffer.from_array(array), SharpenParams())
        self.assertEqual(result.get_pixel(1, 1), (255, 255, 255, 255))

    def test_small_raster_unchanged(self):
        """Test rasters without an interior come back unchanged."""
        raster = make_random_raster(2, 7, seed=9)
        self.assertEqual(apply_sharpen(raster, SharpenParams(amount=3)), raster)


class TestOutlineEffect(unittest.TestCase):
    """Test the colored outline effect."""

    def test_zero_opacity_keeps_rgb(self):
        """Test opacity 0 leaves RGB unchanged and sets alpha 255."""
        raster = make_random_raster(8, 8, seed=11)
        source = raster.to_array()
        result = apply_outline(raster, OutlineParams(opacity=0)).to_array()
        np.testing.assert_array_equal(result[:, :, :3], source[:, :, :3])
        self.assertTrue(np.all(result[:, :, 3] == 255))

    def test_flat_image_unchanged(self):
        """Test a flat image has no outline."""
        raster = make_uniform_raster(6, 6, (40, 50, 60, 255))
        self.assertEqual(apply_outline(raster, OutlineParams(opacity=2)), raster)

    def test_edges_take_outline_color(self):
        """Test strong edges on black screen to the outline color."""
        raster = make_uniform_raster(8, 6, (0, 0, 0, 255))
        raster.set_pixel(4, 3, (255, 255, 255, 255))
        params = OutlineParams(width=0, hue=0, saturation=3, opacity=1)
        result = apply_outline(raster, params)
        # the strongest gradient is next to the bright pixel, on black
        self.assertEqual(result.get_pixel(3, 3), (255, 0, 0, 255))

    def test_mask_range(self):
        """Test the mask stays within 0-1 with and without dilation."""
        raster = make_random_raster(9, 9, seed=12)
        for width in (0, 1, 3):
            mask = outline_mask(raster, OutlineParams(width=width))
            self.assertLessEqual(mask.max(), 1.0 + 1e-6)
            self.assertGreaterEqual(float(mask.values.min()), 0.0)

    def test_width_grows_mask(self):
        """Test dilation never shrinks the mask."""
        raster = make_random_raster(9, 9, seed=13)
        thin = outline_mask(raster, OutlineParams(width=0)).values
        thick = outline_mask(raster, OutlineParams(width=2)).values
        self.assertTrue(np.all(thick >= thin - 1e-6))

    def test_outline_color(self):
        """Test saturation is divided by 3 and hue wraps."""
        self.assertEqual(outline_color(OutlineParams(hue=0, saturation=3)), (255, 0, 0))
        self.assertEqual(outline_color(OutlineParams(hue=360, saturation=3)), (255, 0, 0))
        self.assertEqual(outline_color(OutlineParams(hue=0, saturation=0)), (255, 255, 255))

    def test_non_finite_knobs(self):
        """Test non-finite knobs still render."""
        raster = make_random_raster(7, 7, seed=14)
        params = OutlineParams(width=float("nan"), hue=float("inf"),
                               saturation=float("-inf"), opacity=float("nan"))
        result = apply_outline(raster, params)
        self.assertEqual(result.size, (7, 7))


if __name__ == '__main__':
    unittest.main()
