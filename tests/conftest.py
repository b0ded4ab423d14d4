"""
Pytest configuration and shared fixtures for Rover Lens tests.

This module provides shared test fixtures and raster factories
used across multiple test modules.
"""

import numpy as np
import pytest

from RL_Libs.RasterLib.raster_models import RasterBuffer


def make_uniform_raster(width, height, color=(255, 255, 255, 255)):
    """Build a raster filled with one RGBA color."""
    return RasterBuffer(width, height, bytes(color) * (width * height))


def make_random_raster(width, height, seed=0):
    """Build a raster of reproducible random bytes."""
    rng = np.random.default_rng(seed)
    data = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return RasterBuffer.from_array(data)


def make_split_raster(width, height, split_x, left=(0, 0, 0, 255), right=(255, 255, 255, 255)):
    """Build a raster with a vertical boundary at column split_x."""
    data = np.empty((height, width, 4), dtype=np.uint8)
    data[:, :split_x] = left
    data[:, split_x:] = right
    return RasterBuffer.from_array(data)


@pytest.fixture
def white_raster():
    """4x4 all-white opaque raster."""
    return make_uniform_raster(4, 4)


@pytest.fixture
def random_raster():
    """16x12 raster of random bytes (alpha included)."""
    return make_random_raster(16, 12, seed=42)


@pytest.fixture
def split_raster():
    """8x6 raster, black on the left half and white on the right half."""
    return make_split_raster(8, 6, 4)
