"""
Raster data models for Rover Lens.

This module defines the core data structures every pipeline stage reads
and produces.

Classes:
    RasterBuffer: RGBA pixel grid that owns its pixel memory
    ScalarField: Single float value per pixel (grayscale, gradient magnitude, ...)

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
    HsvColor: A tuple of (hue degrees 0-360, saturation 0-1, value 0-1)
"""

from dataclasses import dataclass, field
from typing import Any, Sequence, Tuple

import numpy as np

from RL_Libs.constants import CHANNELS
from RL_Libs.errors import InvalidBuffer, OutOfBounds

RgbaColor = Tuple[int, int, int, int]
RgbColor = Tuple[int, int, int]
HsvColor = Tuple[float, float, float]


def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidBuffer(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidBuffer(f"{name} must be >= 0, got {value}")
    return int(value)


@dataclass
class RasterBuffer:
    """
    In-memory RGBA raster with fixed channel order (R, G, B, A).

    The pixel bytes are copied into a private bytearray at construction, so
    later changes to the caller's buffer never leak in. Pipeline stages never
    mutate a RasterBuffer they receive; use clone() before writing to one
    you need to keep.

    Attributes:
        width: Number of columns
        height: Number of rows
        pixels: width * height * 4 channel bytes, row-major

    Raises:
        InvalidBuffer: If the dimensions are not non-negative integers or the
            byte length does not equal width * height * 4
    """
    width: int
    height: int
    pixels: bytearray = field(repr=False)

    def __post_init__(self) -> None:
        self.width = _check_dimension("width", self.width)
        self.height = _check_dimension("height", self.height)

        try:
            data = bytearray(self.pixels)
        except (TypeError, ValueError) as exc:
            raise InvalidBuffer(f"pixels must be a byte sequence: {exc}") from exc

        expected = self.width * self.height * CHANNELS
        if len(data) != expected:
            raise InvalidBuffer(
                f"Expected {expected} bytes for a {self.width}x{self.height} RGBA raster, "
                f"got {len(data)}"
            )
        self.pixels = data

    @classmethod
    def blank(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 0)) -> "RasterBuffer":
        """Create a raster filled with a single RGBA color."""
        width = _check_dimension("width", width)
        height = _check_dimension("height", height)
        return cls(width, height, bytes(color) * (width * height))

    @classmethod
    def from_array(cls, array: Any) -> "RasterBuffer":
        """
        Create a raster from a (height, width, 4) array of byte values.

        Raises:
            InvalidBuffer: If the array is not 3-dimensional with 4 channels
        """
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise InvalidBuffer(f"Expected array of shape (height, width, 4), got {arr.shape}")
        height, width = arr.shape[:2]
        return cls(width, height, np.ascontiguousarray(arr, dtype=np.uint8).tobytes())

    def to_array(self) -> np.ndarray:
        """Return a writable (height, width, 4) uint8 copy of the pixels."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS
        ).copy()

    def to_bytes(self) -> bytes:
        return bytes(self.pixels)

    def clone(self) -> "RasterBuffer":
        return RasterBuffer(self.width, self.height, self.pixels)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} raster"
            )
        return (y * self.width + x) * CHANNELS

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        """
        Read the four channels of one pixel.

        Raises:
            OutOfBounds: If (x, y) lies outside the raster
        """
        offset = self._offset(x, y)
        r, g, b, a = self.pixels[offset:offset + CHANNELS]
        return r, g, b, a

    def set_pixel(self, x: int, y: int, rgba: Sequence[int]) -> None:
        """
        Write the four channels of one pixel.

        Raises:
            OutOfBounds: If (x, y) lies outside the raster
            ValueError: If rgba does not hold 4 values in 0-255
        """
        offset = self._offset(x, y)
        values = [int(v) for v in rgba]
        if len(values) != CHANNELS:
            raise ValueError(f"Expected 4 channel values, got {len(values)}")
        if any(v < 0 or v > 255 for v in values):
            raise ValueError(f"Channel values must be 0-255, got {tuple(values)}")
        self.pixels[offset:offset + CHANNELS] = bytes(values)


@dataclass(eq=False)
class ScalarField:
    """
    Single-value-per-pixel grid with the dimensions of its source raster.

    Attributes:
        width: Number of columns
        height: Number of rows
        values: float32 array of shape (height, width)
    """
    width: int
    height: int
    values: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        self.width = _check_dimension("width", self.width)
        self.height = _check_dimension("height", self.height)

        values = np.asarray(self.values, dtype=np.float32)
        if values.size != self.width * self.height:
            raise InvalidBuffer(
                f"Expected {self.width * self.height} values for a "
                f"{self.width}x{self.height} field, got {values.size}"
            )
        self.values = values.reshape(self.height, self.width)

    @classmethod
    def zeros(cls, width: int, height: int) -> "ScalarField":
        return cls(width, height, np.zeros((height, width), dtype=np.float32))

    @classmethod
    def from_array(cls, array: Any) -> "ScalarField":
        arr = np.asarray(array, dtype=np.float32)
        if arr.ndim != 2:
            raise InvalidBuffer(f"Expected array of shape (height, width), got {arr.shape}")
        return cls(arr.shape[1], arr.shape[0], arr)

    def copy(self) -> "ScalarField":
        return ScalarField(self.width, self.height, self.values.copy())

    def get(self, x: int, y: int) -> float:
        """
        Read one value.

        Raises:
            OutOfBounds: If (x, y) lies outside the field
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(
                f"Point ({x}, {y}) is outside the {self.width}x{self.height} field"
            )
        return float(self.values[y, x])

    def max(self) -> float:
        """Largest value in the field, 0.0 for an empty field."""
        if self.values.size == 0:
            return 0.0
        return float(self.values.max())
