"""Pixel grids and the luminance rules used to reduce them to grayscale."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image

# Integer Rec. 601 weights; they sum to 1000 so a uniform offset on every
# channel shifts luminance by exactly that offset.
REC601_WEIGHTS = (299, 587, 114)


class InvalidPixelGridError(ValueError):
    """Raised when sample data cannot form a non-empty pixel grid."""


def _work_dtype(dtype: np.dtype) -> type:
    # 16-bit samples times the weight total still fit in int32
    return np.int32 if np.dtype(dtype).itemsize <= 2 else np.int64


def luminance_of(samples: np.ndarray, rule: str = "rec601") -> np.ndarray:
    """
    Reduce an (H, W) or (H, W, C) sample array to (H, W) integer luminance.

    Single-channel data is used as-is. A fourth (alpha) channel and a second
    channel of luminance-alpha data are ignored. Channels are widened one at a
    time so large images are never copied whole into a wide dtype.
    """
    values = np.asarray(samples)
    dtype = _work_dtype(values.dtype)
    if values.ndim == 2:
        return values.astype(dtype)

    channels = values.shape[2]
    if channels in (1, 2):
        return values[:, :, 0].astype(dtype)

    red, green, blue = (values[:, :, i].astype(dtype) for i in range(3))
    if rule == "rec601":
        r, g, b = REC601_WEIGHTS
        return (r * red + g * green + b * blue + 500) // 1000
    if rule == "mean":
        return (red + green + blue) // 3
    raise ValueError(f"Unknown luminance rule: {rule!r}")


class PixelGrid:
    """
    A read-only view over decoded image samples.

    Samples are stored row-major as a numpy array of shape (height, width) for
    single-intensity data or (height, width, channels) for colour data. The
    caller keeps ownership of the array; nothing in this package writes to it.
    """

    def __init__(self, samples: np.ndarray) -> None:
        data = np.asarray(samples)
        if data.ndim not in (2, 3):
            raise InvalidPixelGridError(
                f"Pixel data must be 2D or 3D, got {data.ndim} dimension(s)"
            )
        if data.shape[0] < 1 or data.shape[1] < 1:
            raise InvalidPixelGridError(
                f"Pixel grid must be at least 1x1, got {data.shape[1]}x{data.shape[0]}"
            )
        if data.ndim == 3 and data.shape[2] not in (1, 2, 3, 4):
            raise InvalidPixelGridError(
                f"Unsupported channel count: {data.shape[2]}"
            )
        if not (np.issubdtype(data.dtype, np.integer) or np.issubdtype(data.dtype, np.bool_)):
            raise InvalidPixelGridError(
                f"Pixel samples must be integers, got dtype {data.dtype}"
            )
        self._samples = data

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence]) -> PixelGrid:
        """Build a grid from nested rows of intensities or channel tuples."""
        try:
            data = np.array(rows, dtype=np.int64)
        except ValueError as exc:
            raise InvalidPixelGridError(f"Rows do not form a rectangular grid: {exc}") from exc
        return cls(data)

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelGrid:
        """
        Build a grid from a decoded Pillow image.

        8-bit and 16/32-bit integer modes keep their full sample depth.
        Floating point images are rejected; palette, CMYK, YCbCr and the
        other 8-bit modes go through RGB.
        """
        if image.mode == "F":
            raise InvalidPixelGridError("Floating point images are not supported")
        if image.mode == "I" or image.mode.startswith("I;16"):
            return cls(np.asarray(image))
        if image.mode not in ("L", "LA", "RGB", "RGBA"):
            image = image.convert("RGB")
        return cls(np.asarray(image))

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    @property
    def width(self) -> int:
        return int(self._samples.shape[1])

    @property
    def height(self) -> int:
        return int(self._samples.shape[0])

    @property
    def channels(self) -> int:
        return 1 if self._samples.ndim == 2 else int(self._samples.shape[2])

    def sample(self, x: int, y: int):
        """Return the sample at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self.height} grid")
        value = self._samples[y, x]
        if self._samples.ndim == 2:
            return int(value)
        return tuple(int(channel) for channel in value)

    def luminance(self, rule: str = "rec601") -> np.ndarray:
        return luminance_of(self._samples, rule)

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height}, channels={self.channels})"
