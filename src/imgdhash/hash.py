"""Difference hash computation."""

from pathlib import Path
from typing import Optional

import numpy as np

from .config import Settings
from .grid import PixelGrid, luminance_of
from .loader import load_pixel_grid
from .logging import get_logger
from .signature import Signature

logger = get_logger(__name__)

HASH_WIDTH = 8
HASH_HEIGHT = 8
# One extra column so every row yields HASH_WIDTH adjacent comparisons
RESIZED_WIDTH = HASH_WIDTH + 1


def _nearest_indices(source: int, target: int) -> np.ndarray:
    # Pixel-centre mapping: ((2i + 1) * source) // (2 * target)
    idx = ((2 * np.arange(target, dtype=np.int64) + 1) * source) // (2 * target)
    return np.minimum(idx, source - 1)


def _box_bounds(source: int, target: int) -> list:
    bounds = []
    for i in range(target):
        start = (i * source) // target
        stop = max(((i + 1) * source) // target, start + 1)
        bounds.append((start, stop))
    return bounds


def _box_resize(lum: np.ndarray, width: int, height: int) -> np.ndarray:
    result = np.empty((height, width), dtype=np.int64)
    col_bounds = _box_bounds(lum.shape[1], width)
    for r, (top, bottom) in enumerate(_box_bounds(lum.shape[0], height)):
        band = lum[top:bottom]
        for c, (left, right) in enumerate(col_bounds):
            cell = band[:, left:right]
            result[r, c] = int(cell.sum(dtype=np.int64)) // cell.size
    return result


def resize_grid(grid: PixelGrid, resample: str = "nearest", luminance: str = "rec601") -> np.ndarray:
    """
    Reduce a pixel grid to the 8-row by 9-column luminance grid used for hashing.

    ``nearest`` picks the source pixel under each target pixel centre; ``box``
    takes the floor of the mean luminance of the covered source pixels. Both
    use integer arithmetic only, so results do not depend on the platform.
    """
    if resample == "nearest":
        rows = _nearest_indices(grid.height, HASH_HEIGHT)
        cols = _nearest_indices(grid.width, RESIZED_WIDTH)
        sampled = grid.samples[rows[:, None], cols[None, :]]
        return luminance_of(sampled, luminance)
    if resample == "box":
        return _box_resize(grid.luminance(luminance), RESIZED_WIDTH, HASH_HEIGHT)
    raise ValueError(f"Unknown resample mode: {resample!r}")


def gradient_bits(resized: np.ndarray) -> np.ndarray:
    """Return an 8x8 boolean array: True where a pixel is brighter than its right neighbour."""
    if resized.shape != (HASH_HEIGHT, RESIZED_WIDTH):
        raise ValueError(
            f"Expected a {RESIZED_WIDTH}x{HASH_HEIGHT} grid, got {resized.shape[1]}x{resized.shape[0]}"
        )
    # Strict comparison: equal neighbours give 0
    return resized[:, :-1] > resized[:, 1:]


def pack_bits(bits: np.ndarray) -> int:
    """Pack a boolean array row-major, most significant bit first."""
    value = 0
    for bit in np.asarray(bits, dtype=bool).ravel():
        value = (value << 1) | int(bit)
    return value


def compute_hash(grid: PixelGrid, settings: Optional[Settings] = None) -> Signature:
    """
    Compute the 64-bit difference hash of a pixel grid.

    Args:
        grid: Decoded pixel data; read but never modified
        settings: Resampling and luminance choices (defaults when omitted)

    Returns:
        Signature of the grid
    """
    settings = settings or Settings()
    resized = resize_grid(grid, settings.resample, settings.luminance)
    signature = Signature(pack_bits(gradient_bits(resized)))
    logger.debug(f"Computed dhash for {grid!r}: {signature.hex()}")
    return signature


def hash_image_file(image_path: Path, settings: Optional[Settings] = None) -> Signature:
    """
    Load an image from disk and compute its difference hash.

    Raises:
        ImageDecodeError: If the image cannot be loaded or decoded
    """
    return compute_hash(load_pixel_grid(image_path), settings)
