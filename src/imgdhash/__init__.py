"""Perceptual difference hashing (dhash) for raster images."""

from .config import Settings
from .grid import PixelGrid, InvalidPixelGridError
from .loader import load_pixel_grid, ImageDecodeError
from .signature import Signature
from .hash import compute_hash, hash_image_file, resize_grid, gradient_bits, pack_bits
from .distance import hamming_distance, similarity, is_similar

__all__ = [
    "Settings",
    "PixelGrid",
    "InvalidPixelGridError",
    "load_pixel_grid",
    "ImageDecodeError",
    "Signature",
    "compute_hash",
    "hash_image_file",
    "resize_grid",
    "gradient_bits",
    "pack_bits",
    "hamming_distance",
    "similarity",
    "is_similar",
]
