"""Distance metrics for difference hash comparison."""

from typing import Optional, Union

from .config import Settings
from .signature import SIGNATURE_BITS, Signature

SignatureLike = Union[Signature, int]


def hamming_distance(a: SignatureLike, b: SignatureLike) -> int:
    """
    Calculate Hamming distance between two difference hashes.

    Args:
        a: First hash
        b: Second hash

    Returns:
        Hamming distance (number of differing bits), within [0, 64]
    """
    return (int(Signature(int(a))) ^ int(Signature(int(b)))).bit_count()


def similarity(a: SignatureLike, b: SignatureLike) -> float:
    """Fraction of matching bits: 1.0 for identical hashes, 0.0 for complements."""
    return 1.0 - hamming_distance(a, b) / SIGNATURE_BITS


def is_similar(
    a: SignatureLike,
    b: SignatureLike,
    threshold: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> bool:
    """
    Decide whether two hashes describe the same picture.

    Args:
        a: First hash
        b: Second hash
        threshold: Maximum distance still considered similar; overrides settings
        settings: Source of the default threshold

    Returns:
        True if the distance does not exceed the threshold
    """
    if threshold is None:
        threshold = (settings or Settings()).similarity_threshold
    return hamming_distance(a, b) <= threshold
