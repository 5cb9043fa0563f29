"""64-bit difference hash signature."""

from __future__ import annotations

from dataclasses import dataclass

import imagehash
import numpy as np

SIGNATURE_BITS = 64
_MASK = (1 << SIGNATURE_BITS) - 1


@dataclass(frozen=True, order=True)
class Signature:
    """
    Immutable 64-bit dhash value.

    Bits are packed row-major, most significant bit first: the comparison for
    row r, column c lives at bit ``63 - (8 * r + c)``.
    """
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, np.integer)):
            raise ValueError(f"Signature value must be an integer, got {type(self.value).__name__}")
        if not 0 <= int(self.value) <= _MASK:
            raise ValueError(f"Signature value out of 64-bit range: {self.value}")
        object.__setattr__(self, "value", int(self.value))

    @classmethod
    def from_hex(cls, text: str) -> Signature:
        try:
            value = int(text, 16)
        except ValueError as exc:
            raise ValueError(f"Invalid hex signature: {text!r}") from exc
        return cls(value)

    @classmethod
    def from_image_hash(cls, image_hash: imagehash.ImageHash) -> Signature:
        """Convert an 8x8 imagehash.ImageHash into a Signature."""
        if image_hash.hash.size != SIGNATURE_BITS:
            raise ValueError(
                f"ImageHash has {image_hash.hash.size} bits, expected {SIGNATURE_BITS}"
            )
        return cls.from_hex(str(image_hash))

    def bits(self) -> np.ndarray:
        """Return the signature as an 8x8 boolean array in row-major order."""
        flat = [(self.value >> (SIGNATURE_BITS - 1 - i)) & 1 for i in range(SIGNATURE_BITS)]
        return np.array(flat, dtype=bool).reshape(8, 8)

    def to_image_hash(self) -> imagehash.ImageHash:
        return imagehash.ImageHash(self.bits())

    def complement(self) -> Signature:
        return Signature(~self.value & _MASK)

    def hex(self) -> str:
        return f"{self.value:016x}"

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
