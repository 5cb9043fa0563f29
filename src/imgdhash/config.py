import os
from dataclasses import dataclass

RESAMPLE_MODES = ("nearest", "box")
LUMINANCE_RULES = ("rec601", "mean")


@dataclass
class Settings:
    resample: str = "nearest"
    luminance: str = "rec601"
    similarity_threshold: int = 5
    hex_output: bool = False
    # Set when a threshold was asked for explicitly, by option or environment
    report_similarity: bool = False

    def __post_init__(self) -> None:
        if self.resample not in RESAMPLE_MODES:
            raise ValueError(
                f"Unknown resample mode {self.resample!r}, expected one of {RESAMPLE_MODES}"
            )
        if self.luminance not in LUMINANCE_RULES:
            raise ValueError(
                f"Unknown luminance rule {self.luminance!r}, expected one of {LUMINANCE_RULES}"
            )
        if isinstance(self.similarity_threshold, bool) or not isinstance(self.similarity_threshold, int):
            raise ValueError(
                f"similarity_threshold must be an integer, got {type(self.similarity_threshold).__name__}"
            )
        if not 0 <= self.similarity_threshold <= 64:
            raise ValueError(
                f"similarity_threshold must be within [0, 64], got {self.similarity_threshold}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from IMGDHASH_* environment variables, falling back to defaults."""
        defaults = cls()
        threshold = os.getenv("IMGDHASH_THRESHOLD")
        try:
            similarity_threshold = int(threshold) if threshold else defaults.similarity_threshold
        except ValueError as exc:
            raise ValueError(f"IMGDHASH_THRESHOLD must be an integer, got {threshold!r}") from exc

        return cls(
            resample=os.getenv("IMGDHASH_RESAMPLE", defaults.resample).lower(),
            luminance=os.getenv("IMGDHASH_LUMINANCE", defaults.luminance).lower(),
            similarity_threshold=similarity_threshold,
            hex_output=os.getenv("IMGDHASH_HEX", "").lower() in ("1", "true", "yes", "on"),
            report_similarity=bool(threshold),
        )
