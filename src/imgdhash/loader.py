"""Image decoding through Pillow."""

from pathlib import Path

from PIL import Image

from .grid import PixelGrid
from .logging import get_logger

logger = get_logger(__name__)


class ImageDecodeError(Exception):
    """Raised when an image file cannot be opened or decoded."""


def load_pixel_grid(image_path: Path) -> PixelGrid:
    """
    Open an image file and decode it into a PixelGrid.

    Args:
        image_path: Path to the image file

    Returns:
        PixelGrid holding the decoded samples

    Raises:
        ImageDecodeError: If the file is missing, unreadable or not a decodable image
    """
    image_path = Path(image_path)
    try:
        with Image.open(image_path) as img:
            # Force the full decode while the file is still open
            img.load()
            grid = PixelGrid.from_image(img)
    except Exception as exc:
        raise ImageDecodeError(f"Failed to decode image {image_path}: {exc}") from exc

    logger.debug(f"Decoded {image_path}: {grid.width}x{grid.height}, {grid.channels} channel(s)")
    return grid
