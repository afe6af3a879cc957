"""Raster image decoding with Pillow.

The vectorization pipeline consumes decoded RGBA pixel grids only. This
module is the codec boundary: every format Pillow understands is decoded
and converted to RGBA here.
"""

from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from glyphforge.domain import PixelGrid
from glyphforge.exceptions import InvalidImageError


def image_to_pixel_grid(image: Image.Image) -> PixelGrid:
    """Convert a Pillow image of any mode to a PixelGrid."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    width, height = image.size
    return PixelGrid(width=width, height=height, data=image.tobytes())


def decode_pixel_grid(data: bytes) -> PixelGrid:
    """Decode encoded image bytes (PNG, GIF, BMP, JPEG, ...).

    Raises:
        InvalidImageError: If the bytes are not a decodable image
    """
    if not data:
        raise InvalidImageError("empty image data")

    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            return image_to_pixel_grid(image)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise InvalidImageError(str(e)) from e


def load_pixel_grid(path: Path) -> PixelGrid:
    """Read and decode an image file.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidImageError: If the file is not a decodable image
    """
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")
    return decode_pixel_grid(path.read_bytes())
