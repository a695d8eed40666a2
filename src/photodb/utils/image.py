import io
import logging
from typing import NamedTuple, Optional

from PIL import Image, ImageFile, UnidentifiedImageError

logger = logging.getLogger(__name__)
ImageFile.LOAD_TRUNCATED_IMAGES = True


class ImageInfo(NamedTuple):
    width: int
    height: int
    color: str


def average_color(img: Image.Image) -> str:
    """Average color of the image as six lowercase hex digits."""
    if img.mode != "RGB":
        img = img.convert("RGB")
    r, g, b = img.resize((1, 1), Image.Resampling.BOX).getpixel((0, 0))
    return f"{r:02x}{g:02x}{b:02x}"


def read_image_info(image_data: bytes) -> Optional[ImageInfo]:
    """
    image_data: Bytes of the full image file.
    Returns: pixel size and average color, or None when the bytes are not an image.
    """
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            width, height = img.size
            color = average_color(img)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.debug(f"Image decoding failed: {e}")
        return None
    except Image.DecompressionBombError as e:
        logger.warning(f"Image too large to decode, size and color skipped: {e}")
        return None
    return ImageInfo(width=width, height=height, color=color)
