"""
Image decoding.

Turns raw bytes into a fully loaded Pillow image.
"""

from io import BytesIO

from PIL import Image as PILImage


class ImageDecodeError(ValueError):
    """Raised when bytes cannot be decoded into an image."""


def decode_image(data: bytes) -> PILImage.Image:
    """
    Decode raw bytes into an image.

    Pillow opens images lazily, so the pixel data is loaded here to make
    truncated or corrupt payloads fail immediately rather than on first use.

    Args:
        data: Encoded image bytes (PNG, JPEG, GIF, ...)

    Returns:
        Loaded PIL image

    Raises:
        ImageDecodeError: If the bytes are empty or not a decodable image
    """
    if not data:
        raise ImageDecodeError("No image data")

    try:
        img = PILImage.open(BytesIO(data))
        img.load()
    except Exception as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e
    return img
