"""
Image Fetcher.

Asynchronous remote image loading with a local byte cache and per-consumer
cancellation of superseded requests.

Usage:
    # Fetch one image (cache first, then network)
    image-fetcher fetch https://example.com/logo.png --output logo.png

    # Show configuration and cache status
    image-fetcher info

    # Empty the disk cache
    image-fetcher clear-cache
"""

__version__ = "0.1.0"

from .binding import ImageSlot
from .decoding import ImageDecodeError, decode_image
from .service import ImageService, cache_key

__all__ = [
    "ImageDecodeError",
    "ImageService",
    "ImageSlot",
    "cache_key",
    "decode_image",
]
