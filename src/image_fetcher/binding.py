"""
Display-slot binding.

An ImageSlot stands in for a widget that shows one remote image. It owns its
ImageService, so two slots never cancel each other's downloads.
"""

import asyncio
from collections.abc import Callable

from PIL import Image as PILImage

from .service import ImageService


class ImageSlot:
    """Shows the most recently requested remote image."""

    def __init__(self, service_factory: Callable[[], ImageService] | None = None):
        """
        Initialize the slot.

        Args:
            service_factory: Builds this slot's ImageService on first use.
                Defaults to one wired to the process-wide cache and network.
        """
        self.image: PILImage.Image | None = None
        self._service_factory = service_factory
        self._service: ImageService | None = None

    @property
    def service(self) -> ImageService:
        """Get or create the coordinator owned by this slot."""
        if self._service is None:
            factory = self._service_factory
            if factory is None:
                from .shared import default_image_service

                factory = default_image_service
            self._service = factory()
        return self._service

    def set_image(
        self,
        url: str,
        placeholder: PILImage.Image | None = None,
    ) -> asyncio.Task[None]:
        """
        Show a placeholder, then the image at ``url`` once it arrives.

        If the download fails the placeholder stays in place.

        Args:
            url: Remote image URL
            placeholder: Image to show until the real one is delivered

        Returns:
            The coordinator's cache lookup task
        """
        self.image = placeholder
        return self.service.fetch(url, self._show)

    def _show(self, image: PILImage.Image) -> None:
        self.image = image
