"""Random-access pixel source over a decoded Vixyl image."""

from __future__ import annotations

import io

import numpy as np
import structlog
from PIL import Image

from .errors import InvalidHeaderError, TrackError
from .pixels import Pixel

logger = structlog.get_logger(__name__)

# Alpha of groove, signature and anchor pixels
GROOVE_ALPHA = 255


class RasterImage:
    """Read-only RGBA raster backed by a numpy array of shape (h, w, 4)."""

    def __init__(self, rgba: np.ndarray) -> None:
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise ValueError(f"Expected an (h, w, 4) RGBA array, got shape {rgba.shape}")
        self._rgba = rgba
        self._groove = rgba[:, :, 3] == GROOVE_ALPHA

    @classmethod
    def from_image(cls, img: Image.Image) -> RasterImage:
        """Wrap a Pillow image.

        Raises:
            TrackError: If the image carries no transparency, since the groove
                is told apart from the background by opacity. Palette images
                with a tRNS chunk are accepted.
        """
        if "A" not in img.getbands() and "transparency" not in img.info:
            raise TrackError(f"Image mode {img.mode} has no alpha channel; groove cannot be traced")
        return cls(np.array(img.convert("RGBA"), dtype=np.uint8))

    @classmethod
    def from_bytes(cls, image_bytes: bytes) -> RasterImage:
        """Open encoded image bytes (PNG).

        Raises:
            InvalidHeaderError: If the bytes are not a readable image.
        """
        try:
            img = Image.open(io.BytesIO(image_bytes))
            img.load()
        except Exception as e:
            logger.warning("image_open_failed", error=str(e), error_type=type(e).__name__)
            raise InvalidHeaderError(f"Cannot open image: {e}") from e
        return cls.from_image(img)

    @property
    def width(self) -> int:
        return self._rgba.shape[1]

    @property
    def height(self) -> int:
        return self._rgba.shape[0]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Pixel:
        """RGB value at (x, y).

        Raises:
            TrackError: If (x, y) lies outside the image.
        """
        if not self.in_bounds(x, y):
            raise TrackError(f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} image")
        r, g, b, _a = self._rgba[y, x]
        return Pixel(int(r), int(g), int(b))

    def is_groove(self, x: int, y: int) -> bool:
        """True if (x, y) is inside the image and fully opaque."""
        return self.in_bounds(x, y) and bool(self._groove[y, x])
