"""Raster rendering for Vixyl images.

Draws a DrawingPlan onto a drawing surface:
- Background disk: the record, in the background color (never fully opaque)
- Inner disk: white label just inside the innermost groove turn
- Optional overlay image centered on the label
- Groove: one fully opaque pixel per plan point
- Corner: signature pixels on row 0, anchor pixels on row 1

Opacity is what separates the groove from the record: the track reader
follows only fully opaque pixels, so the background alpha must stay
below 255.
"""

from __future__ import annotations

import io
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import structlog
from PIL import Image, ImageDraw

from .encoder import DrawingPlan
from .formats import SIGNATURE_POSITIONS, signature_pixels
from .pixels import Pixel, encode_int24_pixel

logger = structlog.get_logger(__name__)

# Anchor pixel positions (x and y of the groove start, canvas coordinates)
ANCHOR_POSITIONS = ((0, 1), (1, 1))

# Gap between the label disk and the innermost groove point
INNER_DISK_GAP = 5

DEFAULT_BACKGROUND = (0, 0, 0, 0.99)
LABEL_COLOR = (255, 255, 255, 255)


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert a hex color string to (r, g, b) tuple."""
    h = hex_color.lstrip("#")
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


@dataclass(frozen=True)
class RenderOptions:
    """Decorative rendering options.

    Attributes:
        background: (r, g, b, alpha) of the record disk, alpha in [0, 1).
        overlay_path: Optional image pasted at the center of the label.
    """

    background: tuple[int, int, int, float] = DEFAULT_BACKGROUND
    overlay_path: str | None = None

    def __post_init__(self) -> None:
        r, g, b, alpha = self.background
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise ValueError(f"Background channels must be 0-255, got {(r, g, b)}")
        if not 0.0 <= alpha or round(alpha * 255) >= 255:
            raise ValueError(f"Background alpha must be below full opacity, got {alpha}")

    @classmethod
    def from_hex(cls, hex_color: str, alpha: float = DEFAULT_BACKGROUND[3]) -> RenderOptions:
        """Build options from a "#rrggbb" background color."""
        return cls(background=(*_hex_to_rgb(hex_color), alpha))

    @property
    def background_rgba(self) -> tuple[int, int, int, int]:
        r, g, b, alpha = self.background
        return (r, g, b, round(alpha * 255))


class DrawingSurface(Protocol):
    """Minimal raster canvas used by render()."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def clear(self) -> None: ...

    def draw_filled_circle(
        self, cx: float, cy: float, r: float, color: tuple[int, int, int, int]
    ) -> None: ...

    def draw_pixel(self, x: int, y: int, pixel: Pixel) -> None: ...

    def paste(self, image: Image.Image, x: int, y: int) -> None: ...


class PillowSurface:
    """DrawingSurface backed by an RGBA Pillow image.

    Shapes replace the pixels they cover (no alpha blending), so the
    background keeps exactly the requested opacity.
    """

    def __init__(self, width: int, height: int) -> None:
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self.image)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def clear(self) -> None:
        self._draw.rectangle((0, 0, self.width, self.height), fill=(0, 0, 0, 0))

    def draw_filled_circle(
        self, cx: float, cy: float, r: float, color: tuple[int, int, int, int]
    ) -> None:
        self._draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=color)

    def draw_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        self.image.putpixel((x, y), pixel.as_rgba())

    def paste(self, image: Image.Image, x: int, y: int) -> None:
        self.image.alpha_composite(image.convert("RGBA"), dest=(x, y))

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()


def _load_overlay(path: str, max_radius: float) -> Image.Image:
    """Load an overlay image that must fit inside the label disk."""
    overlay = Image.open(path)
    overlay.load()
    half_diagonal = math.hypot(overlay.width, overlay.height) / 2
    if half_diagonal > max_radius:
        raise ValueError(
            f"Overlay {overlay.width}x{overlay.height} does not fit inside the "
            f"label (radius {max_radius})"
        )
    return overlay


def render(
    plan: DrawingPlan,
    options: RenderOptions | None = None,
    surface_factory: Callable[[int, int], DrawingSurface] = PillowSurface,
) -> DrawingSurface:
    """Draw a plan onto a new surface.

    Args:
        plan: Encoded drawing plan.
        options: Decorative options; defaults to a near-opaque black record.
        surface_factory: Creates a surface of the given width and height.

    Returns:
        The drawn surface.

    Raises:
        ValueError: If the overlay does not fit inside the label.
    """
    opts = options or RenderOptions()
    size = plan.diameter

    surface = surface_factory(size, size)
    surface.clear()
    cx = surface.width // 2
    cy = surface.height // 2

    # Record and label
    surface.draw_filled_circle(cx, cy, size / 2, opts.background_rgba)
    label_radius = plan.points[-1].x - INNER_DISK_GAP
    if label_radius > 0:
        surface.draw_filled_circle(cx, cy, label_radius, LABEL_COLOR)

    if opts.overlay_path:
        overlay = _load_overlay(opts.overlay_path, label_radius)
        surface.paste(overlay, cx - overlay.width // 2, cy - overlay.height // 2)

    # Groove
    for point, pixel in zip(plan.points, plan.pixels):
        surface.draw_pixel(point.x + cx, point.y + cy, pixel)

    # Signature and anchor
    for (x, y), pixel in zip(SIGNATURE_POSITIONS, signature_pixels(plan.format_tag)):
        surface.draw_pixel(x, y, pixel)
    anchor = plan.anchor
    anchor_pixels = (encode_int24_pixel(anchor.x + cx), encode_int24_pixel(anchor.y + cy))
    for (x, y), pixel in zip(ANCHOR_POSITIONS, anchor_pixels):
        surface.draw_pixel(x, y, pixel)

    logger.debug(
        "vixyl_rendered",
        size=size,
        groove_pixels=len(plan.pixels),
        anchor=(anchor.x + cx, anchor.y + cy),
        overlay=bool(opts.overlay_path),
    )

    return surface


def render_png(plan: DrawingPlan, options: RenderOptions | None = None) -> bytes:
    """Render a plan as PNG image bytes."""
    surface = render(plan, options, surface_factory=PillowSurface)
    png_bytes = surface.to_png()

    logger.debug("png_rendered", size=plan.diameter, bytes=len(png_bytes))
    return png_bytes
