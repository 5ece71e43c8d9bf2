"""Spiral encoder for Vixyl images.

Converts a file into a DrawingPlan: the ordered groove pixels paired
with the spiral points they are drawn on.

Encoding algorithm:
1. Resolve the payload codec from the format tag
2. Lay out header, type and payload as pixels
3. Generate a spiral with exactly one point per pixel
4. Size the canvas to the spiral radius plus a fixed margin

The plan is independent of any drawing surface; see renderer.py for
turning it into an image.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from .formats import FormatTag, get_codec, resolve_tag
from .pixels import Pixel, Point
from .protocol import FileInfo, build_pixels
from .spiral import generate_spiral

logger = structlog.get_logger(__name__)

# Canvas diameter beyond the spiral's bounding square
CANVAS_MARGIN = 10

__all__ = ["CANVAS_MARGIN", "DrawingPlan", "FileInfo", "encode"]


@dataclass
class DrawingPlan:
    """Everything needed to draw a Vixyl image.

    Attributes:
        points: Spiral points, relative to the canvas center.
        pixels: Groove pixels, pixels[i] is drawn at points[i].
        radius: Spiral bounding radius.
        format_tag: Format used for the payload.
    """

    points: list[Point]
    pixels: list[Pixel]
    radius: int
    format_tag: FormatTag = FormatTag.GRAY

    @property
    def diameter(self) -> int:
        """Canvas width and height in pixels."""
        return self.radius * 2 + CANVAS_MARGIN

    @property
    def anchor(self) -> Point:
        """First groove point, recorded in the image for decoding."""
        return self.points[0]


def encode(file: FileInfo, format_tag: int = FormatTag.GRAY) -> DrawingPlan:
    """Encode a file into a Vixyl drawing plan.

    Args:
        file: Type label and content to encode.
        format_tag: Payload format (see FormatTag).

    Returns:
        DrawingPlan ready for rendering.

    Raises:
        UnknownFormatError: If format_tag is not registered.
        Int24OverflowError: If the type or data is too long for a 24-bit prefix.
        ValueError: If the file type holds characters above U+00FF.
    """
    tag = resolve_tag(format_tag)
    codec = get_codec(tag)

    pixels = build_pixels(file, tag, codec)
    spiral = generate_spiral(len(pixels))

    logger.debug(
        "vixyl_encoded",
        file_type=file.type,
        data_bytes=len(file.data),
        pixels=len(pixels),
        radius=spiral.radius,
        format=tag.name,
    )

    return DrawingPlan(
        points=spiral.points,
        pixels=pixels,
        radius=spiral.radius,
        format_tag=tag,
    )
