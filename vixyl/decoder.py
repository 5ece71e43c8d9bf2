"""Image decoder for Vixyl images.

Decodes a Vixyl image back to the original file by:
1. Checking the corner signature and reading the format tag from it
2. Reading the groove start from the two anchor pixels
3. Tracing the groove from the anchor to recover the draw order
4. Checking the groove header against the signature tag
5. Parsing type and payload with the tag's codec

There is no partial recovery: any structural problem raises a
VixylError subclass and no data is returned.
"""

from __future__ import annotations

import structlog

from .formats import PixelSource, get_codec, read_signature
from .pixels import Point, decode_int24_pixel
from .protocol import HEADER_PIXELS, FileInfo, check_track_header, parse_pixels
from .raster import RasterImage
from .renderer import ANCHOR_POSITIONS
from .track import read_track

logger = structlog.get_logger(__name__)


def read_anchor(image: PixelSource) -> Point:
    """Canvas coordinates of the groove start, from the anchor pixels."""
    (x_pos, y_pos) = ANCHOR_POSITIONS
    return Point(
        decode_int24_pixel(image.get_pixel(*x_pos)),
        decode_int24_pixel(image.get_pixel(*y_pos)),
    )


def decode(image: RasterImage) -> FileInfo:
    """Decode a Vixyl raster into the file it carries.

    Raises:
        InvalidHeaderError: If the signature or groove header is wrong.
        UnknownFormatError: If the format tag is not registered.
        TrackError: If the groove cannot be traced or is too short.
    """
    tag = read_signature(image)
    codec = get_codec(tag)

    start = read_anchor(image)
    pixels = read_track(image, start)

    check_track_header(pixels, tag)
    file = parse_pixels(pixels[HEADER_PIXELS:], codec)

    logger.info(
        "decode_success",
        format=tag.name,
        file_type=file.type,
        data_bytes=len(file.data),
        groove_pixels=len(pixels),
    )
    return file


def decode_image(image_bytes: bytes) -> FileInfo:
    """Decode PNG bytes of a Vixyl image.

    Args:
        image_bytes: Raw image file content (PNG with alpha).

    Returns:
        The decoded FileInfo.

    Raises:
        InvalidHeaderError: If the bytes are not a readable Vixyl image.
        UnknownFormatError: If the format tag is not registered.
        TrackError: If the groove cannot be traced or is too short.
    """
    return decode(RasterImage.from_bytes(image_bytes))
