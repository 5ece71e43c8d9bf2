"""Format tags and the image signature that carries them.

The top-left corner of every Vixyl image spells the magic text across
two pixels, with the format tag smuggled into the last channel:

    (0, 0) = ('V', 'i', 'x') = (86, 105, 120)
    (1, 0) = ('y', 'l', tag) = (121, 108, tag)
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import Protocol

import structlog

from .codecs import GrayCodec, PayloadCodec
from .errors import InvalidHeaderError, UnknownFormatError
from .pixels import Pixel

logger = structlog.get_logger(__name__)

MAGIC = "Vixyl"

# Signature pixel positions in canvas coordinates
SIGNATURE_POSITIONS = ((0, 0), (1, 0))


class FormatTag(IntEnum):
    """Closed set of payload layouts (one byte on the wire)."""

    GRAY = 0


_CODECS: dict[FormatTag, Callable[[], PayloadCodec]] = {
    FormatTag.GRAY: GrayCodec,
}


class PixelSource(Protocol):
    """Random-access read-only pixel source."""

    def get_pixel(self, x: int, y: int) -> Pixel: ...


def resolve_tag(tag: int) -> FormatTag:
    """Map a raw tag byte onto a registered FormatTag.

    Raises:
        UnknownFormatError: If no codec is registered for tag.
    """
    try:
        format_tag = FormatTag(tag)
    except ValueError:
        raise UnknownFormatError(f"Unknown format tag: {tag}") from None
    if format_tag not in _CODECS:
        raise UnknownFormatError(f"Unknown format tag: {tag}")
    return format_tag


def get_codec(tag: int) -> PayloadCodec:
    """Instantiate the payload codec registered for tag.

    Raises:
        UnknownFormatError: If no codec is registered for tag.
    """
    return _CODECS[resolve_tag(tag)]()


def signature_pixels(tag: FormatTag) -> tuple[Pixel, Pixel]:
    """Pixels written at SIGNATURE_POSITIONS for the given tag."""
    codes = [ord(c) for c in MAGIC]
    return Pixel(codes[0], codes[1], codes[2]), Pixel(codes[3], codes[4], int(tag))


def read_signature(image: PixelSource) -> FormatTag:
    """Validate the corner signature and return the format tag it carries.

    Raises:
        InvalidHeaderError: If any of the five magic channels differs.
        UnknownFormatError: If the tag has no registered codec.
    """
    vix = image.get_pixel(*SIGNATURE_POSITIONS[0])
    yl = image.get_pixel(*SIGNATURE_POSITIONS[1])
    expected_vix, expected_yl = signature_pixels(FormatTag.GRAY)

    if vix != expected_vix or yl.red != expected_yl.red or yl.green != expected_yl.green:
        logger.warning(
            "signature_mismatch",
            vix=(vix.red, vix.green, vix.blue),
            yl=(yl.red, yl.green),
        )
        raise InvalidHeaderError("Invalid header: image is not a Vixyl")

    return resolve_tag(yl.blue)
