"""Byte <-> pixel layout of a Vixyl groove.

Groove layout (one entry per pixel, in draw order):
- 5 gray pixels: "Vixyl"
- 1 gray pixel: format tag
- 1 24-bit pixel: file type length
- N gray pixels: file type, one character each
- 1 24-bit pixel: payload length
- payload pixels from the format's codec
"""

from __future__ import annotations

from dataclasses import dataclass

from .codecs import PayloadCodec
from .errors import InvalidHeaderError, Int24OverflowError, TrackError
from .formats import MAGIC, FormatTag
from .pixels import (
    MAX_INT24,
    Pixel,
    decode_int24_pixel,
    decode_string_gray_pixels,
    encode_int24_pixel,
    encode_string_gray_pixels,
    gray_pixel,
)

# Magic text + format tag
HEADER_PIXELS = len(MAGIC) + 1


@dataclass(frozen=True)
class FileInfo:
    """A file as carried by a Vixyl image.

    Attributes:
        type: Short type label (e.g. an extension such as "txt").
        data: Raw file content.
    """

    type: str
    data: bytes


def check_lengths(file: FileInfo) -> None:
    """Reject files whose length prefixes would not fit in 24 bits.

    Raises:
        Int24OverflowError: If the type or payload is too long.
    """
    if len(file.type) > MAX_INT24:
        raise Int24OverflowError(f"File type too long: {len(file.type)} characters (max {MAX_INT24})")
    if len(file.data) > MAX_INT24:
        raise Int24OverflowError(f"Data too large: {len(file.data)} bytes (max {MAX_INT24})")


def build_pixels(file: FileInfo, tag: FormatTag, codec: PayloadCodec) -> list[Pixel]:
    """Lay out a file as the ordered pixel sequence of a groove.

    Args:
        file: File to encode.
        tag: Format tag written after the magic text.
        codec: Payload codec matching tag.

    Returns:
        Full pixel sequence, header first.

    Raises:
        Int24OverflowError: If a length prefix does not fit in 24 bits.
        ValueError: If the file type holds characters above U+00FF.
    """
    check_lengths(file)

    return [
        *encode_string_gray_pixels(MAGIC),
        gray_pixel(int(tag)),
        encode_int24_pixel(len(file.type)),
        *encode_string_gray_pixels(file.type),
        encode_int24_pixel(len(file.data)),
        *codec.bytes_to_pixels(file.data),
    ]


def check_track_header(pixels: list[Pixel], tag: FormatTag) -> None:
    """Verify the groove starts with the magic text and the expected tag.

    Raises:
        InvalidHeaderError: If the first HEADER_PIXELS pixels do not match.
    """
    expected = [*encode_string_gray_pixels(MAGIC), gray_pixel(int(tag))]
    if pixels[:HEADER_PIXELS] != expected:
        raise InvalidHeaderError("Invalid header: groove does not start with the Vixyl magic")


def parse_pixels(pixels: list[Pixel], codec: PayloadCodec) -> FileInfo:
    """Rebuild a file from the groove pixels that follow the header.

    Args:
        pixels: Groove pixels after the magic text and format tag.
        codec: Payload codec resolved from the format tag.

    Returns:
        The decoded FileInfo; codec output is truncated to the declared length.

    Raises:
        TrackError: If the sequence is shorter than its length prefixes claim.
    """
    if not pixels:
        raise TrackError("Groove ended before the file type length")
    type_length = decode_int24_pixel(pixels[0])

    type_end = 1 + type_length
    if len(pixels) <= type_end:
        raise TrackError(
            f"Groove ended inside the file type ({len(pixels)} pixels, type length {type_length})"
        )
    file_type = decode_string_gray_pixels(pixels[1:type_end])

    data_length = decode_int24_pixel(pixels[type_end])
    data = codec.pixels_to_bytes(pixels[type_end + 1 :])
    if len(data) < data_length:
        raise TrackError(f"Groove ended after {len(data)} of {data_length} data bytes")

    return FileInfo(type=file_type, data=data[:data_length])
