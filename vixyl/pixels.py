"""Pixel and point primitives for Vixyl encoding.

Handles conversion between bytes, text and 24-bit integers and the
pixels that carry them along the groove.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import Int24OverflowError

# Largest value a single 24-bit pixel can carry
MAX_INT24 = 0xFFFFFF


@dataclass(frozen=True)
class Point:
    """Integer lattice position, relative to the canvas center."""

    x: int
    y: int


@dataclass(frozen=True)
class Pixel:
    """An RGB pixel with 8-bit channels."""

    red: int
    green: int
    blue: int

    def as_rgba(self, alpha: int = 255) -> tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, alpha)


def is_neighbor(a: Point, b: Point) -> bool:
    """True if a and b are 8-connected (or equal)."""
    return abs(a.x - b.x) <= 1 and abs(a.y - b.y) <= 1


def gray_pixel(value: int) -> Pixel:
    """Build a gray pixel with every channel set to value.

    Raises:
        ValueError: If value is not a byte.
    """
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Gray value must be 0-255, got {value}")
    return Pixel(value, value, value)


def encode_int24_pixel(value: int) -> Pixel:
    """Encode an unsigned 24-bit integer as one pixel.

    Layout: red = most significant byte, green = middle byte,
    blue = least significant byte.

    Args:
        value: Integer in 0..16777215.

    Returns:
        Pixel carrying the value.

    Raises:
        Int24OverflowError: If value is negative or exceeds 24 bits.
    """
    if not 0 <= value <= MAX_INT24:
        raise Int24OverflowError(f"Value {value} does not fit in 24 bits (max {MAX_INT24})")
    return Pixel((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def decode_int24_pixel(pixel: Pixel) -> int:
    """Decode a pixel written by encode_int24_pixel."""
    return (pixel.red << 16) | (pixel.green << 8) | pixel.blue


def encode_string_gray_pixels(text: str) -> list[Pixel]:
    """Encode text as one gray pixel per character.

    Raises:
        ValueError: If a character code does not fit in one byte.
    """
    pixels: list[Pixel] = []
    for char in text:
        code = ord(char)
        if code > 0xFF:
            raise ValueError(f"Character {char!r} cannot be stored in a gray pixel")
        pixels.append(Pixel(code, code, code))
    return pixels


def decode_string_gray_pixels(pixels: list[Pixel]) -> str:
    """Rebuild text from gray pixels (one character per pixel, red channel)."""
    return "".join(chr(p.red) for p in pixels)
