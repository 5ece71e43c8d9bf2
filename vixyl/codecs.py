"""Payload codecs: how file bytes become groove pixels and back."""

from __future__ import annotations

from typing import Protocol

from .pixels import Pixel


class PayloadCodec(Protocol):
    """Bidirectional byte <-> pixel mapping for the payload section.

    pixels_to_bytes may return more bytes than were encoded; the layout
    protocol truncates to the declared payload length.
    """

    def bytes_to_pixels(self, data: bytes) -> list[Pixel]: ...

    def pixels_to_bytes(self, pixels: list[Pixel]) -> bytes: ...


class GrayCodec:
    """One byte per pixel, stored in all three channels."""

    def bytes_to_pixels(self, data: bytes) -> list[Pixel]:
        return [Pixel(byte, byte, byte) for byte in data]

    def pixels_to_bytes(self, pixels: list[Pixel]) -> bytes:
        return bytes(p.red for p in pixels)
