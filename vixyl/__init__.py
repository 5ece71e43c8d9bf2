"""Vixyl -- encode any file as a spiral groove of pixels on a record-like image.

The payload is laid out pixel by pixel along an adaptive spiral, preceded
by a small self-describing header ("Vixyl" magic, format tag, file type and
length prefixes). Decoding walks the groove from the anchor recorded in the
image corner and reads the same layout back.
"""

from .decoder import decode, decode_image
from .encoder import DrawingPlan, FileInfo, encode
from .formats import FormatTag
from .renderer import RenderOptions, render_png

__all__ = [
    "DrawingPlan",
    "FileInfo",
    "FormatTag",
    "RenderOptions",
    "decode",
    "decode_image",
    "encode",
    "render_png",
]

__version__ = "0.1.0"
