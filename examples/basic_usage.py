#!/usr/bin/env python3
"""Basic usage example for Vixyl.

Demonstrates encoding a file into a Vixyl image and decoding it back.

Usage:
    python examples/basic_usage.py
"""

import hashlib
import sys
import os

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vixyl.decoder import decode_image
from vixyl.encoder import FileInfo, encode
from vixyl.renderer import RenderOptions, render_png


def example_basic_roundtrip():
    """Encode a short text file and decode it back."""
    print("=" * 60)
    print("Example 1: Basic Encode/Decode Roundtrip")
    print("=" * 60)

    file = FileInfo(type="txt", data=b"Hello")
    print(f"  Input type:  {file.type}")
    print(f"  Data bytes:  {len(file.data)}")

    # Encode
    plan = encode(file)
    print(f"  Groove:      {len(plan.pixels)} pixels")
    print(f"  Canvas:      {plan.diameter}x{plan.diameter}")

    # Render as PNG
    png_bytes = render_png(plan)
    print(f"  PNG size:    {len(png_bytes)} bytes")

    # Decode
    result = decode_image(png_bytes)
    print(f"  Decoded:     {result.type!r} {result.data!r}")
    print(f"  Match:       {result == file}")
    print()


def example_record_colors():
    """Render the same file on differently colored records."""
    print("=" * 60)
    print("Example 2: Record Colors")
    print("=" * 60)

    file = FileInfo(type="md", data=b"# Side A\n\n1. Intro\n2. Outro\n")
    plan = encode(file)

    for color in ["#000000", "#7A1F1F", "#1F3A7A", "#2E5E2E"]:
        png = render_png(plan, RenderOptions.from_hex(color))
        ok = decode_image(png) == file
        print(f"  Record {color}:  PNG {len(png):6d} bytes, roundtrip={'ok' if ok else 'FAILED'}")

    print()


def example_binary_file():
    """Press a binary payload and check its digest after playback."""
    print("=" * 60)
    print("Example 3: Binary Payload")
    print("=" * 60)

    data = hashlib.sha256(b"vixyl").digest() * 64
    print(f"  Input:         {len(data)} bytes, sha256 {hashlib.sha256(data).hexdigest()[:16]}...")

    plan = encode(FileInfo(type="bin", data=data))
    png = render_png(plan)
    print(f"  Spiral radius: {plan.radius}")
    print(f"  PNG size:      {len(png)} bytes")

    result = decode_image(png)
    print(f"  Output:        {len(result.data)} bytes, sha256 {hashlib.sha256(result.data).hexdigest()[:16]}...")
    print(f"  Roundtrip OK:  {result.data == data}")
    print()


if __name__ == "__main__":
    example_basic_roundtrip()
    example_record_colors()
    example_binary_file()
    print("All examples completed successfully.")
