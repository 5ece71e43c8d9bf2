"""Groove tracing for Vixyl decoding.

Recovers the draw order of the groove pixels by walking 8-connected,
fully opaque pixels from the anchor until the groove runs out.

Neighbor selection when more than one unvisited candidate touches the
current pixel:
1. Fewest unvisited groove neighbors of the candidate (the current pixel
   excluded). At an elbow of three mutually touching pixels this takes
   the near end first instead of stranding it.
2. Edge neighbors before diagonal neighbors.
3. Scan order N, E, S, W, NE, SE, SW, NW.
"""

from __future__ import annotations

import numpy as np
import structlog

from .errors import TrackError
from .pixels import Pixel, Point
from .raster import RasterImage

logger = structlog.get_logger(__name__)

# Edge neighbors first, then diagonals; order is part of the tie-break
NEIGHBOR_OFFSETS = (
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
    (1, -1),
    (1, 1),
    (-1, 1),
    (-1, -1),
)


def _open_neighbors(image: RasterImage, visited: np.ndarray, x: int, y: int) -> list[tuple[int, int]]:
    """Unvisited groove pixels around (x, y), in NEIGHBOR_OFFSETS order."""
    found = []
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        if image.is_groove(nx, ny) and not visited[ny, nx]:
            found.append((nx, ny))
    return found


def read_track(image: RasterImage, start: Point) -> list[Pixel]:
    """Read the groove pixels in draw order.

    Args:
        image: Decoded Vixyl raster.
        start: Anchor position in canvas coordinates.

    Returns:
        Groove pixels, first drawn first.

    Raises:
        TrackError: If start is outside the image or not a groove pixel.
    """
    if not image.is_groove(start.x, start.y):
        raise TrackError(f"Anchor ({start.x}, {start.y}) is not on the groove")

    visited = np.zeros((image.height, image.width), dtype=bool)
    x, y = start.x, start.y
    visited[y, x] = True
    pixels = [image.get_pixel(x, y)]
    forks = 0

    while True:
        candidates = _open_neighbors(image, visited, x, y)
        if not candidates:
            break
        if len(candidates) > 1:
            forks += 1
            # Stable sort: equal counts keep scan order
            candidates.sort(key=lambda c: len(_open_neighbors(image, visited, *c)))
        x, y = candidates[0]
        visited[y, x] = True
        pixels.append(image.get_pixel(x, y))

    logger.debug("track_read", start=(start.x, start.y), pixels=len(pixels), forks=forks)

    return pixels
