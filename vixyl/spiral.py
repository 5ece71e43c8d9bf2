"""Adaptive spiral path generation for the Vixyl groove.

Walks the Archimedean spiral r = a*t and snaps it to the integer lattice,
adjusting the angular step so that every accepted point touches the
previous one:

1. Candidate = floor(a*t*cos(t+dt)), floor(a*t*sin(t+dt))
2. Same as the previous point -> dt *= 1.5 and retry
3. Not 8-connected to the previous point -> dt /= 2 and retry
4. Accept; if the point two back already touches the candidate, drop
   the point in between so the track stays one pixel thin

Points come out from the inside toward the rim and are reversed before
returning, so index 0 is the last generated point (the decode anchor).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import structlog

from .errors import GenerationBoundsError
from .pixels import Point, is_neighbor

logger = structlog.get_logger(__name__)

# Curve constants
SPIRAL_SCALE = 0.5  # a in r = a*t
START_ANGLE = math.pi * 30
START_STEP = 0.1

# Generation bounds
MAX_STEP_RETRIES = 200  # Rejected candidates allowed for a single point
MIN_DT = 1e-12  # Smallest angular step before giving up


@dataclass
class Spiral:
    """Ordered lattice points of a groove and their bounding radius.

    Attributes:
        points: 8-connected points; index 0 is the last generated point.
        radius: Max infinity norm over every accepted point.
    """

    points: list[Point] = field(default_factory=list)
    radius: int = 0

    @property
    def anchor(self) -> Point:
        """Starting point of the groove for decoding."""
        return self.points[0]


def generate_spiral(length: int, max_retries: int = MAX_STEP_RETRIES) -> Spiral:
    """Generate a spiral groove holding exactly length points.

    Args:
        length: Number of points to keep.
        max_retries: Rejected candidates tolerated per point.

    Returns:
        Spiral with len(points) == length.

    Raises:
        ValueError: If length is negative.
        GenerationBoundsError: If the step adaptation fails to converge.
    """
    if length < 0:
        raise ValueError(f"Spiral length must be non-negative, got {length}")

    points: list[Point] = []
    radius = 0
    raw_steps = 0

    t = START_ANGLE
    dt = START_STEP
    previous: Point | None = None

    while len(points) < length:
        retries = 0
        while True:
            candidate = Point(
                math.floor(SPIRAL_SCALE * t * math.cos(t + dt)),
                math.floor(SPIRAL_SCALE * t * math.sin(t + dt)),
            )
            if previous is None:
                break
            if candidate == previous:
                dt *= 1.5
            elif not is_neighbor(candidate, previous):
                dt /= 2
            else:
                break

            retries += 1
            if retries > max_retries or dt < MIN_DT:
                raise GenerationBoundsError(
                    f"Spiral step did not converge at point {len(points)} "
                    f"(retries={retries}, dt={dt:.3g})"
                )

        # Drop the previous point if the one before it already touches the candidate
        if len(points) > 1 and is_neighbor(points[-2], candidate):
            points.pop()

        radius = max(radius, abs(candidate.x), abs(candidate.y))

        points.append(candidate)
        previous = candidate
        t += dt
        raw_steps += 1

    points.reverse()

    logger.debug("spiral_generated", points=length, raw_steps=raw_steps, radius=radius)

    return Spiral(points=points, radius=radius)
