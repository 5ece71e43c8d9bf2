"""Error types raised by the Vixyl codec.

Every error derives from ValueError so callers that treat bad input as a
ValueError (the HTTP layer maps it to 422) need no special casing.
"""

from __future__ import annotations


class VixylError(ValueError):
    """Base class for all Vixyl encode/decode failures."""


class InvalidHeaderError(VixylError):
    """The image signature or the groove header does not spell Vixyl."""


class UnknownFormatError(VixylError):
    """The format tag has no registered payload codec."""


class Int24OverflowError(VixylError):
    """A value does not fit in a 24-bit pixel."""


class GenerationBoundsError(VixylError):
    """The spiral generator exceeded its retry or step bounds."""


class TrackError(VixylError):
    """The groove could not be followed or ended too early."""
