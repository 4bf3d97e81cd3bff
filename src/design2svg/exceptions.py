"""Exceptions raised by design2svg.

Failures that make an artifact impossible to produce propagate to the caller
as subclasses of :class:`Design2SVGError`. Font resolution failures are never
raised; they degrade to a stylesheet import instead.
"""


class Design2SVGError(Exception):
    """Base class for all design2svg errors."""


class MissingLogoError(Design2SVGError, ValueError):
    """An operation that needs a logo was called without one."""


class ImageDecodeError(Design2SVGError):
    """The logo resource could not be fetched or decoded."""


class InvalidGeometryError(Design2SVGError, ValueError):
    """The logo has unusable dimensions (zero or negative)."""


class RasterDecodeError(Design2SVGError):
    """The composed SVG could not be decoded by the rasterizer."""


class RasterContextError(Design2SVGError):
    """The off-screen drawing surface could not be acquired."""
