"""Exception types raised by the circle transform."""


class CircleTransformError(Exception):
    """Base class for all circle transform failures."""


class InvalidImageError(CircleTransformError, ValueError):
    """Input is not a 2D real-valued numeric image."""


class InvalidConfigError(CircleTransformError, ValueError):
    """A transform option or configuration file is invalid."""
