"""Errors raised by tree construction and grid processing."""


class GeometryError(ValueError):
    """Raised when a tree rectangle is degenerate or inverted."""


class ConvolutionConfigError(ValueError):
    """Raised when a convolution cannot run with the given parameters."""
