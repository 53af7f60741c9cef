"""Exceptions raised by the restoration algorithms.

Shape and validity problems derive from ``ValueError``; failures that can
only be detected mid-computation derive from ``ArithmeticError``.
"""

__all__ = [
    "RestorationError",
    "InvalidDimensions",
    "UnsupportedChannelCount",
    "NonOddKernelSize",
    "DegenerateFilter",
    "SizeMismatch",
    "SingularSystem",
    "ComputationError",
]


class RestorationError(Exception):
    """Base class for all restorelib errors."""


class InvalidDimensions(RestorationError, ValueError):
    """Non-positive image size, wrong tensor rank, or bad transform length."""


class UnsupportedChannelCount(RestorationError, ValueError):
    """Channel count is not 1 or 3 (or a PSF is not single-channel)."""


class NonOddKernelSize(RestorationError, ValueError):
    """PSF width or height is even, so it has no center pixel."""


class DegenerateFilter(RestorationError, ValueError):
    """PSF weights sum to zero."""


class SizeMismatch(RestorationError, ValueError):
    """Operands of a transform or convolution primitive disagree in length."""


class SingularSystem(RestorationError, ArithmeticError):
    """No nonzero pivot was found while eliminating a column."""


class ComputationError(RestorationError, ArithmeticError):
    """A denominator became exactly zero during an iterative update."""
