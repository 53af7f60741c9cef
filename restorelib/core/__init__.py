"""Core data structures: images, PSFs and the error taxonomy."""

from .errors import (
    ComputationError,
    DegenerateFilter,
    InvalidDimensions,
    NonOddKernelSize,
    RestorationError,
    SingularSystem,
    SizeMismatch,
    UnsupportedChannelCount,
)
from .image import PSF, Image, clip_to_unit_range, to_grayscale

__all__ = [
    "Image",
    "PSF",
    "clip_to_unit_range",
    "to_grayscale",
    "RestorationError",
    "InvalidDimensions",
    "UnsupportedChannelCount",
    "NonOddKernelSize",
    "DegenerateFilter",
    "SizeMismatch",
    "SingularSystem",
    "ComputationError",
]
