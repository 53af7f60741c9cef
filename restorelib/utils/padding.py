"""Zero-padding of pixel maps into power-of-two complex spectra."""

from typing import Optional

import torch

from ..core.errors import InvalidDimensions
from ..core.image import Image

__all__ = ["next_power_of_two", "form_spectra"]


def next_power_of_two(n: int) -> int:
    """Smallest power of two that is >= n (and >= 1)."""
    if n < 0:
        raise InvalidDimensions(f"Length cannot be negative, got {n}")
    size = 1
    while size < n:
        size *= 2
    return size


def form_spectra(image: Image, min_length: Optional[int] = None) -> torch.Tensor:
    """Flatten each channel into a zero-padded complex sequence.

    The padded length is the next power of two >= max(image pixel count,
    ``min_length``). Pixels are taken in row-major order.

    Args:
        image: Source image.
        min_length: Lower bound on the padded length, e.g. the pixel count
            of a PSF that must share the same transform size.

    Returns:
        Complex128 tensor of shape (channels, L).

    Example:
        >>> spectra = form_spectra(Image.zeros(5, 3))
        >>> spectra.shape
        torch.Size([1, 16])
    """
    size = image.num_pixels
    length = next_power_of_two(max(size, min_length or 0))
    spectra = torch.zeros(image.num_channels, length, dtype=torch.complex128)
    spectra[:, :size] = image.data.reshape(image.num_channels, size)
    return spectra
