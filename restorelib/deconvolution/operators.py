"""Toroidal (periodic-boundary) convolution operators.

The image is treated as a torus: kernel taps that fall off one edge wrap
around to the opposite edge. Nothing is clamped or zero-padded, so a
uniform field is a fixed point of the normalized convolution.

For output pixel (x, y), with half-extents a = Wk // 2 and b = Hk // 2:

    out[y, x] = sum_{i, j} kernel[Hk-1-j, Wk-1-i] * img[(y-b+j) % H, (x-a+i) % W]

divided by the PSF divisor. The kernel is read in reversed order, making
this a true convolution rather than a correlation.
"""

from typing import Callable, Tuple

import torch

from ..core.errors import DegenerateFilter, InvalidDimensions, NonOddKernelSize
from ..core.image import PSF, Image
from .base import check_inputs

__all__ = ["toroidal_convolve", "convolve", "make_toroidal_convolver"]


def toroidal_convolve(maps: torch.Tensor, kernel: torch.Tensor, divisor: float) -> torch.Tensor:
    """Convolve pixel maps with a kernel, wrapping at the edges.

    Cost is O(W * H * Wk * Hk) per channel. Each kernel tap is applied to
    all pixels (and all channels) at once as a rolled copy of the input.

    Args:
        maps: Tensor of shape (..., H, W); leading dimensions are
            channels and are convolved independently.
        kernel: 2D tensor of shape (Hk, Wk), both odd.
        divisor: Normalization constant, usually the kernel sum.

    Returns:
        Tensor with the same shape as ``maps``.

    Raises:
        InvalidDimensions: If ``maps`` has fewer than 2 or ``kernel`` not
            exactly 2 dimensions.
        NonOddKernelSize: If a kernel side is even.
        DegenerateFilter: If ``divisor`` is zero.
    """
    if maps.ndim < 2:
        raise InvalidDimensions(f"Pixel maps must be at least 2D, got shape {tuple(maps.shape)}")
    if kernel.ndim != 2:
        raise InvalidDimensions(f"Kernel must be 2D, got shape {tuple(kernel.shape)}")
    kh, kw = kernel.shape
    if kh % 2 != 1 or kw % 2 != 1:
        raise NonOddKernelSize(f"Kernel cannot be of size ({kw}, {kh})")
    if divisor == 0:
        raise DegenerateFilter("Kernel divisor is 0")

    a = kw // 2
    b = kh // 2
    out = torch.zeros_like(maps)
    for i in range(kw):
        for j in range(kh):
            weight = kernel[kh - j - 1, kw - i - 1]
            # rolled[y, x] == maps[(y - b + j) % H, (x - a + i) % W]
            out += weight * torch.roll(maps, shifts=(b - j, a - i), dims=(-2, -1))
    return out / divisor


def convolve(image: Image, psf: PSF) -> Image:
    """Blur an image with a PSF using toroidal boundary handling.

    Example:
        >>> img = Image(torch.full((1, 4, 4), 0.5))
        >>> psf = PSF(Image(torch.ones(1, 3, 3)))
        >>> convolve(img, psf).data  # still 0.5 everywhere
    """
    divisor = check_inputs(image, psf)
    return Image(toroidal_convolve(image.data, psf.kernel, divisor))


def make_toroidal_convolver(
    psf: PSF,
) -> Tuple[Callable[[torch.Tensor], torch.Tensor], Callable[[torch.Tensor], torch.Tensor]]:
    """Create forward and adjoint toroidal convolution operators.

    Args:
        psf: Non-degenerate PSF.

    Returns:
        Tuple (C, C_adj) where:
            - C(x): convolution with the PSF
            - C_adj(y): convolution with the 180-degree rotated PSF, the
              adjoint of C under periodic boundaries

    Example:
        >>> C, C_adj = make_toroidal_convolver(psf)
        >>> blurred = C(image.data)
        >>> correlated = C_adj(blurred)

    Note:
        Both operators divide by the divisor of the original PSF.
    """
    divisor = psf.require_nondegenerate()
    kernel = psf.kernel
    kernel_rotated = psf.rotated().kernel

    def forward(x: torch.Tensor) -> torch.Tensor:
        """Apply forward convolution."""
        return toroidal_convolve(x, kernel, divisor)

    def adjoint(y: torch.Tensor) -> torch.Tensor:
        """Apply adjoint (convolution with the rotated PSF)."""
        return toroidal_convolve(y, kernel_rotated, divisor)

    return forward, adjoint
