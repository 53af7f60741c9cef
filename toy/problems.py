"""Synthetic restoration problems.

Each problem pairs a known latent image with the observation produced by
one of the blur models the solvers invert:

- ``blurred_problem``: toroidal 2D convolution normalized by the PSF
  divisor, the model inverted by Richardson-Lucy and the direct solver.
- ``spectral_problem``: unnormalized circular convolution of the
  flattened channel with the flattened PSF at the padded transform
  length, the model inverted by frequency-domain inverse filtering.
"""

from typing import Optional, Tuple

import numpy as np
import torch

from restorelib.core.image import PSF, Image
from restorelib.deconvolution.operators import convolve
from restorelib.utils.fourier import spectral_convolution
from restorelib.utils.padding import form_spectra


def sparse_points(
    width: int,
    height: int,
    channels: int = 3,
    count: int = 10,
    seed: Optional[int] = None,
) -> Image:
    """Black image with isolated unit pixels.

    Each lit pixel gets exactly one channel (chosen at random) set to 1.0.

    Args:
        width: Image width.
        height: Image height.
        channels: 1 or 3.
        count: Number of lit pixels, capped at the pixel count.
        seed: Random seed for reproducibility.

    Returns:
        Image of shape (channels, height, width).

    Example:
        >>> img = sparse_points(32, 32, channels=1, count=5, seed=0)
        >>> float(img.data.sum())
        5.0
    """
    image = Image.zeros(width, height, channels)
    rng = np.random.default_rng(seed)
    size = width * height
    pixels = rng.choice(size, size=min(count, size), replace=False)
    lit = rng.integers(0, channels, size=len(pixels))
    for pixel, channel in zip(pixels, lit):
        y, x = divmod(int(pixel), width)
        image.data[channel, y, x] = 1.0
    return image


def blurred_problem(latent: Image, psf: PSF) -> Tuple[Image, Image]:
    """Return (latent, observed) with observed = toroidal blur of latent."""
    return latent, convolve(latent, psf)


def spectral_problem(latent: Image, psf: PSF) -> Tuple[Image, Image]:
    """Return (latent, observed) under the flattened circular blur model.

    Every channel is flattened and zero-padded to
    L = next_power_of_two(max(image pixels, PSF pixels)) and circularly
    convolved with the flattened PSF at length L; the first N samples
    form the observation. When the image pixel count is itself a power
    of two, ``solve_inverse`` inverts this model exactly (provided no
    PSF bin is zero).
    """
    size = latent.num_pixels
    spectra = form_spectra(latent, psf.num_pixels)
    length = spectra.shape[-1]

    observed = torch.empty_like(latent.data)
    for k in range(latent.num_channels):
        channel = spectra[k]
        kernel = form_spectra(psf.image, length)[0]
        out = torch.empty_like(channel)
        spectral_convolution(channel, kernel, out)
        observed[k] = out.real[:size].reshape(latent.height, latent.width)
    return latent, Image(observed)
