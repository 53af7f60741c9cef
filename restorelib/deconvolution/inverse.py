"""Frequency-domain inverse filtering.

Every channel is flattened (row-major) and zero-padded, together with the
flattened PSF, to a common power-of-two length L. In the frequency domain
each channel bin is divided by the matching PSF bin:

    F(k) = G(k) / H(k)

Bins where H(k) is exactly (0, 0) are skipped and keep the observed
value. There is no regularization: bins where H(k) is small but nonzero
amplify noise without bound. The PSF spectrum is not normalized by the
divisor, so the model inverted here is the unnormalized circular
convolution of the flattened sequences (see ``toy.spectral_problem``).
"""

import torch

from ..core.image import PSF, Image
from ..utils.fourier import forward_transform, inverse_transform
from ..utils.padding import form_spectra
from .base import DeconvolutionResult, check_inputs

__all__ = ["solve_inverse", "zero_guard_mask"]


def zero_guard_mask(psf_spectrum: torch.Tensor) -> torch.Tensor:
    """True where a PSF bin may be divided by (real or imaginary part nonzero)."""
    return (psf_spectrum.real != 0) | (psf_spectrum.imag != 0)


def solve_inverse(image: Image, psf: PSF) -> DeconvolutionResult:
    """Deconvolve by dividing spectra bin by bin.

    Args:
        image: Observed (blurred) image, 1 or 3 channels.
        psf: Non-degenerate PSF.

    Returns:
        DeconvolutionResult with the restored image. ``metadata`` holds
        the transform length and the number of skipped (zero) PSF bins.

    Raises:
        DegenerateFilter: If the PSF weights sum to zero.

    Example:
        >>> result = solve_inverse(observed, psf)
        >>> restored = result.restored.to_numpy()
    """
    check_inputs(image, psf)
    size = image.num_pixels

    spectra = form_spectra(image, psf.num_pixels)
    length = spectra.shape[-1]
    psf_spectrum = form_spectra(psf.image, length)[0]
    forward_transform(psf_spectrum)
    divisible = zero_guard_mask(psf_spectrum)

    restored = torch.empty_like(image.data)
    for k in range(image.num_channels):
        channel = spectra[k]
        forward_transform(channel)
        channel[divisible] = channel[divisible] / psf_spectrum[divisible]
        inverse_transform(channel)
        restored[k] = channel.real[:size].reshape(image.height, image.width)

    return DeconvolutionResult(
        restored=Image(restored),
        metadata={
            "algorithm": "inverse-filter",
            "transform_length": length,
            "zero_bins": int((~divisible).sum()),
        },
    )
