"""restorelib - Image restoration from a known point-spread function.

Restores a blurred image given the point-spread function (PSF) that
produced the blur, under periodic (toroidal) boundary conditions.

The library is organized into four modules:

- **core**: Image and PSF containers plus the error taxonomy
- **utils**: power-of-two FFT engine and spectrum padding
- **deconvolution**: toroidal convolution, inverse filtering,
  Richardson-Lucy and the direct linear solver (PyTorch-based)
- **psf**: synthetic PSFs (NumPy-based)

Example:
    >>> import numpy as np
    >>> from restorelib import Image, make_psf, convolve, deconvolve
    >>>
    >>> latent = Image.from_numpy(np.random.rand(6, 6))
    >>> psf = make_psf(3, 3, kind="radial")
    >>> observed = convolve(latent, psf)
    >>>
    >>> result = deconvolve(observed, psf, method="direct")
    >>> np.allclose(result.restored.to_numpy(), latent.to_numpy())
    True
"""

__version__ = "0.1.0"

# =============================================================================
# Core Module - Data structures and errors
# =============================================================================
from .core import (
    Image,
    PSF,
    clip_to_unit_range,
    to_grayscale,
    RestorationError,
    InvalidDimensions,
    UnsupportedChannelCount,
    NonOddKernelSize,
    DegenerateFilter,
    SizeMismatch,
    SingularSystem,
    ComputationError,
)

# =============================================================================
# Utils Module - Spectral transform engine
# =============================================================================
from .utils import (
    forward_transform,
    inverse_transform,
    conjugate,
    multiply,
    spectral_convolution,
    next_power_of_two,
    form_spectra,
)

# =============================================================================
# Deconvolution Module
# =============================================================================
from .deconvolution import (
    DeconvolutionResult,
    convolve,
    make_toroidal_convolver,
    solve_inverse,
    solve_rl,
    solve_direct,
    deconvolve,
)

# =============================================================================
# PSF Module
# =============================================================================
from .psf import make_psf

__all__ = [
    # Version
    "__version__",
    # Core data structures
    "Image",
    "PSF",
    "clip_to_unit_range",
    "to_grayscale",
    # Errors
    "RestorationError",
    "InvalidDimensions",
    "UnsupportedChannelCount",
    "NonOddKernelSize",
    "DegenerateFilter",
    "SizeMismatch",
    "SingularSystem",
    "ComputationError",
    # Spectral transform
    "forward_transform",
    "inverse_transform",
    "conjugate",
    "multiply",
    "spectral_convolution",
    "next_power_of_two",
    "form_spectra",
    # Deconvolution
    "DeconvolutionResult",
    "convolve",
    "make_toroidal_convolver",
    "solve_inverse",
    "solve_rl",
    "solve_direct",
    "deconvolve",
    # PSF synthesis
    "make_psf",
]
