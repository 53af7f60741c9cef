"""Image deconvolution algorithms using PyTorch.

The deconvolution problem is formulated as:
    b = C(x)

where:
    - b: observed blurred image
    - x: unknown latent image
    - C: forward operator (toroidal convolution with the PSF)

Three strategies are provided:

- **inverse**: frequency-domain division of spectra (fast, unregularized)
- **lucy**: Richardson-Lucy multiplicative iterations
- **direct**: exact solve of the dense circulant system (small images only)

Each solver takes an Image and a PSF and returns a DeconvolutionResult.

Example:
    >>> import numpy as np
    >>> from restorelib import Image, make_psf
    >>> from restorelib.deconvolution import convolve, solve_rl
    >>>
    >>> psf = make_psf(5, 5, kind="radial")
    >>> latent = Image.from_numpy(np.random.rand(32, 32))
    >>> observed = convolve(latent, psf)
    >>> restored = solve_rl(observed, psf, num_iter=20).restored
"""

from .base import (
    DeconvolutionResult,
    check_inputs,
)
from .operators import (
    toroidal_convolve,
    convolve,
    make_toroidal_convolver,
)
from .inverse import (
    solve_inverse,
    zero_guard_mask,
)
from .rl import (
    solve_rl,
    DEFAULT_NUM_ITER,
)
from .direct import (
    build_system,
    gaussian_eliminate,
    solve_direct,
)
from .methods import (
    deconvolve,
    METHODS,
)

__all__ = [
    # Base types
    "DeconvolutionResult",
    "check_inputs",
    # Operators
    "toroidal_convolve",
    "convolve",
    "make_toroidal_convolver",
    # Inverse filtering
    "solve_inverse",
    "zero_guard_mask",
    # Richardson-Lucy
    "solve_rl",
    "DEFAULT_NUM_ITER",
    # Direct solve
    "build_system",
    "gaussian_eliminate",
    "solve_direct",
    # Dispatch
    "deconvolve",
    "METHODS",
]
