"""Synthetic test images and blur problems for the restoration solvers.

Example:
    >>> from toy import sparse_points, spectral_problem
    >>> from restorelib import make_psf, solve_inverse
    >>>
    >>> psf = make_psf(5, 5, kind="radial")
    >>> latent, observed = spectral_problem(sparse_points(64, 64, seed=1), psf)
    >>> restored = solve_inverse(observed, psf).restored
"""

from .problems import (
    sparse_points,
    blurred_problem,
    spectral_problem,
)

__all__ = [
    "sparse_points",
    "blurred_problem",
    "spectral_problem",
]
