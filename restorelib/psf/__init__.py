"""PSF synthesis (NumPy-based)."""

from .synthetic import make_psf, PSF_KINDS

__all__ = ["make_psf", "PSF_KINDS"]
