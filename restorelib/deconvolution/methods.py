"""Single entry point selecting a deconvolution method by name."""

from ..core.image import PSF, Image
from .base import DeconvolutionResult
from .direct import solve_direct
from .inverse import solve_inverse
from .rl import solve_rl

__all__ = ["deconvolve", "METHODS"]

METHODS = {
    "inverse": solve_inverse,
    "lucy": solve_rl,
    "direct": solve_direct,
}


def deconvolve(image: Image, psf: PSF, method: str = "lucy", **kwargs) -> DeconvolutionResult:
    """Restore an image with the named method.

    Args:
        image: Observed blurred image.
        psf: PSF describing the blur.
        method: One of "inverse", "lucy" or "direct".
        **kwargs: Passed to the solver (e.g. ``num_iter`` for "lucy").

    Returns:
        DeconvolutionResult from the chosen solver.

    Example:
        >>> result = deconvolve(observed, psf, method="lucy", num_iter=10)
    """
    try:
        solver = METHODS[method]
    except KeyError:
        raise ValueError(
            f"Unknown deconvolution method: {method}. Use one of {sorted(METHODS)}."
        ) from None
    return solver(image, psf, **kwargs)
