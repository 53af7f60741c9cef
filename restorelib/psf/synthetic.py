"""Synthetic point-spread functions for experiments."""

from typing import Literal, Optional

import numpy as np

from ..core.errors import NonOddKernelSize
from ..core.image import PSF

__all__ = ["make_psf", "PSF_KINDS"]

PSF_KINDS = ("random", "radial", "linear")


def make_psf(
    width: int,
    height: int,
    kind: Literal["random", "radial", "linear"] = "radial",
    rng: Optional[np.random.Generator] = None,
) -> PSF:
    """Generate a PSF of the given odd size.

    Supported kinds:
    - "random": every weight drawn uniformly from {0, 1/255, ..., 254/255}.
    - "radial": cone ``max(0, 1 - r / (a + 1))`` around the center, where
      r is the distance to the center and a = width // 2.
    - "linear": horizontal streak; the center row from the center pixel
      to the right edge is 0.5, everything else 0.

    Args:
        width: Kernel width (odd).
        height: Kernel height (odd).
        kind: Shape of the PSF.
        rng: Random generator for "random". Defaults to a fresh
            ``np.random.default_rng()``.

    Returns:
        Single-channel PSF.

    Example:
        >>> psf = make_psf(5, 5, kind="radial")
        >>> psf.kernel[2, 2]
        tensor(1., dtype=torch.float64)
    """
    if width % 2 != 1 or height % 2 != 1:
        raise NonOddKernelSize(f"PSF cannot be of size ({width}, {height})")

    a = width // 2
    b = height // 2

    if kind == "random":
        if rng is None:
            rng = np.random.default_rng()
        weights = rng.integers(0, 255, size=(height, width)) / 255.0
    elif kind == "radial":
        y, x = np.mgrid[0:height, 0:width]
        r = np.sqrt((x - a) ** 2 + (y - b) ** 2)
        weights = np.clip(1.0 - r / (a + 1), 0.0, None)
    elif kind == "linear":
        weights = np.zeros((height, width))
        weights[b, a:] = 0.5
    else:
        raise ValueError(f"Unknown PSF kind: {kind}. Use one of {PSF_KINDS}.")

    return PSF.from_numpy(weights)
