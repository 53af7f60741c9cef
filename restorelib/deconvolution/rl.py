"""Richardson-Lucy deconvolution algorithm.

The Richardson-Lucy (RL) algorithm is an iterative multiplicative method
for deconvolving images when the noise follows a Poisson distribution.

The algorithm iterates:
    x_{k+1} = x_k * C^T(b / C(x_k))

where:
    - x: estimate of the latent image, initialized to the observed image
    - b: observed blurred image
    - C: toroidal convolution with the PSF
    - C^T: toroidal convolution with the 180-degree rotated PSF
    - * and / are element-wise operations

The iteration count is fixed; there is no convergence test, and the
estimate is not clamped to [0, 1].

Reference:
    Richardson, W.H. (1972). "Bayesian-Based Iterative Method of Image
    Restoration". JOSA 62(1): 55-59.

    Lucy, L.B. (1974). "An iterative technique for the rectification of
    observed distributions". The Astronomical Journal 79(6): 745-754.
"""

import numbers
from typing import Callable, Optional

import torch

from ..core.errors import ComputationError
from ..core.image import PSF, Image
from .base import DeconvolutionResult, check_inputs
from .operators import toroidal_convolve

__all__ = ["solve_rl", "DEFAULT_NUM_ITER"]

DEFAULT_NUM_ITER = 10


def solve_rl(
    image: Image,
    psf: PSF,
    num_iter: int = DEFAULT_NUM_ITER,
    callback: Optional[Callable[[int, torch.Tensor], None]] = None,
    verbose: bool = False,
) -> DeconvolutionResult:
    """Solve deconvolution using the Richardson-Lucy algorithm.

    Args:
        image: Observed blurred image, 1 or 3 channels.
        psf: Non-degenerate PSF.
        num_iter: Number of iterations, a non-negative integer. Default 10.
            Zero returns a copy of the observed image.
        callback: Optional function called each iteration with
            (iteration, current_estimate), the estimate having shape
            (channels, height, width).
        verbose: If True, print iteration progress. Default False.

    Returns:
        DeconvolutionResult with restored image and diagnostics.

    Raises:
        DegenerateFilter: If the PSF weights sum to zero.
        TypeError: If ``num_iter`` is not an integer.
        ValueError: If ``num_iter`` is negative.
        ComputationError: If the blurred estimate has an exact zero pixel,
            which would make the ratio b / C(x) undefined.

    Example:
        >>> from restorelib.deconvolution import solve_rl
        >>> result = solve_rl(observed, psf, num_iter=25)
        >>> restored = result.restored.to_numpy()

    Note:
        - Channels are updated independently.
        - Zero pixels in the blurred estimate are not guarded with an
          epsilon; they raise instead of producing inf or NaN.
    """
    divisor = check_inputs(image, psf)
    if isinstance(num_iter, bool) or not isinstance(num_iter, numbers.Integral):
        raise TypeError(f"num_iter must be an integer, got {type(num_iter).__name__}")
    if num_iter < 0:
        raise ValueError(f"num_iter must be non-negative, got {num_iter}")

    observed = image.data
    kernel = psf.kernel
    kernel_rotated = psf.rotated().kernel

    # Initialize estimate with the observed image
    x = observed.clone()

    loss_history = []

    if verbose:
        print("Richardson-Lucy Deconvolution")
        print(f"  Image: {image.width}x{image.height}x{image.num_channels}, "
              f"PSF: {psf.width}x{psf.height}, Iterations: {num_iter}")

    for iteration in range(1, int(num_iter) + 1):
        # Forward model prediction
        Cx = toroidal_convolve(x, kernel, divisor)

        if torch.any(Cx == 0):
            raise ComputationError(
                f"Blurred estimate has {int((Cx == 0).sum())} zero pixel(s) "
                f"at iteration {iteration}"
            )

        # Ratio of observed to predicted
        ratio = observed / Cx

        # Correction factor via the rotated PSF
        correction = toroidal_convolve(ratio, kernel_rotated, divisor)

        # Update estimate (multiplicative)
        x_new = x * correction

        # Track relative change as pseudo-loss
        rel_change = torch.norm(x_new - x) / torch.norm(x)
        loss_history.append(float(rel_change))

        x = x_new

        if verbose:
            print(f"  Iteration {iteration:3d}: rel. change = {loss_history[-1]:.6e}")

        if callback is not None:
            callback(iteration, x)

    return DeconvolutionResult(
        restored=Image(x),
        iterations=int(num_iter),
        loss_history=loss_history,
        converged=True,  # RL doesn't have explicit convergence criterion
        metadata={"algorithm": "Richardson-Lucy"},
    )
