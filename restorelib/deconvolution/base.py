"""Base types for deconvolution algorithms."""

from dataclasses import dataclass, field
from typing import List

from ..core.image import PSF, Image

__all__ = ["DeconvolutionResult", "check_inputs"]


@dataclass
class DeconvolutionResult:
    """Result from a deconvolution algorithm.

    Attributes:
        restored: The restored image (a new object, never the input).
        iterations: Number of iterations performed (0 for direct methods).
        loss_history: Relative change at each iteration (if tracked).
        converged: Whether the algorithm ran to completion.
        metadata: Optional algorithm-specific metadata.
    """

    restored: Image
    iterations: int = 0
    loss_history: List[float] = field(default_factory=list)
    converged: bool = True
    metadata: dict = field(default_factory=dict)


def check_inputs(image: Image, psf: PSF) -> float:
    """Validate the operands of a deconvolution and return the PSF divisor.

    Image and PSF shapes are validated on construction; what remains is
    the type check and the degenerate-divisor check.
    """
    if not isinstance(image, Image):
        raise TypeError(f"Expected an Image, got {type(image).__name__}")
    if not isinstance(psf, PSF):
        raise TypeError(f"Expected a PSF, got {type(psf).__name__}")
    return psf.require_nondegenerate()
