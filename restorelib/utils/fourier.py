"""Power-of-two fast Fourier transform on 1D complex tensors.

Iterative decimation-in-time Cooley-Tukey. The transform kernel uses the
positive exponent ``exp(+2*pi*i*k*n/N)``, so for a length-N sequence

    forward_transform(a) == N * numpy.fft.ifft(a)
    inverse_transform(a) == numpy.fft.fft(a) / N

Every deconvolution built on top of it only relies on the convolution
theorem, which holds for either sign.

All transforms work in place on ``torch.complex128`` tensors and return
the same tensor for chaining.
"""

import math

import torch

from ..core.errors import InvalidDimensions, SizeMismatch

__all__ = [
    "is_power_of_two",
    "bit_reverse",
    "bit_reversal_permutation",
    "forward_transform",
    "inverse_transform",
    "conjugate",
    "multiply",
    "spectral_convolution",
]


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def bit_reverse(x: int, bits: int) -> int:
    """Return ``x`` with its lowest ``bits`` bits in reverse order.

    Example:
        >>> bit_reverse(0b001, 3)
        4
        >>> bit_reverse(0b110, 3)
        3
    """
    result = 0
    for _ in range(bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


def bit_reversal_permutation(n: int) -> torch.Tensor:
    """Index tensor mapping position i to bit_reverse(i, log2 n).

    Built one bit at a time: the permutation for 2m is the permutation
    for m doubled, followed by the same plus one.
    """
    _check_length(n)
    perm = torch.zeros(1, dtype=torch.long)
    while perm.numel() < n:
        perm = torch.cat([2 * perm, 2 * perm + 1])
    return perm


def _check_length(n: int) -> None:
    if not is_power_of_two(n):
        raise InvalidDimensions(f"Transform length must be a power of 2, got {n}")


def _check_sequence(a: torch.Tensor) -> None:
    if a.ndim != 1:
        raise SizeMismatch(f"Expected a 1D sequence, got shape {tuple(a.shape)}")
    if not a.is_complex():
        raise TypeError(f"Expected a complex tensor, got {a.dtype}")
    _check_length(a.numel())


def _check_same_length(*arrays: torch.Tensor) -> None:
    lengths = {a.numel() for a in arrays}
    if len(lengths) != 1:
        raise SizeMismatch(f"Sequence lengths must match, got {sorted(lengths)}")


def _stage_roots(n: int, dtype: torch.dtype) -> list:
    """Primitive roots of unity for stage sizes 2, 4, ..., n.

    Only the root for size n is evaluated with an exponential; each smaller
    stage root is the square of the next larger one.
    """
    root = complex(math.cos(2.0 * math.pi / n), math.sin(2.0 * math.pi / n))
    roots = []
    step = n
    while step > 1:
        roots.append(root)
        root = root * root
        step //= 2
    roots.reverse()
    return [torch.tensor(r, dtype=dtype) for r in roots]


def _twiddles(root: torch.Tensor, half: int) -> torch.Tensor:
    """Powers root**0 .. root**(half-1) by repeated multiplication."""
    factors = root.expand(half).clone()
    factors[0] = 1.0
    return torch.cumprod(factors, dim=0)


def forward_transform(a: torch.Tensor) -> torch.Tensor:
    """In-place discrete Fourier transform. Takes time O(N log N).

    Args:
        a: 1D complex tensor whose length is a power of 2.

    Returns:
        ``a``, now holding its spectrum.

    Raises:
        InvalidDimensions: If the length is not a power of 2.
        SizeMismatch: If ``a`` is not one-dimensional.
    """
    _check_sequence(a)
    n = a.numel()
    if n == 1:
        return a

    # Arrange samples in bit-reversed order
    work = a[bit_reversal_permutation(n)]

    step = 2
    for root in _stage_roots(n, a.dtype):
        half = step // 2
        blocks = work.view(n // step, step)
        top = blocks[:, :half]
        bottom = blocks[:, half:] * _twiddles(root, half)
        work = torch.cat([top + bottom, top - bottom], dim=1).reshape(n)
        step *= 2

    a.copy_(work)
    return a


def inverse_transform(a: torch.Tensor) -> torch.Tensor:
    """In-place inverse transform, exact inverse of forward_transform."""
    _check_sequence(a)
    conjugate(a)
    forward_transform(a)
    conjugate(a)
    a.div_(a.numel())
    return a


def conjugate(a: torch.Tensor) -> torch.Tensor:
    """Replace every sample by its complex conjugate, in place."""
    a.imag.neg_()
    return a


def multiply(a: torch.Tensor, b: torch.Tensor, out: torch.Tensor) -> torch.Tensor:
    """Elementwise product of two sequences into ``out``.

    ``out`` may be the same tensor as ``a`` or ``b``.
    """
    _check_same_length(a, b, out)
    torch.mul(a, b, out=out)
    return out


def spectral_convolution(a: torch.Tensor, b: torch.Tensor, out: torch.Tensor) -> torch.Tensor:
    """Circular convolution of two sequences via the convolution theorem.

    ``a`` and ``b`` are transformed in place and left in the frequency
    domain; do not reuse them afterwards.

    Example:
        >>> a = torch.tensor([1, 2, 0, 0], dtype=torch.complex128)
        >>> b = torch.tensor([1, 1, 0, 0], dtype=torch.complex128)
        >>> out = torch.empty(4, dtype=torch.complex128)
        >>> spectral_convolution(a, b, out).real.round()
        tensor([1., 3., 2., 0.], dtype=torch.float64)
    """
    _check_same_length(a, b, out)
    forward_transform(a)
    forward_transform(b)
    multiply(a, b, out)
    return inverse_transform(out)
