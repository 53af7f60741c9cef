"""Spectral transform engine and padding utilities."""

from .fourier import (
    is_power_of_two,
    bit_reverse,
    bit_reversal_permutation,
    forward_transform,
    inverse_transform,
    conjugate,
    multiply,
    spectral_convolution,
)
from .padding import next_power_of_two, form_spectra

__all__ = [
    # Fourier transform
    "is_power_of_two",
    "bit_reverse",
    "bit_reversal_permutation",
    "forward_transform",
    "inverse_transform",
    "conjugate",
    "multiply",
    "spectral_convolution",
    # Padding
    "next_power_of_two",
    "form_spectra",
]
