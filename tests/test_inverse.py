"""Tests for frequency-domain inverse filtering."""

import numpy as np
import pytest
import torch

from restorelib import PSF, DegenerateFilter, Image
from restorelib.deconvolution import solve_inverse, zero_guard_mask
from restorelib.utils import form_spectra, forward_transform
from toy import spectral_problem

# Center weight exceeds the sum of the others, so no spectrum bin can vanish
DOMINANT_KERNEL = np.array([
    [0.1, 0.2, 0.1],
    [0.2, 2.0, 0.2],
    [0.1, 0.2, 0.1],
])


def spectrum_of(image: Image) -> torch.Tensor:
    return forward_transform(form_spectra(image)[0])


class TestSolveInverse:
    """Tests for solve_inverse."""

    def test_round_trip_single_channel(self):
        """Recovers a 4x4 latent image blurred under the spectral model."""
        rng = np.random.default_rng(0)
        latent = Image.from_numpy(rng.random((4, 4)))
        psf = PSF.from_numpy(DOMINANT_KERNEL)
        _, observed = spectral_problem(latent, psf)

        result = solve_inverse(observed, psf)
        assert torch.allclose(result.restored.data, latent.data, atol=1e-10)
        assert result.metadata["transform_length"] == 16
        assert result.metadata["zero_bins"] == 0

    def test_round_trip_rgb(self):
        """Recovers every channel of an 8x8 RGB image."""
        rng = np.random.default_rng(1)
        latent = Image.from_numpy(rng.random((8, 8, 3)))
        psf = PSF.from_numpy(DOMINANT_KERNEL)
        _, observed = spectral_problem(latent, psf)

        result = solve_inverse(observed, psf)
        assert result.restored.shape == (3, 8, 8)
        assert torch.allclose(result.restored.data, latent.data, atol=1e-10)

    def test_padding_covers_psf(self):
        """The transform length covers the larger of image and PSF."""
        psf = PSF.from_numpy(np.ones((5, 5)))
        result = solve_inverse(Image.zeros(3, 3), psf)
        assert result.metadata["transform_length"] == 32
        assert result.restored.shape == (1, 3, 3)

    def test_zero_bins_left_untouched(self):
        """Bins where the PSF spectrum is exactly zero keep the observed value.

        This is a plain zero-guard, not a regularized inverse: the result is
        pinned here so that a change of policy shows up as a test failure.
        The flattened PSF [1, 2, 1, 0] has an exact zero in bin 2.
        """
        psf = PSF.from_numpy(np.array([[1.0, 2.0, 1.0]]))
        observed = Image.from_numpy(np.array([[0.3, 0.9], [0.4, 0.2]]))

        psf_spectrum = forward_transform(form_spectra(psf.image, 4)[0])
        assert zero_guard_mask(psf_spectrum).tolist() == [True, True, False, True]

        result = solve_inverse(observed, psf)
        assert result.metadata["zero_bins"] == 1
        assert torch.isfinite(result.restored.data).all()

        restored_spectrum = spectrum_of(result.restored)
        observed_spectrum = spectrum_of(observed)
        assert torch.allclose(restored_spectrum[2], observed_spectrum[2], atol=1e-12)
        for k in (0, 1, 3):
            assert torch.allclose(
                restored_spectrum[k] * psf_spectrum[k], observed_spectrum[k], atol=1e-10
            )

    def test_small_bins_amplify_noise(self):
        """Perturbations at frequencies with a weak PSF response are amplified.

        No regularization is applied, so a tiny perturbation of the
        observation grows by 1 / |H| at the weakest bin.
        """
        psf = PSF.from_numpy(np.array([[1.0, 1.99, 1.0]]))
        observed = Image.from_numpy(np.full((2, 2), 0.5))
        noisy = Image(observed.data.clone())
        noisy.data[0, 0, 1] += 1e-3

        clean = solve_inverse(observed, psf).restored.data
        perturbed = solve_inverse(noisy, psf).restored.data
        assert torch.max(torch.abs(perturbed - clean)) > 1e-2

    def test_input_not_mutated(self):
        observed = Image.from_numpy(np.random.default_rng(2).random((4, 4)))
        original = observed.data.clone()
        solve_inverse(observed, PSF.from_numpy(DOMINANT_KERNEL))
        assert torch.equal(observed.data, original)

    def test_degenerate_psf_rejected(self):
        with pytest.raises(DegenerateFilter):
            solve_inverse(Image.zeros(4, 4), PSF(Image(torch.zeros(1, 3, 3))))
