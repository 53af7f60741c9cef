"""Tests for the Image and PSF containers."""

import numpy as np
import pytest
import torch

from restorelib import (
    PSF,
    DegenerateFilter,
    Image,
    InvalidDimensions,
    NonOddKernelSize,
    UnsupportedChannelCount,
    clip_to_unit_range,
    to_grayscale,
)


class TestImage:
    """Tests for Image."""

    def test_zeros(self):
        img = Image.zeros(width=5, height=3, channels=3)
        assert img.shape == (3, 3, 5)
        assert (img.width, img.height, img.num_channels, img.num_pixels) == (5, 3, 3, 15)
        assert img.data.dtype == torch.float64
        assert torch.count_nonzero(img.data) == 0

    def test_numpy_layout(self):
        """Pixel (x, y) of an (H, W, C) array lands at data[c, y, x]."""
        arr = np.zeros((4, 6, 3))
        arr[1, 2, 0] = 1.0
        img = Image.from_numpy(arr)
        assert img.shape == (3, 4, 6)
        assert img.data[0, 1, 2] == 1.0
        assert np.array_equal(img.to_numpy(), arr)

    def test_single_channel_numpy(self):
        arr = np.arange(6.0).reshape(2, 3)
        img = Image.from_numpy(arr)
        assert img.num_channels == 1
        assert np.array_equal(img.to_numpy(), arr)

    def test_copy_is_independent(self):
        img = Image.zeros(2, 2)
        dup = img.copy()
        dup.data[0, 0, 0] = 1.0
        assert img.data[0, 0, 0] == 0.0

    @pytest.mark.parametrize("width, height", [(0, 4), (4, 0), (-1, 3)])
    def test_invalid_size(self, width, height):
        with pytest.raises(InvalidDimensions):
            Image.zeros(width, height)

    def test_empty_tensor(self):
        with pytest.raises(InvalidDimensions):
            Image(torch.zeros(1, 0, 4))

    def test_wrong_rank(self):
        with pytest.raises(InvalidDimensions):
            Image(torch.zeros(4, 4))
        with pytest.raises(InvalidDimensions):
            Image.from_numpy(np.zeros(5))

    @pytest.mark.parametrize("channels", [2, 4])
    def test_unsupported_channels(self, channels):
        with pytest.raises(UnsupportedChannelCount):
            Image(torch.zeros(channels, 2, 2))
        with pytest.raises(UnsupportedChannelCount):
            Image.zeros(2, 2, channels)


class TestPSF:
    """Tests for PSF."""

    def test_geometry(self):
        psf = PSF.from_numpy(np.ones((3, 5)))
        assert (psf.width, psf.height) == (5, 3)
        assert (psf.half_width, psf.half_height) == (2, 1)
        assert psf.num_pixels == 15
        assert psf.divisor == 15.0
        assert psf.kernel.shape == (3, 5)

    @pytest.mark.parametrize("shape", [(2, 3), (3, 4), (4, 4)])
    def test_even_size_rejected(self, shape):
        with pytest.raises(NonOddKernelSize):
            PSF.from_numpy(np.ones(shape))

    def test_must_be_single_channel(self):
        with pytest.raises(UnsupportedChannelCount):
            PSF(Image.zeros(3, 3, channels=3))

    def test_color_array_is_grayscaled(self):
        """A color PSF array is converted to luma."""
        arr = np.zeros((3, 3, 3))
        arr[1, 1] = [1.0, 1.0, 1.0]
        psf = PSF.from_numpy(arr)
        assert psf.image.num_channels == 1
        assert psf.kernel[1, 1] == pytest.approx(1.0)

    def test_rotated_reverses_flattened_kernel(self):
        """Element i of the flattened kernel moves to size - 1 - i."""
        weights = np.arange(15.0).reshape(3, 5)
        rotated = PSF.from_numpy(weights).rotated()
        assert np.array_equal(rotated.kernel.numpy().ravel(), weights.ravel()[::-1])

    def test_degenerate(self):
        psf = PSF.from_numpy(np.array([[1.0, 0.0, -1.0]]))
        assert psf.is_degenerate
        with pytest.raises(DegenerateFilter):
            psf.require_nondegenerate()

    def test_nondegenerate_returns_divisor(self):
        psf = PSF.from_numpy(np.full((3, 3), 0.5))
        assert not psf.is_degenerate
        assert psf.require_nondegenerate() == 4.5


class TestImageUtilities:
    """Tests for clip_to_unit_range and to_grayscale."""

    def test_clip(self):
        img = Image(torch.tensor([[[-0.5, 0.25], [1.0, 3.0]]]))
        clipped = clip_to_unit_range(img)
        assert clipped.data.tolist() == [[[0.0, 0.25], [1.0, 1.0]]]
        assert img.data[0, 0, 0] == -0.5

    def test_grayscale_weights(self):
        img = Image.zeros(1, 1, channels=3)
        img.data[:, 0, 0] = torch.tensor([1.0, 0.5, 0.0], dtype=torch.float64)
        gray = to_grayscale(img)
        assert gray.num_channels == 1
        assert gray.data[0, 0, 0].item() == pytest.approx(0.299 + 0.5 * 0.587)

    def test_grayscale_caps_at_one(self):
        img = Image(torch.full((3, 2, 2), 2.0))
        assert torch.all(to_grayscale(img).data == 1.0)

    def test_grayscale_of_gray_is_copy(self):
        img = Image.zeros(2, 2)
        gray = to_grayscale(img)
        assert gray is not img
        assert torch.equal(gray.data, img.data)
