"""Image and PSF containers."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import torch

from .errors import (
    DegenerateFilter,
    InvalidDimensions,
    NonOddKernelSize,
    UnsupportedChannelCount,
)

__all__ = ["Image", "PSF", "clip_to_unit_range", "to_grayscale", "SUPPORTED_CHANNELS"]

SUPPORTED_CHANNELS = (1, 3)

# ITU-R BT.601 luma weights
_LUMA = (0.299, 0.587, 0.114)


@dataclass(frozen=True)
class Image:
    """Real-valued multi-channel pixel maps.

    Pixel ``(x, y)`` of channel ``c`` is ``data[c, y, x]``, so a flattened
    channel is row-major with index ``y * width + x``. Values are
    conventionally in [0, 1] but restoration results may leave that range.

    Attributes:
        data: Tensor of shape (channels, height, width), stored as float64.

    Example:
        ```python
        img = Image.zeros(width=64, height=48, channels=3)
        img.data[0, 10, 20] = 1.0  # red pixel at x=20, y=10
        ```
    """

    data: torch.Tensor

    def __post_init__(self) -> None:
        """Validate shape and coerce to float64."""
        data = torch.as_tensor(self.data, dtype=torch.float64)
        if data.ndim != 3:
            raise InvalidDimensions(
                f"Image data must have shape (channels, height, width), got {tuple(data.shape)}"
            )
        channels, height, width = data.shape
        if height <= 0 or width <= 0:
            raise InvalidDimensions(f"Image cannot be of size ({width}, {height})")
        if channels not in SUPPORTED_CHANNELS:
            raise UnsupportedChannelCount(f"Image cannot contain {channels} color channels")
        object.__setattr__(self, "data", data)

    @classmethod
    def zeros(cls, width: int, height: int, channels: int = 1) -> "Image":
        """Create a black image."""
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"Image cannot be of size ({width}, {height})")
        if channels not in SUPPORTED_CHANNELS:
            raise UnsupportedChannelCount(f"Image cannot contain {channels} color channels")
        return cls(torch.zeros(channels, height, width, dtype=torch.float64))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "Image":
        """Build an image from an (H, W) or (H, W, C) array."""
        arr = np.asarray(array, dtype=np.float64)
        if arr.ndim == 2:
            arr = arr[np.newaxis]
        elif arr.ndim == 3:
            arr = np.moveaxis(arr, -1, 0)
        else:
            raise InvalidDimensions(f"Expected a 2D or 3D array, got shape {arr.shape}")
        return cls(torch.from_numpy(np.ascontiguousarray(arr)))

    def to_numpy(self) -> np.ndarray:
        """Return an (H, W) array for one channel, (H, W, C) otherwise."""
        arr = self.data.detach().cpu().numpy().copy()
        if self.num_channels == 1:
            return arr[0]
        return np.moveaxis(arr, 0, -1)

    def copy(self) -> "Image":
        return Image(self.data.clone())

    @property
    def num_channels(self) -> int:
        return self.data.shape[0]

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def width(self) -> int:
        return self.data.shape[2]

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Return (channels, height, width)."""
        return tuple(self.data.shape)


@dataclass(frozen=True)
class PSF:
    """Point-spread function: a single-channel image with odd sides.

    Odd sides guarantee a well-defined center pixel at
    ``(half_width, half_height)``. The weights are not normalized; the
    convolution operators divide by ``divisor`` (the sum of weights)
    instead.

    Attributes:
        image: Single-channel image holding the kernel weights.

    Example:
        ```python
        psf = PSF.from_numpy(np.ones((3, 3)))
        psf.divisor  # 9.0
        ```
    """

    image: Image

    def __post_init__(self) -> None:
        """Validate channel count and odd kernel size."""
        if self.image.num_channels != 1:
            raise UnsupportedChannelCount(
                f"PSF should be a grayscale image, got {self.image.num_channels} channels"
            )
        if self.image.width % 2 != 1 or self.image.height % 2 != 1:
            raise NonOddKernelSize(
                f"PSF cannot be of size ({self.image.width}, {self.image.height})"
            )

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "PSF":
        """Build a PSF from a 2D array, or a 3D color array (converted to gray)."""
        image = Image.from_numpy(array)
        if image.num_channels == 3:
            image = to_grayscale(image)
        return cls(image)

    @property
    def kernel(self) -> torch.Tensor:
        """Kernel weights, shape (height, width)."""
        return self.image.data[0]

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def num_pixels(self) -> int:
        return self.image.num_pixels

    @property
    def half_width(self) -> int:
        """Horizontal distance from the center to the edge."""
        return self.width // 2

    @property
    def half_height(self) -> int:
        """Vertical distance from the center to the edge."""
        return self.height // 2

    @property
    def divisor(self) -> float:
        """Sum of all weights."""
        return float(self.kernel.sum())

    @property
    def is_degenerate(self) -> bool:
        return self.divisor == 0.0

    def require_nondegenerate(self) -> float:
        """Return the divisor, raising DegenerateFilter if it is zero."""
        divisor = self.divisor
        if divisor == 0.0:
            raise DegenerateFilter("PSF has only zeros (divisor is 0)")
        return divisor

    def rotated(self) -> "PSF":
        """Return the PSF rotated by 180 degrees, i.e. psf(-x, -y)."""
        return PSF(Image(self.image.data.flip((-2, -1))))


def clip_to_unit_range(image: Image) -> Image:
    """Clamp every pixel into [0, 1]."""
    return Image(image.data.clamp(0.0, 1.0))


def to_grayscale(image: Image) -> Image:
    """Convert an RGB image to a single luma channel.

    Single-channel input is returned as a copy.
    """
    if image.num_channels == 1:
        return image.copy()
    r, g, b = image.data
    lum = _LUMA[0] * r + _LUMA[1] * g + _LUMA[2] * b
    return Image(lum.clamp(max=1.0).unsqueeze(0))
