"""Sample volume: the 3-D array under transformation."""

from typing import Callable

import numpy as np


class SampleVolume:
    """Dense float volume indexed [column, row, band]."""

    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 3:
            raise ValueError(f"Volume must be 3-D (columns, rows, bands), got {data.ndim}-D")
        if min(data.shape) < 1:
            raise ValueError(f"Volume must not be empty, got shape {data.shape}")
        self._data = data.copy()

    @classmethod
    def from_image(cls, image: np.ndarray) -> 'SampleVolume':
        """Build from an (H, W) or (H, W, B) image array."""
        if image.ndim == 2:
            image = image[:, :, np.newaxis]
        return cls(np.transpose(image, (1, 0, 2)))

    @classmethod
    def from_sampler(
        cls,
        width: int,
        height: int,
        bands: int,
        sampler: Callable[[int, int, int], float]
    ) -> 'SampleVolume':
        """Copy samples from a (col, row, band) -> value callable."""
        data = np.empty((width, height, bands), dtype=np.float64)
        for band in range(bands):
            for col in range(width):
                for row in range(height):
                    data[col, row, band] = sampler(col, row, band)
        return cls(data)

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def width(self) -> int:
        return self._data.shape[0]

    @property
    def height(self) -> int:
        return self._data.shape[1]

    @property
    def bands(self) -> int:
        return self._data.shape[2]

    @property
    def shape(self) -> tuple:
        return self._data.shape

    def replace(self, data: np.ndarray) -> None:
        """Swap in a new array; dimensions never change."""
        if data.shape != self._data.shape:
            raise ValueError(f"Shape mismatch: volume is {self._data.shape}, got {data.shape}")
        self._data = np.asarray(data, dtype=np.float64)

    def copy(self) -> 'SampleVolume':
        return SampleVolume(self._data)

    def to_image(self) -> np.ndarray:
        """Return an (H, W, B) copy in image layout."""
        return np.transpose(self._data, (1, 0, 2)).copy()

    def sample(self, col: int, row: int, band: int) -> float:
        return float(self._data[col, row, band])
