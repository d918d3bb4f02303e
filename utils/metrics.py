"""Metrics: PSNR/SSIM of expansion images, round-trip error."""

from typing import Dict, Optional

import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity

SSIM_WINDOW = 7


def compute_degradation(
    original: np.ndarray,
    expansion: np.ndarray,
    data_range: float = 255.0
) -> Dict[str, Optional[float]]:
    """PSNR and SSIM of a pixel-expansion image against the original.

    Both grids are (H, W, B). SSIM is None when the grid is smaller
    than the SSIM window.
    """
    original = np.asarray(original, dtype=np.float64)
    expansion = np.clip(np.asarray(expansion, dtype=np.float64), 0, data_range)

    if np.array_equal(original, expansion):
        psnr = float('inf')
    else:
        psnr = float(peak_signal_noise_ratio(original, expansion, data_range=data_range))

    ssim = None
    if min(original.shape[:2]) >= SSIM_WINDOW:
        ssim = float(structural_similarity(
            original, expansion, channel_axis=2, data_range=data_range
        ))

    return {'psnr': psnr, 'ssim': ssim}


def max_abs_error(original: np.ndarray, recovered: np.ndarray) -> float:
    """Largest absolute sample difference."""
    return float(np.max(np.abs(np.asarray(original, dtype=np.float64) - recovered)))
