"""Pixel expansion of the coarse sub-block for display."""

import numpy as np


def pixel_expansion(data: np.ndarray, row_stages_applied: int, column_stages_applied: int) -> np.ndarray:
    """Broadcast each coarse sample over the block it summarizes.

    Row passes shrink the width, so they set the column scale; column
    passes set the row scale. Samples outside whole blocks stay zero.
    """
    width, height = data.shape[:2]
    column_scale = 2 ** row_stages_applied
    row_scale = 2 ** column_stages_applied
    sub_columns = width // column_scale
    sub_rows = height // row_scale

    result = np.zeros_like(data, dtype=np.float64)
    coarse = data[:sub_columns, :sub_rows]
    expanded = np.repeat(np.repeat(coarse, column_scale, axis=0), row_scale, axis=1)
    result[:sub_columns * column_scale, :sub_rows * row_scale] = expanded
    return result
