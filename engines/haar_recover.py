"""Inverse Haar passes, the exact counterpart of haar_transform."""

import numpy as np

from engines.schedule import recover_extents


def _pairwise_recover(data: np.ndarray, length: int, span: int) -> np.ndarray:
    """Undo _pairwise_forward along axis 0 inside the [0:length, 0:span] block."""
    result = data.copy()
    if length < 2:
        return result

    half = length // 2
    coarse = data[:half, :span]
    detail = data[half:2 * half, :span]
    result[0:2 * half:2, :span] = coarse + detail
    result[1:2 * half:2, :span] = coarse - detail

    if length % 2:
        # Trailing sample is rebuilt from its already recovered neighbour
        last = length - 1
        result[last, :span] = result[last - 1, :span] + 2.0 * data[last, :span]
    return result


def row_recover(data: np.ndarray, rows_left: int, cols_left: int) -> np.ndarray:
    """Recover one row pass; counters are the recoveries remaining."""
    width, height = data.shape[:2]
    sub_columns, sub_rows = recover_extents(width, height, rows_left, cols_left)
    return _pairwise_recover(data, sub_columns, sub_rows)


def column_recover(data: np.ndarray, cols_left: int, rows_left: int) -> np.ndarray:
    """Recover one column pass; counters are the recoveries remaining."""
    width, height = data.shape[:2]
    sub_columns, sub_rows = recover_extents(width, height, rows_left, cols_left)
    swapped = _pairwise_recover(np.swapaxes(data, 0, 1), sub_rows, sub_columns)
    return np.ascontiguousarray(np.swapaxes(swapped, 0, 1))
