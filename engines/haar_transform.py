"""Forward Haar passes over non power of two extents."""

import numpy as np

from engines.schedule import sub_extent


def _pairwise_forward(data: np.ndarray, length: int, span: int) -> np.ndarray:
    """Average/difference along axis 0 inside the [0:length, 0:span] block.

    Pairs (2k, 2k+1) give the coarse value at k and the detail at
    length//2 + k. An odd trailing sample keeps only its difference from
    the average with its left neighbour, so the next coarse run is even.
    """
    result = data.copy()
    if length < 2:
        return result

    half = length // 2
    block = data[:length, :span]
    first = block[0:2 * half:2]
    second = block[1:2 * half:2]
    average = (first + second) / 2.0
    result[:half, :span] = average
    result[half:2 * half, :span] = first - average

    if length % 2:
        last = length - 1
        edge_average = (block[last] + block[last - 1]) / 2.0
        result[last, :span] = block[last] - edge_average
    return result


def row_pass(data: np.ndarray, stage: int) -> np.ndarray:
    """Transform each row of the active sub-block; returns a new array."""
    width, height = data.shape[:2]
    sub_columns = sub_extent(width, stage)
    sub_rows = sub_extent(height, stage)
    return _pairwise_forward(data, sub_columns, sub_rows)


def column_pass(data: np.ndarray, stage: int) -> np.ndarray:
    """Transform each column of the active sub-block; returns a new array."""
    width, height = data.shape[:2]
    sub_columns = sub_extent(width, stage)
    sub_rows = sub_extent(height, stage)
    swapped = _pairwise_forward(np.swapaxes(data, 0, 1), sub_rows, sub_columns)
    return np.ascontiguousarray(np.swapaxes(swapped, 0, 1))
