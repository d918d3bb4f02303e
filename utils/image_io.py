"""Image I/O using OpenCV."""

import logging
import os
from typing import List

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class ImageLoadError(ValueError):
    """Raised when a file cannot be decoded into an image."""


def load_image(path: str) -> np.ndarray:
    """Load image as RGB (or single-band) uint8."""
    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ImageLoadError(f"Could not load image from {path}")
    if img.ndim == 2:
        return img
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def to_display(image: np.ndarray, data_range: float = 255.0) -> np.ndarray:
    """Round and clip real-valued samples into uint8."""
    scaled = np.asarray(image, dtype=np.float64) * (255.0 / data_range)
    return np.clip(np.round(scaled), 0, 255).astype(np.uint8)


def save_image(image: np.ndarray, path: str) -> None:
    """Save an (H, W) or (H, W, B) image of any numeric dtype."""
    img = image if image.dtype == np.uint8 else to_display(image)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[:, :, 0]
    elif img.ndim == 3 and img.shape[2] == 3:
        img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
    elif img.ndim == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)
    if not cv2.imwrite(path, img):
        raise OSError(f"Could not write image to {path}")


def stage_file_names(process: str, stage: int, file_ext: str) -> tuple:
    """(reconstruction, expansion) file names for one stage."""
    return f"{process}_{stage}.{file_ext}", f"{process}PE_{stage}.{file_ext}"


def save_stage_images(results, process: str, output_dir: str = ".", file_ext: str = "png") -> List[str]:
    """Write every stage of a ResultSequence; returns the written paths."""
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for result in results:
        image_name, expansion_name = stage_file_names(process, result.stage, file_ext)
        for name, grid in ((image_name, result.image), (expansion_name, result.expansion)):
            path = os.path.join(output_dir, name)
            save_image(grid, path)
            paths.append(path)
    logger.info("Wrote %d stage file(s) to %s", len(paths), output_dir)
    return paths
