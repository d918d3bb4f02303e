"""Shared utilities."""

from .metrics import compute_degradation, max_abs_error
from .test_images import (
    generate_sequential_grid,
    generate_colored_checkerboard,
    generate_gradient,
    generate_noise,
    generate_demo_image,
)
from .image_io import ImageLoadError, load_image, save_image, to_display, save_stage_images

__all__ = [
    'compute_degradation',
    'max_abs_error',
    'generate_sequential_grid',
    'generate_colored_checkerboard',
    'generate_gradient',
    'generate_noise',
    'generate_demo_image',
    'ImageLoadError',
    'load_image',
    'save_image',
    'to_display',
    'save_stage_images',
]
