"""Data models for sample volumes, parameters and stage results."""

from .sample_volume import SampleVolume
from .transform_params import TransformParams, SUPPORTED_EXTENSIONS
from .stage_result import StageResult, ResultSequence

__all__ = ['SampleVolume', 'TransformParams', 'SUPPORTED_EXTENSIONS', 'StageResult', 'ResultSequence']
