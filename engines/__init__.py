"""Haar engines - pure computation, no GUI dependencies."""

from .schedule import StageSchedule, ForwardStep, RecoverStep, stage_count, sub_extent, recover_extents
from .haar_transform import row_pass, column_pass
from .haar_recover import row_recover, column_recover
from .expansion import pixel_expansion
from .session import TransformSession, SessionState, TransformCancelled

__all__ = [
    'StageSchedule',
    'ForwardStep',
    'RecoverStep',
    'stage_count',
    'sub_extent',
    'recover_extents',
    'row_pass',
    'column_pass',
    'row_recover',
    'column_recover',
    'pixel_expansion',
    'TransformSession',
    'SessionState',
    'TransformCancelled',
]
