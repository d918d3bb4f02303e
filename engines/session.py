"""Multi-stage transform/recover session with progress and cancellation."""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from models.sample_volume import SampleVolume
from models.stage_result import ResultSequence, StageResult
from models.transform_params import TransformParams
from engines.schedule import StageSchedule
from engines.haar_transform import row_pass, column_pass
from engines.haar_recover import row_recover, column_recover
from engines.expansion import pixel_expansion
from utils.image_io import save_stage_images

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class TransformCancelled(Exception):
    """Raised at a checkpoint once cancellation has been requested."""


class TransformSession:
    """Runs the staged decomposition and its inverse over one volume.

    The session owns the working volume and keeps a pristine copy taken
    at construction. Cancellation is polled only between passes, and a
    cancelled or failed run restores the pristine copy.
    """

    def __init__(
        self,
        volume: SampleVolume,
        params: Optional[TransformParams] = None,
        report_progress: Optional[Callable[[int], None]] = None,
        is_cancelled: Optional[Callable[[], bool]] = None
    ):
        self.volume = volume
        self.params = params or TransformParams()
        self.report_progress = report_progress
        self.is_cancelled = is_cancelled
        self.schedule = StageSchedule(volume.width, volume.height)
        self.state = SessionState.IDLE
        self._original = volume.copy()
        self._checkpoints_done = 0
        self._checkpoints_total = 1
        self._stage_started = 0.0

    @property
    def original(self) -> SampleVolume:
        return self._original

    def reset(self) -> None:
        """Restore the working volume from the pristine copy."""
        self.volume.replace(self._original.data.copy())

    def transform(self) -> ResultSequence:
        """Forward decomposition; one result pair per stage plus the start."""
        return self._run("Transform", self._transform_stages)

    def recover(self) -> ResultSequence:
        """Inverse of transform() applied to the current working volume."""
        return self._run("Recover", self._recover_stages)

    def _run(self, process: str, stages: Callable[[ResultSequence], None]) -> ResultSequence:
        if self.state == SessionState.RUNNING:
            raise RuntimeError("Session is already running")

        self.state = SessionState.RUNNING
        self._checkpoints_done = 0
        self._checkpoints_total = 2 + 4 * self.schedule.total_stages
        results = ResultSequence(process)
        logger.info(
            "%s: %dx%dx%d, %d row / %d column stages",
            process, self.volume.width, self.volume.height, self.volume.bands,
            self.schedule.row_stages, self.schedule.column_stages
        )

        self._stage_started = time.perf_counter()
        try:
            stages(results)
            if self.params.write_files:
                save_stage_images(results, process, self.params.output_dir, self.params.file_ext)
        except TransformCancelled:
            logger.warning("%s cancelled after %d stage(s)", process, max(len(results) - 1, 0))
            self.reset()
            results.clear()
            self.state = SessionState.CANCELLED
            raise
        except Exception:
            self.reset()
            self.state = SessionState.FAILED
            raise

        self.state = SessionState.COMPLETED
        logger.info(
            "%s completed: %d result pair(s) in %.2f ms",
            process, len(results), results.total_time_ms
        )
        return results

    def _transform_stages(self, results: ResultSequence) -> None:
        schedule = self.schedule
        self._capture(results, 0, 0, 0)

        for step in schedule.forward_steps():
            if step.row_pass:
                self.volume.replace(row_pass(self.volume.data, step.stage))
            self._checkpoint()
            if step.column_pass:
                self.volume.replace(column_pass(self.volume.data, step.stage))
            self._checkpoint()

            done = step.stage + 1
            logger.debug("Transform stage %d done", done)
            self._capture(
                results, done,
                min(done, schedule.row_stages),
                min(done, schedule.column_stages)
            )

    def _recover_stages(self, results: ResultSequence) -> None:
        schedule = self.schedule
        self._capture(results, 0, schedule.row_stages, schedule.column_stages)

        for stage, step in enumerate(schedule.recovery_steps(), start=1):
            # Column recover comes first: it undoes the last forward pass
            if step.column_recover:
                self.volume.replace(column_recover(self.volume.data, *step.column_counters))
            self._checkpoint()
            if step.row_recover:
                self.volume.replace(row_recover(self.volume.data, *step.row_counters))
            self._checkpoint()

            rows_left = step.rows_left - int(step.row_recover)
            cols_left = step.cols_left - int(step.column_recover)
            logger.debug("Recover stage %d done (%d row / %d column left)", stage, rows_left, cols_left)
            self._capture(results, stage, rows_left, cols_left)

    def _capture(self, results: ResultSequence, stage: int, row_stages: int, column_stages: int) -> None:
        image = self.volume.to_image()
        self._checkpoint()
        expansion = pixel_expansion(self.volume.data, row_stages, column_stages)
        self._checkpoint()

        now = time.perf_counter()
        results.append(StageResult(
            stage=stage,
            image=image,
            expansion=expansion.transpose(1, 0, 2).copy(),
            row_stages_applied=row_stages,
            column_stages_applied=column_stages,
            elapsed_ms=(now - self._stage_started) * 1000.0
        ))
        self._stage_started = now

    def _checkpoint(self) -> None:
        if self.is_cancelled is not None and self.is_cancelled():
            raise TransformCancelled("Transform or recover cancelled")

        self._checkpoints_done += 1
        if self.report_progress is not None:
            percent = min(100, self._checkpoints_done * 100 // self._checkpoints_total)
            self.report_progress(percent)
