"""Stage schedule shared by the forward transform and the recovery."""

from dataclasses import dataclass
from typing import Iterator, Tuple


def stage_count(size: int) -> int:
    """Number of integer halvings before size reaches 1."""
    count = 0
    while size > 1:
        count += 1
        size //= 2
    return count


def sub_extent(size: int, stages_done: int) -> int:
    """Extent of the region still being refined after stages_done halvings."""
    return max(1, size // (2 ** max(stages_done, 0)))


def recover_extents(width: int, height: int, rows_left: int, cols_left: int) -> Tuple[int, int]:
    """(sub_columns, sub_rows) for a recover call given remaining counters.

    Both counters are decremented first: recovery widens the sub-block
    back to the extent it had before the matching forward pass.
    """
    return sub_extent(width, rows_left - 1), sub_extent(height, cols_left - 1)


@dataclass(frozen=True)
class ForwardStep:
    stage: int
    row_pass: bool
    column_pass: bool


@dataclass(frozen=True)
class RecoverStep:
    """One recovery iteration, described by the counters left before it."""

    rows_left: int
    cols_left: int

    @property
    def column_recover(self) -> bool:
        return self.cols_left > 0 and self.cols_left >= self.rows_left

    @property
    def row_recover(self) -> bool:
        return self.rows_left > 0 and self.rows_left >= self.cols_left

    @property
    def column_counters(self) -> Tuple[int, int]:
        """(cols_left, rows_left) handed to column_recover."""
        if self.cols_left > self.rows_left:
            return self.cols_left, self.rows_left + 1
        return self.cols_left, self.rows_left

    @property
    def row_counters(self) -> Tuple[int, int]:
        """(rows_left, cols_left) handed to row_recover."""
        if self.rows_left > self.cols_left:
            return self.rows_left, self.cols_left + 1
        return self.rows_left, self.cols_left


@dataclass(frozen=True)
class StageSchedule:
    """Pass counts per axis for a width x height grid.

    Row passes pair neighbouring columns, so their count follows the
    width; column passes pair neighbouring rows and follow the height.
    """

    width: int
    height: int

    @property
    def row_stages(self) -> int:
        return stage_count(self.width)

    @property
    def column_stages(self) -> int:
        return stage_count(self.height)

    @property
    def total_stages(self) -> int:
        return max(self.row_stages, self.column_stages)

    def extents(self, stage: int) -> Tuple[int, int]:
        """(sub_columns, sub_rows) of the active sub-block at a forward stage."""
        return sub_extent(self.width, stage), sub_extent(self.height, stage)

    def forward_steps(self) -> Iterator[ForwardStep]:
        for stage in range(self.total_stages):
            yield ForwardStep(
                stage=stage,
                row_pass=stage < self.row_stages,
                column_pass=stage < self.column_stages
            )

    def recovery_steps(self) -> Iterator[RecoverStep]:
        rows_left, cols_left = self.row_stages, self.column_stages
        while rows_left > 0 or cols_left > 0:
            step = RecoverStep(rows_left, cols_left)
            yield step
            if step.column_recover:
                cols_left -= 1
            if step.row_recover:
                rows_left -= 1
