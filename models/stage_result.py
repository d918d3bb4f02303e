"""Per-stage output of a transform or recover run."""

from dataclasses import dataclass, field
from typing import Iterator, List

import numpy as np


@dataclass
class StageResult:
    """Materialized grids captured after one stage."""

    stage: int
    image: np.ndarray
    expansion: np.ndarray

    # Passes applied per axis when the expansion was taken
    row_stages_applied: int = 0
    column_stages_applied: int = 0

    # Wall time since the previous capture (or the start of the run)
    elapsed_ms: float = 0.0


@dataclass
class ResultSequence:
    """Ordered stage results; the first entry is the starting state."""

    process: str
    stages: List[StageResult] = field(default_factory=list)

    def append(self, result: StageResult) -> None:
        self.stages.append(result)

    def clear(self) -> None:
        self.stages.clear()

    def __len__(self) -> int:
        return len(self.stages)

    def __iter__(self) -> Iterator[StageResult]:
        return iter(self.stages)

    def __getitem__(self, index: int) -> StageResult:
        return self.stages[index]

    @property
    def final(self) -> StageResult:
        return self.stages[-1]

    @property
    def total_time_ms(self) -> float:
        return sum(result.elapsed_ms for result in self.stages)
