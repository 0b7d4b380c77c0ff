from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .cells import CellWidth

MEMORY_SIZE = 30_000


@dataclass
class InterpreterState:
    cells: CellWidth = field(default_factory=CellWidth)
    tape_size: int = MEMORY_SIZE
    tape: np.ndarray = field(init=False)
    pointer: int = 0
    pc: int = 0
    steps: int = 0
    trace: List[str] = field(default_factory=list)
    trace_limit: int = 0

    def __post_init__(self) -> None:
        self.tape = self.cells.new_tape(self.tape_size)

    @property
    def is_tracing(self) -> bool:
        return len(self.trace) < self.trace_limit

    def reset(self) -> None:
        self.tape = self.cells.new_tape(self.tape_size)
        self.pointer = 0
        self.pc = 0
        self.steps = 0
        self.trace.clear()

    def current(self) -> int:
        return int(self.tape[self.pointer])

    def add_trace(self, command: str) -> None:
        if self.is_tracing:
            self.trace.append(
                f"pc={self.pc} cmd={command} ptr={self.pointer} cell={self.current()}"
            )
