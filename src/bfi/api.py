from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np

from .cells import DEFAULT_CELL_BITS
from .errors import BFIFault, BFILoadError
from .interpreter import Interpreter, Program
from .state import MEMORY_SIZE

MAX_PROGRAM_SIZE = 1024 * 1024 * 1024


@dataclass(frozen=True)
class InterpretOptions:
    cell_bits: int = DEFAULT_CELL_BITS
    tape_size: int = MEMORY_SIZE
    use_jump_table: bool = False
    trace_limit: int = 0


@dataclass(frozen=True)
class InterpretResult:
    output: bytes
    fault: Optional[BFIFault]
    diagnostics: bytes
    steps: int
    trace: List[str] = field(default_factory=list)
    tape: Optional[np.ndarray] = None

    @property
    def ok(self) -> bool:
        return self.fault is None


def _make_interpreter(options: Optional[InterpretOptions]) -> Interpreter:
    opts = options or InterpretOptions()
    return Interpreter(
        cell_bits=opts.cell_bits,
        tape_size=opts.tape_size,
        use_jump_table=opts.use_jump_table,
        trace_limit=opts.trace_limit,
    )


def run_string(program: Program, input_data: bytes = b"", *,
               options: Optional[InterpretOptions] = None) -> InterpretResult:
    interpreter = _make_interpreter(options)
    stdout = io.BytesIO()
    stderr = io.BytesIO()
    fault = interpreter.run(program, io.BytesIO(input_data), stdout, stderr)
    state = interpreter.state
    return InterpretResult(
        output=stdout.getvalue(),
        fault=fault,
        diagnostics=stderr.getvalue(),
        steps=state.steps,
        trace=list(state.trace),
        tape=state.tape.copy(),
    )


def load_program(path: str | Path, *, max_size: int = MAX_PROGRAM_SIZE) -> bytes:
    p = Path(path)
    try:
        with p.open('rb') as f:
            data = f.read(max_size + 1)
    except OSError:
        raise BFILoadError(message=f"Couldn't find file {p}", path=str(p)) from None
    if len(data) > max_size:
        raise BFILoadError(message=f"File too large: {p} (limit {max_size} bytes)", path=str(p))
    return data


def run_file(path: str | Path, input_data: bytes = b"", *,
             options: Optional[InterpretOptions] = None) -> InterpretResult:
    return run_string(load_program(path), input_data, options=options)
