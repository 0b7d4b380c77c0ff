"""Brainfuck execution engine.

The eight instructions operate on a fixed tape of signed cells:

    >   move the data pointer right (faults at the last cell)
    <   move the data pointer left (faults at cell 0)
    +   increment the current cell, wrapping over the cell width
    -   decrement the current cell, wrapping over the cell width
    .   write the low byte of the current cell to the output
    ,   read one byte into the current cell (0 on end of input)
    [   skip past the matching ] if the current cell is 0
    ]   jump back to the matching [ if the current cell is nonzero

Every other byte is a comment.
"""
from __future__ import annotations

from typing import BinaryIO, Dict, Optional, Union

from .cells import CellWidth, DEFAULT_CELL_BITS
from .errors import BFIConfigError, BFIFault, FaultKind, make_fault
from .state import MEMORY_SIZE, InterpreterState

Program = Union[bytes, bytearray, str]

RIGHT = ord('>')
LEFT = ord('<')
INC = ord('+')
DEC = ord('-')
OUT = ord('.')
IN = ord(',')
OPEN = ord('[')
CLOSE = ord(']')

INSTRUCTIONS = frozenset(b'><+-.,[]')


def as_program(program: Program) -> bytes:
    if isinstance(program, str):
        return program.encode('utf-8')
    return bytes(program)


def find_closing(program: bytes, start: int) -> Optional[int]:
    """Scan forward from the '[' at ``start`` for its matching ']'."""
    depth = 1
    pos = start
    last = len(program) - 1
    while pos < last:
        pos += 1
        ch = program[pos]
        if ch == CLOSE:
            depth -= 1
            if depth == 0:
                return pos
        elif ch == OPEN:
            depth += 1
    return None


def find_opening(program: bytes, start: int) -> Optional[int]:
    """Scan backward from the ']' at ``start`` for its matching '['."""
    depth = 1
    pos = start
    while pos > 0:
        pos -= 1
        ch = program[pos]
        if ch == OPEN:
            depth -= 1
            if depth == 0:
                return pos
        elif ch == CLOSE:
            depth += 1
    return None


def build_jump_table(program: bytes) -> Dict[int, int]:
    """Map every matched bracket to its partner in one pass.

    Unmatched brackets get no entry; they only fault if execution actually
    needs to jump from them.
    """
    jump_table: Dict[int, int] = {}
    stack = []

    for pos, ch in enumerate(program):
        if ch == OPEN:
            stack.append(pos)
        elif ch == CLOSE and stack:
            start = stack.pop()
            jump_table[start] = pos
            jump_table[pos] = start

    return jump_table


def _read_byte(source: Optional[BinaryIO]) -> Optional[int]:
    if source is None:
        return None
    try:
        data = source.read(1)
    except (OSError, ValueError):
        return None
    if not data:
        return None
    return data[0]


class Interpreter:
    def __init__(self, *, cell_bits: int = DEFAULT_CELL_BITS, tape_size: int = MEMORY_SIZE,
                 use_jump_table: bool = False, trace_limit: int = 0):
        if tape_size < 1:
            raise BFIConfigError(f"Tape size must be positive, got {tape_size}")
        if trace_limit < 0:
            raise BFIConfigError(f"Trace limit must not be negative, got {trace_limit}")
        self.cells = CellWidth(cell_bits)
        self.use_jump_table = use_jump_table
        self.state = InterpreterState(cells=self.cells, tape_size=tape_size, trace_limit=trace_limit)

    def run(self, program: Program, input: Optional[BinaryIO], output: BinaryIO,
            error_log: Optional[BinaryIO] = None, *, reset: bool = True) -> Optional[BFIFault]:
        """Run ``program`` to completion.

        Returns None on success, or the fault that stopped execution after
        writing its diagnostic line to ``error_log`` (when given). With
        ``reset=False`` the tape and data pointer left by the previous run
        (or set on ``self.state``) are kept; the program counter restarts.
        """
        code = as_program(program)
        if reset:
            self.state.reset()
        else:
            self.state.pc = 0
            self.state.steps = 0
            self.state.trace.clear()
        try:
            self._execute(code, input, output)
        except BFIFault as fault:
            if error_log is not None:
                error_log.write(fault.diagnostic().encode('utf-8'))
                flush = getattr(error_log, 'flush', None)
                if flush is not None:
                    flush()
            return fault
        return None

    def _execute(self, code: bytes, input: Optional[BinaryIO], output: BinaryIO) -> None:
        state = self.state
        cells = self.cells
        tape = state.tape
        last_cell = len(tape) - 1
        length = len(code)
        jump_table = build_jump_table(code) if self.use_jump_table else None
        flush = getattr(output, 'flush', None)

        while state.pc < length:
            ch = code[state.pc]
            if ch not in INSTRUCTIONS:
                state.pc += 1
                continue

            state.steps += 1
            if state.trace_limit:
                state.add_trace(chr(ch))

            if ch == RIGHT:
                if state.pointer == last_cell:
                    raise make_fault(FaultKind.OUT_OF_BOUNDS, program=code,
                                     position=state.pc, direction='right')
                state.pointer += 1
            elif ch == LEFT:
                if state.pointer == 0:
                    raise make_fault(FaultKind.OUT_OF_BOUNDS, program=code,
                                     position=state.pc, direction='left')
                state.pointer -= 1
            elif ch == INC:
                tape[state.pointer] = cells.wrap(int(tape[state.pointer]) + 1)
            elif ch == DEC:
                tape[state.pointer] = cells.wrap(int(tape[state.pointer]) - 1)
            elif ch == OUT:
                output.write(bytes((cells.to_byte(tape[state.pointer]),)))
                if flush is not None:
                    flush()
            elif ch == IN:
                byte = _read_byte(input)
                tape[state.pointer] = 0 if byte is None else cells.from_byte(byte)
            elif ch == OPEN:
                if tape[state.pointer] == 0:
                    if jump_table is not None:
                        target = jump_table.get(state.pc)
                    else:
                        target = find_closing(code, state.pc)
                    if target is None:
                        raise make_fault(FaultKind.MISSING_CLOSING_BRACKET, program=code,
                                         position=state.pc)
                    state.pc = target
            elif ch == CLOSE:
                if tape[state.pointer] != 0:
                    if jump_table is not None:
                        target = jump_table.get(state.pc)
                    else:
                        target = find_opening(code, state.pc)
                    if target is None:
                        raise make_fault(FaultKind.MISSING_OPENING_BRACKET, program=code,
                                         position=state.pc)
                    state.pc = target

            state.pc += 1


def interpret(program: Program, input: Optional[BinaryIO], output: BinaryIO,
              error_log: Optional[BinaryIO] = None, *, cell_bits: int = DEFAULT_CELL_BITS,
              tape_size: int = MEMORY_SIZE, use_jump_table: bool = False) -> Optional[BFIFault]:
    interpreter = Interpreter(cell_bits=cell_bits, tape_size=tape_size,
                              use_jump_table=use_jump_table)
    return interpreter.run(program, input, output, error_log)
