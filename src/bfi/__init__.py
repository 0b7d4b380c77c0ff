
from .interpreter import Interpreter, interpret, build_jump_table, find_closing, find_opening
from .cells import CellWidth
from .errors import (
    BFIError,
    BFIConfigError,
    BFILoadError,
    BFIFault,
    FaultKind,
    MissingClosingBracket,
    MissingOpeningBracket,
    PointerOutOfBounds,
)
from .api import InterpretOptions, InterpretResult, load_program, run_file, run_string

__all__ = [
    'Interpreter',
    'interpret',
    'build_jump_table',
    'find_closing',
    'find_opening',
    'CellWidth',
    'BFIError',
    'BFIConfigError',
    'BFILoadError',
    'BFIFault',
    'FaultKind',
    'MissingClosingBracket',
    'MissingOpeningBracket',
    'PointerOutOfBounds',
    'InterpretOptions',
    'InterpretResult',
    'load_program',
    'run_file',
    'run_string',
]
