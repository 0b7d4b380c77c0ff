from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, List, Optional

from .errors import BFIConfigError, BFILoadError
from .api import load_program
from .interpreter import Interpreter


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="bfi",
        description="Brainfuck interpreter (32-bit wrapping cells, 30000-cell tape by default).",
    )
    parser.add_argument("file", nargs="?", help="Program file to run")
    parser.add_argument("-e", "--eval", dest="program", help="Run PROGRAM given on the command line")
    parser.add_argument("--cell-bits", type=int, choices=(8, 16, 32), default=32,
                        help="Cell width in bits (default 32)")
    parser.add_argument("--tape-size", type=int, default=30000, help="Number of tape cells (default 30000)")
    parser.add_argument("--jump-table", action="store_true",
                        help="Resolve brackets with a precomputed jump table")
    parser.add_argument("--quiet", action="store_true", help="Do not print fault diagnostics")
    parser.add_argument("--trace", type=int, default=0, metavar="N",
                        help="Print the first N executed instructions to stderr")
    parser.add_argument("--dump", type=int, default=0, metavar="N",
                        help="Print the first N tape cells after the run")
    return parser


def _join_eval_args(argv: List[str]) -> List[str]:
    # Programs may start with "-", which argparse would take for an option
    out: List[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in ("-e", "--eval") and i + 1 < len(argv):
            out.append(f"--eval={argv[i + 1]}")
            i += 2
            continue
        out.append(arg)
        i += 1
    return out


def _write(stream: BinaryIO, text: str) -> None:
    stream.write(text.encode("utf-8"))
    stream.flush()


def _dump_tape(stream: BinaryIO, tape, count: int) -> None:
    cells = [int(v) for v in tape[:count]]
    for i in range(0, len(cells), 8):
        _write(stream, " ".join(str(v) for v in cells[i:i + 8]) + "\n")


def main(argv: Optional[List[str]] = None, *, stdin: Optional[BinaryIO] = None,
         stdout: Optional[BinaryIO] = None, stderr: Optional[BinaryIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_join_eval_args(sys.argv[1:] if argv is None else list(argv)))

    if (args.file is None) == (args.program is None):
        parser.error("give exactly one of FILE or -e PROGRAM")

    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer
    stderr = stderr if stderr is not None else sys.stderr.buffer

    try:
        interpreter = Interpreter(
            cell_bits=args.cell_bits,
            tape_size=args.tape_size,
            use_jump_table=args.jump_table,
            trace_limit=max(args.trace, 0),
        )
        program = load_program(args.file) if args.file is not None else args.program
    except (BFIConfigError, BFILoadError) as e:
        _write(stderr, f"{e}\n")
        return 1

    fault = interpreter.run(program, stdin, stdout, None if args.quiet else stderr)
    stdout.flush()

    for line in interpreter.state.trace:
        _write(stderr, line + "\n")

    if args.dump > 0:
        _dump_tape(stdout, interpreter.state.tape, args.dump)

    if fault is not None:
        if not args.quiet:
            _write(stderr, fault.context + "\n")
            if fault.hint:
                _write(stderr, f"Hint: {fault.hint}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
