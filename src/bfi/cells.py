from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import BFIConfigError

# bits -> tape dtype
_DTYPES = {
    8: np.int8,
    16: np.int16,
    32: np.int32,
}

DEFAULT_CELL_BITS = 32


@dataclass(frozen=True)
class CellWidth:
    """Signed two's-complement cell of a fixed bit width.

    Arithmetic never traps: ``+``/``-`` wrap around the width. Output takes
    the low byte of the bit pattern, so with 32-bit cells a cell holding -1
    prints byte 255 and a cell holding 300 prints byte 44.
    """

    bits: int = DEFAULT_CELL_BITS

    def __post_init__(self) -> None:
        if self.bits not in _DTYPES:
            supported = ', '.join(str(b) for b in sorted(_DTYPES))
            raise BFIConfigError(f"Unsupported cell width: {self.bits} (expected one of {supported})")

    @property
    def dtype(self):
        return _DTYPES[self.bits]

    @property
    def modulus(self) -> int:
        return 1 << self.bits

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def wrap(self, value: int) -> int:
        value &= self.modulus - 1
        if value > self.max_value:
            value -= self.modulus
        return value

    def from_byte(self, byte: int) -> int:
        return self.wrap(byte & 0xFF)

    @staticmethod
    def to_byte(value: int) -> int:
        return int(value) & 0xFF

    def new_tape(self, size: int) -> np.ndarray:
        return np.zeros(size, dtype=self.dtype)
