#!/usr/bin/env python3
"""
Test cell width arithmetic.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import pytest

from bfi import BFIConfigError, CellWidth, InterpretOptions, run_string

# Prints "8 bit cells", "16 bit cells" or "32 bit cells" depending on the cell width
CELL_WIDTH_PROBE = """
 // This generates 65536 to check for larger than 16bit cells
 [-]>[-]++[<++++++++>-]<[>++++++++<-]>[<++++++++>-]<[>++++++++<-]>[<+++++
 +++>-]<[[-]
 [-]>[-]+++++[<++++++++++>-]<+.-.
 [-]]
 // This section is cell doubling for 16bit cells
 >[-]>[-]<<[-]++++++++[>++++++++<-]>[<++++>-]<[->+>+<<]>[<++++++++>-]<[>+
 +++++++<-]>[<++++>-]>[<+>[-]]<<[>[-]<[-]]>[-<+>]<[[-]
 [-]>[-]+++++++[<+++++++>-]<.+++++.
 [-]]
 // This section is cell quadrupling for 8bit cells
 [-]>[-]++++++++[<++++++++>-]<[>++++<-]+>[<->[-]]<[[-]
 [-]>[-]+++++++[<++++++++>-]<.
 [-]]
 [-]>[-]++++[-<++++++++>]<.[->+++<]>++.+++++++.+++++++++++.[----<+>]<+++.
 +[->+++<]>.++.+++++++..+++++++.[-]++++++++++.[-]<
"""


def test_default_width_is_32_bits():
    cells = CellWidth()
    assert cells.bits == 32
    assert cells.dtype is np.int32
    assert cells.min_value == -2 ** 31
    assert cells.max_value == 2 ** 31 - 1


def test_wrap_32_bits():
    cells = CellWidth(32)
    assert cells.wrap(2 ** 31) == -2 ** 31
    assert cells.wrap(-2 ** 31 - 1) == 2 ** 31 - 1
    assert cells.wrap(2 ** 32) == 0
    assert cells.wrap(-1) == -1


def test_wrap_8_bits():
    cells = CellWidth(8)
    assert cells.wrap(127) == 127
    assert cells.wrap(128) == -128
    assert cells.wrap(-129) == 127
    assert cells.wrap(256) == 0


def test_to_byte_takes_low_bits():
    assert CellWidth.to_byte(300) == 44
    assert CellWidth.to_byte(-1) == 255
    assert CellWidth.to_byte(-200) == 56
    assert CellWidth.to_byte(np.int32(65)) == 65


def test_from_byte_reinterprets_in_width():
    assert CellWidth(8).from_byte(200) == -56
    assert CellWidth(16).from_byte(200) == 200
    assert CellWidth(32).from_byte(255) == 255


def test_unsupported_width():
    with pytest.raises(BFIConfigError):
        CellWidth(12)
    with pytest.raises(BFIConfigError):
        run_string("+", options=InterpretOptions(cell_bits=64))


@pytest.mark.parametrize("bits", [8, 16])
def test_full_cycle_returns_to_zero(bits):
    result = run_string("+" * (2 ** bits), options=InterpretOptions(cell_bits=bits))
    assert result.ok
    assert int(result.tape[0]) == 0


def test_8_bit_cells_wrap_to_negative():
    result = run_string("+" * 128 + ".", options=InterpretOptions(cell_bits=8))
    assert result.ok
    assert int(result.tape[0]) == -128
    assert result.output == bytes([128])


def test_32_bit_cells_do_not_wrap_at_byte_boundary():
    result = run_string("+" * 256)
    assert result.ok
    assert int(result.tape[0]) == 256


def test_input_byte_stored_per_width():
    result = run_string(",.", bytes([200]), options=InterpretOptions(cell_bits=8))
    assert int(result.tape[0]) == -56
    assert result.output == bytes([200])

    result = run_string(",.", bytes([200]))
    assert int(result.tape[0]) == 200
    assert result.output == bytes([200])


@pytest.mark.parametrize("bits, expected", [
    (8, b"8 bit cells\n"),
    (16, b"16 bit cells\n"),
    (32, b"32 bit cells\n"),
])
def test_cell_width_probe(bits, expected):
    result = run_string(CELL_WIDTH_PROBE, options=InterpretOptions(cell_bits=bits))
    assert result.ok
    assert result.output == expected
