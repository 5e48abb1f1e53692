"""
6502 Opcode Definitions
=======================

Opcode values, addressing modes, and per-instruction metadata for the
instructions the emulator implements.

Adding an instruction takes three edits:
    1. a member on ``Opcode``
    2. a row in ``OPCODE_TABLE``
    3. a ``case`` in ``Processor._execute_instruction``

Reference: http://www.6502.org/users/obelisk/6502/reference.html

Copyright (c) 2026 emu6502 Contributors
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Optional


class AddressingMode(Enum):
    """Rule for computing an instruction's effective operand."""
    IMMEDIATE = auto()
    ZERO_PAGE = auto()
    ZERO_PAGE_X = auto()
    ABSOLUTE = auto()


class Opcode(IntEnum):
    """Opcode bytes understood by the processor."""
    JSR = 0x20      # Jump to subroutine
    LDA_ZP = 0xA5   # Load A, zero page
    LDA_IM = 0xA9   # Load A, immediate
    LDA_ZPX = 0xB5  # Load A, zero page,X


@dataclass(frozen=True)
class InstructionInfo:
    """
    Static description of one opcode.

    Attributes:
        mnemonic: Assembler mnemonic (e.g. "LDA")
        mode: Addressing mode
        cycles: Nominal cycle cost, including the opcode fetch
        operand_bytes: Number of operand bytes following the opcode
    """
    mnemonic: str
    mode: AddressingMode
    cycles: int
    operand_bytes: int


OPCODE_TABLE: dict[Opcode, InstructionInfo] = {
    Opcode.LDA_IM: InstructionInfo("LDA", AddressingMode.IMMEDIATE, 2, 1),
    Opcode.LDA_ZP: InstructionInfo("LDA", AddressingMode.ZERO_PAGE, 3, 1),
    Opcode.LDA_ZPX: InstructionInfo("LDA", AddressingMode.ZERO_PAGE_X, 4, 1),
    Opcode.JSR: InstructionInfo("JSR", AddressingMode.ABSOLUTE, 6, 2),
}


def is_valid_opcode(value: int) -> bool:
    """Check whether a byte decodes to an implemented instruction."""
    try:
        Opcode(value)
    except ValueError:
        return False
    return True


def get_instruction_info(value: int) -> Optional[InstructionInfo]:
    """
    Look up metadata for an opcode byte.

    Args:
        value: Opcode byte

    Returns:
        InstructionInfo, or None if the opcode is not implemented
    """
    if not is_valid_opcode(value):
        return None
    return OPCODE_TABLE[Opcode(value)]
