"""
emu6502 - MOS 6502 Execution Core
=================================

Fetch-decode-execute emulation of the MOS 6502 8-bit microprocessor:
a 64 KiB address space and a processor that executes instructions against
it while tracking condition flags and cycle cost.

Quick Start
-----------
    >>> from emu6502 import AddressSpace, Processor, Opcode
    >>> memory = AddressSpace()
    >>> cpu = Processor()
    >>> cpu.reset(memory)
    >>> memory.load(0xFFFC, [Opcode.JSR, 0x42, 0x42])
    >>> memory.load(0x4242, [Opcode.LDA_IM, 0x84])
    >>> cpu.execute(9, memory)
    9
    >>> print(f"A=${cpu.a:02X} PC=${cpu.pc:04X}")
    A=$84 PC=$4244

Or through the session wrapper:
    >>> from emu6502 import Emulator
    >>> emu = Emulator()
    >>> emu.reset()

Module Structure
----------------
- `memory.py`: AddressSpace (bounds-checked 64 KiB memory)
- `cpu.py`: Processor, flags and dispatch
- `opcodes.py`: Opcode values and instruction metadata
- `cycles.py`: CycleBudget accounting
- `emulator.py`: Emulator session and EmulatorConfig
- `errors.py`: Exception hierarchy

Reference: http://www.6502.org/users/obelisk/
"""

__version__ = "0.1.0"

from emu6502.cpu import CPUState, Processor, StatusFlags, UnhandledOpcodeEvent
from emu6502.cycles import CycleBudget
from emu6502.emulator import Emulator, EmulatorConfig
from emu6502.errors import (
    AddressOutOfRangeError,
    Emu6502Error,
    InvalidAddressError,
    ProcessorStateError,
    UnhandledOpcodeError,
)
from emu6502.memory import AddressSpace
from emu6502.opcodes import (
    OPCODE_TABLE,
    AddressingMode,
    InstructionInfo,
    Opcode,
    get_instruction_info,
    is_valid_opcode,
)

__all__ = [
    # Session
    "Emulator",
    "EmulatorConfig",

    # CPU
    "Processor",
    "CPUState",
    "StatusFlags",
    "UnhandledOpcodeEvent",
    "CycleBudget",

    # Memory
    "AddressSpace",

    # Opcodes
    "Opcode",
    "AddressingMode",
    "InstructionInfo",
    "OPCODE_TABLE",
    "get_instruction_info",
    "is_valid_opcode",

    # Errors
    "Emu6502Error",
    "AddressOutOfRangeError",
    "InvalidAddressError",
    "UnhandledOpcodeError",
    "ProcessorStateError",
]
