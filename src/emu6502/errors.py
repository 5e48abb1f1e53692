"""
emu6502 Error Hierarchy
=======================

This module defines the exception hierarchy for the emu6502 package.
All exceptions inherit from Emu6502Error, allowing callers to catch every
emulator-related error with a single except clause if desired.

Exception Hierarchy
-------------------
Emu6502Error (base)
├── AddressOutOfRangeError - address outside the 64 KiB address space
├── InvalidAddressError    - processor-level read of an invalid address
├── UnhandledOpcodeError   - opcode with no handler (strict mode only)
└── ProcessorStateError    - processor used before it was reset

Addresses are reported in the usual $XXXX notation so messages line up with
the register dumps produced elsewhere in the package.

Copyright (c) 2026 emu6502 Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Emu6502Error(Exception):
    """
    Base exception for all emu6502 errors.

        try:
            cpu.execute(1000, memory)
        except Emu6502Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Memory Exceptions
# =============================================================================

class AddressOutOfRangeError(Emu6502Error):
    """
    An address presented to the AddressSpace falls outside [0, size).

    Raised by every AddressSpace access method before any byte is touched,
    so a failed access never leaves memory partially modified.

    Attributes:
        address: The offending address (as supplied, not truncated)
        size: Size of the address space that rejected it
    """

    def __init__(self, address: int, size: int = 0x10000):
        self.address = address
        self.size = size
        super().__init__(
            f"address {_format_address(address)} out of range "
            f"(valid: $0000-${size - 1:04X})"
        )


class InvalidAddressError(Emu6502Error):
    """
    The processor attempted to read from an address it cannot reach.

    This is the processor-level counterpart of AddressOutOfRangeError. It
    carries the program counter at the time of the read so the failing
    instruction can be located.

    Attributes:
        address: The offending address
        pc: Program counter when the read was attempted (optional)
    """

    def __init__(self, address: int, pc: Optional[int] = None):
        self.address = address
        self.pc = pc
        message = f"invalid memory address {_format_address(address)}"
        if pc is not None:
            message += f" (PC=${pc:04X})"
        super().__init__(message)


# =============================================================================
# Execution Exceptions
# =============================================================================

class UnhandledOpcodeError(Emu6502Error):
    """
    Decode hit an opcode with no handler while strict opcode mode is on.

    In the default (non-strict) mode unhandled opcodes are reported to the
    processor's observer hook instead, and execution continues.

    Attributes:
        opcode: The unrecognised opcode byte
        address: Address the opcode was fetched from
    """

    def __init__(self, opcode: int, address: int):
        self.opcode = opcode
        self.address = address
        super().__init__(
            f"instruction not handled: ${opcode:02X} at ${address:04X}"
        )


class ProcessorStateError(Emu6502Error):
    """Processor was asked to execute before reset() established its state."""
    pass


def _format_address(address: int) -> str:
    """Format an address that may not fit in 16 bits."""
    if address < 0:
        return f"-${-address:04X}"
    return f"${address:04X}"
