"""
Memory Subsystem for the 6502 Emulator
======================================

A single flat 64 KiB address space. The 6502 has no memory management of
its own, so every address from $0000 to $FFFF maps to one byte here.

Memory Map (conventional, not enforced):
    $0000-$00FF  Zero page (single-byte addressing)
    $0100-$01FF  Stack page
    $0200-$FFFB  General purpose
    $FFFC-$FFFD  Reset location (the processor starts fetching at $FFFC)

Every access is bounds-checked. Addresses are plain Python ints, so an
out-of-range value is rejected with AddressOutOfRangeError rather than
silently truncated to 16 bits.

Copyright (c) 2026 emu6502 Contributors
"""

from typing import Iterable

from .cycles import CycleBudget
from .errors import AddressOutOfRangeError


class AddressSpace:
    """
    Byte-addressable memory covering the full 6502 address range.

    The processor borrows an AddressSpace for the duration of each call and
    never keeps a reference to it; the caller owns it.

    Attributes:
        MAX_MEM: Number of addressable bytes (64 KiB)

    Example:
        >>> memory = AddressSpace()
        >>> memory.write(0x0200, 0x42)
        >>> memory.read(0x0200)
        66
    """

    MAX_MEM = 1024 * 64

    def __init__(self):
        self._data = bytearray(self.MAX_MEM)

    def __len__(self) -> int:
        return self.MAX_MEM

    def __getitem__(self, address: int) -> int:
        return self.read(address)

    def __setitem__(self, address: int, value: int) -> None:
        self.write(address, value)

    def _check(self, address: int) -> None:
        if not (0 <= address < self.MAX_MEM):
            raise AddressOutOfRangeError(address, self.MAX_MEM)

    def initialise(self) -> None:
        """Set every byte to zero."""
        self._data[:] = bytes(self.MAX_MEM)

    def read(self, address: int) -> int:
        """
        Read a byte.

        Args:
            address: Address in [0, MAX_MEM)

        Returns:
            Byte value at address

        Raises:
            AddressOutOfRangeError: If address is outside the address space
        """
        self._check(address)
        return self._data[address]

    def write(self, address: int, value: int) -> None:
        """
        Write a byte.

        Args:
            address: Address in [0, MAX_MEM)
            value: Byte value to write (masked to 8 bits)

        Raises:
            AddressOutOfRangeError: If address is outside the address space
        """
        self._check(address)
        self._data[address] = value & 0xFF

    def write_word(self, value: int, address: int, cycles: CycleBudget) -> None:
        """
        Write a 16-bit word, little-endian, and charge 2 cycles.

        Low byte goes to ``address``, high byte to ``address + 1``. Both
        addresses are validated first; a rejected write changes nothing and
        charges nothing.

        Args:
            value: Word to write (masked to 16 bits)
            address: Address of the low byte
            cycles: Budget to debit

        Raises:
            AddressOutOfRangeError: If either byte address is out of range
        """
        self._check(address)
        self._check(address + 1)
        self._data[address] = value & 0xFF
        self._data[address + 1] = (value >> 8) & 0xFF
        cycles.debit(2)

    def load(self, address: int, data: Iterable[int]) -> None:
        """
        Copy a block of bytes into memory starting at ``address``.

        The whole span is validated before anything is written.

        Args:
            address: Destination of the first byte
            data: Byte values to copy

        Raises:
            AddressOutOfRangeError: If any part of the span is out of range
        """
        block = bytes(b & 0xFF for b in data)
        self._check(address)
        if block:
            self._check(address + len(block) - 1)
        self._data[address:address + len(block)] = block

    def dump(self, address: int, length: int) -> bytes:
        """
        Return a copy of ``length`` bytes starting at ``address``.

        Raises:
            ValueError: If length is negative
            AddressOutOfRangeError: If any byte of the span is outside memory
        """
        if length < 0:
            raise ValueError(f"dump length must not be negative, got {length}")
        self._check(address)
        if length > 0:
            self._check(address + length - 1)
        return bytes(self._data[address:address + length])
