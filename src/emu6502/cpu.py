"""
MOS 6502 CPU Emulator
=====================

Fetch-decode-execute core for the MOS 6502 with cycle accounting.

The 6502 has:
- 8-bit registers: A (accumulator), X, Y (index)
- 16-bit registers: PC (program counter), SP (stack pointer)
- Flags: C (carry), Z (zero), I (interrupt disable), D (decimal),
  B (break), V (overflow), N (negative)

Simplifications of this core:
- Reset does not read the reset vector; PC is set to $FFFC directly and
  execution starts there.
- The stack starts at $0100 and JSR grows it upward (SP is incremented
  after the return address is written).

Every memory access goes through an explicit CycleBudget, so the cost of
each instruction can be read off its handler.

Copyright (c) 2026 emu6502 Contributors
"""

import logging
from dataclasses import dataclass
from enum import IntFlag
from typing import Callable, Optional

from .cycles import CycleBudget
from .errors import (
    InvalidAddressError,
    ProcessorStateError,
    UnhandledOpcodeError,
)
from .memory import AddressSpace
from .opcodes import Opcode, get_instruction_info

logger = logging.getLogger(__name__)


class StatusFlags(IntFlag):
    """
    Processor status (P) flags.

    Bit layout of the status register:
        7  6  5  4  3  2  1  0
        N  V  -  B  D  I  Z  C

    Bit 5 is unused and always reads as 1 on real hardware.
    """
    C = 0x01  # Carry
    Z = 0x02  # Zero
    I = 0x04  # Interrupt disable
    D = 0x08  # Decimal mode
    B = 0x10  # Break command
    U = 0x20  # Unused
    V = 0x40  # Overflow
    N = 0x80  # Negative


@dataclass
class CPUState:
    """
    Complete register and flag state.

    All values stored as Python ints but represent:
    - a, x, y: 8-bit unsigned (0-255)
    - pc, sp: 16-bit unsigned (0-65535)
    - flags: StatusFlags bits (bit 5 never stored)
    """
    pc: int = 0
    sp: int = 0
    a: int = 0
    x: int = 0
    y: int = 0
    flags: int = 0

    def __str__(self) -> str:
        return (
            f"PC=${self.pc:04X} SP=${self.sp:04X} "
            f"A=${self.a:02X} X=${self.x:02X} Y=${self.y:02X} "
            f"P=${self.flags:02X}"
        )


@dataclass(frozen=True)
class UnhandledOpcodeEvent:
    """
    Report of an opcode the decoder has no handler for.

    Attributes:
        opcode: The unrecognised byte
        address: Where it was fetched from (PC is left pointing here)
        cycles_consumed: Cycles spent by the current execute/step call,
            including the opcode fetch
    """
    opcode: int
    address: int
    cycles_consumed: int

    def __str__(self) -> str:
        return f"Instruction not handled: ${self.opcode:02X} at ${self.address:04X}"


class Processor:
    """
    MOS 6502 CPU emulator.

    The processor does not own memory. Every operation takes the
    AddressSpace it should work against, and nothing is retained between
    calls.

    Unhandled opcodes are soft failures by default: the opcode fetch is
    charged, PC is put back on the opcode, and the event is logged and
    passed to ``on_unhandled_opcode``. A stream of unknown bytes therefore
    stalls in place one cycle at a time. With ``strict_opcodes`` set,
    UnhandledOpcodeError is raised instead.

    Example:
        >>> memory = AddressSpace()
        >>> cpu = Processor()
        >>> cpu.reset(memory)
        >>> memory[0xFFFC] = Opcode.LDA_IM
        >>> memory[0xFFFD] = 0x42
        >>> cpu.execute(2, memory)
        2
        >>> print(f"A=${cpu.a:02X} PC=${cpu.pc:04X}")
        A=$42 PC=$FFFE
    """

    RESET_PC = 0xFFFC
    RESET_SP = 0x0100

    def __init__(
        self,
        strict_opcodes: bool = False,
        log_unhandled_opcodes: bool = True,
    ):
        """
        Initialize CPU. Call reset() before executing anything.

        Args:
            strict_opcodes: Raise UnhandledOpcodeError on unknown opcodes
            log_unhandled_opcodes: Emit a warning for each unknown opcode
        """
        self.state = CPUState()
        self.strict_opcodes = strict_opcodes
        self.log_unhandled_opcodes = log_unhandled_opcodes

        # on_unhandled_opcode(event): observer for soft-failed decodes
        self.on_unhandled_opcode: Optional[
            Callable[[UnhandledOpcodeEvent], None]
        ] = None

        # Cycles spent by the last execute/step, kept even if it raised
        self.last_cycles = 0

        self._is_reset = False

    # ========================================
    # Register Properties
    # ========================================

    @property
    def a(self) -> int:
        """Accumulator (8-bit)."""
        return self.state.a

    @a.setter
    def a(self, value: int) -> None:
        self.state.a = value & 0xFF

    @property
    def x(self) -> int:
        """Index register X (8-bit)."""
        return self.state.x

    @x.setter
    def x(self, value: int) -> None:
        self.state.x = value & 0xFF

    @property
    def y(self) -> int:
        """Index register Y (8-bit)."""
        return self.state.y

    @y.setter
    def y(self, value: int) -> None:
        self.state.y = value & 0xFF

    @property
    def sp(self) -> int:
        """Stack pointer (16-bit)."""
        return self.state.sp

    @sp.setter
    def sp(self, value: int) -> None:
        self.state.sp = value & 0xFFFF

    @property
    def pc(self) -> int:
        """Program counter (16-bit)."""
        return self.state.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.state.pc = value & 0xFFFF

    # ========================================
    # Flag Properties
    # ========================================

    def _get_flag(self, flag: StatusFlags) -> bool:
        return bool(self.state.flags & flag)

    def _set_flag(self, flag: StatusFlags, value: bool) -> None:
        if value:
            self.state.flags |= flag
        else:
            self.state.flags &= ~flag

    @property
    def flag_c(self) -> bool:
        """Carry flag."""
        return self._get_flag(StatusFlags.C)

    @flag_c.setter
    def flag_c(self, value: bool) -> None:
        self._set_flag(StatusFlags.C, value)

    @property
    def flag_z(self) -> bool:
        """Zero flag."""
        return self._get_flag(StatusFlags.Z)

    @flag_z.setter
    def flag_z(self, value: bool) -> None:
        self._set_flag(StatusFlags.Z, value)

    @property
    def flag_i(self) -> bool:
        """Interrupt disable flag."""
        return self._get_flag(StatusFlags.I)

    @flag_i.setter
    def flag_i(self, value: bool) -> None:
        self._set_flag(StatusFlags.I, value)

    @property
    def flag_d(self) -> bool:
        """Decimal mode flag."""
        return self._get_flag(StatusFlags.D)

    @flag_d.setter
    def flag_d(self, value: bool) -> None:
        self._set_flag(StatusFlags.D, value)

    @property
    def flag_b(self) -> bool:
        """Break command flag."""
        return self._get_flag(StatusFlags.B)

    @flag_b.setter
    def flag_b(self, value: bool) -> None:
        self._set_flag(StatusFlags.B, value)

    @property
    def flag_v(self) -> bool:
        """Overflow flag."""
        return self._get_flag(StatusFlags.V)

    @flag_v.setter
    def flag_v(self, value: bool) -> None:
        self._set_flag(StatusFlags.V, value)

    @property
    def flag_n(self) -> bool:
        """Negative flag."""
        return self._get_flag(StatusFlags.N)

    @flag_n.setter
    def flag_n(self, value: bool) -> None:
        self._set_flag(StatusFlags.N, value)

    @property
    def status(self) -> int:
        """
        Flags packed into the 8-bit status register layout.

        Bit 5 reads as 1; it is dropped again when the status is written.
        """
        return self.state.flags | StatusFlags.U

    @status.setter
    def status(self, value: int) -> None:
        self.state.flags = value & 0xFF & ~StatusFlags.U

    # ========================================
    # Reset
    # ========================================

    def reset(self, memory: AddressSpace) -> None:
        """
        Reset CPU and memory to the power-on state.

        PC=$FFFC, SP=$0100, A/X/Y and all flags cleared, memory zeroed.
        """
        self.state = CPUState(pc=self.RESET_PC, sp=self.RESET_SP)
        memory.initialise()
        self._is_reset = True
        logger.debug(f"Reset: {self.state}")

    # ========================================
    # Fetch / Read Primitives
    # ========================================

    def fetch_byte(self, cycles: CycleBudget, memory: AddressSpace) -> int:
        """Fetch next byte at PC and increment PC. Costs 1 cycle."""
        value = memory.read(self.pc)
        self.pc = self.pc + 1
        cycles.debit(1)
        return value

    def fetch_word(self, cycles: CycleBudget, memory: AddressSpace) -> int:
        """Fetch next word at PC (little-endian) and advance PC by 2. Costs 2 cycles."""
        lo = self.fetch_byte(cycles, memory)
        hi = self.fetch_byte(cycles, memory)
        return (hi << 8) | lo

    def read_byte(
        self, cycles: CycleBudget, address: int, memory: AddressSpace
    ) -> int:
        """
        Read a byte from an explicit address without touching PC.

        Costs 1 cycle.

        Raises:
            InvalidAddressError: If address is outside the address space
        """
        if not (0 <= address < AddressSpace.MAX_MEM):
            raise InvalidAddressError(address, self.pc)
        value = memory.read(address)
        cycles.debit(1)
        return value

    # ========================================
    # Main Execution Loop
    # ========================================

    def execute(self, cycles: int, memory: AddressSpace) -> int:
        """
        Execute instructions until the cycle allowance is used up.

        The allowance is a budget: the instruction that crosses zero runs to
        completion, so the result can exceed ``cycles``.

        Args:
            cycles: Cycle allowance (zero or less executes nothing)
            memory: Address space to execute against

        Returns:
            Number of cycles actually consumed

        Raises:
            ProcessorStateError: If reset() has not been called

        If an instruction raises, the cycles spent up to that point are
        still available in ``last_cycles``.
        """
        self.last_cycles = 0
        self._require_reset()
        budget = CycleBudget(cycles)

        try:
            while not budget.exhausted:
                self._step(budget, memory)
        finally:
            self.last_cycles = budget.consumed

        logger.debug(f"Executed {budget.consumed} cycles: {self.state}")
        return budget.consumed

    def step(self, memory: AddressSpace) -> int:
        """
        Execute exactly one instruction.

        Returns:
            Number of cycles consumed by the instruction
        """
        self.last_cycles = 0
        self._require_reset()
        budget = CycleBudget(0)

        try:
            self._step(budget, memory)
        finally:
            self.last_cycles = budget.consumed
        return budget.consumed

    def _require_reset(self) -> None:
        if not self._is_reset:
            raise ProcessorStateError("processor must be reset before executing")

    def _step(self, cycles: CycleBudget, memory: AddressSpace) -> None:
        address = self.pc
        opcode = self.fetch_byte(cycles, memory)
        if logger.isEnabledFor(logging.DEBUG):
            info = get_instruction_info(opcode)
            if info is not None:
                logger.debug(f"${address:04X}: {info.mnemonic} ({info.mode.name})")
        self._execute_instruction(opcode, address, cycles, memory)

    # ========================================
    # Flag Helpers
    # ========================================

    def _ld8(self, value: int) -> int:
        """Load 8-bit value, set N,Z flags."""
        self.flag_z = value == 0
        self.flag_n = (value & 0x80) != 0
        return value

    # ========================================
    # Instruction Execution
    # ========================================

    def _execute_instruction(
        self,
        opcode: int,
        address: int,
        cycles: CycleBudget,
        memory: AddressSpace,
    ) -> None:
        """
        Execute one decoded instruction.

        The opcode fetch has already been charged. Each case charges its
        operand fetches, memory accesses and internal cycles.

        Args:
            opcode: The instruction opcode byte
            address: Address the opcode was fetched from
            cycles: Budget to debit
            memory: Address space to operate on
        """
        match opcode:
            case Opcode.LDA_IM:
                self.a = self._ld8(self.fetch_byte(cycles, memory))

            case Opcode.LDA_ZP:
                zero_page = self.fetch_byte(cycles, memory)
                self.a = self._ld8(self.read_byte(cycles, zero_page, memory))

            case Opcode.LDA_ZPX:
                # Index add wraps within the zero page
                zero_page = (self.fetch_byte(cycles, memory) + self.x) & 0xFF
                cycles.debit(1)
                self.a = self._ld8(self.read_byte(cycles, zero_page, memory))

            case Opcode.JSR:
                target = self.fetch_word(cycles, memory)
                # Return address is the last byte of the JSR instruction
                memory.write_word(self.pc - 1, self.sp, cycles)
                self.pc = target
                cycles.debit(1)
                self.sp = self.sp + 1

            case _:
                self._unhandled_opcode(opcode, address, cycles)

    def _unhandled_opcode(
        self, opcode: int, address: int, cycles: CycleBudget
    ) -> None:
        # Only the fetch cycle is charged; PC goes back onto the opcode
        self.pc = address
        if self.strict_opcodes:
            raise UnhandledOpcodeError(opcode, address)

        event = UnhandledOpcodeEvent(opcode, address, cycles.consumed)
        if self.log_unhandled_opcodes:
            logger.warning(str(event))
        if self.on_unhandled_opcode:
            self.on_unhandled_opcode(event)
