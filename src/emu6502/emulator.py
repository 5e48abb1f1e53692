"""
6502 Emulator - Session Orchestrator
====================================

This module provides the `Emulator` class, which pairs one AddressSpace with
one Processor and exposes a small high-level API:

- reset the session
- write program bytes into memory
- run for a cycle allowance, or step a single instruction
- inspect unhandled-opcode events captured during the run

Example usage:
    >>> from emu6502 import Emulator, Opcode
    >>> emu = Emulator()
    >>> emu.reset()
    >>> emu.load(0xFFFC, [Opcode.LDA_IM, 0x84])
    >>> emu.run(2)
    2
    >>> emu.cpu.a
    132

Copyright (c) 2026 emu6502 Contributors
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .cpu import CPUState, Processor, UnhandledOpcodeEvent
from .memory import AddressSpace

logger = logging.getLogger(__name__)


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for emulator initialization.

    Attributes:
        default_cycles: Allowance used by run() when none is given
        strict_opcodes: Raise UnhandledOpcodeError instead of soft-failing
        log_unhandled_opcodes: Log a warning for every unhandled opcode

    Example:
        >>> config = EmulatorConfig(strict_opcodes=True)
        >>> config = EmulatorConfig.from_env()
    """
    default_cycles: int = 1000
    strict_opcodes: bool = False
    log_unhandled_opcodes: bool = True

    @classmethod
    def from_env(cls) -> "EmulatorConfig":
        """
        Create EmulatorConfig from environment variables.

        Environment variables (all optional):
            EMU6502_DEFAULT_CYCLES: Default run allowance (integer)
            EMU6502_STRICT_OPCODES: "1"/"true"/"yes"/"on" or "0"/"false"/"no"/"off"
            EMU6502_LOG_UNHANDLED: Same boolean forms as above

        Invalid values are ignored and the default kept.

        Returns:
            EmulatorConfig with values from environment variables
        """
        overrides = {}

        if cycles := os.environ.get("EMU6502_DEFAULT_CYCLES"):
            try:
                overrides["default_cycles"] = int(cycles, 0)
            except ValueError:
                logger.warning(f"Ignoring invalid EMU6502_DEFAULT_CYCLES={cycles!r}")

        if strict := os.environ.get("EMU6502_STRICT_OPCODES"):
            parsed = _parse_bool(strict)
            if parsed is not None:
                overrides["strict_opcodes"] = parsed
            else:
                logger.warning(f"Ignoring invalid EMU6502_STRICT_OPCODES={strict!r}")

        if log_unhandled := os.environ.get("EMU6502_LOG_UNHANDLED"):
            parsed = _parse_bool(log_unhandled)
            if parsed is not None:
                overrides["log_unhandled_opcodes"] = parsed
            else:
                logger.warning(
                    f"Ignoring invalid EMU6502_LOG_UNHANDLED={log_unhandled!r}"
                )

        return cls(**overrides)


class Emulator:
    """
    One emulation session: an AddressSpace and the Processor that runs on it.

    Attributes:
        config: The EmulatorConfig used to initialize this instance
        memory: The AddressSpace (writable by the caller to load programs)
        cpu: The Processor (accessible for register inspection)

    Example:
        >>> emu = Emulator()
        >>> emu.reset()
        >>> emu.memory[0xFFFC] = 0xA9
        >>> emu.memory[0xFFFD] = 0x01
        >>> emu.step()
        2
    """

    def __init__(self, config: Optional[EmulatorConfig] = None):
        """
        Initialize the emulator with given configuration.

        Args:
            config: EmulatorConfig; defaults are used if None
        """
        self.config = config or EmulatorConfig()
        self.memory = AddressSpace()
        self.cpu = Processor(
            strict_opcodes=self.config.strict_opcodes,
            log_unhandled_opcodes=self.config.log_unhandled_opcodes,
        )
        self.cpu.on_unhandled_opcode = self._unhandled_opcode_hook

        self._unhandled: List[UnhandledOpcodeEvent] = []
        self._total_cycles = 0

    def _unhandled_opcode_hook(self, event: UnhandledOpcodeEvent) -> None:
        self._unhandled.append(event)

    # ========================================
    # Properties
    # ========================================

    @property
    def state(self) -> CPUState:
        """Current register and flag state."""
        return self.cpu.state

    @property
    def total_cycles(self) -> int:
        """Cycles consumed since the last reset."""
        return self._total_cycles

    @property
    def unhandled_opcodes(self) -> List[UnhandledOpcodeEvent]:
        """Unhandled-opcode events seen since the last reset."""
        return list(self._unhandled)

    # ========================================
    # Session Control
    # ========================================

    def reset(self) -> None:
        """Reset CPU and memory, and clear collected events."""
        self.cpu.reset(self.memory)
        self._unhandled.clear()
        self._total_cycles = 0

    def load(self, address: int, data: Iterable[int]) -> None:
        """
        Write program bytes into memory.

        Args:
            address: Destination of the first byte
            data: Byte values (ints, bytes, or Opcode members)
        """
        self.memory.load(address, data)

    def run(self, cycles: Optional[int] = None) -> int:
        """
        Run the processor for a cycle allowance.

        Args:
            cycles: Allowance; config.default_cycles if None

        Returns:
            Cycles actually consumed

        Cycles spent before an exception are still added to total_cycles.
        """
        if cycles is None:
            cycles = self.config.default_cycles
        try:
            return self.cpu.execute(cycles, self.memory)
        finally:
            self._total_cycles += self.cpu.last_cycles

    def step(self) -> int:
        """
        Execute exactly one instruction.

        Returns:
            Cycles consumed by the instruction
        """
        try:
            return self.cpu.step(self.memory)
        finally:
            self._total_cycles += self.cpu.last_cycles
