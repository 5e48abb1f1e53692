#!/usr/bin/env python3
"""
6502 Emulator Demo
==================

This script shows the emulator running a tiny inline program:
1. Reset a session
2. Write a JSR at the reset location and a subroutine at $4242
3. Run for 9 cycles and print the resulting state

Usage:
    pip install -e .
    python examples/jsr_demo.py

Copyright (c) 2026 emu6502 Contributors
"""

import logging

from emu6502 import Emulator, EmulatorConfig, Opcode


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # ==========================================================================
    # 1. Create and reset an emulator
    # ==========================================================================
    emu = Emulator(EmulatorConfig.from_env())
    emu.reset()

    # ==========================================================================
    # 2. Inline a little program
    # ==========================================================================
    #   $FFFC  JSR $4242
    #   $4242  LDA #$84
    emu.load(0xFFFC, [Opcode.JSR, 0x42, 0x42])
    emu.load(0x4242, [Opcode.LDA_IM, 0x84])

    # ==========================================================================
    # 3. Run and inspect
    # ==========================================================================
    consumed = emu.run(9)

    print(f"Cycles consumed: {consumed}")
    print(f"Registers: {emu.state}")
    print(f"Flags: Z={int(emu.cpu.flag_z)} N={int(emu.cpu.flag_n)}")
    print(f"Return address on stack: ${emu.memory.read(0x0101):02X}{emu.memory.read(0x0100):02X}")

    for event in emu.unhandled_opcodes:
        print(f"  {event}")


if __name__ == "__main__":
    main()
