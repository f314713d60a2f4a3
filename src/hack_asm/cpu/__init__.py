"""
Hack Assembler CPU Package
==========================

Instruction-set definitions for the Hack computer: the C-instruction
field tables and the encoders that build 16-bit instruction words.

Modules:
    hack: Encoding tables, lookup functions, and instruction encoders.

Usage:
    from hack_asm.cpu import COMP_TABLE, encode_compute
"""

from hack_asm.cpu.hack import (
    # Layout constants
    WORD_BITS,
    ADDRESS_BITS,
    MAX_ADDRESS,
    # Encoding tables
    DEST_TABLE,
    COMP_TABLE,
    JUMP_TABLE,
    MNEMONICS,
    # Lookup functions
    dest,
    comp,
    jump,
    # Encoders
    encode_address,
    encode_compute,
)

__all__ = [
    "WORD_BITS",
    "ADDRESS_BITS",
    "MAX_ADDRESS",
    "DEST_TABLE",
    "COMP_TABLE",
    "JUMP_TABLE",
    "MNEMONICS",
    "dest",
    "comp",
    "jump",
    "encode_address",
    "encode_compute",
]
