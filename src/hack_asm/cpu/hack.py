"""
Hack CPU Instruction Encoding
=============================

Complete encoding tables for the Hack C-instruction fields and the helper
functions that turn mnemonics into bit strings.

Instruction Formats
-------------------
A-instruction:  0vvv vvvv vvvv vvvv   (15-bit address or constant)
C-instruction:  111a cccc ccdd djjj

| Field | Bits | Table        | Entries |
|-------|------|--------------|---------|
| comp  | 7    | COMP_TABLE   | 28      |
| dest  | 3    | DEST_TABLE   | 8       |
| jump  | 3    | JUMP_TABLE   | 8       |

The leading comp bit (``a``) selects the operand register: 0 for A,
1 for M. The tables are read-only mappings; lookups return None for
anything not listed rather than raising.
"""

from types import MappingProxyType
from typing import Optional

from hack_asm.errors import SourceLocation, UnknownMnemonicError


# =============================================================================
# Instruction Layout Constants
# =============================================================================

WORD_BITS = 16
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1  # 32767

C_PREFIX = "111"


# =============================================================================
# Encoding Tables
# =============================================================================

DEST_TABLE = MappingProxyType({
    "":    "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
})

JUMP_TABLE = MappingProxyType({
    "":    "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})

COMP_TABLE = MappingProxyType({
    # a=0: operate on A
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # a=1: operate on M
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
})

# Valid mnemonics per field, in table order (used for error hints)
MNEMONICS = MappingProxyType({
    "dest": tuple(DEST_TABLE),
    "comp": tuple(COMP_TABLE),
    "jump": tuple(JUMP_TABLE),
})


# =============================================================================
# Lookup Functions
# =============================================================================

def dest(mnemonic: str) -> Optional[str]:
    """Return the 3-bit dest code for a mnemonic, or None if unknown."""
    return DEST_TABLE.get(mnemonic)


def comp(mnemonic: str) -> Optional[str]:
    """Return the 7-bit comp code (a-bit included), or None if unknown."""
    return COMP_TABLE.get(mnemonic)


def jump(mnemonic: str) -> Optional[str]:
    """Return the 3-bit jump code for a mnemonic, or None if unknown."""
    return JUMP_TABLE.get(mnemonic)


# =============================================================================
# Instruction Encoders
# =============================================================================

def encode_address(value: int) -> str:
    """
    Encode an A-instruction as a 16-character binary string.

    Args:
        value: Address or constant in the range 0..32767

    Returns:
        Zero-padded binary text with the top bit clear

    Raises:
        ValueError: If value does not fit in 15 bits
    """
    if not 0 <= value <= MAX_ADDRESS:
        raise ValueError(f"address {value} does not fit in {ADDRESS_BITS} bits")
    return format(value, f"0{WORD_BITS}b")


def encode_compute(
    dest_mnemonic: str,
    comp_mnemonic: str,
    jump_mnemonic: str,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Encode a C-instruction as ``111`` + comp + dest + jump.

    Args:
        dest_mnemonic: Destination field text (may be empty)
        comp_mnemonic: Computation field text
        jump_mnemonic: Jump field text (may be empty)
        location: Source location used in error messages
        source_line: Source text used in error messages

    Returns:
        16-character binary string

    Raises:
        UnknownMnemonicError: If any field is not in its table
    """
    fields = (
        ("comp", comp_mnemonic, comp(comp_mnemonic)),
        ("dest", dest_mnemonic, dest(dest_mnemonic)),
        ("jump", jump_mnemonic, jump(jump_mnemonic)),
    )

    bits = [C_PREFIX]
    for field, mnemonic, code in fields:
        if code is None:
            raise UnknownMnemonicError(
                field,
                mnemonic,
                location=location,
                source_line=source_line,
                valid_mnemonics=list(MNEMONICS[field]),
            )
        bits.append(code)

    return "".join(bits)
