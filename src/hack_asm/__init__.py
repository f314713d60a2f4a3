"""
hack-asm - Assembler for the Hack Computer
==========================================

This package translates Hack assembly language into the 16-bit binary
machine code of the Hack computer.

Main Components
---------------
- **assembler**: Tokenizer, symbol table and two-pass code generator
- **cpu**: Instruction encoding tables (dest, comp, jump)
- **cli**: The ``hackasm`` command-line tool

Quick Start
-----------
Assemble a program:
    >>> from hack_asm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm Max.hack
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_asm.assembler import (
    Assembler,
    assemble,
    assemble_file,
    SymbolTable,
    PREDEFINED_SYMBOLS,
)
from hack_asm.config import AssemblerConfig
from hack_asm.errors import (
    HackAsmError,
    AssemblerError,
    AssemblySyntaxError,
    UnknownMnemonicError,
    DuplicateSymbolError,
    AddressRangeError,
    SourceLocation,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "SymbolTable",
    "PREDEFINED_SYMBOLS",
    "AssemblerConfig",
    # Exception hierarchy
    "HackAsmError",
    "AssemblerError",
    "AssemblySyntaxError",
    "UnknownMnemonicError",
    "DuplicateSymbolError",
    "AddressRangeError",
    "SourceLocation",
]
