"""
Hack Assembler
==============

This package translates Hack assembly source code into Hack binary text:
one 16-character line of ``0``/``1`` per machine instruction.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **Tokenizer**: Cleans source lines and classifies them as A, C or L commands
- **SymbolTable**: Predefined symbols plus labels and variables
- **CodeGenerator**: Two-pass translation from commands to binary text

Assembly Process
----------------
1. **Tokenizing**: strip ``//`` comments and whitespace, classify each line
2. **Pass 1**: bind labels to ROM addresses
3. **Pass 2**: resolve operands (allocating variables from RAM 16) and
   encode every A and C command

Example Usage
-------------
>>> from hack_asm.assembler import assemble
>>> print(assemble("@R0\\nD=M\\n@R1"))
0000000000000000
1111110000010000
0000000000000001
"""

from hack_asm.assembler.assembler import Assembler, assemble, assemble_file
from hack_asm.assembler.lexer import (
    Command,
    CommandType,
    Tokenizer,
    classify,
    clean_lines,
    tokenize,
)
from hack_asm.assembler.symbols import PREDEFINED_SYMBOLS, SymbolTable
from hack_asm.assembler.codegen import CodeGenerator, ListingEntry

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Lexer
    "Command",
    "CommandType",
    "Tokenizer",
    "classify",
    "clean_lines",
    "tokenize",
    # Symbols
    "PREDEFINED_SYMBOLS",
    "SymbolTable",
    # Code generator
    "CodeGenerator",
    "ListingEntry",
]
