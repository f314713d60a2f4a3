"""
Hack Code Generator
===================

This module generates Hack machine code from classified commands.
It implements a two-pass assembly process:

Pass 1 (Label Collection):
    - Start a fresh symbol table holding the predefined symbols
    - Count instruction addresses (one per A or C command)
    - Bind each (LABEL) to the address of the next instruction

Pass 2 (Code Generation):
    - Resolve each @operand: numeric literal, known symbol, or a new
      variable allocated from RAM address 16 upward in first-use order
    - Encode C-commands through the dest/comp/jump tables
    - Emit one 16-character binary line per A or C command

Any unclassifiable line or unknown mnemonic aborts the whole run; no
partial code is kept.

Output
------
Text with one instruction per line and no trailing newline::

    0000000000000010
    1110110000010000
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hack_asm.assembler.lexer import Command, CommandType
from hack_asm.assembler.symbols import SymbolTable
from hack_asm.config import AssemblerConfig
from hack_asm.cpu import MAX_ADDRESS, WORD_BITS, encode_address, encode_compute
from hack_asm.errors import (
    AddressRangeError,
    AssemblerError,
    AssemblySyntaxError,
    DuplicateSymbolError,
    SourceLocation,
)

logger = logging.getLogger(__name__)

# Decimal literal with optional sign, ASCII digits only
_LITERAL_RE = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# Listing Data Structures
# =============================================================================

@dataclass(frozen=True)
class ListingEntry:
    """
    One emitted instruction and the command it came from.

    Attributes:
        address: ROM address of the instruction
        code: 16-character binary instruction
        command: Source command that produced it
    """
    address: int
    code: str
    command: Command


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates Hack machine code from classified commands.

    The code generator owns, for the duration of one ``generate()`` call:
    - Symbol table (predefined symbols, labels, variables)
    - ROM counter (pass 1) and variable counter (pass 2)
    - Output instruction buffer

    Usage:
        codegen = CodeGenerator()
        text = codegen.generate(tokenize(source))
        codegen.write_hack("prog.hack")
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self._config = config or AssemblerConfig()
        self._reset()

    def _reset(self) -> None:
        self._symbols = SymbolTable()
        self._labels: dict[str, int] = {}
        self._label_locations: dict[str, SourceLocation] = {}
        self._variables: dict[str, int] = {}
        self._instructions: list[str] = []
        self._listing: list[ListingEntry] = []
        self._next_variable = self._config.variable_base

    @property
    def config(self) -> AssemblerConfig:
        return self._config

    # =========================================================================
    # Main Entry Point
    # =========================================================================

    def generate(self, commands: list[Command]) -> str:
        """
        Translate classified commands into Hack binary text.

        Args:
            commands: Commands in source order (see lexer.tokenize)

        Returns:
            One 16-character line per A or C command, newline separated

        Raises:
            AssemblerError: On the first unclassifiable command, unknown
                mnemonic, duplicate label (strict mode) or out-of-range
                literal or label address (reject mode)
        """
        self._reset()
        try:
            self._pass1(commands)
            self._pass2(commands)
        except Exception:
            self._reset()
            raise

        logger.debug(
            "generated %d instructions, %d labels, %d variables",
            len(self._instructions), len(self._labels), len(self._variables),
        )
        return self.get_code()

    # =========================================================================
    # Pass 1: Labels
    # =========================================================================

    def _pass1(self, commands: list[Command]) -> None:
        """Bind every label to the ROM address of the next instruction."""
        rom_address = 0
        for cmd in commands:
            if cmd.type is CommandType.NONE:
                raise self._syntax_error(cmd)
            if cmd.emits_code:
                rom_address += 1
            else:
                self._define_label(cmd, rom_address)

        logger.debug("pass 1: %d instructions, %d labels", rom_address, len(self._labels))

    def _define_label(self, cmd: Command, address: int) -> None:
        name = cmd.symbol
        if name in self._labels and self._config.strict_labels:
            raise DuplicateSymbolError(
                name,
                location=cmd.location,
                original_location=self._label_locations[name],
                source_line=cmd.text,
            )

        self._symbols.add_entry(name, address)
        self._labels[name] = address
        if self._symbols.is_predefined(name):
            logger.debug("label %s shadows a predefined symbol", name)
        self._label_locations.setdefault(name, cmd.location)
        logger.debug("label %s = %d", name, address)

    # =========================================================================
    # Pass 2: Code Generation
    # =========================================================================

    def _pass2(self, commands: list[Command]) -> None:
        """Encode every A and C command in source order."""
        for cmd in commands:
            if cmd.type is CommandType.NONE:
                raise self._syntax_error(cmd)
            if cmd.type is CommandType.L:
                continue

            if cmd.type is CommandType.A:
                code = encode_address(self._resolve(cmd))
            else:
                code = encode_compute(
                    cmd.dest, cmd.comp, cmd.jump,
                    location=cmd.location, source_line=cmd.text,
                )

            self._listing.append(ListingEntry(len(self._instructions), code, cmd))
            self._instructions.append(code)

    def _resolve(self, cmd: Command) -> int:
        """Resolve an A-command operand to a 15-bit address."""
        operand = cmd.symbol

        if _LITERAL_RE.fullmatch(operand):
            return self._literal_value(int(operand), cmd)

        address = self._symbols.get_address(operand)
        if address is not None:
            # Labels past the 15-bit range follow the same policy as literals
            return self._literal_value(address, cmd, symbol=operand)

        return self._allocate_variable(operand, cmd)

    def _literal_value(self, value: int, cmd: Command,
                       symbol: Optional[str] = None) -> int:
        if 0 <= value <= MAX_ADDRESS:
            return value
        if self._config.literal_mode == "mask":
            # Two's-complement low bits with the top bit forced to zero
            return value & MAX_ADDRESS
        raise AddressRangeError(
            value, location=cmd.location, source_line=cmd.text, symbol=symbol,
        )

    def _allocate_variable(self, name: str, cmd: Command) -> int:
        address = self._next_variable
        if address > MAX_ADDRESS:
            raise AssemblerError(
                f"no RAM left for variable '{name}'",
                location=cmd.location,
                source_line=cmd.text,
            )
        self._symbols.add_entry(name, address)
        self._variables[name] = address
        self._next_variable += 1
        logger.debug("variable %s = %d", name, address)
        return address

    @staticmethod
    def _syntax_error(cmd: Command) -> AssemblySyntaxError:
        return AssemblySyntaxError(
            f"cannot parse '{cmd.text}'",
            location=cmd.location,
            hint="expected @value, dest=comp;jump or (LABEL)",
            source_line=cmd.text,
        )

    # =========================================================================
    # Results
    # =========================================================================

    def get_code(self) -> str:
        """Return the generated text ("" if nothing was generated)."""
        return "\n".join(self._instructions)

    def get_instructions(self) -> list[str]:
        return list(self._instructions)

    def get_symbols(self) -> dict[str, int]:
        """Return the final symbol table, variables included."""
        return self._symbols.as_dict()

    def get_labels(self) -> dict[str, int]:
        return dict(self._labels)

    def get_variables(self) -> dict[str, int]:
        """Return variables in allocation order."""
        return dict(self._variables)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            ROM address, binary code, source line number and source text
            for every instruction, followed by labels and variables.
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append(f"{'Addr':<6} {'Code':<{WORD_BITS}}  {'Line':>5}  Source")
        lines.append("-" * 60)
        for entry in self._listing:
            lines.append(
                f"{entry.address:<6d} {entry.code}  "
                f"{entry.command.location.line:>5d}  {entry.command.text}"
            )
        lines.append("")
        lines.append("Labels")
        lines.append("-" * 30)
        for name, address in sorted(self._labels.items()):
            lines.append(f"{name:20s} = {address}")
        lines.append("")
        lines.append("Variables")
        lines.append("-" * 30)
        for name, address in self._variables.items():
            lines.append(f"{name:20s} = {address}")
        return "\n".join(lines)

    # =========================================================================
    # File Output
    # =========================================================================

    def write_hack(self, filepath: str | Path) -> None:
        """Write the generated binary text."""
        Path(filepath).write_text(self.get_code())

    def write_listing(self, filepath: str | Path) -> None:
        Path(filepath).write_text(self.get_listing())

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (one per line, predefined symbols first)
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for name, address in self._symbols.items():
                f.write(f"{name} {address}\n")
