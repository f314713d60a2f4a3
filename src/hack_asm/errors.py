"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackAsmError, allowing callers to catch all
assembler-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
HackAsmError (base)
└── AssemblerError (assembler-related)
    ├── AssemblySyntaxError - line is not an A, C or label command
    ├── UnknownMnemonicError - dest/comp/jump not in the encoding tables
    ├── DuplicateSymbolError - label defined more than once
    └── AddressRangeError - literal or label address does not fit in 15 bits

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackAsmError(Exception):
    """
    Base exception for all Hack assembler errors.

        try:
            assemble(source)
        except HackAsmError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Physical line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackAsmError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The cleaned source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.asm:7:5: error: unknown comp mnemonic 'D*M'
                D=D*M
                ^
            hint: valid comp mnemonics: 0, 1, -1, D, A, ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # The source line is stored stripped, so the caret sits under its
        # first character.
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            parts.append("    ^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    A cleaned source line matches none of the command forms.

    Valid forms are ``@value``, ``dest=comp;jump`` (either part optional
    but at least one of ``=`` or ``;`` present) and ``(LABEL)``.
    """
    pass


class UnknownMnemonicError(AssemblerError):
    """
    A dest, comp or jump field is not in its encoding table.

    Attributes:
        field: Which field failed ("dest", "comp" or "jump")
        mnemonic: The offending text
    """

    def __init__(
        self,
        field: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_mnemonics: Optional[list[str]] = None,
    ):
        self.field = field
        self.mnemonic = mnemonic
        self.valid_mnemonics = valid_mnemonics or []

        hint = None
        if self.valid_mnemonics:
            shown = ", ".join(m if m else "(empty)" for m in self.valid_mnemonics)
            hint = f"valid {field} mnemonics: {shown}"

        super().__init__(
            f"unknown {field} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Label defined multiple times in the same program.

    Only raised when strict label checking is enabled. Includes the
    location of the first definition when available.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"duplicate label '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    A-instruction operand outside the 15-bit range 0..32767.

    Covers numeric literals and labels whose ROM address is 32768 or
    more. Attributes: value, and symbol (the label name, or None for a
    literal).

    Only raised when the literal mode is "reject"; in "mask" mode the
    low 15 bits are used instead.
    """

    def __init__(
        self,
        value: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        symbol: Optional[str] = None,
    ):
        self.value = value
        self.symbol = symbol

        what = f"label '{symbol}' address" if symbol else "address"
        super().__init__(
            f"{what} {value} is out of range 0..32767",
            location=location,
            hint="use --literals mask to keep the low 15 bits",
            source_line=source_line,
        )
