"""
Hack Assembly Language Lexer
============================

This module splits Hack assembly source into cleaned command lines and
classifies each one.

Cleaning
--------
For every physical line:
- everything from the first ``//`` to end of line is dropped
- surrounding whitespace is stripped
- lines that are now empty are skipped

Command Types
-------------
| Type | Form              | Derived fields        |
|------|-------------------|-----------------------|
| A    | ``@Xxx``          | symbol                |
| C    | ``dest=comp;jump``| dest, comp, jump      |
| L    | ``(Xxx)``         | symbol                |
| NONE | anything else     | (none)                |

Classification is checked in the order A, C, L, so ``@a=b`` is an
A-command and ``(a=b)`` is a C-command.

Example
-------
>>> from hack_asm.assembler.lexer import Tokenizer
>>> tok = Tokenizer("@2\\nD=A // load\\n(LOOP)")
>>> while tok.has_more_commands():
...     tok.advance()
...     print(tok.command_type().name, tok.current.text)
A @2
C D=A
L (LOOP)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hack_asm.errors import SourceLocation


COMMENT_MARKER = "//"


# =============================================================================
# Command Type Enumeration
# =============================================================================

class CommandType(Enum):
    """Classification of a cleaned source line."""

    A = auto()      # @Xxx, address or constant reference
    C = auto()      # dest=comp;jump, computation
    L = auto()      # (Xxx), label pseudo-command
    NONE = auto()   # matches no command form


# =============================================================================
# Command Data Class
# =============================================================================

@dataclass(frozen=True)
class Command:
    """
    A single classified command.

    Attributes:
        type: The CommandType classification
        text: The cleaned source text
        location: Where the command starts in the source
        symbol: Operand for A and L commands, else ""
        dest: Destination field for C commands, else ""
        comp: Computation field for C commands, else ""
        jump: Jump field for C commands, else ""
    """
    type: CommandType
    text: str
    location: SourceLocation
    symbol: str = ""
    dest: str = ""
    comp: str = ""
    jump: str = ""

    def __repr__(self) -> str:
        return f"Command({self.type.name}, {self.text!r}, {self.location.line})"

    @property
    def emits_code(self) -> bool:
        """True for commands that become an instruction word."""
        return self.type in (CommandType.A, CommandType.C)


# =============================================================================
# Cleaning and Classification
# =============================================================================

def clean_lines(source: str, filename: str = "<input>") -> list[tuple[str, SourceLocation]]:
    """
    Strip comments and whitespace, dropping empty lines.

    Returns:
        (text, location) pairs in source order
    """
    cleaned = []
    for line_number, raw in enumerate(source.splitlines(), start=1):
        marker = raw.find(COMMENT_MARKER)
        if marker != -1:
            raw = raw[:marker]

        text = raw.strip()
        if not text:
            continue

        column = len(raw) - len(raw.lstrip()) + 1
        cleaned.append((text, SourceLocation(filename, line_number, column)))

    return cleaned


def split_compute(text: str) -> tuple[str, str, str]:
    """
    Split ``dest=comp;jump`` text into its three fields.

    Missing parts come back as empty strings. dest is the text before
    the first ``=`` and jump the text after the first ``;`` of the whole
    command. With ``=`` the comp field runs from after it up to the next
    ``;``; with only ``;`` it is the text before it.
    """
    dest_part = ""
    jump_part = ""

    semi = text.find(";")
    if semi != -1:
        jump_part = text[semi + 1:]

    eq = text.find("=")
    if eq != -1:
        dest_part = text[:eq]
        comp_part = text[eq + 1:].split(";", 1)[0]
    elif semi != -1:
        comp_part = text[:semi]
    else:
        # classify() only calls this when '=' or ';' is present
        comp_part = ""

    return dest_part, comp_part, jump_part


def classify(text: str, location: SourceLocation) -> Command:
    """Classify one cleaned line into a Command."""
    if text.startswith("@"):
        return Command(CommandType.A, text, location, symbol=text[1:])

    if "=" in text or ";" in text:
        dest_part, comp_part, jump_part = split_compute(text)
        return Command(
            CommandType.C, text, location,
            dest=dest_part, comp=comp_part, jump=jump_part,
        )

    if text.startswith("(") and text.endswith(")"):
        return Command(CommandType.L, text, location, symbol=text[1:-1])

    return Command(CommandType.NONE, text, location)


def tokenize(source: str, filename: str = "<input>") -> list[Command]:
    """Clean and classify a whole source text."""
    return [classify(text, loc) for text, loc in clean_lines(source, filename)]


# =============================================================================
# Tokenizer
# =============================================================================

class Tokenizer:
    """
    Cursor over the classified commands of one source text.

    The source is cleaned and classified once on construction. The
    cursor starts before the first command; ``advance()`` moves to the
    next one and must only be called while ``has_more_commands()`` is
    true. ``reset()`` rewinds so the same commands can be walked again,
    and iterating the tokenizer yields every command independent of the
    cursor.

    Usage:
        tok = Tokenizer(source, "prog.asm")
        while tok.has_more_commands():
            tok.advance()
            if tok.command_type() is CommandType.A:
                print(tok.symbol())
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self._filename = filename
        self._commands = tokenize(source, filename)
        self._position = 0
        self._current: Optional[Command] = None

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def position(self) -> int:
        """Number of commands consumed so far."""
        return self._position

    @property
    def current(self) -> Optional[Command]:
        """The current command, or None before the first advance()."""
        return self._current

    def commands(self) -> list[Command]:
        """Return a copy of the classified command list."""
        return list(self._commands)

    def has_more_commands(self) -> bool:
        return self._position < len(self._commands)

    def advance(self) -> None:
        """
        Make the next command current.

        Raises:
            IndexError: If no commands remain
        """
        if not self.has_more_commands():
            raise IndexError("advance() called with no commands remaining")
        self._current = self._commands[self._position]
        self._position += 1

    def reset(self) -> None:
        """Rewind the cursor to before the first command."""
        self._position = 0
        self._current = None

    # -------------------------------------------------------------------------
    # Accessors for the current command
    # -------------------------------------------------------------------------

    def _require_current(self) -> Command:
        if self._current is None:
            raise RuntimeError("no current command; call advance() first")
        return self._current

    def command_type(self) -> CommandType:
        return self._require_current().type

    def symbol(self) -> str:
        """Operand of an A or L command ("" for other types)."""
        return self._require_current().symbol

    def dest(self) -> str:
        return self._require_current().dest

    def comp(self) -> str:
        return self._require_current().comp

    def jump(self) -> str:
        return self._require_current().jump
