"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, which is the primary interface
for assembling Hack source code. It coordinates the lexer and the code
generator to produce Hack binary text.

Example Usage
-------------
>>> from hack_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> print(asm.assemble_string('''
...     @2
...     D=A   // D = 2
...     @sum
...     M=D
... '''))
0000000000000010
1110110000010000
0000000000010000
1110001100001000
>>> asm.get_symbols()["sum"]
16

Command-Line Usage
------------------
    $ hackasm Prog.asm Prog.hack -s Prog.sym -l Prog.lst
"""

import logging
from pathlib import Path
from typing import Optional

from hack_asm.assembler.codegen import CodeGenerator
from hack_asm.assembler.lexer import tokenize
from hack_asm.config import AssemblerConfig

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    Attributes:
        config: Settings for label redefinition, literal range handling
            and variable placement
        verbose: If True, print progress messages
    """

    def __init__(self, config: Optional[AssemblerConfig] = None,
                 verbose: bool = False):
        """
        Initialize the assembler.

        Args:
            config: Assembler settings (default: AssemblerConfig())
            verbose: Enable verbose output
        """
        self._verbose = verbose
        self._config = config or AssemblerConfig()
        self._codegen = CodeGenerator(self._config)
        self._source_file: Optional[Path] = None

    @property
    def config(self) -> AssemblerConfig:
        return self._config

    @property
    def source_file(self) -> Optional[Path]:
        """Path of the last file passed to assemble_file(), if any."""
        return self._source_file

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> str:
        """
        Assemble source code from a string.

        Args:
            source: Hack assembly source code
            filename: Virtual filename for error messages

        Returns:
            Binary text, one 16-character instruction per line

        Raises:
            AssemblerError: If assembly fails
        """
        commands = tokenize(source, filename)
        logger.debug("%s: %d commands", filename, len(commands))
        if self._verbose:
            print(f"Parsed {len(commands)} commands")

        code = self._codegen.generate(commands)

        if self._verbose:
            print(f"Generated {len(self._codegen.get_instructions())} instructions")

        return code

    def assemble_file(self, filepath: str | Path) -> str:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            Binary text, one 16-character instruction per line

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._source_file = filepath

        if self._verbose:
            print(f"Assembling {filepath}...")

        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> str:
        return self._codegen.get_code()

    def get_instructions(self) -> list[str]:
        return self._codegen.get_instructions()

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping symbol names (predefined, labels and
            variables) to addresses
        """
        return self._codegen.get_symbols()

    def get_labels(self) -> dict[str, int]:
        return self._codegen.get_labels()

    def get_variables(self) -> dict[str, int]:
        return self._codegen.get_variables()

    def get_listing(self) -> str:
        return self._codegen.get_listing()

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the binary text to a .hack file.

        Args:
            filepath: Output file path
        """
        self._codegen.write_hack(filepath)

        if self._verbose:
            source = self._source_file or "<input>"
            print(f"Wrote {filepath} from {source}")

    def write_listing(self, filepath: str | Path) -> None:
        self._codegen.write_listing(filepath)

    def write_symbols(self, filepath: str | Path) -> None:
        self._codegen.write_symbols(filepath)


def assemble(source: str, filename: str = "<input>",
             config: Optional[AssemblerConfig] = None) -> str:
    """
    Convenience function to assemble source code.

    Args:
        source: Hack assembly source code
        filename: Virtual filename for errors
        config: Assembler settings (default: AssemblerConfig())

    Returns:
        Binary text

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(config=config)
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  config: Optional[AssemblerConfig] = None) -> str:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file
        config: Assembler settings (default: AssemblerConfig())

    Returns:
        Binary text

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(config=config)
    return asm.assemble_file(filepath)
