"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Max.hack next to the source):
    $ hackasm Max.asm

With output file:
    $ hackasm Max.asm out/Max.hack

Generate symbol and listing files:
    $ hackasm Max.asm -s Max.sym -l Max.lst

Accept out-of-range literals by masking them to 15 bits:
    $ hackasm --literals mask Prog.asm

Environment variables HACKASM_STRICT_LABELS, HACKASM_LITERAL_MODE and
HACKASM_VARIABLE_BASE supply defaults; command-line options win.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Optional

import click

from hack_asm import __version__
from hack_asm.assembler import Assembler
from hack_asm.cli.errors import handle_cli_exception
from hack_asm.config import LITERAL_MODES, AssemblerConfig
from hack_asm.errors import HackAsmError


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "--strict-labels/--allow-redefinition",
    default=None,
    help="Reject labels defined twice (default) or let the last one win.",
)
@click.option(
    "--literals",
    type=click.Choice(LITERAL_MODES, case_sensitive=False),
    default=None,
    help="How to treat @N outside 0..32767: reject (default) or mask to 15 bits.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output_file: Optional[Path],
    symbols: Optional[Path],
    listing: Optional[Path],
    strict_labels: Optional[bool],
    literals: Optional[str],
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack binary.

    INPUT_FILE is the assembly source file (.asm). OUTPUT_FILE defaults to
    INPUT_FILE with a .hack suffix.

    \b
    Examples:
        hackasm Max.asm              # Outputs Max.hack
        hackasm Max.asm out.hack     # Specify output file
        hackasm -s Max.sym Max.asm   # Also write the symbol table
    """
    setup_logging(verbose)

    if output_file is None:
        output_file = input_file.with_suffix(".hack")

    try:
        if output_file.resolve() == input_file.resolve():
            raise click.BadParameter(
                f"output file {output_file} would overwrite the input file",
                param_hint="OUTPUT_FILE",
            )

        config = AssemblerConfig.from_env()
        overrides = {}
        if strict_labels is not None:
            overrides["strict_labels"] = strict_labels
        if literals is not None:
            overrides["literal_mode"] = literals
        if overrides:
            config = dataclasses.replace(config, **overrides)

        asm = Assembler(config=config)

        if verbose:
            click.echo(f"Assembling {input_file}...")

        try:
            asm.assemble_file(input_file)
        except HackAsmError:
            click.echo(f"Error: can't parse {input_file}", err=True)
            raise

        asm.write_hack(output_file)
        if verbose:
            click.echo(f"Wrote {len(asm.get_instructions())} instructions to {output_file}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if verbose:
            click.echo(
                f"Assembly complete: {len(asm.get_labels())} labels, "
                f"{len(asm.get_variables())} variables"
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
