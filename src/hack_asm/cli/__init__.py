"""
Hack Assembler Command-Line Interface
=====================================

- **hackasm**: Hack assembler

The tool is implemented as a Click-based CLI application with
help output and consistent exit codes.
"""

__all__ = ["hackasm"]
