"""
Hack Assembler - Configuration
==============================

Settings that control how ambiguous input is handled. Configuration can
come from:
- Default values (defined here)
- Environment variables (``AssemblerConfig.from_env()``)
- Command-line options (applied on top by the CLI)

Environment variables:
    HACKASM_STRICT_LABELS   "1"/"true"/"yes" or "0"/"false"/"no"
    HACKASM_LITERAL_MODE    "reject" or "mask"
    HACKASM_VARIABLE_BASE   first RAM address handed to variables
"""

from dataclasses import dataclass
import os

from hack_asm.cpu import MAX_ADDRESS


LITERAL_MODES = ("reject", "mask")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class AssemblerConfig:
    """
    Configuration for one assembler instance.

    Attributes:
        strict_labels: Raise DuplicateSymbolError when a label is defined
            twice in the same program. When False the later definition
            silently replaces the earlier one.
        literal_mode: How numeric @-operands outside 0..32767 are handled.
            "reject" raises AddressRangeError; "mask" keeps the low 15
            bits of the two's-complement value.
        variable_base: RAM address given to the first variable.
    """

    strict_labels: bool = True
    literal_mode: str = "reject"
    variable_base: int = 16

    def __post_init__(self) -> None:
        self.literal_mode = self.literal_mode.lower()
        if self.literal_mode not in LITERAL_MODES:
            raise ValueError(
                f"literal_mode must be one of {', '.join(LITERAL_MODES)}, "
                f"got {self.literal_mode!r}"
            )
        if not 0 <= self.variable_base <= MAX_ADDRESS:
            raise ValueError(
                f"variable_base must be in 0..{MAX_ADDRESS}, got {self.variable_base}"
            )

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create an AssemblerConfig from environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable holds an unusable value
        """
        values = {}

        if strict := os.environ.get("HACKASM_STRICT_LABELS"):
            value = strict.strip().lower()
            if value in _TRUE_VALUES:
                values["strict_labels"] = True
            elif value in _FALSE_VALUES:
                values["strict_labels"] = False
            else:
                raise ValueError(f"invalid HACKASM_STRICT_LABELS value {strict!r}")

        if mode := os.environ.get("HACKASM_LITERAL_MODE"):
            values["literal_mode"] = mode.strip()

        if base := os.environ.get("HACKASM_VARIABLE_BASE"):
            try:
                values["variable_base"] = int(base, 0)
            except ValueError:
                raise ValueError(f"invalid HACKASM_VARIABLE_BASE value {base!r}") from None

        return cls(**values)
