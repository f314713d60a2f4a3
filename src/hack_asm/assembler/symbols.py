"""
Hack Symbol Table
=================

Mapping from symbol names to addresses, seeded with the predefined Hack
symbols. Entries are added and overwritten, never removed.

Predefined Symbols
------------------
| Symbol        | Address |
|---------------|---------|
| SP            | 0       |
| LCL           | 1       |
| ARG           | 2       |
| THIS          | 3       |
| THAT          | 4       |
| R0 .. R15     | 0 .. 15 |
| SCREEN        | 16384   |
| KBD           | 24576   |
"""

from types import MappingProxyType
from typing import Iterator, Optional


PREDEFINED_SYMBOLS = MappingProxyType({
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{n}": n for n in range(16)},
    "SCREEN": 0x4000,
    "KBD": 0x6000,
})


class SymbolTable:
    """
    Symbol name to address mapping for one translation.

    Usage:
        table = SymbolTable()
        table.add_entry("LOOP", 4)
        if table.contains("LOOP"):
            address = table.get_address("LOOP")
    """

    def __init__(self) -> None:
        self._entries: dict[str, int] = dict(PREDEFINED_SYMBOLS)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"SymbolTable({len(self._entries)} entries)"

    def add_entry(self, name: str, address: int) -> None:
        """
        Add a symbol, replacing any existing address for the same name.

        Raises:
            ValueError: If address is negative
        """
        if address < 0:
            raise ValueError(f"symbol address must be non-negative, got {address}")
        self._entries[name] = address

    def contains(self, name: str) -> bool:
        return name in self._entries

    def get_address(self, name: str) -> Optional[int]:
        """Return the address bound to name, or None if it is unknown."""
        return self._entries.get(name)

    @staticmethod
    def is_predefined(name: str) -> bool:
        return name in PREDEFINED_SYMBOLS

    def items(self) -> list[tuple[str, int]]:
        """Return (name, address) pairs in insertion order."""
        return list(self._entries.items())

    def as_dict(self) -> dict[str, int]:
        return dict(self._entries)
