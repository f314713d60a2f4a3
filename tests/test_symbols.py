# =============================================================================
# test_symbols.py - Symbol Table Tests
# =============================================================================

import pytest

from hack_asm.assembler.symbols import PREDEFINED_SYMBOLS, SymbolTable


class TestPredefined:
    """The predefined layout is part of the external contract."""

    def test_layout(self):
        expected = {"SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
                    "SCREEN": 16384, "KBD": 24576}
        expected.update({f"R{n}": n for n in range(16)})
        assert dict(PREDEFINED_SYMBOLS) == expected

    def test_new_table_is_seeded(self):
        table = SymbolTable()
        assert len(table) == 23
        assert table.get_address("SCREEN") == 16384
        assert table.get_address("R15") == 15

    def test_tables_are_independent(self):
        first = SymbolTable()
        first.add_entry("LOOP", 3)
        assert not SymbolTable().contains("LOOP")


class TestOperations:
    """Test add_entry / contains / get_address."""

    def test_add_and_get(self):
        table = SymbolTable()
        table.add_entry("LOOP", 10)
        assert table.contains("LOOP")
        assert "LOOP" in table
        assert table.get_address("LOOP") == 10

    def test_unknown_symbol(self):
        table = SymbolTable()
        assert not table.contains("nothing")
        assert table.get_address("nothing") is None

    def test_add_overwrites(self):
        table = SymbolTable()
        table.add_entry("X", 1)
        table.add_entry("X", 2)
        assert table.get_address("X") == 2

    def test_symbols_are_case_sensitive(self):
        table = SymbolTable()
        assert not table.contains("sp")

    def test_negative_address_rejected(self):
        with pytest.raises(ValueError):
            SymbolTable().add_entry("X", -1)

    def test_equality(self):
        a, b = SymbolTable(), SymbolTable()
        assert a == b
        a.add_entry("TEST", 0)
        assert a != b
        b.add_entry("TEST", 0)
        assert a == b

    def test_is_predefined(self):
        assert SymbolTable.is_predefined("KBD")
        assert not SymbolTable.is_predefined("LOOP")
