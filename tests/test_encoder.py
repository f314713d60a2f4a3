# =============================================================================
# test_encoder.py - Instruction Encoding Tests
# =============================================================================
# Tests for the dest/comp/jump tables and the instruction encoders.
# =============================================================================

import pytest

from hack_asm.cpu import (
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    comp,
    dest,
    encode_address,
    encode_compute,
    jump,
)
from hack_asm.errors import UnknownMnemonicError


# =============================================================================
# Table Tests
# =============================================================================

class TestTables:
    """Verify table sizes, widths and uniqueness of codes."""

    @pytest.mark.parametrize("table, size, width", [
        (DEST_TABLE, 8, 3),
        (JUMP_TABLE, 8, 3),
        (COMP_TABLE, 28, 7),
    ])
    def test_distinct_codes(self, table, size, width):
        assert len(table) == size
        assert len(set(table.values())) == size
        for code in table.values():
            assert len(code) == width
            assert set(code) <= {"0", "1"}

    def test_dest_covers_all_combinations(self):
        assert sorted(DEST_TABLE.values()) == [format(n, "03b") for n in range(8)]

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEST_TABLE["X"] = "000"

    def test_a_bit_selects_m(self):
        for mnemonic, code in COMP_TABLE.items():
            assert (code[0] == "1") == ("M" in mnemonic)


# =============================================================================
# Lookup Tests
# =============================================================================

class TestLookup:
    """Test individual field lookups."""

    @pytest.mark.parametrize("mnemonic, code", [
        ("", "000"), ("M", "001"), ("D", "010"), ("MD", "011"),
        ("A", "100"), ("AM", "101"), ("AD", "110"), ("AMD", "111"),
    ])
    def test_dest(self, mnemonic, code):
        assert dest(mnemonic) == code

    @pytest.mark.parametrize("mnemonic, code", [
        ("", "000"), ("JGT", "001"), ("JEQ", "010"), ("JGE", "011"),
        ("JLT", "100"), ("JNE", "101"), ("JLE", "110"), ("JMP", "111"),
    ])
    def test_jump(self, mnemonic, code):
        assert jump(mnemonic) == code

    @pytest.mark.parametrize("mnemonic, code", [
        ("0", "0101010"),
        ("-1", "0111010"),
        ("D+A", "0000010"),
        ("D|A", "0010101"),
        ("M", "1110000"),
        ("M-D", "1000111"),
        ("D|M", "1010101"),
    ])
    def test_comp(self, mnemonic, code):
        assert comp(mnemonic) == code

    @pytest.mark.parametrize("func, mnemonic", [
        (dest, "X"),
        (dest, "DM"),
        (jump, "JUMP"),
        (comp, "D*A"),
        (comp, ""),
        (comp, "A+D"),
    ])
    def test_unknown_returns_none(self, func, mnemonic):
        assert func(mnemonic) is None


# =============================================================================
# Encoder Tests
# =============================================================================

class TestEncoders:
    """Test full instruction word encoding."""

    def test_encode_compute(self):
        assert encode_compute("D", "M", "") == "1111110000010000"
        assert encode_compute("", "0", "JMP") == "1110101010000111"

    def test_encode_compute_unknown_field(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            encode_compute("D", "M", "JXX")
        assert exc_info.value.field == "jump"
        assert exc_info.value.mnemonic == "JXX"
        assert "JMP" in str(exc_info.value)

    @pytest.mark.parametrize("value, expected", [
        (0, "0000000000000000"),
        (1, "0000000000000001"),
        (16384, "0100000000000000"),
        (32767, "0111111111111111"),
    ])
    def test_encode_address(self, value, expected):
        assert encode_address(value) == expected

    @pytest.mark.parametrize("value", [-1, 32768])
    def test_encode_address_out_of_range(self, value):
        with pytest.raises(ValueError):
            encode_address(value)
