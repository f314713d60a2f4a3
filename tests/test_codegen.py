# =============================================================================
# test_codegen.py - Code Generator Unit Tests
# =============================================================================
# Tests for the two-pass code generator.
#
# Test coverage includes:
#   - Pass 1 label collection and ROM addressing
#   - Pass 2 operand resolution: literals, predefined, labels, variables
#   - C-instruction encoding
#   - Fatal errors and all-or-nothing output
#   - Duplicate label and literal range policies
# =============================================================================

import pytest

from hack_asm.assembler.codegen import CodeGenerator
from hack_asm.assembler.lexer import tokenize
from hack_asm.config import AssemblerConfig
from hack_asm.errors import (
    AddressRangeError,
    AssemblerError,
    AssemblySyntaxError,
    DuplicateSymbolError,
    UnknownMnemonicError,
)


def generate(source: str, **config) -> str:
    """Helper to run the code generator over a source string."""
    return CodeGenerator(AssemblerConfig(**config)).generate(tokenize(source))


# =============================================================================
# Pass 1 Tests
# =============================================================================

class TestLabels:
    """Test label collection in pass 1."""

    def test_no_labels_leaves_predefined_only(self):
        codegen = CodeGenerator()
        codegen.generate(tokenize("@10"))
        assert codegen.get_labels() == {}

    def test_label_at_zero(self):
        codegen = CodeGenerator()
        codegen.generate(tokenize("(TEST)"))
        assert codegen.get_labels() == {"TEST": 0}

    def test_labels_count_only_instructions(self):
        source = """
        (TEST)
        @10
        (SYMBOL)
        @10
        """
        codegen = CodeGenerator()
        codegen.generate(tokenize(source))
        assert codegen.get_labels() == {"TEST": 0, "SYMBOL": 1}

    def test_consecutive_labels_share_address(self):
        codegen = CodeGenerator()
        codegen.generate(tokenize("@1\n(A1)\n(A2)\nD=A"))
        assert codegen.get_labels() == {"A1": 1, "A2": 1}

    def test_forward_and_backward_references_agree(self):
        source = """
        @LOOP
        0;JMP
        (LOOP)
        @LOOP
        0;JMP
        """
        lines = generate(source).splitlines()
        assert lines[0] == lines[2] == "0000000000000010"


# =============================================================================
# Pass 2 Tests
# =============================================================================

class TestResolution:
    """Test A-instruction operand resolution."""

    @pytest.mark.parametrize("symbol, address", [
        ("SP", 0), ("LCL", 1), ("ARG", 2), ("THIS", 3), ("THAT", 4),
        ("R7", 7), ("R15", 15), ("SCREEN", 16384), ("KBD", 24576),
    ])
    def test_predefined(self, symbol, address):
        assert generate(f"@{symbol}") == format(address, "016b")

    def test_variables_allocated_in_first_use_order(self):
        codegen = CodeGenerator()
        codegen.generate(tokenize("@i\n@sum\n@i\n@n"))
        assert codegen.get_variables() == {"i": 16, "sum": 17, "n": 18}
        assert list(codegen.get_variables()) == ["i", "sum", "n"]

    def test_label_is_not_a_variable(self):
        codegen = CodeGenerator()
        out = codegen.generate(tokenize("@END\n@var\n(END)"))
        assert out.splitlines() == ["0000000000000010", "0000000000010000"]
        assert codegen.get_variables() == {"var": 16}

    def test_variable_base_configurable(self):
        assert generate("@x", variable_base=100) == format(100, "016b")

    def test_symbols_include_variables(self):
        codegen = CodeGenerator()
        codegen.generate(tokenize("@x\n(L)\n@L"))
        symbols = codegen.get_symbols()
        assert symbols["x"] == 16
        assert symbols["L"] == 1
        assert symbols["KBD"] == 24576

    def test_signed_literal_in_range(self):
        assert generate("@+5") == format(5, "016b")


class TestLiteralPolicy:
    """Test numeric literals outside 0..32767."""

    @pytest.mark.parametrize("literal", ["-1", "32768", "100000"])
    def test_reject_by_default(self, literal):
        with pytest.raises(AddressRangeError):
            generate(f"@{literal}")

    @pytest.mark.parametrize("literal, expected", [
        ("-1", "0111111111111111"),
        ("-2", "0111111111111110"),
        ("32768", "0000000000000000"),
        ("32769", "0000000000000001"),
    ])
    def test_mask_keeps_low_bits(self, literal, expected):
        assert generate(f"@{literal}", literal_mode="mask") == expected


# =============================================================================
# C-Instruction Tests
# =============================================================================

class TestCompute:
    """Test C-instruction encoding."""

    @pytest.mark.parametrize("source, expected", [
        ("D=M", "1111110000010000"),
        ("D=A", "1110110000010000"),
        ("M=D", "1110001100001000"),
        ("0;JMP", "1110101010000111"),
        ("D;JGT", "1110001100000001"),
        ("AMD=M+1", "1111110111111000"),
        ("MD=D|M;JLE", "1111010101011110"),
    ])
    def test_encoding(self, source, expected):
        assert generate(source) == expected

    @pytest.mark.parametrize("source, field", [
        ("X=M", "dest"),
        ("D=M*2", "comp"),
        ("0;JUMP", "jump"),
        ("D=", "comp"),
    ])
    def test_unknown_mnemonic(self, source, field):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            generate(source)
        assert exc_info.value.field == field


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrors:
    """Test fatal errors and the all-or-nothing rule."""

    def test_unclassifiable_line(self):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            generate("@1\naiueo\n@2")
        assert exc_info.value.location.line == 2
        assert "aiueo" in str(exc_info.value)

    def test_invalid_after_labels_detected_in_pass1(self):
        """An invalid line is fatal even when it follows only labels."""
        with pytest.raises(AssemblySyntaxError):
            generate("(A)\nbogus")

    def test_no_partial_output(self):
        codegen = CodeGenerator()
        with pytest.raises(AssemblerError):
            codegen.generate(tokenize("@1\nD=M\nD=Q"))
        assert codegen.get_code() == ""
        assert codegen.get_instructions() == []

    def test_failure_clears_previous_result(self):
        codegen = CodeGenerator()
        codegen.generate(tokenize("@1"))
        with pytest.raises(AssemblerError):
            codegen.generate(tokenize("nope"))
        assert codegen.get_code() == ""

    def test_duplicate_label_strict(self):
        with pytest.raises(DuplicateSymbolError) as exc_info:
            generate("(X)\n@1\n(X)\n@2")
        assert exc_info.value.original_location.line == 1
        assert exc_info.value.location.line == 3

    def test_duplicate_label_permissive(self):
        codegen = CodeGenerator(AssemblerConfig(strict_labels=False))
        out = codegen.generate(tokenize("(X)\n@X\n(X)\n@X"))
        assert out.splitlines() == ["0000000000000001"] * 2
        assert codegen.get_labels() == {"X": 1}

    def test_label_may_shadow_predefined(self):
        assert generate("@1\n(R2)\n@R2").splitlines()[1] == format(1, "016b")


# =============================================================================
# ROM Address Limit Tests
# =============================================================================

# 32768 instructions put END at the first ROM address that needs 16 bits
LONG_PROGRAM = "D=A\n" * 32768 + "(END)\n@END\n0;JMP"


class TestRomLimit:
    """Test labels whose ROM address does not fit in 15 bits."""

    def test_label_past_limit_rejected(self):
        codegen = CodeGenerator()
        with pytest.raises(AddressRangeError) as exc_info:
            codegen.generate(tokenize(LONG_PROGRAM))
        assert exc_info.value.symbol == "END"
        assert exc_info.value.value == 32768
        assert exc_info.value.location.line == 32770
        assert codegen.get_instructions() == []
        assert codegen.get_code() == ""

    def test_label_past_limit_masked(self):
        codegen = CodeGenerator(AssemblerConfig(literal_mode="mask"))
        lines = codegen.generate(tokenize(LONG_PROGRAM)).splitlines()
        assert len(lines) == 32770
        assert lines[-2] == "0000000000000000"
        assert codegen.get_labels() == {"END": 32768}

    def test_unreferenced_label_past_limit_is_fine(self):
        lines = generate("D=A\n" * 32768 + "(END)").splitlines()
        assert len(lines) == 32768

    def test_label_at_last_address(self):
        source = "D=A\n" * 32767 + "(LAST)\n@LAST"
        assert generate(source).splitlines()[-1] == "0111111111111111"


# =============================================================================
# Output Tests
# =============================================================================

class TestOutput:
    """Test the output text, listing and file writers."""

    def test_line_count_matches_instruction_count(self):
        source = "(START)\n@i\nM=1\n(LOOP)\n@LOOP\n0;JMP\n(END)"
        assert len(generate(source).splitlines()) == 4

    def test_no_trailing_newline(self):
        assert not generate("@1\n@2").endswith("\n")

    def test_empty_program(self):
        assert generate("// nothing\n") == ""

    def test_listing(self):
        codegen = CodeGenerator()
        codegen.generate(tokenize("@x\n(L)\nD=M"))
        listing = codegen.get_listing()
        assert "0000000000010000" in listing
        assert "D=M" in listing
        assert "x" in listing and "= 16" in listing

    def test_write_files(self, tmp_path):
        codegen = CodeGenerator()
        codegen.generate(tokenize("@x\n(L)\nD=M"))

        hack = tmp_path / "out.hack"
        codegen.write_hack(hack)
        assert hack.read_text() == "0000000000010000\n1111110000010000"

        sym = tmp_path / "out.sym"
        codegen.write_symbols(sym)
        content = sym.read_text()
        assert "SCREEN 16384\n" in content
        assert "L 1\n" in content
        assert "x 16\n" in content
